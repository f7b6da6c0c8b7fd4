import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.api.dependencies import create_resources
from src.api.errors import UpstreamError, upstream_error_handler
from src.api.routes.dialogues import router as dialogues_router
from src.api.routes.files import router as files_router
from src.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the Drive and Supabase clients once; release them on shutdown."""
    app.state.resources = create_resources(settings)
    try:
        yield
    finally:
        app.state.resources.close()
        app.state.resources = None


app = FastAPI(
    title="Dialogue API",
    description="Audio/transcript dialogues from a Drive folder with saved highlights",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(UpstreamError, upstream_error_handler)

app.include_router(dialogues_router)
app.include_router(files_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Dialogue Backend is running!"


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
