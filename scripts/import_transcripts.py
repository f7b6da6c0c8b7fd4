"""Import every transcriptN.txt in the Drive folder into the dialogues table."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog.matcher import TranscriptFile, parse_filename
from src.catalog.transcripts import TranscriptCache
from src.config import settings
from src.dialogue_config import DialogueConfig
from src.drive.credentials import build_credentials, build_drive_service
from src.drive.folder import DriveFolder
from src.storage.dialogues import DialogueStore, get_supabase_client


def import_transcripts(max_dialogues: int | None = None, dry_run: bool = False) -> None:
    """Fill missing transcript text for each dialogue that has a transcript file.

    Dialogues whose transcript is already stored are left untouched.
    """
    config = DialogueConfig.from_settings(settings)
    credentials = build_credentials(settings.google_credentials, config.drive_scopes)
    folder = DriveFolder(build_drive_service(credentials), credentials, config.folder_id)
    store = DialogueStore(get_supabase_client(settings), settings.dialogues_table)
    cache = TranscriptCache(store, folder)

    numbers = sorted(
        {
            role.number
            for role in (parse_filename(f.name, config.audio_extensions) for f in folder.list_files())
            if isinstance(role, TranscriptFile)
        }
    )
    if max_dialogues:
        numbers = numbers[:max_dialogues]

    print(f"Found {len(numbers)} transcript files in folder {config.folder_id}")

    imported = 0
    skipped = 0
    errors = 0

    for number in numbers:
        try:
            record = store.get_dialogue(number)
            if record is not None and record.transcript_text:
                skipped += 1
                print(f"  [{number}] SKIP -- already stored")
                continue

            if dry_run:
                print(f"  [{number}] would import transcript{number}.txt")
                continue

            text = cache.get_or_import(number, record)
            imported += 1
            print(f"  [{number}] Imported {len(text)} chars")

        except Exception as e:
            errors += 1
            print(f"  [{number}] ERROR: {e}")

    folder.close()
    print(f"\nDone! Imported {imported}, skipped {skipped}, {errors} errors.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--max", type=int, default=None)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()
    import_transcripts(args.max, args.dry_run)
