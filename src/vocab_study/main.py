"""Main entry point for the vocabulary study backend."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication

from vocab_study.core import StoreStartupError
from vocab_study.io import open_vocabulary_store, resolve_data_dir
from vocab_study.logging_config import configure_logging
from vocab_study.services import SettingsManager, VocabularyService

logger = logging.getLogger(__name__)

APPLICATION_NAME = "Vocab Study"
ORGANIZATION_NAME = "VocabStudy"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocab-study",
        description="Read, import and flag entries in the local vocabulary store.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding data.db (defaults to the per-user app data location).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="Print every vocabulary entry as JSON.")

    import_cmd = commands.add_parser("import", help="Import a TSV file (header line first).")
    import_cmd.add_argument("path", help="TSV file to import, or - for stdin.")

    flag_cmd = commands.add_parser("flag", help="Set the flag of one entry.")
    flag_cmd.add_argument("vocab_id", type=int)
    flag_cmd.add_argument("flag_value", type=int)
    return parser


def _read_tsv(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Bootstrap the backend following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    args = build_parser().parse_args(argv)

    # 1. Application identity (drives the per-user data location)
    QCoreApplication.setApplicationName(APPLICATION_NAME)
    QCoreApplication.setOrganizationName(ORGANIZATION_NAME)

    # 2. Settings and logging
    settings = SettingsManager()
    configure_logging(settings.get_log_level())

    # 3. Open the store; failure here is fatal
    try:
        data_dir = resolve_data_dir(args.data_dir or settings.get_data_dir())
        db = open_vocabulary_store(data_dir)
    except StoreStartupError as e:
        logger.critical("Cannot start vocabulary store: %s", e)
        return 1

    service = VocabularyService(db)

    # 4. Dispatch one command
    if args.command == "list":
        result = service.invoke("get_vocabulary")
    elif args.command == "import":
        try:
            tsv_data = _read_tsv(args.path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", args.path, e)
            return 1
        result = service.invoke("add_vocabulary_entries_tsv", tsv_data=tsv_data)
    else:
        result = service.invoke(
            "set_vocabulary_flag", id=args.vocab_id, flag_value=args.flag_value
        )

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 1 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
