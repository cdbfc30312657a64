# epub_access/src/epub_access/main.py
"""
Point d'entrée principal pour EPUB Access
Configure le logging puis lance l'inspection en ligne de commande
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)


def setup_logging():
    """Configure le système de logging."""
    ensure_directories()
    logger = logging.getLogger("epub_access")
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_access.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def run_cli(argv: List[str]) -> int:
    """Lance l'inspection en ligne de commande."""
    logger = logging.getLogger("epub_access")

    if len(argv) < 1:
        print("Usage: python -m epub_access <path>")
        print("  path: Fichier .epub, publication décompressée ou dossier d'EPUB")
        return 1

    path = argv[0]
    if not os.path.exists(path):
        print(f"Error: {path} does not exist")
        return 1

    try:
        from .cli import cli_inspect, print_publication_summary

        summaries = cli_inspect(path)
        print_publication_summary(summaries)
    except Exception as e:
        logger.exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1

    if not summaries or all(s.error for s in summaries):
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())
