# epub_access/src/epub_access/core/file_utils.py
"""
Logique pour les opérations sur le système de fichiers (trouver, ouvrir).
"""

import logging
import os
from typing import List

from ..config import CONTAINER_PATH, SUPPORTED_EXT
from .epub import Publication, open_dir, open_epub

logger = logging.getLogger(__name__)


def find_epubs_in_folder(folder: str) -> List[str]:
    """Trouve tous les fichiers EPUB dans un dossier et ses sous-dossiers."""
    files = []
    for root, _, filenames in os.walk(folder):
        for f in sorted(filenames):
            if f.lower().endswith(SUPPORTED_EXT):
                files.append(os.path.join(root, f))
    logger.info("Found %d epub(s) in folder %s", len(files), folder)
    return files


def is_expanded_publication(path: str) -> bool:
    """Vrai si `path` est un répertoire contenant META-INF/container.xml."""
    return os.path.isfile(os.path.join(path, *CONTAINER_PATH.split("/")))


def open_publication(path: str) -> Publication:
    """
    Ouvre une publication en choisissant le backend selon le chemin.

    Args:
        path: Archive .epub ou répertoire décompressé

    Returns:
        Publication ouverte (à fermer par l'appelant)
    """
    if os.path.isdir(path):
        logger.debug("Opening %s as an expanded publication", path)
        return open_dir(path)
    return open_epub(path)
