# epub_access/src/epub_access/core/epub/__init__.py
"""
Module EPUB - Accès en lecture aux publications EPUB.

Ce module ouvre une publication (archive zip ou répertoire décompressé),
enchaîne conteneur, package et navigation, et donne accès aux ressources
par chemin relatif.
"""

from .auxiliary import find_encrypted_data
from .errors import (
    DocumentDecodeError,
    EpubError,
    InvalidPublicationError,
    ResourceNotFoundError,
)
from .package import find_manifest_item
from .publication import Publication, open_dir, open_epub, open_epub_reader
from .store import DirectoryStore, ResourceStore, ZipStore

__all__ = [
    "DirectoryStore",
    "DocumentDecodeError",
    "EpubError",
    "InvalidPublicationError",
    "Publication",
    "ResourceNotFoundError",
    "ResourceStore",
    "ZipStore",
    "find_encrypted_data",
    "find_manifest_item",
    "open_dir",
    "open_epub",
    "open_epub_reader",
]
