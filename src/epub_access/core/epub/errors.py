# epub_access/src/epub_access/core/epub/errors.py
"""
Hiérarchie d'exceptions du module EPUB.
"""


class EpubError(Exception):
    """Erreur de base pour tout accès à une publication."""


class ResourceNotFoundError(EpubError, FileNotFoundError):
    """Aucune entrée d'archive ni aucun fichier ne correspond au chemin demandé."""

    def __init__(self, path: str):
        super().__init__(f"can't find file or directory {path}")
        self.path = path


class DocumentDecodeError(EpubError):
    """Le document existe mais ne peut pas être décodé."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"failed to decode {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidPublicationError(EpubError):
    """La publication ne peut pas être construite (document requis absent ou invalide)."""
