# epub_access/src/epub_access/core/epub/store.py
"""
Module de stockage des ressources.

Responsabilité unique: Ouvrir un chemin et retourner un flux binaire,
que les octets proviennent d'une archive zip ou d'un répertoire.

Pattern: Strategy Pattern, le backend est choisi une seule fois à la construction.
"""

import logging
import os
import zipfile
from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, Optional

from .errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


class ResourceStore(ABC):
    """Contrat commun: fetch(path) -> flux binaire."""

    @abstractmethod
    def fetch(self, path: str) -> BinaryIO:
        """
        Ouvre la ressource désignée par `path`.

        Le flux retourné doit être fermé par l'appelant.

        Raises:
            ResourceNotFoundError: si aucune ressource ne correspond
        """

    def close(self) -> None:
        """Libère les ressources du backend. Peut être appelé plusieurs fois."""

    @property
    def archive(self) -> Optional[zipfile.ZipFile]:
        return None


class ZipStore(ResourceStore):
    """
    Backend archive: recherche exacte (sensible à la casse) dans la table des entrées.

    Args:
        zip_file: Archive déjà ouverte
        owns_archive: Si True, close() ferme l'archive
    """

    def __init__(self, zip_file: zipfile.ZipFile, owns_archive: bool = True):
        self._zip = zip_file
        self._owns_archive = owns_archive
        self._closed = False
        # Première entrée gagnante en cas de doublon
        self._entries: Dict[str, zipfile.ZipInfo] = {}
        for info in zip_file.infolist():
            self._entries.setdefault(info.filename, info)
        logger.debug("Zip store indexed %d entries", len(self._entries))

    def fetch(self, path: str) -> BinaryIO:
        info = self._entries.get(path)
        if info is None:
            raise ResourceNotFoundError(path)
        return self._zip.open(info, "r")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_archive:
            self._zip.close()
            logger.debug("Closed archive %s", self._zip.filename)

    @property
    def archive(self) -> Optional[zipfile.ZipFile]:
        return self._zip


class DirectoryStore(ResourceStore):
    """Backend répertoire: chaque fetch ouvre un nouveau fichier sous `base_dir`."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def _filesystem_path(self, path: str) -> str:
        parts = [p for p in path.split("/") if p]
        return os.path.join(self.base_dir, *parts)

    def fetch(self, path: str) -> BinaryIO:
        fs_path = self._filesystem_path(path)
        try:
            return open(fs_path, "rb")
        except FileNotFoundError as exc:
            raise ResourceNotFoundError(path) from exc
