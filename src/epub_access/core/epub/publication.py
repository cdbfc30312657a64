# epub_access/src/epub_access/core/epub/publication.py
"""
Module d'ouverture des publications EPUB.

Responsabilité unique: Enchaîner conteneur -> package -> navigation ->
documents auxiliaires sur un stockage (archive ou répertoire), puis
répondre aux demandes d'accès aux ressources.
"""

import logging
import os
import zipfile
from typing import BinaryIO, Optional

from ...config import READ_CHUNK_SIZE
from ..models import (
    Container,
    Encryption,
    LcpLicense,
    Ncx,
    Opf,
    OptionalDocument,
    Smil,
)
from .auxiliary import load_encryption, load_license
from .container import load_container
from .documents import read_stream
from .errors import DocumentDecodeError, InvalidPublicationError
from .navigation import load_navigation
from .package import find_manifest_item, load_package
from .paths import resolve_path
from .smil import load_smil
from .store import DirectoryStore, ResourceStore, ZipStore

logger = logging.getLogger(__name__)


class Publication:
    """
    Publication EPUB ouverte, en lecture seule.

    La construction réussit entièrement ou lève InvalidPublicationError;
    seuls le conteneur et le document de package sont requis.

    Attributes:
        container: Descripteur de conteneur (rootfile principal inclus)
        opf: Document de package
        navigation: Résultat du chargement du NCX
        encryption_document: Résultat du chargement de encryption.xml
        license_document: Résultat du chargement de license.lcpl
    """

    def __init__(self, store: ResourceStore):
        self._store = store
        try:
            self.container: Container = load_container(store)
            self.opf: Opf = load_package(store, self.container.primary.path)
        except (DocumentDecodeError, OSError, zipfile.BadZipFile) as exc:
            logger.error("Cannot open publication: %s", exc)
            store.close()
            raise InvalidPublicationError(str(exc)) from exc

        self.navigation: OptionalDocument[Ncx] = load_navigation(
            store, self.opf, self.container.primary.path
        )
        self.encryption_document: OptionalDocument[Encryption] = load_encryption(store)
        self.license_document: OptionalDocument[LcpLicense] = load_license(store)
        logger.info("Opened publication with rootfile %s", self.container.primary.path)

    # --- Accès raccourcis ---

    @property
    def rootfile_path(self) -> str:
        return self.container.primary.path

    @property
    def ncx(self) -> Ncx:
        return self.navigation.document

    @property
    def ncx_path(self) -> Optional[str]:
        """Chemin résolu du NCX, None si le spine ne désigne aucun item."""
        return self.navigation.path

    @property
    def encryption(self) -> Encryption:
        return self.encryption_document.document

    @property
    def license(self) -> LcpLicense:
        return self.license_document.document

    @property
    def archive(self) -> Optional[zipfile.ZipFile]:
        """Archive sous-jacente, None pour une publication en répertoire."""
        return self._store.archive

    # --- Accès aux ressources ---

    def resolve(self, path: str) -> str:
        """Chemin relatif au rootfile -> chemin relatif à la racine."""
        return resolve_path(self.container.primary.path, path)

    def open(self, path: str) -> BinaryIO:
        """
        Ouvre une ressource relative au répertoire du rootfile principal.

        Raises:
            ResourceNotFoundError: avec le chemin résolu tenté
        """
        return self._store.fetch(self.resolve(path))

    def raw_open(self, path: str) -> BinaryIO:
        """Ouvre une ressource sans transformer le chemin."""
        return self._store.fetch(path)

    def read(self, path: str) -> bytes:
        """
        Lit entièrement une ressource relative au rootfile principal.

        Returns:
            Contenu de la ressource, b"" uniquement si elle est vide

        Raises:
            ResourceNotFoundError: si la ressource n'existe pas
        """
        with self.open(path) as fd:
            return read_stream(fd, READ_CHUNK_SIZE)

    def get_smil(self, path: str) -> Smil:
        """
        Décode un media overlay. Rien n'est mis en cache.

        Args:
            path: Chemin relatif à la racine (déjà résolu par l'appelant)

        Raises:
            ResourceNotFoundError: si le document est absent
            DocumentDecodeError: si le document est mal formé
        """
        return load_smil(self._store, path)

    def media_overlay_path(self, item_id: str) -> Optional[str]:
        """
        Chemin résolu du SMIL associé à un item du manifeste (attribut media-overlay).

        Returns:
            Chemin utilisable par get_smil, ou None si aucun overlay
        """
        item = find_manifest_item(self.opf, item_id)
        if item is None or not item.media_overlay:
            return None
        overlay = find_manifest_item(self.opf, item.media_overlay)
        if overlay is None:
            logger.info("Media overlay %r of %r not in manifest", item.media_overlay, item_id)
            return None
        return self.resolve(overlay.href)

    # --- Cycle de vie ---

    def close(self) -> None:
        """Libère l'archive. Idempotent, sans effet pour un répertoire."""
        self._store.close()

    def __enter__(self) -> "Publication":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# --- Points d'entrée ---


def open_epub(path) -> Publication:
    """
    Ouvre une archive EPUB et en devient propriétaire.

    Args:
        path: Chemin de l'archive ou objet fichier binaire

    Raises:
        InvalidPublicationError: archive illisible ou documents requis invalides
    """
    try:
        zip_file = zipfile.ZipFile(path, "r")
    except (OSError, zipfile.BadZipFile) as exc:
        logger.error("Cannot read archive %s: %s", path, exc)
        raise InvalidPublicationError(f"cannot read archive {path}: {exc}") from exc
    return Publication(ZipStore(zip_file, owns_archive=True))


def open_epub_reader(zip_file: zipfile.ZipFile) -> Publication:
    """
    Ouvre une publication depuis une archive déjà ouverte.

    L'appelant reste propriétaire de l'archive: close() ne la ferme pas.
    """
    return Publication(ZipStore(zip_file, owns_archive=False))


def open_dir(path: str) -> Publication:
    """
    Ouvre une publication déjà décompressée dans un répertoire.

    Raises:
        InvalidPublicationError: répertoire absent ou documents requis invalides
    """
    if not os.path.isdir(path):
        logger.error("Not a directory: %s", path)
        raise InvalidPublicationError(f"cannot read directory {path}")
    return Publication(DirectoryStore(path))
