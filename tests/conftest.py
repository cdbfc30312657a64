# tests/conftest.py
"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables: publications d'exemple sous forme
d'archive zip et de répertoire décompressé.
"""

import json
import logging
from pathlib import Path
from typing import Dict

import pytest

from tests.helpers import ENCRYPTION_XML, LICENSE, base_publication_files, write_dir, write_epub


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Retire les handlers ajoutés par setup_logging entre deux tests."""
    yield
    logger = logging.getLogger("epub_access")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def publication_files() -> Dict[str, bytes]:
    """Fichiers de la publication d'exemple, modifiables par test."""
    return base_publication_files()


@pytest.fixture
def drm_files(publication_files) -> Dict[str, bytes]:
    """Publication d'exemple avec encryption.xml et license.lcpl."""
    files = dict(publication_files)
    files["META-INF/encryption.xml"] = ENCRYPTION_XML.encode("utf-8")
    files["META-INF/license.lcpl"] = json.dumps(LICENSE).encode("utf-8")
    return files


@pytest.fixture
def epub_file(tmp_path, publication_files) -> Path:
    """Archive EPUB d'exemple."""
    return write_epub(tmp_path / "book.epub", publication_files)


@pytest.fixture
def epub_dir(tmp_path, publication_files) -> Path:
    """Publication d'exemple décompressée."""
    return write_dir(tmp_path / "book", publication_files)


@pytest.fixture(params=["zip", "dir"])
def make_publication(request, tmp_path):
    """
    Fabrique paramétrée: construit la publication sous les deux formes.

    Retourne une fonction files -> chemin à ouvrir avec open_publication.
    """
    def _make(files: Dict[str, bytes]) -> Path:
        if request.param == "zip":
            return write_epub(tmp_path / "book.epub", files)
        return write_dir(tmp_path / "book", files)

    return _make
