# epub_access/src/epub_access/core/epub/documents.py
"""
Module de décodage des documents.

Responsabilité unique: Récupérer un document depuis le stockage, le décoder
(XML via lxml, JSON) et appliquer la politique des documents optionnels.
"""

import json
import logging
import zipfile
import zlib
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from lxml import etree

from ...config import READ_CHUNK_SIZE
from ..models import DocumentStatus, OptionalDocument
from .errors import DocumentDecodeError, ResourceNotFoundError
from .store import ResourceStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


# --- Helpers XML ---


def local_name(tag: Any) -> str:
    """Retourne le nom local d'un tag lxml, sans namespace."""
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def iter_children(node: etree._Element, name: str) -> Iterator[etree._Element]:
    """Itère sur les enfants directs dont le nom local vaut `name`."""
    for child in node:
        if local_name(child.tag) == name:
            yield child


def first_child(node: Optional[etree._Element], name: str) -> Optional[etree._Element]:
    if node is None:
        return None
    return next(iter_children(node, name), None)


def iter_descendants(node: etree._Element, name: str) -> Iterator[etree._Element]:
    for el in node.iter():
        if local_name(el.tag) == name:
            yield el


def node_text(node: Optional[etree._Element]) -> Optional[str]:
    if node is None:
        return None
    text = "".join(node.itertext()).strip()
    return text or None


def split_tokens(value: Optional[str]) -> tuple:
    """Découpe un attribut de type liste (properties="nav scripted")."""
    return tuple((value or "").split())


# --- Décodage ---

# Erreurs levées par zipfile/zlib pendant la lecture d'une entrée endommagée,
# chiffrée ou compressée avec une méthode non supportée.
_STREAM_ERRORS = (zlib.error, EOFError, RuntimeError, NotImplementedError, zipfile.BadZipFile)


def _fetch_bytes(store: ResourceStore, path: str) -> bytes:
    """
    Lit intégralement `path` depuis le stockage.

    Raises:
        ResourceNotFoundError: si le document est absent
        DocumentDecodeError: si le flux ne peut pas être lu jusqu'au bout
    """
    try:
        with store.fetch(path) as fd:
            return read_stream(fd, READ_CHUNK_SIZE)
    except _STREAM_ERRORS as exc:
        raise DocumentDecodeError(path, f"unreadable entry: {exc}") from exc


def decode_xml(store: ResourceStore, path: str, parse: Callable[[etree._Element, str], T]) -> T:
    """
    Récupère `path` et le décode comme document XML.

    Args:
        store: Stockage des ressources
        path: Chemin brut (déjà résolu)
        parse: Fonction transformant la racine lxml en enregistrement

    Returns:
        Enregistrement produit par `parse`

    Raises:
        ResourceNotFoundError: si le document est absent
        DocumentDecodeError: si le document est illisible ou mal formé
    """
    raw = _fetch_bytes(store, path)
    try:
        root = etree.fromstring(raw, _XML_PARSER)
    except etree.XMLSyntaxError as exc:
        raise DocumentDecodeError(path, str(exc)) from exc
    if root is None:
        raise DocumentDecodeError(path, "empty document")
    return parse(root, path)


def decode_json(store: ResourceStore, path: str, parse: Callable[[dict, str], T]) -> T:
    """Équivalent JSON de decode_xml; la racine doit être un objet."""
    raw = _fetch_bytes(store, path)
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        raise DocumentDecodeError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise DocumentDecodeError(path, "top-level JSON value is not an object")
    return parse(data, path)


def load_optional(
    path: str, decode: Callable[[], T], default: T
) -> OptionalDocument[T]:
    """
    Charge un document optionnel sans jamais propager d'erreur.

    Args:
        path: Chemin du document (pour le rapport)
        decode: Fonction de décodage à appeler
        default: Valeur vide utilisée si le document est absent ou invalide

    Returns:
        OptionalDocument avec le statut PRESENT, ABSENT ou INVALID
    """
    try:
        document = decode()
    except ResourceNotFoundError as exc:
        logger.info("Optional document %s not found", path)
        return OptionalDocument(DocumentStatus.ABSENT, default, path, str(exc))
    except (DocumentDecodeError, OSError, zipfile.BadZipFile) as exc:
        logger.warning("Optional document %s is invalid: %s", path, exc)
        return OptionalDocument(DocumentStatus.INVALID, default, path, str(exc))
    return OptionalDocument(DocumentStatus.PRESENT, document, path)


def read_stream(fd, chunk_size: int) -> bytes:
    """Vide un flux binaire dans un buffer."""
    chunks: List[bytes] = []
    while True:
        chunk = fd.read(chunk_size)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)
