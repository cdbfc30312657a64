# epub_access/src/epub_access/core/epub/auxiliary.py
"""
Module des documents DRM auxiliaires.

Responsabilité unique: Charger au mieux META-INF/encryption.xml et
META-INF/license.lcpl. Aucune erreur n'est jamais propagée à l'appelant.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import unquote

from lxml import etree

from ...config import ENCRYPTION_PATH, LICENSE_PATH
from ..models import EncryptedData, Encryption, LcpLicense, LcpLink, OptionalDocument
from .documents import decode_json, decode_xml, first_child, iter_descendants, load_optional, local_name
from .errors import DocumentDecodeError
from .store import ResourceStore

logger = logging.getLogger(__name__)


# --- encryption.xml ---


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip()) if value is not None else None
    except ValueError:
        return None


def _parse_encrypted_data(node: etree._Element) -> Optional[EncryptedData]:
    cipher_reference = next(iter_descendants(node, "CipherReference"), None)
    if cipher_reference is None or not cipher_reference.get("URI"):
        return None

    method = first_child(node, "EncryptionMethod")
    retrieval = next(iter_descendants(node, "RetrievalMethod"), None)

    compression_method = None
    original_length = None
    for prop in iter_descendants(node, "Compression"):
        compression_method = prop.get("Method")
        original_length = _int_or_none(prop.get("OriginalLength"))
        break

    return EncryptedData(
        uri=unquote(cipher_reference.get("URI")),
        algorithm=method.get("Algorithm") if method is not None else None,
        key_retrieval=retrieval.get("URI") if retrieval is not None else None,
        compression_method=compression_method,
        original_length=original_length,
    )


def parse_encryption(root: etree._Element, path: str = ENCRYPTION_PATH) -> Encryption:
    if local_name(root.tag) != "encryption":
        raise DocumentDecodeError(path, f"unexpected root element <{local_name(root.tag)}>")
    items = []
    for node in iter_descendants(root, "EncryptedData"):
        data = _parse_encrypted_data(node)
        if data is not None:
            items.append(data)
    return Encryption(items=tuple(items))


def load_encryption(store: ResourceStore) -> OptionalDocument[Encryption]:
    """Charge les métadonnées de chiffrement (jamais fatal)."""
    return load_optional(
        ENCRYPTION_PATH,
        lambda: decode_xml(store, ENCRYPTION_PATH, parse_encryption),
        Encryption(),
    )


def find_encrypted_data(encryption: Encryption, uri: str) -> Optional[EncryptedData]:
    """
    Retourne l'entrée de chiffrement d'une ressource.

    Args:
        encryption: Métadonnées de chiffrement
        uri: Chemin relatif à la racine de la publication

    Returns:
        EncryptedData ou None si la ressource n'est pas chiffrée
    """
    for item in encryption.items:
        if item.uri == uri:
            return item
    return None


# --- license.lcpl ---


def _section(data: Dict, key: str) -> Dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _parse_link(raw: Dict) -> Optional[LcpLink]:
    if not isinstance(raw, dict) or not raw.get("rel") or not raw.get("href"):
        return None
    return LcpLink(
        rel=str(raw["rel"]),
        href=str(raw["href"]),
        type=raw.get("type"),
        title=raw.get("title"),
        length=_int_or_none(raw.get("length")),
        hash=raw.get("hash"),
        templated=bool(raw.get("templated", False)),
    )


def parse_license(data: Dict, path: str = LICENSE_PATH) -> LcpLicense:
    encryption = _section(data, "encryption")
    content_key = _section(encryption, "content_key")
    user_key = _section(encryption, "user_key")

    raw_links = data.get("links")
    if raw_links is not None and not isinstance(raw_links, list):
        raise DocumentDecodeError(path, "links must be a list")
    links = tuple(link for link in map(_parse_link, raw_links or []) if link is not None)

    return LcpLicense(
        id=str(data.get("id") or ""),
        provider=str(data.get("provider") or ""),
        issued=data.get("issued"),
        updated=data.get("updated"),
        profile=encryption.get("profile"),
        content_key_algorithm=content_key.get("algorithm"),
        encrypted_content_key=content_key.get("encrypted_value"),
        user_key_algorithm=user_key.get("algorithm"),
        text_hint=user_key.get("text_hint"),
        key_check=user_key.get("key_check"),
        links=links,
        rights=_section(data, "rights"),
        user=_section(data, "user"),
        signature=_section(data, "signature"),
    )


def load_license(store: ResourceStore) -> OptionalDocument[LcpLicense]:
    """Charge la licence LCP (jamais fatal)."""
    return load_optional(
        LICENSE_PATH,
        lambda: decode_json(store, LICENSE_PATH, parse_license),
        LcpLicense(),
    )
