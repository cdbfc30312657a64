# epub_access/src/epub_access/core/epub/package.py
"""
Module de résolution du document de package (OPF).

Responsabilité unique: Décoder le rootfile principal en manifeste, spine,
guide et métadonnées.
"""

import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote

from lxml import etree

from ...config import NAMESPACES
from ..models import GuideReference, ManifestItem, Opf, OpfMetadata, Spine, SpineItem
from .documents import decode_xml, first_child, iter_children, local_name, split_tokens
from .errors import DocumentDecodeError
from .store import ResourceStore

logger = logging.getLogger(__name__)

_DC_PREFIX = "{%s}" % NAMESPACES["DC"]


# --- Extracteurs par section ---


def _attr(node: etree._Element, name: str) -> str:
    return (node.get(name) or "").strip()


def _parse_metadata(node: Optional[etree._Element]) -> OpfMetadata:
    """
    Extrait les éléments Dublin Core et les <meta name="..." content="...">.

    Les <meta property="..."> d'EPUB 3 sont indexés par leur propriété.
    """
    if node is None:
        return OpfMetadata()

    dublin_core: Dict[str, List[str]] = {}
    meta: Dict[str, str] = {}
    for el in node:
        if not isinstance(el.tag, str):
            continue
        name = local_name(el.tag)
        if name == "meta":
            key = el.get("name") or el.get("property")
            if not key:
                continue
            value = el.get("content")
            if value is None:
                value = (el.text or "").strip()
            meta.setdefault(key, value)
        elif el.tag.startswith(_DC_PREFIX):
            text = (el.text or "").strip()
            if text:
                dublin_core.setdefault(name, []).append(text)

    return OpfMetadata(
        dublin_core={k: tuple(v) for k, v in dublin_core.items()},
        meta=meta,
    )


def _parse_manifest(node: Optional[etree._Element]) -> Tuple[ManifestItem, ...]:
    if node is None:
        return ()
    items = []
    for el in iter_children(node, "item"):
        item_id = el.get("id")
        href = el.get("href")
        if not item_id or href is None:
            logger.debug("Skipping manifest item without id or href")
            continue
        items.append(
            ManifestItem(
                id=item_id,
                href=unquote(href),
                media_type=el.get("media-type") or "",
                properties=split_tokens(el.get("properties")),
                media_overlay=el.get("media-overlay"),
                fallback=el.get("fallback"),
            )
        )
    return tuple(items)


def _parse_spine(node: Optional[etree._Element]) -> Spine:
    if node is None:
        return Spine()
    items = tuple(
        SpineItem(
            idref=el.get("idref") or "",
            linear=(el.get("linear") or "yes").strip().lower() != "no",
            properties=split_tokens(el.get("properties")),
        )
        for el in iter_children(node, "itemref")
    )
    return Spine(
        items=items,
        toc=_attr(node, "toc"),
        page_progression_direction=node.get("page-progression-direction"),
    )


def _parse_guide(node: Optional[etree._Element]) -> Tuple[GuideReference, ...]:
    if node is None:
        return ()
    return tuple(
        GuideReference(type=el.get("type") or "", href=unquote(el.get("href") or ""), title=el.get("title"))
        for el in iter_children(node, "reference")
    )


# --- Fonctions principales ---


def parse_opf(root: etree._Element, path: str) -> Opf:
    """
    Construit un Opf depuis la racine <package>.

    Raises:
        DocumentDecodeError: si la racine n'est pas <package>
    """
    if local_name(root.tag) != "package":
        raise DocumentDecodeError(path, f"unexpected root element <{local_name(root.tag)}>")

    opf = Opf(
        version=_attr(root, "version"),
        unique_identifier=root.get("unique-identifier"),
        metadata=_parse_metadata(first_child(root, "metadata")),
        manifest=_parse_manifest(first_child(root, "manifest")),
        spine=_parse_spine(first_child(root, "spine")),
        guide=_parse_guide(first_child(root, "guide")),
    )
    logger.debug(
        "Parsed package %s: %d manifest items, %d spine items",
        path,
        len(opf.manifest),
        len(opf.spine.items),
    )
    return opf


def load_package(store: ResourceStore, rootfile_path: str) -> Opf:
    """
    Décode le document de package au chemin brut du rootfile principal.

    Args:
        store: Stockage des ressources
        rootfile_path: Chemin relatif à la racine de l'archive, utilisé tel quel

    Raises:
        ResourceNotFoundError: si le document est absent
        DocumentDecodeError: si le document est invalide
    """
    return decode_xml(store, rootfile_path, parse_opf)


def find_manifest_item(opf: Opf, item_id: str) -> Optional[ManifestItem]:
    """Retourne le premier item du manifeste portant cet id, ou None."""
    if not item_id:
        return None
    for item in opf.manifest:
        if item.id == item_id:
            return item
    return None
