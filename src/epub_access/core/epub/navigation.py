# epub_access/src/epub_access/core/epub/navigation.py
"""
Module de résolution de la navigation.

Responsabilité unique: Retrouver le document NCX référencé par le spine
et le décoder, sans jamais interrompre la construction.
"""

import logging
from typing import Optional, Tuple

from lxml import etree

from ..models import DocumentStatus, NavPoint, Ncx, Opf, OptionalDocument, PageTarget
from .documents import (
    decode_xml,
    first_child,
    iter_children,
    load_optional,
    local_name,
    node_text,
)
from .errors import DocumentDecodeError
from .package import find_manifest_item
from .paths import resolve_path
from .store import ResourceStore

logger = logging.getLogger(__name__)


def _label(node: etree._Element) -> str:
    """Texte du premier <navLabel><text>."""
    return node_text(first_child(first_child(node, "navLabel"), "text")) or ""


def _content_src(node: etree._Element) -> str:
    content = first_child(node, "content")
    if content is None:
        return ""
    return content.get("src") or ""


def _play_order(node: etree._Element) -> Optional[int]:
    raw = node.get("playOrder")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        logger.debug("Ignoring non-numeric playOrder %r", raw)
        return None


def _parse_nav_points(node: Optional[etree._Element]) -> Tuple[NavPoint, ...]:
    if node is None:
        return ()
    return tuple(
        NavPoint(
            id=point.get("id") or "",
            label=_label(point),
            src=_content_src(point),
            play_order=_play_order(point),
            children=_parse_nav_points(point),
        )
        for point in iter_children(node, "navPoint")
    )


def _parse_page_list(node: Optional[etree._Element]) -> Tuple[PageTarget, ...]:
    if node is None:
        return ()
    return tuple(
        PageTarget(
            id=target.get("id") or "",
            label=_label(target),
            src=_content_src(target),
            type=target.get("type"),
            value=target.get("value"),
        )
        for target in iter_children(node, "pageTarget")
    )


def parse_ncx(root: etree._Element, path: str) -> Ncx:
    """
    Construit un Ncx depuis la racine <ncx>.

    Raises:
        DocumentDecodeError: si la racine n'est pas <ncx>
    """
    if local_name(root.tag) != "ncx":
        raise DocumentDecodeError(path, f"unexpected root element <{local_name(root.tag)}>")

    uid = None
    head = first_child(root, "head")
    if head is not None:
        for meta in iter_children(head, "meta"):
            if meta.get("name") == "dtb:uid":
                uid = meta.get("content")
                break

    return Ncx(
        uid=uid,
        title=node_text(first_child(first_child(root, "docTitle"), "text")),
        nav_points=_parse_nav_points(first_child(root, "navMap")),
        page_list=_parse_page_list(first_child(root, "pageList")),
    )


def load_navigation(store: ResourceStore, opf: Opf, rootfile_path: str) -> OptionalDocument[Ncx]:
    """
    Charge le document de navigation désigné par spine.toc.

    Politique unique pour tous les points d'entrée: l'absence ou la
    malformation n'est jamais fatale.

    Args:
        store: Stockage des ressources
        opf: Document de package décodé
        rootfile_path: Chemin du rootfile principal (base des href)

    Returns:
        OptionalDocument[Ncx]: ABSENT si aucun item ne correspond ou si le
        fichier manque, INVALID si le fichier est mal formé
    """
    item = find_manifest_item(opf, opf.spine.toc)
    if item is None:
        if opf.spine.toc:
            logger.info("Spine toc %r matches no manifest item", opf.spine.toc)
        return OptionalDocument(DocumentStatus.ABSENT, Ncx())

    path = resolve_path(rootfile_path, item.href)
    return load_optional(path, lambda: decode_xml(store, path, parse_ncx), Ncx())
