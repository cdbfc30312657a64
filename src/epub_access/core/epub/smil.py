# epub_access/src/epub_access/core/epub/smil.py
"""
Décodage à la demande des media overlays (SMIL).
"""

import logging

from lxml import etree

from ...config import NAMESPACES
from ..models import Smil, SmilPar
from .documents import decode_xml, first_child, iter_descendants, local_name
from .errors import DocumentDecodeError
from .store import ResourceStore

logger = logging.getLogger(__name__)

_EPUB_TEXTREF = "{%s}textref" % NAMESPACES["EPUB"]


def parse_smil(root: etree._Element, path: str) -> Smil:
    """
    Construit un Smil depuis la racine <smil>.

    Les <par> sont aplatis dans l'ordre du document, quelle que soit
    l'imbrication des <seq>.
    """
    if local_name(root.tag) != "smil":
        raise DocumentDecodeError(path, f"unexpected root element <{local_name(root.tag)}>")

    body = first_child(root, "body")
    pars = []
    if body is not None:
        for par in iter_descendants(body, "par"):
            text = first_child(par, "text")
            audio = first_child(par, "audio")
            pars.append(
                SmilPar(
                    id=par.get("id"),
                    text_src=text.get("src") if text is not None else None,
                    audio_src=audio.get("src") if audio is not None else None,
                    clip_begin=audio.get("clipBegin") if audio is not None else None,
                    clip_end=audio.get("clipEnd") if audio is not None else None,
                )
            )

    text_ref = None
    if body is not None:
        text_ref = body.get(_EPUB_TEXTREF)
        if text_ref is None:
            seq = next(iter_descendants(body, "seq"), None)
            text_ref = seq.get(_EPUB_TEXTREF) if seq is not None else None

    return Smil(
        version=root.get("version"),
        text_ref=text_ref,
        pars=tuple(pars),
    )


def load_smil(store: ResourceStore, path: str) -> Smil:
    """
    Décode le document SMIL à `path` (chemin déjà résolu par l'appelant).

    Raises:
        ResourceNotFoundError: si le document est absent
        DocumentDecodeError: si le document est mal formé
    """
    smil = decode_xml(store, path, parse_smil)
    logger.debug("Decoded SMIL %s with %d par elements", path, len(smil.pars))
    return smil
