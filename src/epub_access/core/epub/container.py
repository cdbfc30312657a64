# epub_access/src/epub_access/core/epub/container.py
"""
Module de résolution du conteneur.

Responsabilité unique: Décoder META-INF/container.xml et choisir le rootfile principal.
"""

import logging

from lxml import etree

from ...config import CONTAINER_PATH
from ..models import Container, Rootfile
from .documents import decode_xml, first_child, iter_children, local_name
from .errors import DocumentDecodeError
from .store import ResourceStore

logger = logging.getLogger(__name__)


def parse_container(root: etree._Element, path: str = CONTAINER_PATH) -> Container:
    """
    Construit un Container depuis la racine XML.

    Le premier rootfile dans l'ordre du document devient le rootfile principal,
    sans inspecter media-type ni version.

    Raises:
        DocumentDecodeError: si la racine n'est pas <container> ou si aucun
            rootfile n'est déclaré
    """
    if local_name(root.tag) != "container":
        raise DocumentDecodeError(path, f"unexpected root element <{local_name(root.tag)}>")

    rootfiles = []
    rootfiles_node = first_child(root, "rootfiles")
    if rootfiles_node is not None:
        for node in iter_children(rootfiles_node, "rootfile"):
            rootfiles.append(
                Rootfile(
                    path=(node.get("full-path") or "").strip(),
                    media_type=node.get("media-type") or "",
                    version=node.get("version") or "",
                )
            )

    if not rootfiles or not rootfiles[0].path:
        raise DocumentDecodeError(path, "no rootfile declared")

    if len(rootfiles) > 1:
        logger.info("Container lists %d rootfiles, using %s", len(rootfiles), rootfiles[0].path)

    return Container(rootfiles=tuple(rootfiles), primary=rootfiles[0])


def load_container(store: ResourceStore) -> Container:
    """
    Lit le descripteur de conteneur à son emplacement fixe.

    Raises:
        ResourceNotFoundError: si META-INF/container.xml est absent
        DocumentDecodeError: si le descripteur est invalide
    """
    return decode_xml(store, CONTAINER_PATH, parse_container)
