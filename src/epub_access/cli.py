# epub_access/src/epub_access/cli.py
"""
Logique pour le mode ligne de commande.

Ouvre une ou plusieurs publications et en affiche un résumé.
"""

import logging
import os
from typing import List

from .core.epub import InvalidPublicationError
from .core.file_utils import find_epubs_in_folder, is_expanded_publication, open_publication
from .core.models import PublicationSummary

logger = logging.getLogger(__name__)


def summarize_publication(path: str) -> PublicationSummary:
    """
    Ouvre une publication et construit son résumé.

    Une publication invalide donne un résumé avec `error` renseigné.
    """
    summary = PublicationSummary(path=path)
    try:
        pub = open_publication(path)
    except InvalidPublicationError as e:
        logger.warning("Could not open %s: %s", path, e)
        summary.error = str(e)
        return summary

    with pub:
        dc = pub.opf.metadata.dublin_core
        summary.rootfile = pub.rootfile_path
        summary.title = (dc.get("title") or (None,))[0]
        summary.language = (dc.get("language") or (None,))[0]
        summary.manifest_count = len(pub.opf.manifest)
        summary.spine_count = len(pub.opf.spine.items)
        summary.nav_point_count = len(pub.ncx.nav_points)
        summary.navigation_status = pub.navigation.status
        summary.encryption_status = pub.encryption_document.status
        summary.license_status = pub.license_document.status
        summary.encrypted_resources = len(pub.encryption.items)
    return summary


def cli_inspect(path: str) -> List[PublicationSummary]:
    """
    Inspecte une archive, une publication décompressée ou un dossier d'archives.

    Args:
        path: Chemin à inspecter

    Returns:
        Liste des résumés, un par publication
    """
    logger.info("CLI mode - inspecting: %s", path)
    if os.path.isdir(path) and not is_expanded_publication(path):
        targets = find_epubs_in_folder(path)
    else:
        targets = [path]

    summaries = [summarize_publication(target) for target in targets]
    logger.info("CLI mode - inspected %d publication(s)", len(summaries))
    return summaries


def _status(value) -> str:
    return value.value if value is not None else "-"


def print_publication_summary(summaries: List[PublicationSummary]):
    """Affiche un résumé des publications inspectées."""
    print("\n=== Résumé de l'inspection ===")
    print(f"Publications: {len(summaries)}")

    failures = sum(1 for s in summaries if s.error)
    print(f"En erreur: {failures}")

    for s in summaries:
        print(f"\n{os.path.basename(s.path.rstrip(os.sep)) or s.path}:")
        if s.error:
            print(f"  Erreur: {s.error}")
            continue
        print(f"  Rootfile: {s.rootfile}")
        print(f"  Titre: {s.title or '-'}")
        print(f"  Langue: {s.language or '-'}")
        print(f"  Manifeste: {s.manifest_count} items, spine: {s.spine_count} items")
        print(f"  Navigation: {_status(s.navigation_status)} ({s.nav_point_count} entrées)")
        print(f"  Chiffrement: {_status(s.encryption_status)} ({s.encrypted_resources} ressources)")
        print(f"  Licence LCP: {_status(s.license_status)}")
