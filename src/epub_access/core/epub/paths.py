# epub_access/src/epub_access/core/epub/paths.py
"""
Résolution des chemins relatifs au rootfile principal.
"""

import posixpath


def resolve_path(rootfile_path: str, relative: str) -> str:
    """
    Joint `relative` au répertoire contenant le rootfile principal.

    Le résultat est normalisé ("." et ".." réduits), jamais préfixé par "./".
    Un href absolu ("/x") reste relatif au répertoire du rootfile.

    Args:
        rootfile_path: Chemin du rootfile, relatif à la racine de la publication
        relative: Chemin relatif au répertoire du rootfile (href du manifeste)

    Returns:
        Chemin relatif à la racine de la publication
    """
    joined = posixpath.join(posixpath.dirname(rootfile_path), relative.lstrip("/"))
    if not joined:
        return ""
    return posixpath.normpath(joined)
