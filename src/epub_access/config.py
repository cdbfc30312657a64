# epub_access/src/epub_access/config.py
"""
Configuration et constantes pour EPUB Access
"""

import os

# ---------- Chemins bien connus ----------
CONTAINER_PATH = "META-INF/container.xml"
ENCRYPTION_PATH = "META-INF/encryption.xml"
LICENSE_PATH = "META-INF/license.lcpl"

# ---------- Namespaces XML ----------
NAMESPACES = {
    "CONTAINER": "urn:oasis:names:tc:opendocument:xmlns:container",
    "OPF": "http://www.idpf.org/2007/opf",
    "DC": "http://purl.org/dc/elements/1.1/",
    "DAISY": "http://www.daisy.org/z3986/2005/ncx/",
    "SMIL": "http://www.w3.org/ns/SMIL",
    "EPUB": "http://www.idpf.org/2007/ops",
    "XMLENC": "http://www.w3.org/2001/04/xmlenc#",
    "DSIG": "http://www.w3.org/2000/09/xmldsig#",
    "COMPRESSION": "http://www.idpf.org/2016/encryption#compression",
}

# ---------- Types MIME ----------
OPF_MEDIA_TYPE = "application/oebps-package+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
SMIL_MEDIA_TYPE = "application/smil+xml"

# ---------- Extensions supportées ----------
SUPPORTED_EXT = (".epub",)

# ---------- Configuration lecture ----------
READ_CHUNK_SIZE = 64 * 1024

# ---------- Configuration logging ----------
LOG_DIR = "logs"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)
