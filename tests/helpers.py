# tests/helpers.py
"""
Publications d'exemple et fonctions de construction partagées par les tests.
"""

import struct
import zipfile
from pathlib import Path
from typing import Dict

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

CONTENT_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="bookid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>Test Book</dc:title>
    <dc:creator>Test Author</dc:creator>
    <dc:language>en</dc:language>
    <dc:identifier id="bookid">urn:uuid:1234</dc:identifier>
    <meta name="cover" content="cover-image"/>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="chap1" href="chapter1.xhtml" media-type="application/xhtml+xml" media-overlay="chap1-overlay"/>
    <item id="chap2" href="text/chapter%202.xhtml" media-type="application/xhtml+xml"/>
    <item id="chap1-overlay" href="audio/chapter1.smil" media-type="application/smil+xml"/>
    <item id="cover-image" href="images/cover.jpg" media-type="image/jpeg" properties="cover-image"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="chap1"/>
    <itemref idref="chap2" linear="no"/>
  </spine>
  <guide>
    <reference type="text" title="Start" href="chapter1.xhtml"/>
  </guide>
</package>
"""

TOC_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE ncx PUBLIC "-//NISO//DTD ncx 2005-1//EN" "http://www.daisy.org/z3986/2005/ncx-2005-1.dtd">
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="urn:uuid:1234"/>
  </head>
  <docTitle><text>Test Book</text></docTitle>
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text>Chapter 1</text></navLabel>
      <content src="chapter1.xhtml"/>
      <navPoint id="np1-1" playOrder="2">
        <navLabel><text>Section 1.1</text></navLabel>
        <content src="chapter1.xhtml#s1"/>
      </navPoint>
    </navPoint>
    <navPoint id="np2" playOrder="3">
      <navLabel><text>Chapter 2</text></navLabel>
      <content src="text/chapter%202.xhtml"/>
    </navPoint>
  </navMap>
  <pageList>
    <pageTarget id="p1" type="normal" value="1">
      <navLabel><text>1</text></navLabel>
      <content src="chapter1.xhtml#page1"/>
    </pageTarget>
  </pageList>
</ncx>
"""

CHAPTER1 = b"<html xmlns='http://www.w3.org/1999/xhtml'><body><p>One</p></body></html>"
CHAPTER2 = b"<html xmlns='http://www.w3.org/1999/xhtml'><body><p>Two</p></body></html>"

CHAPTER1_SMIL = """<?xml version="1.0" encoding="UTF-8"?>
<smil xmlns="http://www.w3.org/ns/SMIL" xmlns:epub="http://www.idpf.org/2007/ops" version="3.0">
  <body epub:textref="../chapter1.xhtml">
    <seq id="seq1">
      <par id="par1">
        <text src="../chapter1.xhtml#p1"/>
        <audio src="chapter1.mp3" clipBegin="0:00:00.000" clipEnd="0:00:05.000"/>
      </par>
      <par id="par2">
        <text src="../chapter1.xhtml#p2"/>
        <audio src="chapter1.mp3" clipBegin="0:00:05.000" clipEnd="0:00:09.500"/>
      </par>
    </seq>
  </body>
</smil>
"""

ENCRYPTION_XML = """<?xml version="1.0" encoding="UTF-8"?>
<encryption xmlns="urn:oasis:names:tc:opendocument:xmlns:container"
            xmlns:enc="http://www.w3.org/2001/04/xmlenc#"
            xmlns:ds="http://www.w3.org/2000/09/xmldsig#">
  <enc:EncryptedData>
    <enc:EncryptionMethod Algorithm="http://www.w3.org/2001/04/xmlenc#aes256-cbc"/>
    <ds:KeyInfo>
      <ds:RetrievalMethod URI="license.lcpl#/encryption/content_key"/>
    </ds:KeyInfo>
    <enc:CipherData>
      <enc:CipherReference URI="OEBPS/chapter1.xhtml"/>
    </enc:CipherData>
    <enc:EncryptionProperties>
      <enc:EncryptionProperty xmlns:ns="http://www.idpf.org/2016/encryption#compression">
        <ns:Compression Method="8" OriginalLength="72"/>
      </enc:EncryptionProperty>
    </enc:EncryptionProperties>
  </enc:EncryptedData>
</encryption>
"""

LICENSE = {
    "id": "license-1",
    "issued": "2024-01-01T00:00:00Z",
    "provider": "https://provider.example",
    "encryption": {
        "profile": "http://readium.org/lcp/basic-profile",
        "content_key": {
            "algorithm": "http://www.w3.org/2001/04/xmlenc#aes256-cbc",
            "encrypted_value": "AAAA",
        },
        "user_key": {
            "algorithm": "http://www.w3.org/2001/04/xmlenc#sha256",
            "text_hint": "Your passphrase",
            "key_check": "BBBB",
        },
    },
    "links": [
        {"rel": "hint", "href": "https://provider.example/hint"},
        {"rel": "publication", "href": "https://provider.example/book.epub", "length": "1024"},
    ],
    "rights": {"print": 10, "copy": 2000},
    "user": {"id": "user-1"},
    "signature": {"algorithm": "http://www.w3.org/2001/04/xmldsig-more#ecdsa-sha256"},
}


def base_publication_files() -> Dict[str, bytes]:
    """Contenu minimal mais complet d'une publication (chemin -> octets)."""
    return {
        "mimetype": b"application/epub+zip",
        "META-INF/container.xml": CONTAINER_XML.encode("utf-8"),
        "OEBPS/content.opf": CONTENT_OPF.encode("utf-8"),
        "OEBPS/toc.ncx": TOC_NCX.encode("utf-8"),
        "OEBPS/chapter1.xhtml": CHAPTER1,
        "OEBPS/text/chapter 2.xhtml": CHAPTER2,
        "OEBPS/audio/chapter1.smil": CHAPTER1_SMIL.encode("utf-8"),
        "OEBPS/images/cover.jpg": b"",
    }


def write_epub(path: Path, files: Dict[str, bytes]) -> Path:
    """Écrit une archive EPUB (mimetype en premier, non compressé)."""
    with zipfile.ZipFile(path, "w") as zf:
        if "mimetype" in files:
            zf.writestr("mimetype", files["mimetype"], compress_type=zipfile.ZIP_STORED)
        for name, data in files.items():
            if name == "mimetype":
                continue
            zf.writestr(name, data, compress_type=zipfile.ZIP_DEFLATED)
    return path


def write_dir(path: Path, files: Dict[str, bytes]) -> Path:
    """Écrit une publication décompressée."""
    for name, data in files.items():
        target = path.joinpath(*name.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return path



def damage_entry(path: Path, name: str) -> Path:
    """
    Écrase le début des données compressées d'une entrée de l'archive.

    0xFF en tête d'un flux deflate annonce un bloc de type invalide:
    la lecture de l'entrée échoue avec zlib.error.
    """
    with zipfile.ZipFile(path) as zf:
        offset = zf.getinfo(name).header_offset
    with open(path, "r+b") as fh:
        fh.seek(offset + 26)
        name_len, extra_len = struct.unpack("<HH", fh.read(4))
        fh.seek(offset + 30 + name_len + extra_len)
        fh.write(b"\xff" * 8)
    return path
