# epub_access/src/epub_access/core/models.py
"""
Modèles de données: enregistrements décodés depuis les documents de la publication.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


# --- Container ---


@dataclass(frozen=True)
class Rootfile:
    """Entrée <rootfile> du fichier META-INF/container.xml."""

    path: str = ""
    media_type: str = ""
    version: str = ""


@dataclass(frozen=True)
class Container:
    """Descripteur de conteneur: liste ordonnée des rootfiles."""

    rootfiles: Tuple[Rootfile, ...] = ()
    primary: Rootfile = field(default_factory=Rootfile)


# --- Document de package (OPF) ---


@dataclass(frozen=True)
class ManifestItem:
    id: str
    href: str
    media_type: str = ""
    properties: Tuple[str, ...] = ()
    media_overlay: str | None = None
    fallback: str | None = None


@dataclass(frozen=True)
class SpineItem:
    idref: str
    linear: bool = True
    properties: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Spine:
    items: Tuple[SpineItem, ...] = ()
    toc: str = ""
    page_progression_direction: str | None = None


@dataclass(frozen=True)
class GuideReference:
    type: str
    href: str
    title: str | None = None


@dataclass(frozen=True)
class OpfMetadata:
    """Métadonnées opaques: éléments Dublin Core et <meta name=... content=...>."""

    dublin_core: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    meta: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Opf:
    version: str = ""
    unique_identifier: str | None = None
    metadata: OpfMetadata = field(default_factory=OpfMetadata)
    manifest: Tuple[ManifestItem, ...] = ()
    spine: Spine = field(default_factory=Spine)
    guide: Tuple[GuideReference, ...] = ()


# --- Navigation (NCX) ---


@dataclass(frozen=True)
class NavPoint:
    id: str
    label: str
    src: str
    play_order: int | None = None
    children: Tuple["NavPoint", ...] = ()


@dataclass(frozen=True)
class PageTarget:
    id: str
    label: str
    src: str
    type: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class Ncx:
    uid: str | None = None
    title: str | None = None
    nav_points: Tuple[NavPoint, ...] = ()
    page_list: Tuple[PageTarget, ...] = ()


# --- Métadonnées DRM ---


@dataclass(frozen=True)
class EncryptedData:
    """Entrée <EncryptedData> de META-INF/encryption.xml."""

    uri: str
    algorithm: str | None = None
    key_retrieval: str | None = None
    compression_method: str | None = None
    original_length: int | None = None


@dataclass(frozen=True)
class Encryption:
    items: Tuple[EncryptedData, ...] = ()


@dataclass(frozen=True)
class LcpLink:
    rel: str
    href: str
    type: str | None = None
    title: str | None = None
    length: int | None = None
    hash: str | None = None
    templated: bool = False


@dataclass(frozen=True)
class LcpLicense:
    """Licence Readium LCP (META-INF/license.lcpl)."""

    id: str = ""
    provider: str = ""
    issued: str | None = None
    updated: str | None = None
    profile: str | None = None
    content_key_algorithm: str | None = None
    encrypted_content_key: str | None = None
    user_key_algorithm: str | None = None
    text_hint: str | None = None
    key_check: str | None = None
    links: Tuple[LcpLink, ...] = ()
    rights: Dict = field(default_factory=dict)
    user: Dict = field(default_factory=dict)
    signature: Dict = field(default_factory=dict)


# --- Media overlays (SMIL) ---


@dataclass(frozen=True)
class SmilPar:
    id: str | None
    text_src: str | None
    audio_src: str | None = None
    clip_begin: str | None = None
    clip_end: str | None = None


@dataclass(frozen=True)
class Smil:
    version: str | None = None
    text_ref: str | None = None
    pars: Tuple[SmilPar, ...] = ()


# --- Documents optionnels ---


class DocumentStatus(str, Enum):
    """Issue du chargement d'un document optionnel."""

    PRESENT = "present"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True)
class OptionalDocument(Generic[T]):
    """
    Résultat à trois états d'un document optionnel.

    `document` contient toujours un enregistrement utilisable: le document
    décodé si PRESENT, sinon la valeur vide par défaut.
    """

    status: DocumentStatus
    document: T
    path: Optional[str] = None
    error: Optional[str] = None


# --- Résumé (mode ligne de commande) ---


@dataclass
class PublicationSummary:
    """Modèle de données pour le résumé d'une publication inspectée."""

    path: str
    rootfile: str | None = None
    title: str | None = None
    language: str | None = None
    manifest_count: int = 0
    spine_count: int = 0
    nav_point_count: int = 0
    navigation_status: DocumentStatus | None = None
    encryption_status: DocumentStatus | None = None
    license_status: DocumentStatus | None = None
    encrypted_resources: int = 0
    error: str = ""
