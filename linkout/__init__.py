"""Link-out URL builders for BLAST search hits."""

from .builders import (
    EmptyAlignmentSetError,
    build_gbrowse_linkout,
    build_generic_linkout,
    build_jbrowse_linkout,
    build_none_linkout,
)
from .params import LinkoutParams
from .records import AuxiliaryInfo, HitRecord, Hsp, extract_linkout_id
from .registry import (
    LinkoutRegistry,
    LinkoutTypeDescriptor,
    UnknownLinkoutTypeError,
    build_registry,
)
from .render import Link, render_link
from .service import LinkoutResult, resolve_linkout, resolve_linkouts

__all__ = [
    "AuxiliaryInfo",
    "EmptyAlignmentSetError",
    "HitRecord",
    "Hsp",
    "Link",
    "LinkoutParams",
    "LinkoutRegistry",
    "LinkoutResult",
    "LinkoutTypeDescriptor",
    "UnknownLinkoutTypeError",
    "build_gbrowse_linkout",
    "build_generic_linkout",
    "build_jbrowse_linkout",
    "build_none_linkout",
    "build_registry",
    "extract_linkout_id",
    "render_link",
    "resolve_linkout",
    "resolve_linkouts",
]
