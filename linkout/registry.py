"""Registry of link-out types.

The registry is assembled once at startup by :func:`build_registry` and then
passed to whatever needs to turn a type key into a builder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .builders import (
    build_gbrowse_linkout,
    build_generic_linkout,
    build_jbrowse_linkout,
    build_none_linkout,
)
from .params import NONE_LINKOUT_TYPE
from .records import AuxiliaryInfo, HitRecord
from .render import Link

logger = logging.getLogger(__name__)

LinkBuilder = Callable[[str, HitRecord, AuxiliaryInfo, Optional[Mapping[str, Any]]], Optional[Link]]


class UnknownLinkoutTypeError(KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class LinkoutTypeDescriptor:
    key: str
    name: str
    process: LinkBuilder
    help: str = ""
    require_regex: bool = False
    require_db: bool = False
    require_alignments: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key.strip():
            raise ValueError("link-out type key is required")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError(f"link-out type '{self.key}' must have a name")
        if not callable(self.process):
            raise ValueError(f"link-out type '{self.key}' must supply a callable process function")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "help": self.help,
            "require_regex": self.require_regex,
            "require_db": self.require_db,
            "require_alignments": self.require_alignments,
        }


Contribution = Union[LinkoutTypeDescriptor, Mapping[str, Any]]
Contributor = Callable[[], Iterable[Contribution]]


def descriptor_from_mapping(mapping: Mapping[str, Any]) -> LinkoutTypeDescriptor:
    return LinkoutTypeDescriptor(
        key=str(mapping.get("key", "") or "").strip(),
        name=str(mapping.get("name", "") or "").strip(),
        process=mapping.get("process", mapping.get("process function")),
        help=str(mapping.get("help", "") or ""),
        require_regex=bool(mapping.get("require_regex", False)),
        require_db=bool(mapping.get("require_db", False)),
        require_alignments=bool(mapping.get("require_alignments", False)),
    )


class LinkoutRegistry:
    def __init__(self) -> None:
        self._types: Dict[str, LinkoutTypeDescriptor] = {}

    def register(self, contribution: Contribution) -> LinkoutTypeDescriptor:
        """Add a descriptor; a repeated key replaces the old entry in place."""

        if isinstance(contribution, LinkoutTypeDescriptor):
            descriptor = contribution
        else:
            descriptor = descriptor_from_mapping(contribution)
        if descriptor.key in self._types:
            logger.debug("Link-out type '%s' replaced by a later registration", descriptor.key)
        self._types[descriptor.key] = descriptor
        return descriptor

    def get(self, key: str) -> LinkoutTypeDescriptor:
        try:
            return self._types[key]
        except KeyError as exc:
            raise UnknownLinkoutTypeError(f"Unknown link-out type '{key}'") from exc

    def list_types(self) -> Dict[str, LinkoutTypeDescriptor]:
        return dict(self._types)

    def choices(self) -> List[Tuple[str, str]]:
        return [(key, descriptor.name) for key, descriptor in self._types.items()]

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


def builtin_linkout_types() -> List[LinkoutTypeDescriptor]:
    return [
        LinkoutTypeDescriptor(
            key=NONE_LINKOUT_TYPE,
            name="None",
            process=build_none_linkout,
            help="Hits are listed by name without a link.",
        ),
        LinkoutTypeDescriptor(
            key="link",
            name="Generic Link",
            process=build_generic_linkout,
            help=(
                "The link-out id is appended to the URL prefix, e.g. "
                "<em>https://example.org/feature/</em> becomes "
                "<em>https://example.org/feature/Chr01</em>."
            ),
            require_regex=True,
            require_db=True,
        ),
        LinkoutTypeDescriptor(
            key="gbrowse",
            name="GBrowse",
            process=build_gbrowse_linkout,
            help=(
                "Opens GBrowse on the hit region with the HSPs drawn as a "
                "<em>BlastHit</em> feature. The link-out id must be a reference "
                "sequence name known to GBrowse."
            ),
            require_regex=True,
            require_db=True,
            require_alignments=True,
        ),
        LinkoutTypeDescriptor(
            key="jbrowse",
            name="JBrowse",
            process=build_jbrowse_linkout,
            help=(
                "Opens JBrowse on the hit region and adds a <em>BLAST Result</em> "
                "track. The URL prefix must end in <em>?</em> or <em>&amp;</em> "
                "and the link-out id must be a reference sequence name."
            ),
            require_regex=True,
            require_db=True,
            require_alignments=True,
        ),
    ]


def build_registry(contributors: Iterable[Contributor] = ()) -> LinkoutRegistry:
    registry = LinkoutRegistry()
    for descriptor in builtin_linkout_types():
        registry.register(descriptor)
    for contributor in contributors:
        for contribution in contributor():
            registry.register(contribution)
    return registry
