from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .params import NONE_LINKOUT_TYPE, LinkoutParams
from .records import AuxiliaryInfo, HitRecord, hits_from_payload
from .registry import LinkoutRegistry
from .render import plain_text

logger = logging.getLogger(__name__)


@dataclass
class LinkoutResult:
    ordinal: int
    text: str
    href: Optional[str]
    html: str
    linked: bool

    def to_payload(self) -> Dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            "text": self.text,
            "href": self.href,
            "html": self.html,
            "linked": self.linked,
        }


def _fallback(hit: HitRecord, reason: str) -> LinkoutResult:
    logger.debug("Hit %s shown as plain text: %s", hit.ordinal, reason)
    text = hit.display_name
    return LinkoutResult(
        ordinal=hit.ordinal,
        text=text,
        href=None,
        html=str(plain_text(text)),
        linked=False,
    )


def resolve_linkout(
    registry: LinkoutRegistry,
    params: LinkoutParams,
    hit: HitRecord,
    info: Optional[AuxiliaryInfo] = None,
    options: Optional[Mapping[str, Any]] = None,
    *,
    query_name: str = "",
) -> LinkoutResult:
    descriptor = registry.get(params.linkout_type)
    if descriptor.key == NONE_LINKOUT_TYPE:
        return _fallback(hit, "link-out disabled")
    if descriptor.require_db and not params.url_prefix:
        return _fallback(hit, f"no URL prefix configured for '{descriptor.key}'")
    if descriptor.require_regex and not hit.linkout_id:
        return _fallback(hit, "no link-out id")

    if info is None:
        info = AuxiliaryInfo.for_hit(hit, query_name)
    if descriptor.require_alignments and not info.hsps:
        return _fallback(hit, "no HSPs")

    link = descriptor.process(params.url_prefix, hit, info, dict(options or {}))
    if link is None:
        return _fallback(hit, f"'{descriptor.key}' builder returned no link")
    return LinkoutResult(
        ordinal=hit.ordinal,
        text=link.text,
        href=link.href,
        html=str(link.to_html()),
        linked=True,
    )


def resolve_linkouts(
    registry: LinkoutRegistry,
    params: LinkoutParams,
    hits: Sequence[HitRecord],
    *,
    query_name: str = "",
    options: Optional[Mapping[str, Any]] = None,
) -> List[LinkoutResult]:
    return [
        resolve_linkout(registry, params, hit, options=options, query_name=query_name)
        for hit in hits
    ]


def linkouts_from_payload(
    registry: LinkoutRegistry, payload: Dict[str, Any]
) -> Tuple[LinkoutParams, List[LinkoutResult]]:
    params = LinkoutParams.from_payload(payload.get("database", {}))
    raw_hits = payload.get("hits")
    if not isinstance(raw_hits, list):
        raise ValueError("hits must be a list")
    options = payload.get("options") or {}
    if not isinstance(options, dict):
        raise ValueError("options must be an object")
    query_name = str(payload.get("query_name", "") or "").strip()

    # Unknown types fail before any hit is parsed.
    registry.get(params.linkout_type)
    hits = hits_from_payload(raw_hits, pattern=params.pattern)
    return params, resolve_linkouts(registry, params, hits, query_name=query_name, options=options)
