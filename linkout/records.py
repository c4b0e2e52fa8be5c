from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple, Union

from .params import to_float, to_int


@dataclass(frozen=True)
class Hsp:
    hit_from: int
    hit_to: int
    query_from: Optional[int] = None
    query_to: Optional[int] = None
    bit_score: Optional[float] = None
    evalue: Optional[float] = None

    @property
    def is_reverse(self) -> bool:
        return self.hit_to - self.hit_from < 0


@dataclass(frozen=True)
class HitRecord:
    ordinal: int
    hit_id: str
    definition: str = ""
    accession: str = ""
    length: int = 0
    hsps: Tuple[Hsp, ...] = ()
    linkout_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.hit_id:
            return self.hit_id
        return self.definition.split()[0] if self.definition.strip() else ""


@dataclass(frozen=True)
class AuxiliaryInfo:
    query_name: str
    score: Optional[float] = None
    e_value: Optional[float] = None
    hsps: Tuple[Hsp, ...] = field(default_factory=tuple)

    @classmethod
    def for_hit(cls, hit: HitRecord, query_name: str) -> "AuxiliaryInfo":
        scores = [hsp.bit_score for hsp in hit.hsps if hsp.bit_score is not None]
        evalues = [hsp.evalue for hsp in hit.hsps if hsp.evalue is not None]
        return cls(
            query_name=query_name,
            score=max(scores) if scores else None,
            e_value=min(evalues) if evalues else None,
            hsps=tuple(hit.hsps),
        )


PatternArg = Union[str, Pattern[str]]


def extract_linkout_id(definition: str, hit_id: str, pattern: Optional[PatternArg]) -> Optional[str]:
    """Pull the link-out identifier out of a hit's header.

    The definition line is tried first, then the hit identifier. The first
    capture group wins; a pattern without groups yields the whole match.
    """

    if pattern is None:
        return None
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    for candidate in (definition, hit_id):
        if not candidate:
            continue
        match = compiled.search(candidate)
        if match is None:
            continue
        value = match.group(1) if compiled.groups else match.group(0)
        if value:
            return value
    return None


def _optional_int(payload: Dict[str, Any], name: str) -> Optional[int]:
    value = payload.get(name)
    if value is None or value == "":
        return None
    return to_int(value, name=name)


def _optional_float(payload: Dict[str, Any], name: str) -> Optional[float]:
    value = payload.get(name)
    if value is None or value == "":
        return None
    return to_float(value, name=name)


def hsp_from_payload(payload: Dict[str, Any]) -> Hsp:
    if not isinstance(payload, dict):
        raise ValueError("hsp must be an object")
    for required in ("hit_from", "hit_to"):
        if payload.get(required) is None:
            raise ValueError(f"hsp.{required} is required")
    return Hsp(
        hit_from=to_int(payload["hit_from"], name="hsp.hit_from"),
        hit_to=to_int(payload["hit_to"], name="hsp.hit_to"),
        query_from=_optional_int(payload, "query_from"),
        query_to=_optional_int(payload, "query_to"),
        bit_score=_optional_float(payload, "bit_score"),
        evalue=_optional_float(payload, "evalue"),
    )


def hit_from_payload(
    payload: Dict[str, Any],
    *,
    ordinal: int,
    pattern: Optional[PatternArg] = None,
) -> HitRecord:
    if not isinstance(payload, dict):
        raise ValueError("hit must be an object")
    raw_hsps = payload.get("hsps", [])
    if not isinstance(raw_hsps, list):
        raise ValueError("hit.hsps must be a list")
    hsps: List[Hsp] = [hsp_from_payload(item) for item in raw_hsps]

    hit_id = str(payload.get("hit_id", "") or "").strip()
    definition = str(payload.get("definition", "") or "").strip()

    linkout_id = payload.get("linkout_id")
    if linkout_id is not None:
        linkout_id = str(linkout_id).strip() or None
    else:
        linkout_id = extract_linkout_id(definition, hit_id, pattern)

    return HitRecord(
        ordinal=to_int(payload.get("ordinal", ordinal), name="hit.ordinal", min_value=0),
        hit_id=hit_id,
        definition=definition,
        accession=str(payload.get("accession", "") or "").strip(),
        length=to_int(payload.get("length", 0), name="hit.length", min_value=0),
        hsps=tuple(hsps),
        linkout_id=linkout_id,
    )


def hits_from_payload(
    payloads: Sequence[Dict[str, Any]],
    *,
    pattern: Optional[PatternArg] = None,
) -> List[HitRecord]:
    return [
        hit_from_payload(item, ordinal=index, pattern=pattern)
        for index, item in enumerate(payloads, start=1)
    ]
