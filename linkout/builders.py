"""Link-out builders for BLAST hits.

Every builder takes ``(url_prefix, hit, info, options)`` and returns a
:class:`~linkout.render.Link`, or ``None`` when the hit cannot be linked and
the caller should show plain text instead.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .records import AuxiliaryInfo, HitRecord, Hsp
from .render import Link, render_link

NEW_WINDOW = {"target": "_blank"}
GBROWSE_FEATURE_NAME = "BlastHit"
JBROWSE_TRACK_TYPE = "JBrowse/View/Track/CanvasFeatures"

BuilderOptions = Optional[Mapping[str, Any]]


class EmptyAlignmentSetError(ValueError):
    """Raised when a coordinate-based builder receives no HSPs."""


def _require_hsps(hsps: Sequence[Hsp]) -> None:
    if not hsps:
        raise EmptyAlignmentSetError("at least one HSP is required to build a browser link-out")


def hsp_ranges(hsps: Sequence[Hsp]) -> Tuple[List[str], List[int]]:
    """Return ``start..stop`` range labels and the flat list of their bounds."""

    ranges: List[str] = []
    coords: List[int] = []
    for hsp in hsps:
        start = min(hsp.hit_from, hsp.hit_to)
        stop = max(hsp.hit_from, hsp.hit_to)
        ranges.append(f"{start}..{stop}")
        coords.extend((start, stop))
    return ranges, coords


def coordinate_span(coords: Sequence[int]) -> Tuple[int, int]:
    if not coords:
        raise EmptyAlignmentSetError("no coordinates to span")
    return min(coords), max(coords)


def screen_buffer(span_min: int, span_max: int) -> int:
    # round(span / 6), halves away from zero; span is never negative.
    span = span_max - span_min
    return (2 * span + 6) // 12


def jbrowse_subfeatures(hsps: Sequence[Hsp]) -> Tuple[List[str], List[int]]:
    """Return ``match_part`` fragments and the raw (unswapped) coordinates."""

    fragments: List[str] = []
    coords: List[int] = []
    for hsp in hsps:
        if hsp.is_reverse:
            strand = "-1"
            start, end = hsp.hit_to, hsp.hit_from
        else:
            strand = "1"
            start, end = hsp.hit_from, hsp.hit_to
        coords.extend((hsp.hit_from, hsp.hit_to))
        fragments.append(
            f'{{"start":{start},"end":{end},"strand":"{strand}","type":"match_part"}}'
        )
    return fragments, coords


def build_none_linkout(
    url_prefix: str,
    hit: HitRecord,
    info: AuxiliaryInfo,
    options: BuilderOptions = None,
) -> Optional[Link]:
    return None


def build_generic_linkout(
    url_prefix: str,
    hit: HitRecord,
    info: AuxiliaryInfo,
    options: BuilderOptions = None,
) -> Optional[Link]:
    if not hit.linkout_id:
        return None
    return render_link(hit.linkout_id, url_prefix + hit.linkout_id, attributes=NEW_WINDOW)


def build_gbrowse_linkout(
    url_prefix: str,
    hit: HitRecord,
    info: AuxiliaryInfo,
    options: BuilderOptions = None,
) -> Optional[Link]:
    """Link to a GBrowse location with the HSPs drawn as an added feature.

    GBrowse wants ``;`` between parameters, so every ``&`` in the finished
    URL is swapped out.
    """

    if not hit.linkout_id:
        return None
    _require_hsps(info.hsps)

    ranges, coords = hsp_ranges(info.hsps)
    span_min, span_max = coordinate_span(coords)
    query = {
        "ref": hit.linkout_id,
        "start": span_min,
        "stop": span_max,
        "add": f"{hit.linkout_id} BLAST {GBROWSE_FEATURE_NAME} {','.join(ranges)}",
        "h_feat": GBROWSE_FEATURE_NAME,
    }
    link = render_link(hit.linkout_id, url_prefix, attributes=NEW_WINDOW, query=query)
    return Link(text=link.text, href=link.href.replace("&", ";"), attributes=link.attributes)


def build_jbrowse_linkout(
    url_prefix: str,
    hit: HitRecord,
    info: AuxiliaryInfo,
    options: BuilderOptions = None,
) -> Optional[Link]:
    """Link to a JBrowse location with the hit added as a feature track.

    The viewport is padded so the hit fills roughly the middle two thirds.
    The ``blast`` track is added but not switched on; the prefix must already
    end in ``?`` or ``&``.
    """

    if not hit.linkout_id:
        return None
    _require_hsps(info.hsps)

    subfeatures, coords = jbrowse_subfeatures(info.hsps)
    span_min, span_max = coordinate_span(coords)
    buffer = screen_buffer(span_min, span_max)
    screen_start = span_min - buffer
    screen_end = span_max + buffer

    seq_id = hit.linkout_id
    fragments = [
        f"loc={seq_id}:{screen_start}..{screen_end}",
        (
            f'addFeatures=[{{"seq_id":"{seq_id}","start":{span_min},"end":{span_max},'
            f'"name":"{info.query_name} Blast Hit","subfeatures":[{",".join(subfeatures)}]}}]'
        ),
        (
            'addTracks=[{"label":"blast","key":"BLAST Result",'
            f'"type":"{JBROWSE_TRACK_TYPE}","store":"url"}}]'
        ),
    ]
    return render_link(seq_id, url_prefix + "&".join(fragments), attributes=NEW_WINDOW)
