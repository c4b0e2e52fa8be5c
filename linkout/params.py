from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Pattern

NONE_LINKOUT_TYPE = "none"
DEFAULT_LINKOUT_TYPE = NONE_LINKOUT_TYPE
DEFAULT_REGEX_TYPE = "default"
CUSTOM_REGEX_TYPE = "custom"

# Header conventions for common sequence databases; group 1 is the link-out id.
REGEX_PRESETS: Dict[str, str] = {
    "default": r"^(\S+)",
    "genbank": r"^gb\|([^|]+)\|",
    "embl": r"^emb\|([^|]+)\|",
    "swissprot": r"^sp\|([^|]+)\|",
    "pdb": r"^pdb\|([^|]+\|[^|\s]*)",
    "gnl": r"^gnl\|[^|]+\|(\S+)",
}


@dataclass(frozen=True)
class LinkoutParams:
    database_name: str = ""
    url_prefix: str = ""
    linkout_type: str = DEFAULT_LINKOUT_TYPE
    regex_type: str = DEFAULT_REGEX_TYPE
    custom_regex: Optional[str] = None

    @property
    def pattern(self) -> Pattern[str]:
        return resolve_pattern(self.regex_type, self.custom_regex)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "LinkoutParams":
        if not isinstance(payload, dict):
            raise ValueError("database must be an object")

        def require(name: str, default: Any) -> Any:
            value = payload.get(name, default)
            return default if value is None else value

        regex_type = parse_regex_type(require("regex_type", DEFAULT_REGEX_TYPE))
        custom_regex = str(require("custom_regex", "")).strip() or None
        # Fail on a bad custom pattern up front rather than per hit.
        resolve_pattern(regex_type, custom_regex)
        return cls(
            database_name=str(require("database_name", "")).strip(),
            url_prefix=str(require("url_prefix", "")).strip(),
            linkout_type=str(require("linkout_type", DEFAULT_LINKOUT_TYPE)).strip().lower() or DEFAULT_LINKOUT_TYPE,
            regex_type=regex_type,
            custom_regex=custom_regex,
        )


def parse_regex_type(value: Any) -> str:
    normalized = str(value).strip().lower() or DEFAULT_REGEX_TYPE
    if normalized != CUSTOM_REGEX_TYPE and normalized not in REGEX_PRESETS:
        allowed = ", ".join(sorted([*REGEX_PRESETS, CUSTOM_REGEX_TYPE]))
        raise ValueError(f"regex_type must be one of: {allowed}")
    return normalized


def resolve_pattern(regex_type: str, custom_regex: Optional[str] = None) -> Pattern[str]:
    if regex_type == CUSTOM_REGEX_TYPE:
        if not custom_regex:
            raise ValueError("custom_regex is required when regex_type is 'custom'")
        try:
            return re.compile(custom_regex)
        except re.error as exc:
            raise ValueError(f"custom_regex is not a valid regular expression: {exc}") from exc
    try:
        return re.compile(REGEX_PRESETS[regex_type])
    except KeyError as exc:
        raise ValueError(f"Unknown regex_type '{regex_type}'") from exc


def to_float(value: Any, *, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a floating-point number") from exc


def to_int(value: Any, *, name: str, min_value: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if min_value is not None and parsed < min_value:
        raise ValueError(f"{name} must be >= {min_value}")
    return parsed
