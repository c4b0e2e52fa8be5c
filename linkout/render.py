from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from markupsafe import Markup, escape


@dataclass(frozen=True)
class Link:
    text: str
    href: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def to_html(self) -> Markup:
        attrs = Markup("").join(
            Markup(' {}="{}"').format(name, value) for name, value in self.attributes.items()
        )
        return Markup('<a href="{}"{}>{}</a>').format(self.href, attrs, self.text)


def build_query_string(query: Mapping[str, Any]) -> str:
    """Raw-URL-encode ``query`` pairs and join them with ``&``.

    Slashes inside values are kept as-is so path-like values stay readable.
    """

    parts = []
    for key, value in query.items():
        encoded_key = quote(str(key), safe="")
        if value is None:
            parts.append(encoded_key)
            continue
        parts.append(f"{encoded_key}={quote(str(value), safe='/')}")
    return "&".join(parts)


def render_link(
    text: str,
    href: str,
    *,
    attributes: Optional[Mapping[str, str]] = None,
    query: Optional[Mapping[str, Any]] = None,
) -> Link:
    if query:
        separator = "&" if "?" in href else "?"
        href = f"{href}{separator}{build_query_string(query)}"
    return Link(text=str(text), href=href, attributes=dict(attributes or {}))


def plain_text(text: str) -> Markup:
    return escape(text)
