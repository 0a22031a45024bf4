"""Pattern-based extraction of link-preview metadata from raw HTML.

No document tree is built. Each preview field is described by an ordered list
of ``ExtractionRule`` objects; the first rule that yields a non-empty value
wins for that field.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, Sequence

from app.schemas.preview import PreviewData
from app.services.errors import InvalidBaseURL
from app.services.urls import origin, resolve_url

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE


def _attr(name: str, value: str, group: str) -> str:
    # name="value" or name='value', not matching data-name= and friends
    return (
        rf"(?<![\w-]){name}\s*=\s*(?P<{group}_q>[\"'])"
        rf"{value}(?P={group}_q)"
    )


# a quoted value never runs past its own closing quote
_VALUE = r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')"""
_CONTENT = rf"(?<![\w-])content\s*=\s*{_VALUE}"


@lru_cache(maxsize=None)
def _meta_patterns(attribute: str, key: str) -> tuple[re.Pattern[str], ...]:
    selector = _attr(re.escape(attribute), re.escape(key), "key")
    return (
        re.compile(rf"<meta\s[^>]*?{selector}[^>]*?{_CONTENT}", _FLAGS),
        re.compile(rf"<meta\s[^>]*?{_CONTENT}[^>]*?{selector}", _FLAGS),
    )


_ICON_REL = _attr("rel", r"(?:shortcut\s+)?icon", "rel")
_ICON_HREF = rf"(?<![\w-])href\s*=\s*{_VALUE}"

FAVICON_PATTERNS = (
    re.compile(rf"<link\s[^>]*?{_ICON_REL}[^>]*?{_ICON_HREF}", _FLAGS),
    re.compile(rf"<link\s[^>]*?{_ICON_HREF}[^>]*?{_ICON_REL}", _FLAGS),
)


def _first_value(html: str, patterns: Sequence[re.Pattern[str]]) -> Optional[str]:
    for pattern in patterns:
        for match in pattern.finditer(html):
            value = match.group("dq")
            if value is None:
                value = match.group("sq")
            if value:
                return value
    return None


@dataclass(frozen=True)
class ExtractionRule:
    """Read ``field`` from a ``<meta {attribute}="{key}" content="...">`` tag."""

    field: str
    attribute: str
    key: str
    priority: int

    def match(self, html: str) -> Optional[str]:
        return _first_value(html, _meta_patterns(self.attribute, self.key))


EXTRACTION_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("image", "property", "og:image", 0),
    ExtractionRule("image", "name", "og:image", 1),
    ExtractionRule("image", "name", "twitter:image", 2),
    ExtractionRule("image", "property", "twitter:image", 3),
    ExtractionRule("title", "property", "og:title", 0),
    ExtractionRule("title", "name", "og:title", 1),
    ExtractionRule("title", "name", "twitter:title", 2),
    ExtractionRule("title", "property", "twitter:title", 3),
    ExtractionRule("description", "property", "og:description", 0),
    ExtractionRule("description", "name", "og:description", 1),
    ExtractionRule("description", "name", "twitter:description", 2),
    ExtractionRule("description", "property", "twitter:description", 3),
    ExtractionRule("description", "name", "description", 4),
    ExtractionRule("description", "property", "description", 5),
    ExtractionRule("site_name", "property", "og:site_name", 0),
    ExtractionRule("site_name", "name", "og:site_name", 1),
)

PREVIEW_FIELDS = ("image", "title", "description", "site_name")


def extract_field(
    html: str, field: str, rules: Sequence[ExtractionRule] = EXTRACTION_RULES
) -> Optional[str]:
    """Return the value of the highest-priority rule that matches ``field``."""
    candidates = sorted(
        (rule for rule in rules if rule.field == field),
        key=lambda rule: rule.priority,
    )
    for rule in candidates:
        value = rule.match(html)
        if value is not None:
            return value
    return None


def extract_favicon(html: str, source_url: str) -> Optional[str]:
    href = _first_value(html, FAVICON_PATTERNS)
    if href is not None:
        return resolve_url(href, source_url)
    try:
        return f"{origin(source_url)}/favicon.ico"
    except InvalidBaseURL:
        return None


def _guarded(
    field: str, source_url: str, extract: Callable[[], Optional[str]]
) -> Optional[str]:
    try:
        return extract()
    except Exception:
        logger.exception(
            "preview.parse.field_failed",
            extra={"field": field, "source_url": source_url},
        )
        return None


def parse_metadata(
    html: str,
    source_url: str,
    rules: Sequence[ExtractionRule] = EXTRACTION_RULES,
) -> PreviewData:
    """Build a ``PreviewData`` from the page text fetched from ``source_url``.

    Never raises: a failure while extracting one field leaves only that field
    empty.
    """
    values: dict[str, Optional[str]] = {}
    for field in PREVIEW_FIELDS:
        values[field] = _guarded(
            field, source_url, lambda field=field: extract_field(html, field, rules)
        )

    image = values["image"]
    if image is not None:
        values["image"] = _guarded(
            "image", source_url, lambda: resolve_url(image, source_url)
        )

    values["favicon"] = _guarded(
        "favicon", source_url, lambda: extract_favicon(html, source_url)
    )
    return PreviewData(**values)
