"""
Escaping utilities for widget rendering.

Attribute values and text nodes go through markupsafe so values coming
from a request can never break out of the markup. Values already wrapped
in ``Markup`` are trusted and emitted as they are.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import bleach
from markupsafe import Markup, escape

log = logging.getLogger(__name__)

# Tags kept when HTML widget content is sanitized
ALLOWED_TAGS = {
    "a", "abbr", "b", "br", "div", "em", "h1", "h2", "h3", "h4", "h5", "h6",
    "i", "img", "li", "ol", "p", "span", "strong", "table", "tbody", "td",
    "th", "thead", "tr", "u", "ul",
}

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "class", "id"],
    "img": ["src", "alt", "title", "class", "id", "width", "height"],
    "span": ["class", "id", "title"],
    "div": ["class", "id", "title"],
    "p": ["class", "id"],
    "td": ["class", "id", "colspan", "rowspan"],
    "th": ["class", "id", "colspan", "rowspan"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

# Characters Word pastes in place of plain single quotes
SMART_QUOTES = ("‘", "’")


def escape_value(value: Any) -> str:
    """
    Escape a value for use inside an attribute or a text node.

    The result is a plain ``str`` so it can be concatenated with other
    markup without markupsafe escaping the other operand.

    Args:
        value: Any value, ``None`` renders as an empty string

    Returns:
        Escaped text
    """
    if value is None:
        return ""
    if isinstance(value, Markup):
        return str(value)
    return str(escape(str(value)))


def sanitize_html(
    content: str,
    allowed_tags: Optional[set] = None,
    allowed_attributes: Optional[Dict[str, List[str]]] = None,
) -> Markup:
    """
    Strip disallowed tags and attributes from an HTML fragment.

    Args:
        content: HTML fragment to clean
        allowed_tags: Tags to keep, defaults to ``ALLOWED_TAGS``
        allowed_attributes: Attributes to keep per tag

    Returns:
        Cleaned fragment marked as safe
    """
    if not content:
        return Markup("")
    cleaned = bleach.clean(
        str(content),
        tags=allowed_tags or ALLOWED_TAGS,
        attributes=allowed_attributes or ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
    return Markup(cleaned)


def sanitize_submitted(value: Any) -> Any:
    """
    Make a submitted value safe to embed in HTML.

    Lists and dicts are handled recursively, scalars are stripped of Word
    smart quotes and escaped.
    """
    if isinstance(value, dict):
        return {key: sanitize_submitted(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_submitted(item) for item in value]
    if value is None:
        return Markup("")
    text = str(value)
    for quote in SMART_QUOTES:
        text = text.replace(quote, "'")
    return escape(text)


def slugify(text: str) -> str:
    """``"Billing_Address Info"`` -> ``"billing-address-info"``"""
    return str(text).strip().replace("_", "-").replace(" ", "-").lower()


def humanize(text: str) -> str:
    """``"billing_address-info"`` -> ``"Billing Address Info"``"""
    words = re.sub(r"[-_]", " ", str(text).strip()).split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)
