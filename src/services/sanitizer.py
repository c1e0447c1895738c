"""
HTML sanitization for user-supplied text echoed back in responses.

Tags outside the allow-list are escaped rather than removed, so an injected
``<script>`` renders as inert text. Allowed tags keep only their allow-listed
attributes, which strips event handlers such as ``onerror``.
"""
from bleach.sanitizer import Cleaner


_ALLOWED_TAGS = {
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "del",
    "div",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "img",
    "ins",
    "li",
    "mark",
    "ol",
    "p",
    "pre",
    "s",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
}

_ALLOWED_ATTRS = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_CLEANER = Cleaner(
    tags=_ALLOWED_TAGS,
    attributes=_ALLOWED_ATTRS,
    protocols=_ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize(text: str | None) -> str | None:
    """Sanitize a user-supplied text field. None passes through."""
    if text is None:
        return None
    # Plain text without angle brackets is returned as is so "&" in URLs is not entity-encoded
    if "<" not in text and ">" not in text:
        return text
    return _CLEANER.clean(text)
