"""
Sanitization of user-supplied free text.

Markup outside a small allow-list is escaped rather than dropped, so
`<script>` comes back as `&lt;script&gt;`. Allowed tags keep only their safe
attributes (an `<img>` loses its `onerror` handler but keeps `src`). The
result is HTML-safe text, so a bare `&` is returned as `&amp;`.
"""
import bleach


ALLOWED_TAGS = frozenset({
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
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
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "small",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})


def sanitize(text: str | None) -> str | None:
    """Return `text` with unsafe markup escaped. None passes through."""
    if text is None:
        return None
    return bleach.clean(
        text,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,
    )
