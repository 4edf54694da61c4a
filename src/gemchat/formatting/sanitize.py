"""HTML sanitization.

Hides the allow-list: which tags and attributes survive. Script and style
elements are dropped together with their content, event-handler
attributes are never allowed, and URLs are limited to nh3's safe schemes.
"""

from collections.abc import Iterable

import nh3

# Highlighted code carries its language and token classes on these tags
CLASS_TAGS = ("pre", "code", "span", "div")


class HtmlSanitizer:
    """Allow-list HTML cleaner backed by nh3 (ammonia)."""

    def __init__(
        self,
        extra_tags: Iterable[str] = (),
        class_tags: Iterable[str] = CLASS_TAGS,
    ) -> None:
        self._tags = set(nh3.ALLOWED_TAGS) | set(extra_tags)
        self._attributes = {tag: set(attrs) for tag, attrs in nh3.ALLOWED_ATTRIBUTES.items()}
        for tag in class_tags:
            self._attributes.setdefault(tag, set()).add("class")

    @property
    def tags(self) -> frozenset[str]:
        return frozenset(self._tags)

    def clean(self, html: str) -> str:
        """Return ``html`` with everything outside the allow-list removed."""
        return nh3.clean(html, tags=self._tags, attributes=self._attributes)
