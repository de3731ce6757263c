"""Assign URL-safe, collision-free identifiers to section headings."""

from __future__ import annotations

import logging
import re
import unicodedata

from df12_mdx._constants import FALLBACK_SLUG, SECTION_HEADING_TAG
from df12_mdx.tree import Root, iter_elements, to_string

logger = logging.getLogger(__name__)

REPLACEMENTS = (("&", " and "),)
ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return a lower-case, hyphen-separated ASCII slug for ``text``.

    Accents are transliterated, camelCase words are split, and anything that
    is not a letter or digit collapses into single hyphens. Text without any
    usable characters yields ``"section"``.

    Examples
    --------
    >>> slugify("Déjà vu & more")
    'deja-vu-and-more'
    >>> slugify("parseHTTPResponse")
    'parse-http-response'
    """
    for needle, replacement in REPLACEMENTS:
        text = text.replace(needle, replacement)
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    split = CAMEL_BOUNDARY.sub(r"\1 \2", ACRONYM_BOUNDARY.sub(r"\1 \2", ascii_text))
    slug = NON_ALPHANUMERIC.sub("-", split.lower()).strip("-")
    return slug or FALLBACK_SLUG


class SlugCounter:
    """Issue unique slugs, suffixing ``-1``, ``-2``, ... on repeated text.

    A counter belongs to exactly one document run; sharing it between runs
    would make identifiers depend on unrelated documents.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}
        self._issued: set[str] = set()

    def slug(self, text: str) -> str:
        """Return the next unused slug for ``text``."""
        base = slugify(text)
        count = self._occurrences.get(base, 0)
        candidate = base if count == 0 else f"{base}-{count}"
        while candidate in self._issued:
            count += 1
            candidate = f"{base}-{count}"
        self._occurrences[base] = count + 1
        self._issued.add(candidate)
        return candidate


class HeadingSlugAssigner:
    """Give every section heading without an ``id`` a generated one.

    Author-supplied identifiers are kept as written and are not registered
    with the counter.
    """

    def __init__(self, tag: str = SECTION_HEADING_TAG) -> None:
        self.tag = tag

    def run(self, tree: Root) -> Root:
        """Assign identifiers in document order and return ``tree``."""
        counter = SlugCounter()
        for heading, _parent in iter_elements(tree, self.tag):
            if heading.id:
                continue
            heading.id = counter.slug(to_string(heading))
            logger.debug("Assigned id %r to <%s>", heading.id, self.tag)
        return tree


__all__ = ["HeadingSlugAssigner", "SlugCounter", "slugify"]
