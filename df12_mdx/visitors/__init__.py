"""Tree visitors run by the enrichment pipeline, in dependency order.

1. :class:`AnnotationNormalizer` lifts ``{{ ... }}`` annotations.
2. :class:`CodeBlockClassifier` records code block languages.
3. :class:`SyntaxHighlighter` highlights classified blocks (async).
4. :class:`HeadingSlugAssigner` gives section headings identifiers.
5. :class:`TitleExtractor` derives the document title.
6. :class:`ExportSynthesizer` exports the section index.
"""

from .annotations import AnnotationNormalizer, parse_annotation
from .code_blocks import CodeBlockClassifier, code_language
from .exports import (
    ExportSynthesizer,
    add_export,
    build_export,
    declares,
    default_exports,
    get_sections,
)
from .highlighter import SyntaxHighlighter
from .slugs import HeadingSlugAssigner, SlugCounter, slugify
from .title import TitleExtractor

__all__ = [
    "AnnotationNormalizer",
    "CodeBlockClassifier",
    "ExportSynthesizer",
    "HeadingSlugAssigner",
    "SlugCounter",
    "SyntaxHighlighter",
    "TitleExtractor",
    "add_export",
    "build_export",
    "code_language",
    "declares",
    "default_exports",
    "get_sections",
    "parse_annotation",
    "slugify",
]
