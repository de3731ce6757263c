"""Enumerated highlight languages and their Pygments lexer bindings.

The set of languages is fixed process configuration: code fences may only ask
for a member of :class:`SupportedLanguage` or one of its aliases. Each member
maps to an ordered tuple of Pygments lexer aliases; the first one the
installed Pygments release knows is used. Prisma and Bicep have no dedicated
lexer in current Pygments releases, so they fall back to the closest grammar.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from df12_mdx.errors import UnsupportedLanguageError


class SupportedLanguage(enum.StrEnum):
    """Languages a highlight engine can be configured with."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PHP = "php"
    PYTHON = "python"
    RUBY = "ruby"
    SHELL = "shell"
    CSHARP = "c#"
    PLAIN_TEXT = "text"
    JAVA = "java"
    KOTLIN = "kotlin"
    TERRAFORM = "terraform"
    MAKE = "make"
    HCL = "hcl"
    DART = "dart"
    GO = "go"
    YAML = "yaml"
    BICEP = "bicep"
    DOCKERFILE = "dockerfile"
    JSON = "json"
    PRISMA = "prisma"
    TOML = "toml"
    GRAPHQL = "graphql"


@dc.dataclass(frozen=True, slots=True)
class LexerBinding:
    """Pygments lexer aliases (in preference order) and lexer options."""

    aliases: tuple[str, ...]
    options: typ.Mapping[str, object] = dc.field(default_factory=dict)


LEXER_BINDINGS: dict[SupportedLanguage, LexerBinding] = {
    SupportedLanguage.JAVASCRIPT: LexerBinding(("javascript",)),
    SupportedLanguage.TYPESCRIPT: LexerBinding(("typescript",)),
    SupportedLanguage.PHP: LexerBinding(("php",), {"startinline": True}),
    SupportedLanguage.PYTHON: LexerBinding(("python",)),
    SupportedLanguage.RUBY: LexerBinding(("ruby",)),
    SupportedLanguage.SHELL: LexerBinding(("bash",)),
    SupportedLanguage.CSHARP: LexerBinding(("csharp",)),
    SupportedLanguage.PLAIN_TEXT: LexerBinding(("text",)),
    SupportedLanguage.JAVA: LexerBinding(("java",)),
    SupportedLanguage.KOTLIN: LexerBinding(("kotlin",)),
    SupportedLanguage.TERRAFORM: LexerBinding(("terraform",)),
    SupportedLanguage.MAKE: LexerBinding(("make",)),
    SupportedLanguage.HCL: LexerBinding(("hcl", "terraform")),
    SupportedLanguage.DART: LexerBinding(("dart",)),
    SupportedLanguage.GO: LexerBinding(("go",)),
    SupportedLanguage.YAML: LexerBinding(("yaml",)),
    SupportedLanguage.BICEP: LexerBinding(("bicep", "typescript")),
    SupportedLanguage.DOCKERFILE: LexerBinding(("dockerfile",)),
    SupportedLanguage.JSON: LexerBinding(("json",)),
    SupportedLanguage.PRISMA: LexerBinding(("prisma", "graphql")),
    SupportedLanguage.TOML: LexerBinding(("toml",)),
    SupportedLanguage.GRAPHQL: LexerBinding(("graphql",)),
}

LANGUAGE_ALIASES: dict[str, SupportedLanguage] = {
    "js": SupportedLanguage.JAVASCRIPT,
    "jsx": SupportedLanguage.JAVASCRIPT,
    "ts": SupportedLanguage.TYPESCRIPT,
    "tsx": SupportedLanguage.TYPESCRIPT,
    "py": SupportedLanguage.PYTHON,
    "rb": SupportedLanguage.RUBY,
    "sh": SupportedLanguage.SHELL,
    "bash": SupportedLanguage.SHELL,
    "zsh": SupportedLanguage.SHELL,
    "shellscript": SupportedLanguage.SHELL,
    "csharp": SupportedLanguage.CSHARP,
    "cs": SupportedLanguage.CSHARP,
    "txt": SupportedLanguage.PLAIN_TEXT,
    "plaintext": SupportedLanguage.PLAIN_TEXT,
    "plain text": SupportedLanguage.PLAIN_TEXT,
    "kt": SupportedLanguage.KOTLIN,
    "tf": SupportedLanguage.TERRAFORM,
    "makefile": SupportedLanguage.MAKE,
    "yml": SupportedLanguage.YAML,
    "docker": SupportedLanguage.DOCKERFILE,
    "gql": SupportedLanguage.GRAPHQL,
}


def resolve_language(name: str) -> SupportedLanguage:
    """Return the supported language named by ``name`` or one of its aliases.

    Raises
    ------
    UnsupportedLanguageError
        If ``name`` is neither a canonical language nor a known alias.
    """
    normalized = name.strip().lower()
    try:
        return SupportedLanguage(normalized)
    except ValueError:
        pass
    try:
        return LANGUAGE_ALIASES[normalized]
    except KeyError as exc:
        raise UnsupportedLanguageError(name) from exc


__all__ = [
    "LANGUAGE_ALIASES",
    "LEXER_BINDINGS",
    "LexerBinding",
    "SupportedLanguage",
    "resolve_language",
]
