"""Load pipeline configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from df12_mdx.errors import UnsupportedLanguageError
from df12_mdx.highlight.languages import SupportedLanguage, resolve_language

from .models import PipelineConfig, PipelineConfigError, ThemeConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_pipeline_config(path: Path) -> PipelineConfig:
    """Load the YAML configuration describing highlight and heading settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``mdx.yaml``).

    Returns
    -------
    PipelineConfig
        Parsed configuration with defaults applied for every omitted key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    PipelineConfigError
        If a language is not supported or the theme section is malformed.

    Examples
    --------
    >>> from pathlib import Path
    >>> from df12_mdx.config import load_pipeline_config
    >>> config = load_pipeline_config(Path("mdx.yaml"))  # doctest: +SKIP
    >>> config.theme.variable_prefix  # doctest: +SKIP
    '--shiki-'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_pipeline_config(loaded)


def build_pipeline_config(raw: typ.Mapping[str, typ.Any]) -> PipelineConfig:
    """Build a PipelineConfig from an already parsed mapping."""
    base = PipelineConfig()
    languages = _build_languages(raw.get("languages"), base.languages)
    theme = _build_theme_config(raw.get("theme") or {})
    return PipelineConfig(
        languages=languages,
        theme=theme,
        section_heading=str(raw.get("section_heading", base.section_heading)),
        title_heading=str(raw.get("title_heading", base.title_heading)),
    )


def _build_languages(
    value: object, default: tuple[SupportedLanguage, ...]
) -> tuple[SupportedLanguage, ...]:
    """Resolve configured language names, keeping their order and dropping repeats."""
    match value:
        case None:
            return default
        case list() | tuple():
            resolved: list[SupportedLanguage] = []
            for entry in value:
                try:
                    language = resolve_language(str(entry))
                except UnsupportedLanguageError as exc:
                    msg = f"Unsupported language in configuration: {entry!r}"
                    raise PipelineConfigError(msg) from exc
                if language not in resolved:
                    resolved.append(language)
            if not resolved:
                msg = "At least one highlight language must be configured."
                raise PipelineConfigError(msg)
            return tuple(resolved)
        case _:
            msg = "'languages' must be a list of language names."
            raise PipelineConfigError(msg)


def _build_theme_config(payload: object) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    if not isinstance(payload, dict):
        msg = "'theme' must be a mapping."
        raise PipelineConfigError(msg)
    base = ThemeConfig()
    defaults = payload.get("variable_defaults") or {}
    if not isinstance(defaults, dict):
        msg = "'theme.variable_defaults' must be a mapping."
        raise PipelineConfigError(msg)
    return ThemeConfig(
        name=str(payload.get("name", base.name)),
        variable_prefix=str(payload.get("variable_prefix", base.variable_prefix)),
        font_style=bool(payload.get("font_style", base.font_style)),
        variable_defaults=tuple(
            (str(key), str(value)) for key, value in defaults.items()
        ),
    )


__all__ = ["build_pipeline_config", "load_pipeline_config"]
