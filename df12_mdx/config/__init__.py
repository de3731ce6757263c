"""Load and validate pipeline configuration for df12_mdx runs.

Configuration is process-level: the set of highlight languages, the CSS
variables theme, and the heading levels used for titles and sections are fixed
when the highlight engine is built and shared by every document run. The
primary entry point is :func:`load_pipeline_config`, which reads a YAML file,
applies defaults, and returns a frozen :class:`PipelineConfig`.

Examples
--------
>>> from df12_mdx.config import PipelineConfig
>>> PipelineConfig().theme.name
'css-variables'
"""

from .loader import build_pipeline_config, load_pipeline_config
from .models import PipelineConfig, PipelineConfigError, ThemeConfig

__all__ = [
    "PipelineConfig",
    "PipelineConfigError",
    "ThemeConfig",
    "build_pipeline_config",
    "load_pipeline_config",
]
