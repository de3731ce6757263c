"""Common literal values used across df12_mdx.

These constants keep tag names, class prefixes, and declaration templates
centralized so visitors, the parser, and tests can import the same values
without drifting. Intended for internal use within the df12_mdx package.

Examples
--------
>>> from df12_mdx import _constants
>>> _constants.EXPORT_DECLARATION_TEMPLATE.format(name="sections", value="[]")
'export const sections = []'
>>> "language-python".removeprefix(_constants.LANGUAGE_CLASS_PREFIX)
'python'
"""

SECTION_HEADING_TAG = "h2"
TITLE_HEADING_TAG = "h1"
LANGUAGE_CLASS_PREFIX = "language-"
EXPORT_DECLARATION_TEMPLATE = "export const {name} = {value}"
DEFAULT_THEME_NAME = "css-variables"
DEFAULT_VARIABLE_PREFIX = "--shiki-"
FALLBACK_SLUG = "section"
