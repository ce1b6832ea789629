"""Configuration utility for Critical CSS."""

# Project version
VERSION = "1.0.0"

# Media type that producers may elide, e.g. "all and (min-width: 768px)"
MEDIA_ALL_PREFIX = "all and "

# Parser defaults
DEFAULT_PARSE_OPTIONS = {
    'silent': True,
    'source': None,
}

# Serializer defaults
DEFAULT_INDENT = "  "
DEFAULT_STRINGIFY_OPTIONS = {
    'indent': DEFAULT_INDENT,
    'compress': False,
    'sourcemap': True,
    'input_sourcemaps': True,
}

# At-rules dropped while parsing, matched by keyword suffix so vendor
# prefixed forms go too
DROPPED_AT_RULES = ('keyframes',)

# At-rules that only apply ahead of all other rules
LEADING_AT_RULES = ('charset', 'import', 'namespace')

# Pseudo selectors a live document cannot be queried for
PSEUDO_SELECTORS_TO_KEEP = [
    ':before',
    ':after',
    ':visited',
    ':first-letter',
    ':first-line',
]

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_LEVEL = 'INFO'

# Exported config
__all__ = [
    'VERSION', 'MEDIA_ALL_PREFIX',
    'DEFAULT_PARSE_OPTIONS', 'DEFAULT_STRINGIFY_OPTIONS',
    'DEFAULT_INDENT', 'DROPPED_AT_RULES', 'LEADING_AT_RULES',
    'PSEUDO_SELECTORS_TO_KEEP',
    'LOG_FORMAT', 'LOG_DATE_FORMAT', 'LOG_LEVEL',
]
