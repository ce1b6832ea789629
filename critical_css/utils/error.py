"""Error utility for Critical CSS."""

class CriticalCssError(Exception):
    """Base exception for Critical CSS."""
    pass

class ParseFailure(CriticalCssError):
    """Raised when CSS text cannot be turned into a stylesheet tree."""
    pass

class MalformedAst(CriticalCssError):
    """Raised when a tree lacks the stylesheet/rules shape."""
    pass

class SerializationError(CriticalCssError):
    """Raised when a stylesheet tree cannot be turned back into CSS text."""
    pass

class ConfigurationError(CriticalCssError):
    """Raised when configuration is invalid."""
    pass

class FileOperationError(CriticalCssError):
    """Raised when file operations fail."""
    pass

# Exported exceptions
__all__ = [
    'CriticalCssError',
    'ParseFailure',
    'MalformedAst',
    'SerializationError',
    'ConfigurationError',
    'FileOperationError',
]
