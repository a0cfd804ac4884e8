"""
Error Types for the Asset Compression Pipeline
==============================================

Selection-phase errors (PatternError) are recovered inside the selector.
Everything else escapes ``CompressionPipeline.run`` and aborts the run.
"""

import time
import traceback
from pathlib import Path
from typing import Any, Dict, Optional


class CompressionError(Exception):
    """Base class for all pipeline errors"""

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a pipeline error.

        Args:
            message: Error description
            cause: Original exception that caused this error
            error_code: Specific error code for categorization
            details: Additional error context
        """
        super().__init__(message)
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = time.time()
        self.traceback = traceback.format_exc() if cause else None

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.cause:
            return f"{base_msg} (caused by {type(self.cause).__name__}: {self.cause})"
        return base_msg

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(message={super().__str__()!r}, "
                f"cause={self.cause!r}, error_code={self.error_code!r})")


class ConfigurationError(CompressionError, ValueError):
    """Invalid configuration values"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('error_code', 'CONFIG_INVALID')
        super().__init__(message, **kwargs)


class UnconfiguredCodecError(ConfigurationError):
    """No compression codec was selected"""

    def __init__(self, message: str = "No compression algorithm set. "
                                      "Enable exactly one of the 'brotli' or 'gzip' codecs.",
                 **kwargs):
        kwargs.setdefault('error_code', 'CODEC_UNCONFIGURED')
        super().__init__(message, **kwargs)


class PatternError(CompressionError):
    """Malformed glob pattern. Never escapes the selector."""

    def __init__(self, pattern: str, reason: str, **kwargs):
        kwargs.setdefault('error_code', 'PATTERN_INVALID')
        kwargs.setdefault('details', {'pattern': pattern, 'reason': reason})
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}", **kwargs)
        self.pattern = pattern
        self.reason = reason


class FileOperationError(CompressionError):
    """I/O failure tied to a specific path"""

    default_code = 'IO_ERROR'

    def __init__(self, message: str, path: Path, cause: Optional[Exception] = None, **kwargs):
        kwargs.setdefault('error_code', self.default_code)
        details = kwargs.pop('details', None) or {}
        details.setdefault('path', str(path))
        super().__init__(message, cause=cause, details=details, **kwargs)
        self.path = Path(path)


class SourceFileError(FileOperationError):
    """A selected source file could not be opened or read"""

    default_code = 'SOURCE_UNREADABLE'


class OutputWriteError(FileOperationError):
    """A compressed artifact could not be created, written or finalized"""

    default_code = 'OUTPUT_UNWRITABLE'


__all__ = [
    'CompressionError',
    'ConfigurationError',
    'UnconfiguredCodecError',
    'PatternError',
    'FileOperationError',
    'SourceFileError',
    'OutputWriteError',
]
