"""
Pipeline stages for the asset compression system.
"""

from .compression import StreamingCompressor, compressed_path
from .selection import SelectedFileSet, Selector, resolve, validate_pattern

__all__ = [
    'StreamingCompressor',
    'compressed_path',
    'SelectedFileSet',
    'Selector',
    'resolve',
    'validate_pattern',
]
