"""
Asset compression pipeline stages.
"""

# Import pipeline stages
from .stages.compression import StreamingCompressor, compressed_path
from .stages.selection import Selector, resolve

__all__ = [
    'StreamingCompressor',
    'compressed_path',
    'Selector',
    'resolve',
]
