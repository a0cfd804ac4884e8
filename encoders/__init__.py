"""
Streaming encoders for the asset compression pipeline.

Two codecs are supported, Brotli and Gzip. Exactly one is active per process;
see ``registry.select_codec``.
"""

from .brotli_encoder import BrotliStreamEncoder
from .gzip_encoder import GzipStreamEncoder
from .registry import (
    CodecInfo,
    CodecKind,
    codec_suffix,
    create_encoder,
    get_codec_info,
    list_available_codecs,
    select_codec,
)

__all__ = [
    'BrotliStreamEncoder',
    'GzipStreamEncoder',
    'CodecInfo',
    'CodecKind',
    'codec_suffix',
    'create_encoder',
    'get_codec_info',
    'list_available_codecs',
    'select_codec',
]
