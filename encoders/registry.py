"""
Codec Registry
==============

Maps the process-wide ``CodecKind`` to its encoder class and artifact suffix.
Exactly one codec is active per process; selecting none, several, or an
unknown one is a configuration error raised at selection time.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Type

from base_classes import StreamEncoder
from pipeline_errors import ConfigurationError, UnconfiguredCodecError

from .brotli_encoder import BrotliStreamEncoder
from .gzip_encoder import GzipStreamEncoder

logger = logging.getLogger(__name__)


class CodecKind(Enum):
    """Available compression codecs"""
    BROTLI = "brotli"
    GZIP = "gzip"
    UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class CodecInfo:
    """Information about a supported codec"""
    kind: CodecKind
    encoder_class: Type[StreamEncoder]
    suffix: str
    description: str = ""


_CODECS: Dict[CodecKind, CodecInfo] = {
    CodecKind.BROTLI: CodecInfo(
        kind=CodecKind.BROTLI,
        encoder_class=BrotliStreamEncoder,
        suffix=BrotliStreamEncoder.suffix,
        description="Brotli, smaller output, supported by all modern browsers",
    ),
    CodecKind.GZIP: CodecInfo(
        kind=CodecKind.GZIP,
        encoder_class=GzipStreamEncoder,
        suffix=GzipStreamEncoder.suffix,
        description="Gzip via zlib, universally supported",
    ),
}


def select_codec(features: Optional[Iterable[str]]) -> CodecKind:
    """
    Turn the set of enabled codec features into a single codec.

    Args:
        features: Codec names such as ``["brotli"]``

    Returns:
        The selected codec

    Raises:
        UnconfiguredCodecError: if no codec is enabled
        ConfigurationError: if several codecs or an unknown name are given
    """
    names = {name.strip().lower() for name in (features or []) if name and name.strip()}
    known = {kind.value: kind for kind in _CODECS}

    unknown = sorted(names - set(known))
    if unknown:
        raise ConfigurationError(
            f"Unknown compression codec(s): {', '.join(unknown)}. "
            f"Choose one of: {', '.join(sorted(known))}",
            details={'features': sorted(names)},
        )
    if not names:
        raise UnconfiguredCodecError()
    if len(names) > 1:
        raise ConfigurationError(
            f"Only one compression codec may be enabled, got: {', '.join(sorted(names))}",
            error_code='CODEC_CONFLICT',
            details={'features': sorted(names)},
        )

    codec = known[names.pop()]
    logger.debug(f"Selected codec {codec.value}")
    return codec


def get_codec_info(kind: CodecKind) -> CodecInfo:
    """Look up the encoder class and suffix for ``kind``"""
    try:
        return _CODECS[kind]
    except KeyError as e:
        raise UnconfiguredCodecError(cause=e) from e


def codec_suffix(kind: CodecKind) -> str:
    return get_codec_info(kind).suffix


def create_encoder(kind: CodecKind, settings=None) -> StreamEncoder:
    """Instantiate a fresh encoder for ``kind`` using ``settings``"""
    info = get_codec_info(kind)
    return info.encoder_class.from_settings(settings)


def list_available_codecs() -> Dict[str, str]:
    return {info.kind.value: info.description for info in _CODECS.values()}
