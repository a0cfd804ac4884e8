"""
Pipeline Configurations
=======================

Configuration for a single compression run, encoder tuning, and the
process-wide codec selection.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from encoders.registry import CodecKind, select_codec
from pipeline_errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE: Tuple[str, ...] = (
    "./dist/static/**/*.css",
    "./dist/pkg/**/*.wasm",
    "./dist/pkg/**/*.js",
)

CODEC_ENV_VAR = "ASSET_COMPRESS_CODEC"


def _as_patterns(name: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        raise ConfigurationError(f"{name} must be a sequence of glob strings, not a single string")
    try:
        patterns = tuple(value)
    except TypeError as e:
        raise ConfigurationError(f"{name} must be a sequence of glob strings", cause=e) from e
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise ConfigurationError(f"{name} entries must be strings, got {type(pattern).__name__}")
    return patterns


@dataclass(frozen=True)
class CompressionConfig:
    """Options for one compression run.

    ``include`` and ``exclude`` are glob patterns resolved relative to the
    current working directory. ``should_run`` is the master switch, usually
    derived from a build-mode flag so compression is skipped in development.
    """

    include: Tuple[str, ...] = DEFAULT_INCLUDE
    exclude: Tuple[str, ...] = ()
    should_run: bool = True

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'include', _as_patterns('include', self.include))
        object.__setattr__(self, 'exclude', _as_patterns('exclude', self.exclude))
        if not isinstance(self.should_run, bool):
            raise ConfigurationError("should_run must be a boolean")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CompressionConfig':
        """Build a config from a host-supplied mapping, accepting camelCase keys"""
        aliases = {'shouldRun': 'should_run'}
        kwargs = {}
        for key, value in data.items():
            key = aliases.get(key, key)
            if key not in ('include', 'exclude', 'should_run'):
                raise ConfigurationError(f"Unknown compression option: {key}")
            kwargs[key] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'include': list(self.include),
            'exclude': list(self.exclude),
            'should_run': self.should_run,
        }


@dataclass(frozen=True)
class EncoderSettings:
    """Tuning for the streaming encoders"""

    chunk_size: int = 4096
    brotli_quality: int = 11
    brotli_lgwin: int = 22
    gzip_level: int = 6

    def __post_init__(self) -> None:
        """Validate configuration parameters"""
        if self.chunk_size <= 0:
            raise ConfigurationError("chunk_size must be positive")
        if not 0 <= self.brotli_quality <= 11:
            raise ConfigurationError("brotli_quality must be between 0 and 11")
        if not 10 <= self.brotli_lgwin <= 24:
            raise ConfigurationError("brotli_lgwin must be between 10 and 24")
        if not 0 <= self.gzip_level <= 9:
            raise ConfigurationError("gzip_level must be between 0 and 9")


class ConfigPresets:
    """Pre-configured settings for common build modes"""

    @staticmethod
    def production() -> CompressionConfig:
        """Default globs, compression enabled"""
        return CompressionConfig()

    @staticmethod
    def development() -> CompressionConfig:
        """Default globs, compression skipped"""
        return CompressionConfig(should_run=False)

    @staticmethod
    def for_build_mode(release: bool, **overrides) -> CompressionConfig:
        """Production for release builds, development otherwise"""
        base = ConfigPresets.production() if release else ConfigPresets.development()
        return replace(base, **overrides)


def codec_from_environment(environ: Optional[Mapping[str, str]] = None) -> CodecKind:
    """Read the enabled codec features from ``ASSET_COMPRESS_CODEC``.

    The variable holds a comma-separated list of feature names; exactly one
    must be given.
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(CODEC_ENV_VAR, '')
    features = [item.strip() for item in raw.split(',') if item.strip()]
    return select_codec(features)


_active_codec: Optional[CodecKind] = None


def get_active_codec(features: Optional[Iterable[str]] = None) -> CodecKind:
    """Resolve the process-wide codec once and cache it.

    The first call fixes the codec for the rest of the process. Later calls
    return the cached value; explicit ``features`` must agree with it.

    Raises:
        ConfigurationError: if ``features`` names a different codec than the
            one already fixed for this process
    """
    global _active_codec
    if _active_codec is None:
        codec = select_codec(features) if features is not None else codec_from_environment()
        logger.info(f"Compression codec fixed to {codec.value}")
        _active_codec = codec
    elif features is not None:
        requested = select_codec(features)
        if requested is not _active_codec:
            raise ConfigurationError(
                f"Compression codec already fixed to {_active_codec.value}, "
                f"cannot switch to {requested.value}",
                error_code='CODEC_CONFLICT',
                details={'active': _active_codec.value, 'requested': requested.value},
            )
    return _active_codec


def reset_active_codec() -> None:
    """Forget the cached codec. Intended for tests."""
    global _active_codec
    _active_codec = None
