"""
Unit tests for codec encoders and codec selection
=================================================

Tests for encoders/ including:
- Incremental Brotli and Gzip encoding
- Deterministic output
- Single-codec selection rules
"""

import gzip

import brotli
import pytest

from encoders import (
    BrotliStreamEncoder,
    CodecKind,
    GzipStreamEncoder,
    codec_suffix,
    create_encoder,
    get_codec_info,
    list_available_codecs,
    select_codec,
)
from pipeline_configs import EncoderSettings
from pipeline_errors import ConfigurationError, UnconfiguredCodecError


def encode(encoder, chunks):
    return b''.join(encoder.process(chunk) for chunk in chunks) + encoder.finish()


class TestGzipStreamEncoder:
    """Test the zlib-backed gzip encoder"""

    def test_round_trip_multiple_chunks(self):
        """Test that chunked input decompresses to the original bytes"""
        data = b"The quick brown fox jumps over the lazy dog. " * 200
        chunks = [data[i:i + 333] for i in range(0, len(data), 333)]

        compressed = encode(GzipStreamEncoder(), chunks)

        assert gzip.decompress(compressed) == data

    def test_header_is_deterministic(self):
        """Test that the gzip header carries no timestamp"""
        compressed = encode(GzipStreamEncoder(), [b"hello"])

        assert compressed[:2] == b"\x1f\x8b"
        assert compressed[4:8] == b"\x00\x00\x00\x00"
        assert encode(GzipStreamEncoder(), [b"hello"]) == compressed

    def test_empty_input(self):
        """Test that an empty stream still produces a valid gzip member"""
        compressed = encode(GzipStreamEncoder(), [])

        assert gzip.decompress(compressed) == b""

    def test_level_from_settings(self):
        """Test that gzip_level is honoured"""
        encoder = GzipStreamEncoder.from_settings(EncoderSettings(gzip_level=1))

        assert encoder.level == 1

    def test_finish_twice(self):
        """Test that a finished encoder refuses more work"""
        encoder = GzipStreamEncoder()
        encoder.finish()

        with pytest.raises(RuntimeError, match="already finished"):
            encoder.finish()
        with pytest.raises(RuntimeError, match="already finished"):
            encoder.process(b"late")


class TestBrotliStreamEncoder:
    """Test the Brotli encoder"""

    def test_round_trip_multiple_chunks(self):
        """Test that chunked input decompresses to the original bytes"""
        data = b"body { color: red; }\n" * 500
        chunks = [data[i:i + 4096] for i in range(0, len(data), 4096)]

        compressed = encode(BrotliStreamEncoder(), chunks)

        assert brotli.decompress(compressed) == data
        assert len(compressed) < len(data)

    def test_deterministic_output(self):
        """Test that the same input gives the same bytes"""
        data = bytes(range(256)) * 64

        assert encode(BrotliStreamEncoder(), [data]) == encode(BrotliStreamEncoder(), [data])

    def test_settings(self):
        """Test that quality and window come from settings"""
        encoder = BrotliStreamEncoder.from_settings(EncoderSettings(brotli_quality=4, brotli_lgwin=18))

        assert encoder.quality == 4
        assert encoder.lgwin == 18
        assert brotli.decompress(encode(encoder, [b"abc" * 100])) == b"abc" * 100

    def test_finish_twice(self):
        """Test that a finished encoder refuses more work"""
        encoder = BrotliStreamEncoder()
        encoder.finish()

        with pytest.raises(RuntimeError):
            encoder.finish()


class TestCodecSelection:
    """Test single-codec selection"""

    @pytest.mark.parametrize("features, expected", [
        (["brotli"], CodecKind.BROTLI),
        (["gzip"], CodecKind.GZIP),
        (["GZIP "], CodecKind.GZIP),
        (["brotli", "brotli"], CodecKind.BROTLI),
    ])
    def test_select_single_codec(self, features, expected):
        """Test that exactly one enabled codec is selected"""
        assert select_codec(features) is expected

    @pytest.mark.parametrize("features", [None, [], ["", "  "]])
    def test_no_codec(self, features):
        """Test that enabling no codec is a configuration error"""
        with pytest.raises(UnconfiguredCodecError, match="No compression algorithm set"):
            select_codec(features)

    def test_multiple_codecs(self):
        """Test that enabling both codecs is rejected"""
        with pytest.raises(ConfigurationError, match="Only one compression codec") as exc_info:
            select_codec(["brotli", "gzip"])

        assert exc_info.value.error_code == 'CODEC_CONFLICT'

    def test_unknown_codec(self):
        """Test that unknown names are rejected"""
        with pytest.raises(ConfigurationError, match="Unknown compression codec"):
            select_codec(["zstd"])

    def test_suffixes(self):
        """Test the artifact suffix of each codec"""
        assert codec_suffix(CodecKind.BROTLI) == ".br"
        assert codec_suffix(CodecKind.GZIP) == ".gz"

    def test_unconfigured_has_no_encoder(self):
        """Test that the unconfigured state cannot produce an encoder"""
        with pytest.raises(UnconfiguredCodecError):
            get_codec_info(CodecKind.UNCONFIGURED)
        with pytest.raises(UnconfiguredCodecError):
            create_encoder(CodecKind.UNCONFIGURED)

    def test_create_encoder(self):
        """Test that create_encoder returns a fresh encoder per call"""
        first = create_encoder(CodecKind.GZIP)
        second = create_encoder(CodecKind.GZIP)

        assert isinstance(first, GzipStreamEncoder)
        assert first is not second

    def test_list_available_codecs(self):
        """Test that exactly two codecs are offered"""
        assert set(list_available_codecs()) == {"brotli", "gzip"}
