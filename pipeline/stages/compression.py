"""
Streaming file compression.

Copies a source file through a codec encoder into a sibling artifact in
fixed-size chunks, so memory use does not grow with file size.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from base_classes import CompressedArtifact, StreamEncoder
from encoders.registry import CodecKind, codec_suffix, create_encoder, get_codec_info
from pipeline_configs import EncoderSettings
from pipeline_errors import OutputWriteError, SourceFileError

logger = logging.getLogger(__name__)


def compressed_path(original_path: Union[str, Path], codec: CodecKind) -> Path:
    """
    Derive the artifact path for ``original_path``.

    The codec suffix is appended to the full file name in the same directory,
    so ``a/b/style.css`` becomes ``a/b/style.css.br`` for Brotli.

    Raises:
        ValueError: if the path has no file name component
    """
    original_path = Path(original_path)
    if not original_path.name:
        raise ValueError(f"Cannot derive a compressed path for {original_path!s}: no file name")
    return original_path.with_name(original_path.name + codec_suffix(codec))


class StreamingCompressor:
    """
    Compresses one file at a time with a fixed codec.

    The encoder is finished and both handles are closed before
    ``compress_file`` returns. If anything fails after the artifact was
    created, the truncated artifact is removed before the error propagates.
    """

    def __init__(self, codec: CodecKind, settings: Optional[EncoderSettings] = None):
        # validates the codec eagerly
        get_codec_info(codec)
        self.codec = codec
        self.settings = settings or EncoderSettings()
        self.files_compressed = 0
        self.bytes_in = 0
        self.bytes_out = 0

        logger.debug(f"Initialized StreamingCompressor with codec={codec.value}, "
                     f"chunk_size={self.settings.chunk_size}")

    def compressed_path(self, original_path: Union[str, Path]) -> Path:
        return compressed_path(original_path, self.codec)

    def compress_file(self, source_path: Union[str, Path]) -> CompressedArtifact:
        """
        Compress ``source_path`` into its sibling artifact.

        Args:
            source_path: File to compress

        Returns:
            Record of the written artifact

        Raises:
            SourceFileError: if the source cannot be opened or read
            OutputWriteError: if the artifact cannot be created, written or flushed
        """
        source_path = Path(source_path)
        try:
            source = open(source_path, 'rb')
        except OSError as e:
            raise SourceFileError(f"Cannot open source file {source_path}", source_path, cause=e) from e

        with source:
            artifact_path = self.compressed_path(source_path)
            try:
                output = open(artifact_path, 'wb')
            except OSError as e:
                raise OutputWriteError(f"Cannot create {artifact_path}", artifact_path, cause=e) from e

            try:
                with output:
                    encoder = create_encoder(self.codec, self.settings)
                    original_size, compressed_size = self._copy(source, source_path,
                                                                output, artifact_path, encoder)
            except (SourceFileError, OutputWriteError):
                self._discard(artifact_path)
                raise
            except OSError as e:
                # raised by close() when the final flush fails
                self._discard(artifact_path)
                raise OutputWriteError(f"Cannot finalize {artifact_path}", artifact_path, cause=e) from e
            except BaseException:
                # encoder errors and interrupts must not leave a truncated artifact
                self._discard(artifact_path)
                raise

        self.files_compressed += 1
        self.bytes_in += original_size
        self.bytes_out += compressed_size

        artifact = CompressedArtifact(
            source_path=source_path,
            artifact_path=artifact_path,
            codec=self.codec.value,
            original_size=original_size,
            compressed_size=compressed_size,
        )
        if original_size > 0:
            reduction = (1 - artifact.compression_ratio) * 100
            logger.info(f"Compressed {source_path}: {original_size} -> {compressed_size} bytes "
                        f"({reduction:.1f}% reduction)")
        else:
            logger.info(f"Compressed empty file {source_path}")
        return artifact

    def _copy(self, source: BinaryIO, source_path: Path,
              output: BinaryIO, artifact_path: Path, encoder: StreamEncoder):
        original_size = 0
        compressed_size = 0
        while True:
            try:
                chunk = source.read(self.settings.chunk_size)
            except OSError as e:
                raise SourceFileError(f"Cannot read source file {source_path}",
                                      source_path, cause=e) from e
            if not chunk:
                break
            original_size += len(chunk)
            compressed_size += self._write(output, artifact_path, encoder.process(chunk))

        compressed_size += self._write(output, artifact_path, encoder.finish())
        try:
            output.flush()
        except OSError as e:
            raise OutputWriteError(f"Cannot flush {artifact_path}", artifact_path, cause=e) from e
        return original_size, compressed_size

    @staticmethod
    def _write(output: BinaryIO, artifact_path: Path, data: bytes) -> int:
        if not data:
            return 0
        try:
            output.write(data)
        except OSError as e:
            raise OutputWriteError(f"Cannot write {artifact_path}", artifact_path, cause=e) from e
        return len(data)

    @staticmethod
    def _discard(artifact_path: Path) -> None:
        try:
            artifact_path.unlink()
            logger.debug(f"Removed incomplete artifact {artifact_path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Could not remove incomplete artifact {artifact_path}: {e}")

    def get_stats(self) -> dict:
        """
        Get totals across all files compressed by this instance.

        Returns:
            Dictionary with compression statistics
        """
        return {
            'codec': self.codec.value,
            'files_compressed': self.files_compressed,
            'bytes_in': self.bytes_in,
            'bytes_out': self.bytes_out,
            'compression_ratio': self.bytes_out / self.bytes_in if self.bytes_in else 1.0,
        }
