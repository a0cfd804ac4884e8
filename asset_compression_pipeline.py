"""
Asset Compression Pipeline
==========================

Post-build step that writes a compressed sibling for every selected output
file. Selection runs first and never fails; compression then processes the
files one at a time and aborts the whole run on the first I/O error. Files
compressed before the failure keep their complete artifacts.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from tqdm import tqdm

from base_classes import CompressedArtifact
from encoders.registry import CodecKind, get_codec_info
from pipeline.stages.compression import StreamingCompressor
from pipeline.stages.selection import Selector
from pipeline_configs import CompressionConfig, EncoderSettings, get_active_codec
from pipeline_errors import ConfigurationError, UnconfiguredCodecError
from pipeline_monitoring import RunMonitor

logger = logging.getLogger(__name__)

ConfigLike = Union[CompressionConfig, Mapping[str, Any]]


def coerce_config(config: ConfigLike) -> CompressionConfig:
    if isinstance(config, CompressionConfig):
        return config
    if isinstance(config, Mapping):
        return CompressionConfig.from_dict(config)
    raise ConfigurationError(f"Expected CompressionConfig or mapping, got {type(config).__name__}")


class CompressionPipeline:
    """Selects files and compresses each one with the process-wide codec"""

    def __init__(self,
                 codec: Optional[CodecKind] = None,
                 settings: Optional[EncoderSettings] = None,
                 selector: Optional[Selector] = None,
                 show_progress: bool = False):
        """
        Initialize the pipeline.

        Args:
            codec: Codec to use; defaults to the process-wide codec from
                ``get_active_codec``
            settings: Encoder tuning
            selector: File selector, mainly for tests
            show_progress: Show a progress bar while compressing

        Raises:
            UnconfiguredCodecError: if no codec is configured
        """
        self.codec = codec if codec is not None else get_active_codec()
        if self.codec is CodecKind.UNCONFIGURED:
            raise UnconfiguredCodecError()
        get_codec_info(self.codec)

        self.settings = settings or EncoderSettings()
        self.selector = selector or Selector()
        self.show_progress = show_progress
        self.monitor: Optional[RunMonitor] = None

    def run(self, config: ConfigLike) -> List[CompressedArtifact]:
        """
        Compress every file selected by ``config``.

        Returns:
            The artifacts written, in processing order. Empty when
            ``config.should_run`` is false.

        Raises:
            SourceFileError: a selected file could not be opened or read
            OutputWriteError: an artifact could not be written
        """
        config = coerce_config(config)
        if not config.should_run:
            logger.info("Asset compression disabled, skipping")
            return []

        monitor = RunMonitor()
        self.monitor = monitor
        monitor.start()
        logger.info(f"Starting asset compression with {self.codec.value}")

        artifacts: List[CompressedArtifact] = []
        try:
            monitor.start_stage('selection')
            files = self.selector.resolve(config.include, config.exclude)
            monitor.record_item('selection', items=len(files))
            monitor.end_stage('selection')

            compressor = StreamingCompressor(self.codec, self.settings)
            monitor.start_stage('compression')
            progress = tqdm(sorted(files), desc="Compressing", unit="file",
                            disable=not self.show_progress)
            with progress:
                for path in progress:
                    artifact = compressor.compress_file(path)
                    monitor.record_item('compression', artifact.original_size, artifact.compressed_size)
                    artifacts.append(artifact)
            monitor.end_stage('compression')
        except BaseException as e:
            monitor.fail(e)
            logger.error(f"Asset compression failed after {len(artifacts)} files: {e}")
            raise

        monitor.complete()
        stats = compressor.get_stats()
        logger.info(f"Asset compression complete: {stats['files_compressed']} files, "
                    f"{stats['bytes_in']} -> {stats['bytes_out']} bytes")
        return artifacts


def run(config: ConfigLike, codec: Optional[CodecKind] = None,
        settings: Optional[EncoderSettings] = None) -> List[CompressedArtifact]:
    """Run the pipeline once with a fresh ``CompressionPipeline``"""
    config = coerce_config(config)
    if not config.should_run:
        logger.info("Asset compression disabled, skipping")
        return []
    return CompressionPipeline(codec=codec, settings=settings).run(config)
