"""
Build System Hooks
==================

Exposes the compression pipeline as a build plugin. A host registers the
plugin's hooks for its "after successful build" and "after successful export"
events; both hooks run the same pipeline.

Usage:
    from build_hooks import get_compression_plugin
    from pipeline_configs import ConfigPresets

    plugin = get_compression_plugin(ConfigPresets.for_build_mode(release=True))
    host.register(plugin.name, plugin.hooks())
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from asset_compression_pipeline import CompressionPipeline, ConfigLike, coerce_config
from base_classes import CompressedArtifact
from encoders.registry import CodecKind
from pipeline_configs import CompressionConfig, EncoderSettings

logger = logging.getLogger(__name__)

PLUGIN_NAME = "asset-compress"


class BuildEvent(Enum):
    """Host lifecycle events the plugin reacts to"""
    AFTER_SUCCESSFUL_BUILD = "after_successful_build"
    AFTER_SUCCESSFUL_EXPORT = "after_successful_export"


class CompressionPlugin:
    """Runs the compression pipeline when the host signals a finished build"""

    name: str = PLUGIN_NAME
    events = tuple(BuildEvent)

    def __init__(self,
                 options: Optional[ConfigLike] = None,
                 codec: Optional[CodecKind] = None,
                 settings: Optional[EncoderSettings] = None,
                 pipeline: Optional[CompressionPipeline] = None):
        self.options = coerce_config(options) if options is not None else CompressionConfig()
        # constructing the pipeline resolves the codec, so a missing codec
        # fails at registration rather than after the first build
        self.pipeline = pipeline or CompressionPipeline(codec=codec, settings=settings)

    def handle(self, event: Union[BuildEvent, str],
               config: Optional[ConfigLike] = None) -> List[CompressedArtifact]:
        """Run the pipeline for ``event`` with ``config`` or the plugin's options"""
        event = BuildEvent(event)
        options = coerce_config(config) if config is not None else self.options
        logger.info(f"{self.name}: handling {event.value}")
        return self.pipeline.run(options)

    def after_successful_build(self, config: Optional[ConfigLike] = None) -> List[CompressedArtifact]:
        return self.handle(BuildEvent.AFTER_SUCCESSFUL_BUILD, config)

    def after_successful_export(self, config: Optional[ConfigLike] = None) -> List[CompressedArtifact]:
        return self.handle(BuildEvent.AFTER_SUCCESSFUL_EXPORT, config)

    def hooks(self) -> Dict[str, Callable[..., List[CompressedArtifact]]]:
        """Map each event name to its hook callable"""
        return {
            BuildEvent.AFTER_SUCCESSFUL_BUILD.value: self.after_successful_build,
            BuildEvent.AFTER_SUCCESSFUL_EXPORT.value: self.after_successful_export,
        }


def get_compression_plugin(options: Optional[ConfigLike] = None, **kwargs) -> CompressionPlugin:
    """Plugin constructor"""
    return CompressionPlugin(options, **kwargs)
