"""
Example Build Host Integration
==============================

Demonstrates how a build tool registers the compression plugin and fires
its lifecycle events once a build has written its output.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, List

from build_hooks import BuildEvent, get_compression_plugin
from encoders import CodecKind
from pipeline_configs import ConfigPresets

logger = logging.getLogger(__name__)


class MiniBuildHost:
    """
    Minimal stand-in for a static site generator.

    Plugins register callables per event name; ``emit`` calls them in
    registration order and collects their results.
    """

    def __init__(self):
        self.plugins: List[str] = []
        self._hooks: Dict[str, List[Callable]] = defaultdict(list)

    def register(self, name: str, hooks: Dict[str, Callable]):
        self.plugins.append(name)
        for event, hook in hooks.items():
            self._hooks[event].append(hook)
        logger.info(f"Registered plugin {name} for {', '.join(hooks)}")

    def emit(self, event: BuildEvent) -> list:
        return [hook() for hook in self._hooks[event.value]]


def build_and_compress(release: bool = True, codec: CodecKind = CodecKind.BROTLI) -> list:
    """Register the plugin on a fresh host and fire the build event"""
    host = MiniBuildHost()
    plugin = get_compression_plugin(ConfigPresets.for_build_mode(release), codec=codec)
    host.register(plugin.name, plugin.hooks())

    # The host would run its own build here before announcing success
    results = host.emit(BuildEvent.AFTER_SUCCESSFUL_BUILD)
    return results[0]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    artifacts = build_and_compress()
    print(f"Wrote {len(artifacts)} compressed artifacts")
    for artifact in artifacts:
        print(f"   - {artifact.artifact_path} ({artifact.compression_ratio:.1%})")
