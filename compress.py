#!/usr/bin/env python3
"""
Command line wrapper that fires one build event against the current directory.

Intended as a postbuild step in build scripts:

    ASSET_COMPRESS_CODEC=brotli asset-compress --event build
"""

import argparse
import logging
import sys
from typing import List, Optional

from build_hooks import BuildEvent, get_compression_plugin
from encoders.registry import list_available_codecs
from pipeline_configs import DEFAULT_INCLUDE, ConfigPresets, get_active_codec
from pipeline_errors import CompressionError

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Write compressed siblings of build output files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  asset-compress --codec brotli                      # Default globs under ./dist
  asset-compress --codec gzip -i 'public/**/*.html'  # Custom include glob
  asset-compress -e './dist/static/vendor.css'       # Skip one file
  asset-compress --skip                              # Development build, do nothing
        """
    )

    parser.add_argument('-i', '--include', action='append', metavar='GLOB',
                        help='Glob for files to compress (repeatable, default: %s)'
                             % ', '.join(DEFAULT_INCLUDE))
    parser.add_argument('-e', '--exclude', action='append', default=[], metavar='GLOB',
                        help='Glob for files to leave uncompressed (repeatable)')
    parser.add_argument('--codec', choices=sorted(list_available_codecs()),
                        help='Compression codec (default: $ASSET_COMPRESS_CODEC)')
    parser.add_argument('--event', choices=['build', 'export'], default='build',
                        help='Build event to simulate (default: build)')
    parser.add_argument('--skip', action='store_true',
                        help='Disable compression for this invocation')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    overrides = {'exclude': tuple(args.exclude)}
    if args.include:
        overrides['include'] = tuple(args.include)
    config = ConfigPresets.for_build_mode(not args.skip, **overrides)
    logger.debug(f"Compression options: {config.to_dict()}")
    event = (BuildEvent.AFTER_SUCCESSFUL_EXPORT if args.event == 'export'
             else BuildEvent.AFTER_SUCCESSFUL_BUILD)

    if not config.should_run:
        print("Compression skipped")
        return 0

    try:
        codec = get_active_codec([args.codec] if args.codec else None)
        plugin = get_compression_plugin(config, codec=codec)
        plugin.pipeline.show_progress = args.progress
        artifacts = plugin.handle(event)
    except CompressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    total_in = sum(a.original_size for a in artifacts)
    total_out = sum(a.compressed_size for a in artifacts)
    print(f"Compressed {len(artifacts)} files with {codec.value}")
    for artifact in artifacts:
        print(f"   - {artifact.artifact_path}: {artifact.compressed_size:,} bytes")
    if artifacts:
        print(f"Total: {total_in:,} -> {total_out:,} bytes")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
