"""
Base Classes for the Asset Compression Pipeline
===============================================

Contains core data structures and abstract base classes used throughout the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CompressedArtifact:
    """A compressed sibling written next to its source file"""
    source_path: Path
    artifact_path: Path
    codec: str
    original_size: int
    compressed_size: int

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


class StreamEncoder(ABC):
    """Abstract base class for incremental codec encoders.

    ``process`` may buffer internally and return an empty byte string;
    ``finish`` must be called exactly once and returns the trailing bytes
    that complete the stream.
    """

    name: str = ""
    suffix: str = ""

    @abstractmethod
    def process(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def finish(self) -> bytes:
        pass
