"""
Gzip stream encoder built on zlib.

The gzip header is written by zlib with a zero timestamp and no embedded
filename, so identical input always yields identical output.
"""

import zlib

from base_classes import StreamEncoder

# wbits offset that makes zlib emit a gzip container
GZIP_WBITS = zlib.MAX_WBITS | 16


class GzipStreamEncoder(StreamEncoder):
    """Incremental gzip encoder producing ``.gz`` artifacts"""

    name = "gzip"
    suffix = ".gz"

    def __init__(self, level: int = 6):
        self.level = level
        self._compressor = zlib.compressobj(level, zlib.DEFLATED, GZIP_WBITS)
        self._finished = False

    @classmethod
    def from_settings(cls, settings=None) -> 'GzipStreamEncoder':
        if settings is None:
            return cls()
        return cls(level=settings.gzip_level)

    def process(self, data: bytes) -> bytes:
        if self._finished:
            raise RuntimeError("Encoder already finished")
        return self._compressor.compress(data)

    def finish(self) -> bytes:
        if self._finished:
            raise RuntimeError("Encoder already finished")
        self._finished = True
        return self._compressor.flush(zlib.Z_FINISH)
