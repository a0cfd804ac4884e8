"""
Brotli stream encoder.
"""

import brotli

from base_classes import StreamEncoder


class BrotliStreamEncoder(StreamEncoder):
    """Incremental Brotli encoder producing ``.br`` artifacts"""

    name = "brotli"
    suffix = ".br"

    def __init__(self, quality: int = 11, lgwin: int = 22):
        self.quality = quality
        self.lgwin = lgwin
        self._compressor = brotli.Compressor(mode=brotli.MODE_GENERIC, quality=quality, lgwin=lgwin)
        self._finished = False

    @classmethod
    def from_settings(cls, settings=None) -> 'BrotliStreamEncoder':
        if settings is None:
            return cls()
        return cls(quality=settings.brotli_quality, lgwin=settings.brotli_lgwin)

    def process(self, data: bytes) -> bytes:
        if self._finished:
            raise RuntimeError("Encoder already finished")
        return self._compressor.process(data)

    def finish(self) -> bytes:
        if self._finished:
            raise RuntimeError("Encoder already finished")
        self._finished = True
        return self._compressor.finish()
