from typing import Literal

CodecNoneT = Literal[0x00]
CodecGzipT = Literal[0x01]
CodecSnappyT = Literal[0x02]
CodecLz4T = Literal[0x03]
CodecZstdT = Literal[0x04]
CompressionTypeT = CodecGzipT | CodecLz4T | CodecNoneT | CodecSnappyT | CodecZstdT

TimestampTypeT = Literal[-1, 0, 1]
