import struct
from numbers import Integral
from typing import List, Sequence

import numpy as np

from huffcodec.errors import TruncatedStreamError

MAGIC = b"HUFF"   # 4 bytes
VERSION = 1       # 1 byte

FLAG_TOKENS = 0x01  # body holds a generic token stream
FLAG_LEGACY = 0x02  # character dictionary uses the legacy symbol+digit layout

# Container header (little-endian):
# magic(4) version(1) flags(1) reserved(u16)
HDR_FMT = "<4sBBH"
HDR_SIZE = struct.calcsize(HDR_FMT)

# Token body: count(u32) then items as int64
CNT_FMT = "<I"
CNT_SIZE = struct.calcsize(CNT_FMT)
TOKEN_DTYPE = "<i8"

# Payload words inside a character stream
WORD_DTYPE = ">u4"
WORD_SIZE = 4


def words_to_bytes(words: Sequence[int]) -> bytes:
    return np.asarray(words, dtype=WORD_DTYPE).tobytes()


def bytes_to_words(buf: bytes, offset: int = 0) -> np.ndarray:
    n = len(buf) - offset
    if n < 0 or n % WORD_SIZE:
        raise TruncatedStreamError("Malformed stream: payload is not a whole number of 32-bit words")
    return np.frombuffer(buf, dtype=WORD_DTYPE, offset=offset)


def write_header(f, *, flags: int):
    f.write(struct.pack(HDR_FMT, MAGIC, VERSION, flags, 0))


def read_header(f):
    data = f.read(HDR_SIZE)
    if len(data) != HDR_SIZE:
        raise ValueError("Malformed stream: header too short")
    magic, ver, flags, _ = struct.unpack(HDR_FMT, data)
    if magic != MAGIC:
        raise ValueError("Bad magic number (not HUFF)")
    if ver != VERSION:
        raise ValueError(f"Unsupported version: {ver}")
    return dict(
        flags=flags,
        tokens=bool(flags & FLAG_TOKENS),
        legacy=bool(flags & FLAG_LEGACY),
    )


def write_tokens(f, stream: Sequence):
    for v in stream:
        if not isinstance(v, Integral) or isinstance(v, bool):
            raise ValueError(f"token stream holds integers only, got {v!r}")
        if not (-(1 << 63) <= v < (1 << 63)):
            raise ValueError(f"token out of int64 range: {v}")
    items = np.asarray(stream, dtype=TOKEN_DTYPE)
    f.write(struct.pack(CNT_FMT, len(items)))
    f.write(items.tobytes())


def read_tokens(f) -> List[int]:
    data = f.read(CNT_SIZE)
    if len(data) != CNT_SIZE:
        raise ValueError("Malformed stream: token count truncated")
    (n,) = struct.unpack(CNT_FMT, data)
    body = f.read(n * 8)
    if len(body) != n * 8:
        raise ValueError("Malformed stream: token body truncated")
    return np.frombuffer(body, dtype=TOKEN_DTYPE).tolist()
