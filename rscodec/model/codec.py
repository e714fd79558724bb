# rscodec/model/codec.py
# front-end for callers: encode/decode by redundancy length, plus a fixed
# RS(n,k) block configuration (default RS(255,223), 16 correctable bytes)

from dataclasses import dataclass
from functools import lru_cache
from typing import MutableSequence, Sequence

from rscodec.model.decoder import DecodeStatus, rs_decode
from rscodec.model.encoder import RSEncoder
from rscodec.model.errors import InvalidParameterError
from rscodec.model.field import MAX_BLOCK, check_nsym


@dataclass(frozen=True)
class RSCfg:
    # RS(n,k) over GF(256)
    n: int = 255
    k: int = 223

    def __post_init__(self):
        if not 1 <= self.k < self.n <= MAX_BLOCK:
            raise InvalidParameterError(
                f"RS(n,k) needs 1 <= k < n <= {MAX_BLOCK} (got n={self.n}, k={self.k})"
            )

    @property
    def nsym(self) -> int:
        return self.n - self.k

    @property
    def t(self) -> int:
        return self.nsym // 2


default_rs_cfg = RSCfg()


@lru_cache(maxsize=None)
def get_encoder(nsym: int) -> RSEncoder:
    check_nsym(nsym)
    return RSEncoder(nsym)


def encode(data: Sequence[int], nsym: int) -> bytes:
    return get_encoder(nsym).encode(data)


def decode(buffer: MutableSequence[int], nsym: int) -> DecodeStatus:
    return rs_decode(buffer, nsym)


def encode_block(data: Sequence[int], cfg: RSCfg = default_rs_cfg) -> bytes:
    if len(data) != cfg.k:
        raise InvalidParameterError(f"RS({cfg.n},{cfg.k}) block must be {cfg.k} bytes, got {len(data)}")
    return encode(data, cfg.nsym)


def decode_block(buffer: MutableSequence[int], cfg: RSCfg = default_rs_cfg) -> DecodeStatus:
    if len(buffer) != cfg.n:
        raise InvalidParameterError(f"RS({cfg.n},{cfg.k}) codeword must be {cfg.n} bytes, got {len(buffer)}")
    return decode(buffer, cfg.nsym)
