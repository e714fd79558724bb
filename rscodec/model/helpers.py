# rscodec/model/helpers.py
# common helper functions used by the runners, the benchmark and the tests
# provides byte comparison, dump and corruption utilities

from typing import List, Sequence, Tuple

import numpy as np


def pad_to_block(data: bytes, block_size: int) -> bytes:
    rem = len(data) % block_size
    if rem == 0:
        return data
    return data + bytes(block_size - rem)


def hex_dump(data: bytes, bytes_per_line: int = 16) -> str:
    lines = []
    for i in range(0, len(data), bytes_per_line):
        chunk = data[i:i + bytes_per_line]
        hex_str = ' '.join(f'{b:02X}' for b in chunk)
        lines.append(f'{i:08X}: {hex_str}')
    return '\n'.join(lines)


def byte_error_count(a: Sequence[int], b: Sequence[int]) -> int:
    if len(a) != len(b):
        raise ValueError(f"Sequences must have equal length: {len(a)} != {len(b)}")
    return sum(1 for x, y in zip(a, b) if x != y)


def corrupt_bytes(
    codeword: Sequence[int],
    count: int,
    rng: np.random.Generator,
) -> Tuple[bytearray, List[int]]:
    """XOR `count` distinct positions of a copy of `codeword` with nonzero deltas.

    Returns (corrupted, positions). The input is left untouched.
    """
    if not 0 <= count <= len(codeword):
        raise ValueError(f"cannot corrupt {count} positions of a {len(codeword)}-byte codeword")
    out = bytearray(codeword)
    positions = sorted(int(p) for p in rng.choice(len(out), size=count, replace=False))
    deltas = rng.integers(1, 256, size=count)
    for pos, delta in zip(positions, deltas):
        out[pos] ^= int(delta)
    return out, positions
