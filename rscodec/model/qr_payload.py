# rscodec/model/qr_payload.py
# QR alphanumeric-mode data segment packer
# builds sample payloads that look like a barcode data segment:
#   mode indicator 0010 | 9-bit char count | 11 bits per char pair | 6 bits for an odd last char
#   | up to 4 zero terminator bits | zero-pad to byte | 0xEC, 0x11 pad bytes up to capacity
#
# example (version 1-M, 16 data bytes):
#   pack_alphanumeric("HELLO WORLD", 16)
#   -> 20 5B 0B 78 D1 72 DC 4D 43 40 EC 11 EC 11 EC 11

from typing import Iterable, List

from rscodec.model.errors import InvalidParameterError

ALPHANUMERIC = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
MODE_ALPHANUMERIC = 0b0010
COUNT_BITS = 9              # character count indicator width for versions 1..9
PAD_BYTES = (0xEC, 0x11)


def _append_bits(bits: List[int], value: int, width: int) -> None:
    for i in range(width - 1, -1, -1):
        bits.append((value >> i) & 1)


def _bytes_from_bits(bits: Iterable[int]) -> bytes:
    # pack bits msb-first per byte (pad last byte with zeros if needed)
    out = bytearray()
    acc = 0
    n = 0
    for bit in bits:
        acc = (acc << 1) | (bit & 1)
        n += 1
        if n == 8:
            out.append(acc)
            acc = 0
            n = 0
    if n:
        out.append(acc << (8 - n))
    return bytes(out)


def pack_alphanumeric(text: str, capacity: int) -> bytes:
    try:
        codes = [ALPHANUMERIC.index(ch) for ch in text]
    except ValueError:
        bad = next(ch for ch in text if ch not in ALPHANUMERIC)
        raise InvalidParameterError(f"character {bad!r} is not in the alphanumeric set") from None
    if len(codes) >= 1 << COUNT_BITS:
        raise InvalidParameterError(f"too many characters for a {COUNT_BITS}-bit count ({len(codes)})")

    bits: List[int] = []
    _append_bits(bits, MODE_ALPHANUMERIC, 4)
    _append_bits(bits, len(codes), COUNT_BITS)
    for i in range(0, len(codes) - 1, 2):
        _append_bits(bits, codes[i] * 45 + codes[i + 1], 11)
    if len(codes) % 2:
        _append_bits(bits, codes[-1], 6)

    capacity_bits = capacity * 8
    if len(bits) > capacity_bits:
        raise InvalidParameterError(f"segment needs {len(bits)} bits, capacity is {capacity_bits}")
    # terminator, at most 4 bits and never past capacity
    bits.extend([0] * min(4, capacity_bits - len(bits)))

    data = _bytes_from_bits(bits)
    pad = bytes(PAD_BYTES[i % 2] for i in range(capacity - len(data)))
    return data + pad


def unpack_alphanumeric(data: bytes) -> str:
    bits: List[int] = []
    for b in data:
        _append_bits(bits, b, 8)

    def take(offset: int, width: int) -> int:
        if offset + width > len(bits):
            raise InvalidParameterError("segment truncated")
        value = 0
        for bit in bits[offset:offset + width]:
            value = (value << 1) | bit
        return value

    if take(0, 4) != MODE_ALPHANUMERIC:
        raise InvalidParameterError("not an alphanumeric-mode segment")
    count = take(4, COUNT_BITS)
    offset = 4 + COUNT_BITS
    chars: List[str] = []
    while len(chars) + 1 < count:
        pair = take(offset, 11)
        offset += 11
        if pair >= 45 * 45:
            raise InvalidParameterError(f"invalid character pair value {pair}")
        chars.append(ALPHANUMERIC[pair // 45])
        chars.append(ALPHANUMERIC[pair % 45])
    if len(chars) < count:
        single = take(offset, 6)
        if single >= 45:
            raise InvalidParameterError(f"invalid character value {single}")
        chars.append(ALPHANUMERIC[single])
    return "".join(chars)
