import numpy as np
import pytest

from rscodec.model.codec import decode, encode
from rscodec.model.decoder import DecodeStatus
from rscodec.model.errors import InvalidParameterError
from rscodec.model.helpers import corrupt_bytes
from rscodec.model.qr_payload import ALPHANUMERIC, pack_alphanumeric, unpack_alphanumeric


def test_hello_world_segment():
    packed = pack_alphanumeric("HELLO WORLD", 16)
    assert packed.hex(" ").upper() == "20 5B 0B 78 D1 72 DC 4D 43 40 EC 11 EC 11 EC 11"


def test_eight_chars_fill_ten_bytes():
    # 4 + 9 + 4 * 11 = 57 bits -> terminator -> 8 bytes, then pad
    packed = pack_alphanumeric("AC-42/:$", 10)
    assert len(packed) == 10
    assert packed[0] == 0x20
    assert packed[8:] == bytes([0xEC, 0x11])


@pytest.mark.parametrize("text", ["", "A", "AB", "HELLO WORLD", "0123456789 $%*+-./:"])
def test_unpack_inverts_pack(text):
    assert unpack_alphanumeric(pack_alphanumeric(text, 19)) == text


def test_rejects_bad_input():
    with pytest.raises(InvalidParameterError):
        pack_alphanumeric("hello", 16)
    with pytest.raises(InvalidParameterError):
        pack_alphanumeric("A" * 30, 10)
    with pytest.raises(InvalidParameterError):
        unpack_alphanumeric(bytes([0x40, 0x00]))


def test_barcode_like_block_survives_corruption():
    """Payload shaped like a version 1 barcode segment, 16 ECC bytes, 7 byte errors."""
    rng = np.random.default_rng(45)
    for _ in range(50):
        text = "".join(ALPHANUMERIC[i] for i in rng.integers(0, 45, size=8))
        payload = pack_alphanumeric(text, 10)
        codeword = encode(payload, 16)
        received, _ = corrupt_bytes(codeword, 7, rng)
        assert decode(received, 16) is DecodeStatus.REPAIRED
        assert unpack_alphanumeric(bytes(received[:10])) == text
