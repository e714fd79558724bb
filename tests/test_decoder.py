import numpy as np
import pytest

import rscodec.model.decoder as decoder
from rscodec.model.decoder import DecodeStatus, RSDecoder, rs_decode, rs_syndromes
from rscodec.model.encoder import RSEncoder
from rscodec.model.errors import InvalidParameterError
from rscodec.model.field import gf_inv, gf_log
from rscodec.model.helpers import corrupt_bytes


def _random_codeword(rng, k, nsym):
    data = rng.integers(0, 256, size=k, dtype=np.uint8).tobytes()
    return data, RSEncoder(nsym).encode(data)


def test_clean_round_trip_leaves_buffer_untouched():
    rng = np.random.default_rng(0)
    for k, nsym in ((223, 32), (10, 16), (1, 2), (100, 254 - 100)):
        _, codeword = _random_codeword(rng, k, nsym)
        buffer = bytearray(codeword)
        assert rs_decode(buffer, nsym) is DecodeStatus.CLEAN
        assert buffer == codeword
        # idempotent
        assert rs_decode(buffer, nsym) is DecodeStatus.CLEAN
        assert buffer == codeword


def test_corrects_up_to_capacity():
    rng = np.random.default_rng(1)
    for k, nsym in ((223, 32), (10, 16), (40, 2), (30, 5), (5, 20)):
        t = nsym // 2
        for errors in range(1, t + 1):
            data, codeword = _random_codeword(rng, k, nsym)
            received, positions = corrupt_bytes(codeword, errors, rng)
            status = rs_decode(received, nsym)
            assert status is DecodeStatus.REPAIRED, (k, nsym, positions)
            assert bytes(received) == codeword
            assert bytes(received[:k]) == data


def test_every_single_error_position():
    data = bytes(range(10))
    codeword = RSEncoder(16).encode(data)
    for pos in range(len(codeword)):
        for delta in (0x01, 0x80, 0xFF):
            buffer = bytearray(codeword)
            buffer[pos] ^= delta
            assert rs_decode(buffer, 16) is DecodeStatus.REPAIRED
            assert buffer == codeword


def test_rs_255_223_sixteen_errors():
    rng = np.random.default_rng(223)
    for _ in range(20):
        data, codeword = _random_codeword(rng, 223, 32)
        received, _ = corrupt_bytes(codeword, 16, rng)
        assert rs_decode(received, 32) is DecodeStatus.REPAIRED
        assert bytes(received[:223]) == data


def test_rs_255_223_seventeen_errors_is_uncorrectable():
    rng = np.random.default_rng(17)
    trials = 1000
    uncorrectable = 0
    for _ in range(trials):
        _, codeword = _random_codeword(rng, 223, 32)
        received, _ = corrupt_bytes(codeword, 17, rng)
        before = bytes(received)
        status = rs_decode(received, 32)
        if status is DecodeStatus.UNCORRECTABLE:
            uncorrectable += 1
            # nothing is written on failure
            assert bytes(received) == before
    # miscorrection is possible in principle, so only require the overwhelming majority
    assert uncorrectable >= 0.99 * trials


def test_shortened_code_beyond_capacity():
    rng = np.random.default_rng(26)
    trials = 500
    outcomes = {status: 0 for status in DecodeStatus}
    for _ in range(trials):
        _, codeword = _random_codeword(rng, 10, 16)
        received, _ = corrupt_bytes(codeword, 12, rng)
        outcomes[rs_decode(received, 16)] += 1
    assert outcomes[DecodeStatus.CLEAN] == 0
    assert outcomes[DecodeStatus.UNCORRECTABLE] >= trials - 5


def test_single_parity_byte_only_detects():
    codeword = RSEncoder(1).encode(b"abc")
    buffer = bytearray(codeword)
    buffer[0] ^= 0x40
    assert rs_decode(buffer, 1) is DecodeStatus.UNCORRECTABLE
    assert buffer[0] == codeword[0] ^ 0x40


def test_list_buffer_is_repaired_in_place():
    codeword = RSEncoder(8).encode(b"list buffer")
    buffer = list(codeword)
    buffer[3] ^= 0x11
    buffer[12] ^= 0x22
    assert RSDecoder(8).decode(buffer) is DecodeStatus.REPAIRED
    assert bytes(buffer) == codeword


def test_syndromes_flag_corruption():
    codeword = RSEncoder(6).encode(b"syndrome")
    assert rs_syndromes(codeword, 6).is_zero()
    corrupted = bytearray(codeword)
    corrupted[-1] ^= 1
    s = rs_syndromes(corrupted, 6)
    # a single error in the constant term gives e * alpha^(0*i) = 1 for every i
    assert s.coefficients == (1,) * 6


@pytest.mark.parametrize("nsym", [7, 8])
def test_key_equation_locates_three_errors(nsym):
    codeword = RSEncoder(nsym).encode(b"key equation")
    n = len(codeword)
    corrupted = bytearray(codeword)
    for pos, delta in ((1, 0x5A), (9, 0x01), (n - 2, 0xC3)):
        corrupted[pos] ^= delta
    locator, evaluator = decoder._solve_key_equation(rs_syndromes(corrupted, nsym), nsym)
    assert locator.degree() == 3
    assert 2 * evaluator.degree() < nsym
    roots = locator.find_roots(3)
    assert sorted(n - gf_log(gf_inv(z)) - 1 for z in roots) == [1, 9, n - 2]


def test_decoder_does_not_depend_on_encoder():
    modules = {getattr(v, "__module__", None) for v in vars(decoder).values()}
    assert "rscodec.model.encoder" not in modules


def test_matches_reedsolo_oracle():
    reedsolo = pytest.importorskip("reedsolo")
    rng = np.random.default_rng(5)
    oracle = reedsolo.RSCodec(32)
    for errors in (1, 8, 16):
        data, codeword = _random_codeword(rng, 100, 32)
        received, _ = corrupt_bytes(codeword, errors, rng)
        expected = oracle.decode(bytearray(received))[0]
        assert rs_decode(received, 32) is DecodeStatus.REPAIRED
        assert bytes(received[:100]) == bytes(expected) == data


@pytest.mark.parametrize(
    "buffer, nsym",
    [
        (bytes(20), 4),                 # immutable
        (bytearray(4), 4),              # nsym >= len
        (bytearray(10), 0),
        (bytearray(300), 255),
        (bytearray(256), 32),           # longer than a block
    ],
)
def test_invalid_parameters(buffer, nsym):
    with pytest.raises(InvalidParameterError):
        rs_decode(buffer, nsym)


def test_debug_output(monkeypatch, capsys):
    monkeypatch.setattr(decoder, "_DEBUG", True)
    codeword = RSEncoder(4).encode(b"debug")
    buffer = bytearray(codeword)
    buffer[1] ^= 0x5A
    assert rs_decode(buffer, 4) is DecodeStatus.REPAIRED
    assert "[RS] repaired 1 byte(s) at [1]" in capsys.readouterr().err


def test_quiet_by_default(monkeypatch, capsys):
    monkeypatch.setattr(decoder, "_DEBUG", False)
    buffer = bytearray(RSEncoder(4).encode(b"quiet"))
    buffer[0] ^= 1
    rs_decode(buffer, 4)
    assert capsys.readouterr().err == ""
