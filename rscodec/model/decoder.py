# rscodec/model/decoder.py
# Reed-Solomon decoder matching encoder.py (first consecutive root 0)
#
# pipeline, one block per call:
#   1. syndromes S_i = r(alpha^i), i = 0..nsym-1 -> all zero means CLEAN
#   2. extended Euclid on (x^nsym, S(x)) until deg r < nsym/2
#      -> locator Lambda = t, evaluator Omega = r
#   3. normalise so Lambda(0) = 1
#   4. root search, roots z_i of Lambda; locators X_i = 1/z_i
#   5. position = len - log(X_i) - 1, all positions checked before any write
#   6. Forney: e_i = Omega(z_i) / prod_{j != i} (1 + X_j * z_i)
#
# every failure mode collapses to UNCORRECTABLE, only bad parameters raise

import os
import sys
from collections.abc import MutableSequence
from enum import Enum
from typing import List, Sequence, Tuple

from rscodec.model.errors import InvalidParameterError
from rscodec.model.field import MAX_BLOCK, check_nsym, gf_add, gf_div, gf_exp, gf_inv, gf_log, gf_mul, is_zero
from rscodec.model.polynomial import Poly

# Debug logging controlled by environment variable RS_DEBUG
_DEBUG = os.environ.get("RS_DEBUG", "").lower() in {"1", "true", "yes"}


def _dbg(msg: str) -> None:
    if _DEBUG:
        print(f"[RS] {msg}", file=sys.stderr)


class DecodeStatus(Enum):
    CLEAN = "clean"
    REPAIRED = "repaired"
    UNCORRECTABLE = "uncorrectable"


def rs_syndromes(buffer: Sequence[int], nsym: int) -> Poly:
    received = Poly.from_bytes(buffer)
    return Poly(received.evaluate_at(gf_exp(i)) for i in range(nsym))


def _solve_key_equation(syndrome: Poly, nsym: int) -> Tuple[Poly, Poly]:
    r_prev, r_cur = Poly.monomial(nsym, 1), syndrome
    t_prev, t_cur = Poly.zero(), Poly.one()

    # a zero remainder has degree 0 and ends the loop; divmod strictly lowers deg(r)
    while 2 * r_cur.degree() >= nsym:
        q, r_next = r_prev.divmod(r_cur)
        t_next = q * t_cur + t_prev
        r_prev, r_cur = r_cur, r_next
        t_prev, t_cur = t_cur, t_next

    return t_cur, r_cur


def _error_magnitudes(roots: List[int], evaluator: Poly) -> List[int]:
    locators = [gf_inv(z) for z in roots]
    magnitudes = []
    for i, z in enumerate(roots):
        denominator = 1
        for j, x_j in enumerate(locators):
            if i == j:
                continue
            denominator = gf_mul(denominator, gf_add(1, gf_mul(x_j, z)))
        if is_zero(denominator):
            # repeated locator, cannot happen for distinct roots
            return []
        magnitudes.append(gf_div(evaluator.evaluate_at(z), denominator))
    return magnitudes


def rs_decode(buffer: MutableSequence, nsym: int) -> DecodeStatus:
    """Detect and repair byte errors in `buffer` in place.

    Returns CLEAN when the syndromes are all zero, REPAIRED after writing the
    corrections, and UNCORRECTABLE (buffer untouched) when the errors could
    not be located with certainty.
    """
    check_nsym(nsym)
    if not isinstance(buffer, MutableSequence):
        raise InvalidParameterError(
            f"buffer must be a mutable sequence such as bytearray (got {type(buffer).__name__})"
        )
    n = len(buffer)
    if nsym >= n:
        raise InvalidParameterError(f"redundancy length {nsym} must be smaller than the buffer ({n} bytes)")
    if n > MAX_BLOCK:
        raise InvalidParameterError(f"buffer length {n} exceeds {MAX_BLOCK} symbols")

    # 1. syndromes
    syndrome = rs_syndromes(buffer, nsym)
    if syndrome.is_zero():
        return DecodeStatus.CLEAN

    # 2. key equation
    locator, evaluator = _solve_key_equation(syndrome, nsym)

    # 3. normalise Lambda(0) = 1
    lam0 = locator.constant_coefficient()
    if is_zero(lam0) or evaluator.is_zero():
        _dbg("degenerate locator/evaluator")
        return DecodeStatus.UNCORRECTABLE
    scale = gf_inv(lam0)
    locator = locator.multiply_by_scalar(scale)
    evaluator = evaluator.multiply_by_scalar(scale)

    # 4. roots
    error_count = locator.degree()
    if error_count == 0 or 2 * error_count > nsym:
        _dbg(f"locator degree {error_count} out of range for nsym={nsym}")
        return DecodeStatus.UNCORRECTABLE
    roots = locator.find_roots(error_count)
    if len(roots) != error_count:
        _dbg(f"found {len(roots)} roots, expected {error_count}")
        return DecodeStatus.UNCORRECTABLE

    # 5. positions, validated before touching the buffer
    positions = [n - gf_log(gf_inv(z)) - 1 for z in roots]
    if any(not 0 <= pos < n for pos in positions):
        _dbg(f"error position outside buffer: {positions}")
        return DecodeStatus.UNCORRECTABLE

    # 6. magnitudes
    magnitudes = _error_magnitudes(roots, evaluator)
    if len(magnitudes) != error_count or any(is_zero(e) for e in magnitudes):
        _dbg("zero error magnitude")
        return DecodeStatus.UNCORRECTABLE

    for pos, e in zip(positions, magnitudes):
        buffer[pos] ^= e
    _dbg(f"repaired {error_count} byte(s) at {sorted(positions)}")
    return DecodeStatus.REPAIRED


class RSDecoder:
    """Decoder bound to one redundancy length."""

    def __init__(self, nsym: int):
        check_nsym(nsym)
        self.nsym = nsym

    def __repr__(self) -> str:
        return f"RSDecoder(nsym={self.nsym})"

    def decode(self, buffer: MutableSequence) -> DecodeStatus:
        return rs_decode(buffer, self.nsym)
