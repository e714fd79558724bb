# rscodec/model/encoder.py
# systematic Reed-Solomon encoder over GF(2^8)
# codeword = [data (k bytes)] || [parity (nsym bytes)], n = k + nsym <= 255
# generator g(x) = prod_{i=0}^{nsym-1} (x - alpha^i)   (first consecutive root 0)

from typing import Sequence, Tuple

from rscodec.model.errors import InvalidParameterError
from rscodec.model.field import MAX_BLOCK, check_nsym, gf_exp, gf_mul
from rscodec.model.polynomial import Poly


def rs_generator_poly(nsym: int) -> Poly:
    check_nsym(nsym)
    g = Poly.one()
    for i in range(nsym):
        # (x - alpha^i) == (x + alpha^i) -> coefficients [alpha^i, 1]
        g = g * Poly((gf_exp(i), 1))
    return g


class RSEncoder:
    """Encoder bound to one redundancy length; the generator is built once."""

    def __init__(self, nsym: int):
        self.nsym = nsym
        self.generator = rs_generator_poly(nsym)
        # LFSR taps: non-leading generator coefficients, highest power first
        self._taps: Tuple[int, ...] = tuple(
            self.generator.coefficient_at(nsym - 1 - j) for j in range(nsym)
        )

    def __repr__(self) -> str:
        return f"RSEncoder(nsym={self.nsym})"

    def encode(self, data: Sequence[int]) -> bytes:
        try:
            msg = bytes(data)
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(f"data must be a sequence of byte values: {exc}") from exc
        if len(msg) == 0:
            raise InvalidParameterError("data must contain at least one byte")
        if len(msg) + self.nsym > MAX_BLOCK:
            raise InvalidParameterError(
                f"codeword length {len(msg) + self.nsym} exceeds {MAX_BLOCK} symbols"
            )

        # remainder register (parity), start at all zeros
        parity = [0] * self.nsym
        for b in msg:
            # feedback = incoming byte XOR top of remainder
            feedback = b ^ parity[0]
            # shift left by 1 (drop parity[0], append 0 at end)
            parity = parity[1:] + [0]
            if feedback != 0:
                for j, tap in enumerate(self._taps):
                    parity[j] ^= gf_mul(tap, feedback)
        return msg + bytes(parity)
