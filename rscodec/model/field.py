# rscodec/model/field.py
# GF(2^8) arithmetic with log/antilog tables
# Field: p(x) = x^8 + x^4 + x^3 + x^2 + 1  -> 0x11D
# alpha = 0x02 generates the multiplicative group (order 255)
#
# exp[i] = alpha^i for i in 0..254, log[alpha^i] = i, log[0] is undefined

from typing import Tuple

from rscodec.model.errors import DivisionByZeroError, InvalidParameterError

# field parameters
m = 8                       # num of bits per symbol
field_size = 2**m           # 256 elements
order = field_size - 1      # size of the multiplicative group
prim_poly = 0b100011101     # p(x) = x^8 + x^4 + x^3 + x^2 + 1
alpha = 0x02                # generator element

# block limits shared by encoder and decoder
MAX_NSYM = order - 1        # leaves room for at least one data byte
MAX_BLOCK = order           # 255 symbols per codeword


def _build_tables(pp: int) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    exp = [0] * order
    log = [0] * field_size
    x = 1
    for i in range(order):
        exp[i] = x
        log[x] = i
        # multiply by alpha (shift left), reduce if the x^8 term appears
        x <<= 1
        if x & field_size:
            x ^= pp
    return tuple(exp), tuple(log)


# built once at import, read-only afterwards
EXP, LOG = _build_tables(prim_poly)


def gf_exp(i: int) -> int:
    return EXP[i % order]


def gf_log(a: int) -> int:
    if a == 0:
        raise ValueError("log(0) is undefined in GF(256)")
    return LOG[a]


def gf_add(a: int, b: int) -> int:
    # addition and subtraction are both XOR in characteristic 2
    return a ^ b


def gf_mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return EXP[(LOG[a] + LOG[b]) % order]


def gf_inv(a: int) -> int:
    if a == 0:
        raise DivisionByZeroError("GF256 inverse of 0")
    return EXP[(order - LOG[a]) % order]


def gf_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError("GF256 div by 0")
    if a == 0:
        return 0
    return EXP[(LOG[a] - LOG[b]) % order]


def gf_pow(a: int, p: int) -> int:
    if p == 0:
        return 1
    if a == 0:
        return 0
    return EXP[(LOG[a] * p) % order]


def is_zero(a: int) -> bool:
    return a == 0


def is_one(a: int) -> bool:
    return a == 1


def check_nsym(nsym: int) -> None:
    if isinstance(nsym, bool) or not isinstance(nsym, int):
        raise InvalidParameterError(f"redundancy length must be an int (got {nsym!r})")
    if not 1 <= nsym <= MAX_NSYM:
        raise InvalidParameterError(f"redundancy length must be in [1, {MAX_NSYM}] (got {nsym})")
