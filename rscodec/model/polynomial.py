# rscodec/model/polynomial.py
# dense polynomials over GF(256)
# coefficients are stored lowest power first: [c0, c1, ..., cd] = c0 + c1*x + ... + cd*x^d
# the zero polynomial is (0,), otherwise the leading coefficient is never 0
#
# Poly is a value type: every operation returns a new instance and the
# coefficient tuple is never shared with a mutable caller buffer.

from typing import Iterable, List, Optional, Sequence, Tuple

from rscodec.model.errors import DivisionByZeroError
from rscodec.model.field import field_size, gf_add, gf_div, gf_inv, gf_mul, is_one, is_zero


def _normalize(coefficients: Iterable[int]) -> Tuple[int, ...]:
    coeffs = list(coefficients)
    while len(coeffs) > 1 and coeffs[-1] == 0:
        coeffs.pop()
    if not coeffs:
        return (0,)
    return tuple(coeffs)


class Poly:
    __slots__ = ("_coefficients",)

    def __init__(self, coefficients: Iterable[int] = (0,)):
        self._coefficients = _normalize(coefficients)

    # constructors

    @classmethod
    def from_coefficients(cls, coefficients: Iterable[int]) -> "Poly":
        return cls(coefficients)

    @classmethod
    def from_bytes(cls, buffer: Sequence[int]) -> "Poly":
        # buffer[0] is the highest power, buffer[-1] the constant term
        return cls(reversed(list(buffer)))

    @classmethod
    def monomial(cls, degree: int, scale: int = 1) -> "Poly":
        """scale * x^degree"""
        if degree < 0:
            raise ValueError(f"monomial degree must be >= 0 (got {degree})")
        if scale == 0:
            return cls.zero()
        return cls([0] * degree + [scale])

    @classmethod
    def zero(cls) -> "Poly":
        return cls((0,))

    @classmethod
    def one(cls) -> "Poly":
        return cls((1,))

    # accessors

    @property
    def coefficients(self) -> Tuple[int, ...]:
        return self._coefficients

    def degree(self) -> int:
        return len(self._coefficients) - 1

    def leading_coefficient(self) -> int:
        return self._coefficients[-1]

    def constant_coefficient(self) -> int:
        return self._coefficients[0]

    def coefficient_at(self, i: int) -> int:
        if i < 0 or i > self.degree():
            return 0
        return self._coefficients[i]

    def is_zero(self) -> bool:
        return len(self._coefficients) == 1 and self._coefficients[0] == 0

    # arithmetic

    def evaluate_at(self, a: int) -> int:
        if is_zero(a):
            return self.constant_coefficient()
        if is_one(a):
            result = 0
            for c in self._coefficients:
                result ^= c
            return result
        # Horner, highest power first
        result = 0
        for c in reversed(self._coefficients):
            result = gf_add(gf_mul(result, a), c)
        return result

    def add(self, other: "Poly") -> "Poly":
        a, b = self._coefficients, other._coefficients
        if len(a) < len(b):
            a, b = b, a
        out = list(a)
        for i, c in enumerate(b):
            out[i] ^= c
        return Poly(out)

    def multiply(self, other: "Poly") -> "Poly":
        if self.is_zero() or other.is_zero():
            return Poly.zero()
        out = [0] * (len(self._coefficients) + len(other._coefficients) - 1)
        for i, a in enumerate(self._coefficients):
            if a == 0:
                continue
            for j, b in enumerate(other._coefficients):
                if b == 0:
                    continue
                out[i + j] ^= gf_mul(a, b)
        return Poly(out)

    def multiply_by_scalar(self, scale: int) -> "Poly":
        if scale == 0:
            return Poly.zero()
        if scale == 1:
            return self
        return Poly(gf_mul(c, scale) for c in self._coefficients)

    def multiply_by_monomial(self, degree: int, scale: int = 1) -> "Poly":
        # self * scale * x^degree without a full convolution
        if degree < 0:
            raise ValueError(f"monomial degree must be >= 0 (got {degree})")
        if scale == 0 or self.is_zero():
            return Poly.zero()
        return Poly([0] * degree + [gf_mul(c, scale) for c in self._coefficients])

    def shift(self, degree: int) -> "Poly":
        return self.multiply_by_monomial(degree, 1)

    def divmod(self, divisor: "Poly") -> Tuple["Poly", "Poly"]:
        """Polynomial long division, returns (quotient, remainder).

        Each step cancels the leading term of the running remainder with
        scale * x^(deg diff) * divisor and accumulates that monomial into the
        quotient. Stops once the remainder is zero or of lower degree than
        the divisor.
        """
        if divisor.is_zero():
            raise DivisionByZeroError("polynomial division by the zero polynomial")
        lead_inv = gf_inv(divisor.leading_coefficient())
        quotient = Poly.zero()
        remainder = self
        while not remainder.is_zero() and remainder.degree() >= divisor.degree():
            diff = remainder.degree() - divisor.degree()
            scale = gf_mul(remainder.leading_coefficient(), lead_inv)
            quotient = quotient.add(Poly.monomial(diff, scale))
            remainder = remainder.add(divisor.multiply_by_monomial(diff, scale))
        return quotient, remainder

    def find_roots(self, expected_count: Optional[int] = None) -> List[int]:
        """Nonzero field elements r with self(r) == 0.

        Stops after expected_count roots (default: the degree). Fewer roots
        than expected means the polynomial does not split into distinct
        linear factors over GF(256).
        """
        if expected_count is None:
            expected_count = self.degree()
        if self.degree() == 0 or expected_count <= 0:
            return []
        if self.degree() == 1:
            # a*x + c = 0  ->  x = c / a
            root = gf_div(self.constant_coefficient(), self.leading_coefficient())
            return [root] if root != 0 else []
        roots: List[int] = []
        for candidate in range(1, field_size):
            if self.evaluate_at(candidate) == 0:
                roots.append(candidate)
                if len(roots) == expected_count:
                    break
        return roots

    # operators

    __add__ = add
    __sub__ = add
    __mul__ = multiply

    def __divmod__(self, divisor: "Poly") -> Tuple["Poly", "Poly"]:
        return self.divmod(divisor)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __repr__(self) -> str:
        return f"Poly({list(self._coefficients)})"

    def to_latex(self, var: str = "x") -> str:
        terms = []
        for power in range(self.degree(), -1, -1):
            c = self._coefficients[power]
            if c == 0:
                continue
            coeff = f"\\text{{{c:02X}}}_{{16}}"
            if power == 0:
                terms.append(coeff)
            elif power == 1:
                terms.append(f"{coeff}{var}")
            else:
                exponent = str(power) if power < 10 else f"{{{power}}}"
                terms.append(f"{coeff}{var}^{exponent}")
        if not terms:
            return "0"
        return " + ".join(terms)
