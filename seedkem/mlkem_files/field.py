# Arithmetic in Z_q and the ring R_q = Z_q[X]/(X^256 + 1) for ML-KEM

import hmac
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Tuple

from .constants import N, Q

# floor(2^25 / q). For x < 2^24 the quotient estimate is off by at most one.
_BARRETT_SHIFT = 25
_BARRETT_MULT = 10079


def ct_mod_q(x: int) -> int:
    """
    Reduces x modulo q without a data-dependent branch or division.
    Barrett reduction followed by a masked conditional subtraction.

    Args:
        x (int): Value in [0, 2^24). Every product of two residues fits.

    Returns:
        int: x mod q in [0, q).
    """
    t = (x * _BARRETT_MULT) >> _BARRETT_SHIFT
    r = x - t * Q
    # r is in [0, 2q)
    r_sub = r - Q
    sign = (r_sub >> 15) & 1
    mask = (-sign) & 0xFFFF
    return (r & mask) | (r_sub & (mask ^ 0xFFFF))


def ct_div_q(x: int) -> int:
    """
    Computes floor(x / q) for 0 <= x < 2^24 without Python's variable-time //.
    """
    t = (x * _BARRETT_MULT) >> _BARRETT_SHIFT
    r = x - t * Q
    sign = ((r - Q) >> 15) & 1
    return t + 1 - sign


def ct_eq(a: bytes, b: bytes) -> int:
    """Returns 1 if a == b, else 0. Constant time for equal-length inputs."""
    return int(hmac.compare_digest(a, b))


def ct_select_bytes(flag: int, a: bytes, b: bytes) -> bytes:
    """
    Returns a if flag is 1, b if flag is 0, reading both inputs fully.

    Args:
        flag (int): 0 or 1.
        a (bytes): Selected on flag == 1.
        b (bytes): Selected on flag == 0. Must be as long as a.

    Returns:
        bytes: The selected value.
    """
    m = (-(flag & 1)) & 0xFF
    nm = m ^ 0xFF
    return bytes((x & m) | (y & nm) for x, y in zip(a, b))


class Domain(Enum):
    COEFFICIENT = "coefficient"
    NTT = "ntt"


@dataclass(frozen=True)
class RingElement:
    """
    A polynomial of R_q (coefficient domain) or T_q (NTT domain).

    Coefficients are canonical residues in [0, q). The domain tag guards
    against combining elements from different representations; doing so
    is a programming error and raises TypeError.
    """

    coeffs: Tuple[int, ...]
    domain: Domain = Domain.COEFFICIENT

    def __post_init__(self):
        if len(self.coeffs) != N:
            raise ValueError(f"RingElement needs {N} coefficients, got {len(self.coeffs)}")

    @classmethod
    def zero(cls, domain: Domain = Domain.COEFFICIENT) -> "RingElement":
        return cls((0,) * N, domain)

    @classmethod
    def from_list(cls, coeffs: Iterable[int], domain: Domain = Domain.COEFFICIENT) -> "RingElement":
        return cls(tuple(coeffs), domain)

    @property
    def is_ntt(self) -> bool:
        return self.domain is Domain.NTT

    def _check_domain(self, other: "RingElement") -> None:
        if not isinstance(other, RingElement):
            raise TypeError(f"cannot combine RingElement with {type(other).__name__}")
        if other.domain is not self.domain:
            raise TypeError(
                f"domain mismatch: {self.domain.value} vs {other.domain.value}"
            )

    def __add__(self, other: "RingElement") -> "RingElement":
        self._check_domain(other)
        return RingElement(
            tuple(ct_mod_q(a + b) for a, b in zip(self.coeffs, other.coeffs)),
            self.domain,
        )

    def __sub__(self, other: "RingElement") -> "RingElement":
        self._check_domain(other)
        # +q keeps the operand non-negative for Barrett
        return RingElement(
            tuple(ct_mod_q(a + Q - b) for a, b in zip(self.coeffs, other.coeffs)),
            self.domain,
        )

    def __neg__(self) -> "RingElement":
        return RingElement(tuple(ct_mod_q(Q - a) for a in self.coeffs), self.domain)

    def scale(self, c: int) -> "RingElement":
        """Multiplies every coefficient by the scalar c mod q."""
        c = c % Q
        return RingElement(tuple(ct_mod_q(a * c) for a in self.coeffs), self.domain)

    def __len__(self) -> int:
        return N

    def __iter__(self) -> Iterator[int]:
        return iter(self.coeffs)

    def __getitem__(self, i):
        return self.coeffs[i]


Vector = List[RingElement]
Matrix = List[Vector]


def vec_add(v1: Vector, v2: Vector) -> Vector:
    if len(v1) != len(v2):
        raise ValueError("vectors must have the same length")
    return [a + b for a, b in zip(v1, v2)]


def vec_sub(v1: Vector, v2: Vector) -> Vector:
    if len(v1) != len(v2):
        raise ValueError("vectors must have the same length")
    return [a - b for a, b in zip(v1, v2)]
