from typing import Iterable

from .constants import N, Q
from .errors import EncodingError
from .field import Domain, RingElement, ct_div_q, ct_mod_q


def BitsToBytes(b: list[int]) -> bytes:
    """
    Converts a list of bits into bytes, least significant bit first.
    FIPS 203 Algorithm 3.

    Args:
        b (list[int]): Bits, length a multiple of 8.

    Returns:
        bytes: Packed bytes.

    Raises:
        ValueError: If the length is not a multiple of 8.
    """
    if len(b) % 8 != 0:
        raise ValueError("Bit list length must be a multiple of 8.")

    B = bytearray(len(b) // 8)
    for i in range(len(b)):
        B[i // 8] |= (b[i] & 1) << (i % 8)
    return bytes(B)


def BytesToBits(B: bytes) -> list[int]:
    """
    Converts bytes into a list of bits, least significant bit first.
    FIPS 203 Algorithm 4.
    """
    b = [0] * (8 * len(B))
    for i in range(len(B)):
        for j in range(8):
            b[8 * i + j] = (B[i] >> j) & 1
    return b


def Compress(x: int, d: int) -> int:
    """
    Maps x in Z_q to round(2^d / q * x) mod 2^d.

    Args:
        x (int): Residue in [0, q).
        d (int): Bit width, 1 <= d <= 12.

    Returns:
        int: Compressed value in [0, 2^d).
    """
    if not (0 < d <= 12):
        raise ValueError(f"Bit width d={d} must be between 1 and 12.")

    scale = 1 << d
    return ct_div_q(scale * x + (Q >> 1)) & (scale - 1)


def Decompress(y: int, d: int) -> int:
    """
    Maps y in Z_{2^d} to round(q / 2^d * y).

    Args:
        y (int): Compressed value in [0, 2^d).
        d (int): Bit width, 1 <= d <= 12.

    Returns:
        int: Residue in [0, q).
    """
    if not (0 < d <= 12):
        raise ValueError(f"Bit width d={d} must be between 1 and 12.")

    return (Q * y + (1 << (d - 1))) >> d


def CompressPoly(f: RingElement, d: int) -> list[int]:
    if f.domain is not Domain.COEFFICIENT:
        raise TypeError("Compress expects a coefficient-domain element")
    return [Compress(c, d) for c in f.coeffs]


def DecompressPoly(F: Iterable[int], d: int) -> RingElement:
    return RingElement(tuple(Decompress(y, d) for y in F), Domain.COEFFICIENT)


def ByteEncode(F: Iterable[int], d: int) -> bytes:
    """
    Serializes 256 d-bit integers into 32*d bytes.
    FIPS 203 Algorithm 5.

    Args:
        F (Iterable[int]): 256 values, each below 2^d.
        d (int): Bit width, 1 <= d <= 12.

    Returns:
        bytes: Encoded array of 32*d bytes.
    """
    F = list(F)
    if len(F) != N:
        raise ValueError(f"Input must contain {N} values.")
    mask = (1 << d) - 1
    acc = 0
    for i, a in enumerate(F):
        acc |= (a & mask) << (i * d)
    return acc.to_bytes(32 * d, "little")


def ByteDecode(B: bytes, d: int) -> list[int]:
    """
    Deserializes 32*d bytes into 256 d-bit integers.
    FIPS 203 Algorithm 6, without the final reduction mod q for d = 12;
    see DecodeRingElement12.

    Args:
        B (bytes): Encoded array of 32*d bytes.
        d (int): Bit width, 1 <= d <= 12.

    Returns:
        list[int]: 256 values in [0, 2^d).

    Raises:
        EncodingError: If B does not hold exactly 32*d bytes.
    """
    if len(B) != 32 * d:
        raise EncodingError(f"ByteDecode_{d} expects {32 * d} bytes, got {len(B)}")
    mask = (1 << d) - 1
    acc = int.from_bytes(B, "little")
    F = [0] * N
    for i in range(N):
        F[i] = acc & mask
        acc >>= d
    return F


def DecodeRingElement12(B: bytes, domain: Domain = Domain.NTT) -> RingElement:
    """ByteDecode_12 with every coefficient reduced mod q."""
    return RingElement(tuple(ct_mod_q(c) for c in ByteDecode(B, 12)), domain)
