# The Number-Theoretic Transform for ML-KEM

from .constants import ZETAS_BITREV, GAMMAS, N, Q, N_INV
from .field import Domain, Matrix, RingElement, Vector, ct_mod_q


def NTT(f: RingElement) -> RingElement:
    """
    Computes the NTT representation of a polynomial.
    FIPS 203 Algorithm 9.

    Args:
        f (RingElement): Polynomial in the coefficient domain.

    Returns:
        RingElement: The same polynomial in the NTT domain, 128 degree-1
        blocks in bit-reversed order.

    Raises:
        TypeError: If f is already in the NTT domain.
    """
    if f.domain is not Domain.COEFFICIENT:
        raise TypeError("NTT expects a coefficient-domain element")
    k = 1
    l = 128
    a = list(f.coeffs)

    while l >= 2:
        start = 0
        while start < N:
            zeta = ZETAS_BITREV[k]
            k += 1
            for j in range(start, start + l):
                t = ct_mod_q(zeta * a[j + l])
                a[j + l] = ct_mod_q(a[j] + Q - t)
                a[j] = ct_mod_q(a[j] + t)
            start += 2 * l
        l //= 2

    return RingElement(tuple(a), Domain.NTT)


def InvNTT(f_hat: RingElement) -> RingElement:
    """
    Computes the polynomial whose NTT representation is f_hat.
    FIPS 203 Algorithm 10.

    Args:
        f_hat (RingElement): NTT-domain element.

    Returns:
        RingElement: Coefficient-domain polynomial.

    Raises:
        TypeError: If f_hat is not in the NTT domain.
    """
    if f_hat.domain is not Domain.NTT:
        raise TypeError("InvNTT expects an NTT-domain element")
    k = 127
    l = 2
    a = list(f_hat.coeffs)

    while l <= 128:
        start = 0
        while start < N:
            zeta = ZETAS_BITREV[k]
            k -= 1
            for j in range(start, start + l):
                t = a[j]
                a[j] = ct_mod_q(t + a[j + l])
                a[j + l] = ct_mod_q(zeta * ct_mod_q(a[j + l] + Q - t))
            start += 2 * l
        l *= 2

    return RingElement(tuple(ct_mod_q(x * N_INV) for x in a), Domain.COEFFICIENT)


def BaseCaseMultiply(a0: int, a1: int, b0: int, b1: int, gamma: int) -> tuple[int, int]:
    """
    Multiplies two degree-1 polynomials modulo X^2 - gamma.
    FIPS 203 Algorithm 12.

    Returns:
        tuple[int, int]: Coefficients (c0, c1) of the product.
    """
    c0 = ct_mod_q(ct_mod_q(a0 * b0) + ct_mod_q(ct_mod_q(a1 * b1) * gamma))
    c1 = ct_mod_q(ct_mod_q(a0 * b1) + ct_mod_q(a1 * b0))
    return c0, c1


def MultiplyNTTs(f_hat: RingElement, g_hat: RingElement) -> RingElement:
    """
    Computes the product of two NTT representations.
    FIPS 203 Algorithm 11. Block i is reduced modulo X^2 - GAMMAS[i].

    Raises:
        TypeError: If either operand is not in the NTT domain.
    """
    if f_hat.domain is not Domain.NTT or g_hat.domain is not Domain.NTT:
        raise TypeError("MultiplyNTTs expects NTT-domain elements")
    f = f_hat.coeffs
    g = g_hat.coeffs
    h = [0] * N
    for i in range(N // 2):
        h[2 * i], h[2 * i + 1] = BaseCaseMultiply(
            f[2 * i], f[2 * i + 1], g[2 * i], g[2 * i + 1], GAMMAS[i]
        )
    return RingElement(tuple(h), Domain.NTT)


def DotNTT(a_hat: Vector, b_hat: Vector) -> RingElement:
    """Inner product sum_i a_hat[i] o b_hat[i], in the NTT domain."""
    if len(a_hat) != len(b_hat):
        raise ValueError("vectors must have the same length")
    acc = RingElement.zero(Domain.NTT)
    for x, y in zip(a_hat, b_hat):
        acc = acc + MultiplyNTTs(x, y)
    return acc


def MatrixVectorNTT(A_hat: Matrix, v_hat: Vector, transpose: bool = False) -> Vector:
    """
    Computes A_hat o v_hat, or A_hat^T o v_hat when transpose is set.
    """
    k = len(A_hat)
    if transpose:
        return [DotNTT([A_hat[j][i] for j in range(k)], v_hat) for i in range(k)]
    return [DotNTT(A_hat[i], v_hat) for i in range(k)]
