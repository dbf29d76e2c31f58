# Sampling algorithms for ML-KEM

from .constants import N, Q
from .crypto_primitives import PRF, XOF
from .field import Domain, RingElement, Vector, ct_mod_q
from .ntt import NTT

# SHAKE128 rate in bytes
XOF_BLOCK_SIZE = 168


def SampleNTT(rho: bytes, i: int, j: int) -> RingElement:
    """
    Generates a pseudorandom element of T_q from rho and two index bytes.
    FIPS 203 Algorithm 7.

    The loop count depends only on the XOF stream of the public seed rho,
    so it reveals nothing secret.

    Args:
        rho (bytes): 32-byte public seed.
        i (int): First index byte appended to rho.
        j (int): Second index byte appended to rho.

    Returns:
        RingElement: Uniform element, already in the NTT domain.

    Raises:
        ValueError: If rho is not 32 bytes or an index is outside 0-255.
    """
    if len(rho) != 32:
        raise ValueError("Seed rho must be 32 bytes.")
    if not (0 <= i < 256 and 0 <= j < 256):
        raise ValueError("Indices i, j must be in 0-255.")

    ctx = XOF(rho, i, j)
    a_hat = []

    while len(a_hat) < N:
        C = ctx.read(XOF_BLOCK_SIZE)
        for pos in range(0, XOF_BLOCK_SIZE, 3):
            d1 = C[pos] | ((C[pos + 1] & 0x0F) << 8)
            d2 = (C[pos + 1] >> 4) | (C[pos + 2] << 4)
            if d1 < Q and len(a_hat) < N:
                a_hat.append(d1)
            if d2 < Q and len(a_hat) < N:
                a_hat.append(d2)

    return RingElement(tuple(a_hat), Domain.NTT)


def SamplePolyCBD(B: bytes, eta: int) -> RingElement:
    """
    Samples a polynomial from the centered binomial distribution D_eta(R_q).
    FIPS 203 Algorithm 8.

    Each coefficient is the popcount of eta bits minus the popcount of the
    next eta bits, reduced mod q without branching on the sign.

    Args:
        B (bytes): 64 * eta bytes of PRF output.
        eta (int): Distribution parameter (ETA1 or ETA2).

    Returns:
        RingElement: Coefficient-domain polynomial with values in [-eta, eta] mod q.

    Raises:
        ValueError: If eta is not positive or B has the wrong length.
    """
    if eta <= 0:
        raise ValueError("Parameter eta must be a positive integer.")
    if len(B) != 64 * eta:
        raise ValueError(f"Input length {len(B)} does not match {64 * eta} for eta={eta}")

    stream = int.from_bytes(B, "little")
    half_mask = (1 << eta) - 1
    f = [0] * N
    for i in range(N):
        x = (stream & half_mask).bit_count()
        stream >>= eta
        y = (stream & half_mask).bit_count()
        stream >>= eta
        f[i] = ct_mod_q(x + Q - y)
    return RingElement(tuple(f), Domain.COEFFICIENT)


def SampleVector(seed: bytes, eta: int, k: int, nonce: int) -> tuple[Vector, int]:
    """
    Samples k CBD polynomials with PRF counters nonce, nonce+1, ...

    Returns:
        tuple[Vector, int]: The coefficient-domain vector and the next counter.
    """
    vec = []
    for _ in range(k):
        vec.append(SamplePolyCBD(PRF(eta, seed, nonce), eta))
        nonce += 1
    return vec, nonce


def SampleVectorNTT(seed: bytes, eta: int, k: int, nonce: int) -> tuple[Vector, int]:
    """Same as SampleVector, with each entry mapped to the NTT domain."""
    vec, nonce = SampleVector(seed, eta, k, nonce)
    return [NTT(p) for p in vec], nonce
