# Cryptographic primitives for ML-KEM, FIPS 203 section 4.1

from hashlib import sha3_256, sha3_512

from Crypto.Hash import SHAKE128, SHAKE256

Shake128Context = type(SHAKE128.new())


def PRF(eta: int, s: bytes, b: int) -> bytes:
    """
    Pseudorandom function PRF_eta(s, b) = SHAKE256(s || b, 64 * eta).

    Args:
        eta (int): Noise parameter, sets the output length.
        s (bytes): 32-byte seed.
        b (int): One-byte domain separation counter.

    Returns:
        bytes: 64 * eta pseudorandom bytes.
    """
    return SHAKE256.new(data=s + bytes([b])).read(64 * eta)


def H(s: bytes) -> bytes:
    """SHA3-256, used for the key commitment H(ek)."""
    return sha3_256(s).digest()


def J(s: bytes) -> bytes:
    """SHAKE256 truncated to 32 bytes, used for the implicit rejection key."""
    return SHAKE256.new(data=s).read(32)


def G(c: bytes) -> tuple[bytes, bytes]:
    """
    SHA3-512 split into two 32-byte halves.

    Returns:
        tuple[bytes, bytes]: First and second half of the digest.
    """
    h = sha3_512(c).digest()
    return h[:32], h[32:]


def XOF(rho: bytes, i: int, j: int) -> Shake128Context:
    """
    Returns a SHAKE128 context that has absorbed rho || i || j.
    Squeeze with ``ctx.read(n)``; successive reads continue the stream.
    """
    return SHAKE128.new(data=rho + bytes([i, j]))


def ExpandSeed(seed: bytes) -> tuple[bytes, bytes]:
    """
    Expands a 32-byte master seed into the key generation seed d and the
    implicit rejection secret z.

    Returns:
        tuple[bytes, bytes]: (d, z), 32 bytes each.
    """
    out = SHAKE256.new(data=seed).read(64)
    return out[:32], out[32:]
