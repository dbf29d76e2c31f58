import logging
from dataclasses import dataclass

from .constants import ENCODE_SIZE_12, MLKEMParams, SEED_SIZE
from .crypto_primitives import ExpandSeed, G, H, J
from .errors import EncodingError
from .field import Matrix, Vector, ct_eq, ct_select_bytes
from .pke import (
    EncodeEncryptionKey,
    EncodeVector12,
    K_PKE_Decrypt,
    K_PKE_Encrypt,
    K_PKE_ExpandPrivate,
    K_PKE_KeyGen,
    K_PKE_ParseEncryptionKey,
)
from .utils import DecodeRingElement12

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpandedKey:
    """
    Working form of a decapsulation key.

    Holding on to an instance skips the per-call re-derivation from the seed;
    the result of every operation is identical either way.
    """

    params: MLKEMParams
    A_hat: Matrix
    t_hat: Vector
    s_hat: Vector
    ek: bytes
    h: bytes
    z: bytes

    def to_classic_bytes(self) -> bytes:
        """Serializes to the FIPS 203 layout dk_pke || ek || H(ek) || z."""
        return EncodeVector12(self.s_hat) + self.ek + self.h + self.z

    def __repr__(self) -> str:
        return f"ExpandedKey(params={self.params.name}, h={self.h.hex()[:16]}...)"


def MLKEM_UnpackPrivate(seed: bytes, params: MLKEMParams) -> ExpandedKey:
    """
    Re-derives the full key material from a 32-byte master seed.

    (d, z) = ExpandSeed(seed), (rho, sigma) = G(d || k), then K-PKE key
    expansion. Identical seeds always give identical output.

    Raises:
        EncodingError: If the seed is not 32 bytes.
    """
    if len(seed) != SEED_SIZE:
        raise EncodingError("seed must be 32 bytes")
    d, z = ExpandSeed(seed)
    return _expand(d, z, params)


def MLKEM_KeyGen_internal(d: bytes, z: bytes, params: MLKEMParams) -> tuple[bytes, bytes]:
    """
    Deterministic classic key generation, FIPS 203 Algorithm 16.

    Returns:
        tuple[bytes, bytes]: (ek, dk) with dk in the 768k+96-byte layout.
    """
    if len(d) != 32 or len(z) != 32:
        raise ValueError("d and z must be 32 bytes")
    ekPKE, dkPKE = K_PKE_KeyGen(d, params)
    dk = dkPKE + ekPKE + H(ekPKE) + z
    return ekPKE, dk


def MLKEM_ParseClassicKey(dk: bytes, params: MLKEMParams) -> ExpandedKey:
    """
    Loads a classic decapsulation key after the FIPS 203 section 7.2 hash check.

    Raises:
        EncodingError: On a length mismatch or a bad embedded H(ek).
    """
    if len(dk) != params.dk_size:
        raise EncodingError("decapsulation key length mismatch")
    off_ek = params.dk_pke_size
    off_h = off_ek + params.ek_size
    off_z = off_h + 32
    ek = dk[off_ek:off_h]
    h = dk[off_h:off_z]
    if not ct_eq(H(ek), h):
        raise EncodingError("decapsulation key hash check failed")

    s_hat = [
        DecodeRingElement12(dk[i * ENCODE_SIZE_12:(i + 1) * ENCODE_SIZE_12])
        for i in range(params.K)
    ]
    A_hat, t_hat = K_PKE_ParseEncryptionKey(ek, params)
    return ExpandedKey(params, A_hat, t_hat, s_hat, ek, h, dk[off_z:])


def MLKEM_Encaps_internal(ek: bytes, m: bytes, params: MLKEMParams) -> tuple[bytes, bytes]:
    """
    Deterministic encapsulation, FIPS 203 Algorithm 17.

    Returns:
        tuple[bytes, bytes]: (c, K).
    """
    if len(m) != 32:
        raise ValueError("m must be 32 bytes")
    A_hat, t_hat = K_PKE_ParseEncryptionKey(ek, params)
    K_shared, r = G(m + H(ek))
    c = K_PKE_Encrypt(A_hat, t_hat, m, r, params)
    return c, K_shared


def MLKEM_Decaps_internal(key: ExpandedKey, c: bytes) -> bytes:
    """
    Decapsulation with implicit rejection, FIPS 203 Algorithm 18.

    Both candidate keys are always computed and the result is picked with a
    constant-time select on the re-encryption comparison.
    """
    params = key.params
    m_prime = K_PKE_Decrypt(key.s_hat, c, params)
    K_prime, r_prime = G(m_prime + key.h)
    K_bar = J(key.z + c)
    c_prime = K_PKE_Encrypt(key.A_hat, key.t_hat, m_prime, r_prime, params)
    return ct_select_bytes(ct_eq(c, c_prime), K_prime, K_bar)


def _expand(d: bytes, z: bytes, params: MLKEMParams) -> ExpandedKey:
    rho, sigma = G(d + bytes([params.K]))
    A_hat, t_hat, s_hat = K_PKE_ExpandPrivate(rho, sigma, params)
    ek = EncodeEncryptionKey(t_hat, rho)
    logger.debug("expanded %s key material", params.name)
    return ExpandedKey(params, A_hat, t_hat, s_hat, ek, H(ek), z)
