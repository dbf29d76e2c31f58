"""
ML-KEM key encapsulation (FIPS 203) with seed-form decapsulation keys.

The decapsulation key handed out by MLKEM_KeyGen is the 32-byte master
seed. Every MLKEM_Decaps call re-derives the working key from it, so a
decapsulation key can never pair with more than one encapsulation key.
The classic 768k+96-byte layout is still accepted for compatibility, and
an ExpandedKey from MLKEM_UnpackPrivate may be passed to skip the
re-derivation.
"""
import logging
import os
from typing import Optional, Union

from .mlkem_files.constants import (
    DEFAULT_VARIANT,
    ENCODE_SIZE_12,
    MLKEMParams,
    Q,
    SEED_SIZE,
    get_params_by_id,
)
from .mlkem_files.errors import EncodingError
from .mlkem_files.kem_internal import (
    ExpandedKey,
    MLKEM_Decaps_internal,
    MLKEM_Encaps_internal,
    MLKEM_ParseClassicKey,
    MLKEM_UnpackPrivate as _unpack,
)
from .mlkem_files.utils import ByteDecode

logger = logging.getLogger(__name__)

DecapsulationKey = Union[bytes, ExpandedKey]


def MLKEM_KeyGen(variant_id: int = DEFAULT_VARIANT) -> tuple[bytes, bytes]:
    """
    Generates a key pair from a fresh 32-byte master seed.

    Returns:
        tuple[bytes, bytes]: (ek, dk) where dk is the 32-byte seed.
    """
    return MLKEM_KeyGen_from_seed(os.urandom(SEED_SIZE), variant_id)


def MLKEM_KeyGen_from_seed(seed: bytes, variant_id: int = DEFAULT_VARIANT) -> tuple[bytes, bytes]:
    """Deterministic key generation from a caller-supplied 32-byte seed."""
    key = MLKEM_UnpackPrivate(seed, variant_id)
    return key.ek, bytes(seed)


def MLKEM_UnpackPrivate(seed: bytes, variant_id: int = DEFAULT_VARIANT) -> ExpandedKey:
    """
    Expands a seed-form decapsulation key into (A_hat, t_hat, s_hat, ek, h, z).

    Raises:
        EncodingError: If the seed is not 32 bytes.
    """
    params = get_params_by_id(variant_id)
    if not isinstance(seed, (bytes, bytearray)) or len(seed) != SEED_SIZE:
        logger.debug("rejecting seed of unexpected size for %s", params.name)
        raise EncodingError("Invalid seed")
    return _unpack(bytes(seed), params)


def MLKEM_Encaps(ek: bytes, variant_id: int = DEFAULT_VARIANT,
                 randomness: Optional[bytes] = None) -> tuple[bytes, bytes]:
    """
    Encapsulates a fresh shared secret to ek.

    Args:
        ek (bytes): Encapsulation key, 384k+32 bytes.
        variant_id (int): Parameter set id.
        randomness (bytes, optional): 32-byte m for deterministic runs.
            Drawn from os.urandom when omitted.

    Returns:
        tuple[bytes, bytes]: (ciphertext, shared_secret).

    Raises:
        EncodingError: If ek has the wrong length or fails the modulus check.
    """
    params = get_params_by_id(variant_id)
    if not _validate_encapsulation_key(ek, params):
        raise EncodingError("Invalid ek")
    m = os.urandom(32) if randomness is None else randomness
    logger.debug("encapsulating to %s key", params.name)
    return MLKEM_Encaps_internal(bytes(ek), m, params)


def MLKEM_Decaps(dk: DecapsulationKey, c: bytes, variant_id: int = DEFAULT_VARIANT) -> bytes:
    """
    Recovers the shared secret from a ciphertext.

    A ciphertext that fails re-encryption yields the implicit rejection key
    J(z || c) instead of an error; both outcomes are 32 bytes.

    Args:
        dk: 32-byte seed, classic 768k+96-byte key, or an ExpandedKey.
        c (bytes): Ciphertext, 32 * (du * k + dv) bytes.
        variant_id (int): Parameter set id.

    Returns:
        bytes: 32-byte shared secret.

    Raises:
        EncodingError: If c or dk is malformed.
    """
    params = get_params_by_id(variant_id)
    if not isinstance(c, (bytes, bytearray)) or len(c) != params.ct_size:
        logger.debug("rejecting %s ciphertext of unexpected size", params.name)
        raise EncodingError("Invalid ciphertext")
    key = _load_decapsulation_key(dk, params)
    return MLKEM_Decaps_internal(key, bytes(c))


def MLKEM768_KeyGen(): return MLKEM_KeyGen(1)
def MLKEM768_Encaps(ek: bytes): return MLKEM_Encaps(ek, 1)
def MLKEM768_Decaps(dk: DecapsulationKey, c: bytes): return MLKEM_Decaps(dk, c, 1)


def _load_decapsulation_key(dk: DecapsulationKey, params: MLKEMParams) -> ExpandedKey:
    if isinstance(dk, ExpandedKey):
        if dk.params != params:
            raise EncodingError("Invalid dk")
        return dk
    if not isinstance(dk, (bytes, bytearray)):
        raise EncodingError("Invalid dk")
    if len(dk) == SEED_SIZE:
        return _unpack(bytes(dk), params)
    if len(dk) == params.dk_size:
        return MLKEM_ParseClassicKey(bytes(dk), params)
    logger.debug("rejecting %s decapsulation key of unexpected size", params.name)
    raise EncodingError("Invalid dk")


def _validate_encapsulation_key(ek: bytes, params: MLKEMParams) -> bool:
    # FIPS 203 section 7.1: length and modulus check
    if not isinstance(ek, (bytes, bytearray)):
        return False
    if len(ek) != params.ek_size:
        logger.debug("rejecting %s ek of %d bytes", params.name, len(ek))
        return False
    for i in range(params.K):
        coeffs = ByteDecode(bytes(ek[i * ENCODE_SIZE_12:(i + 1) * ENCODE_SIZE_12]), 12)
        if any(c >= Q for c in coeffs):
            logger.debug("rejecting %s ek with unreduced coefficients", params.name)
            return False
    return True
