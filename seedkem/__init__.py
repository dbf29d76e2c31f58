"""Seed-keyed ML-KEM (FIPS 203) key encapsulation in pure Python."""
import logging

from .mlkem import (
    DecapsulationKey,
    MLKEM_KeyGen,
    MLKEM_KeyGen_from_seed,
    MLKEM_UnpackPrivate,
    MLKEM_Encaps,
    MLKEM_Decaps,
    MLKEM768_KeyGen,
    MLKEM768_Encaps,
    MLKEM768_Decaps,
)
from .mlkem_files import (
    EncodingError,
    ExpandedKey,
    MLKEMParams,
    get_params_by_id,
    get_params_by_name,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DecapsulationKey",
    "MLKEM_KeyGen", "MLKEM_KeyGen_from_seed", "MLKEM_UnpackPrivate",
    "MLKEM_Encaps", "MLKEM_Decaps",
    "MLKEM768_KeyGen", "MLKEM768_Encaps", "MLKEM768_Decaps",
    "EncodingError", "ExpandedKey", "MLKEMParams",
    "get_params_by_id", "get_params_by_name",
]
