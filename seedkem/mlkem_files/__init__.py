# seedkem/mlkem_files/__init__.py
from .constants import (
    N, Q, N_INV,
    MLKEMParams,
    DEFAULT_VARIANT,
    get_params_by_id,
    get_params_by_name,
)
from .errors import EncodingError
from .kem_internal import (
    ExpandedKey,
    MLKEM_UnpackPrivate,
    MLKEM_KeyGen_internal,
    MLKEM_Encaps_internal,
    MLKEM_Decaps_internal,
)
from .pke import (
    K_PKE_ExpandPrivate,
    K_PKE_KeyGen,
    K_PKE_Encrypt,
    K_PKE_Decrypt,
)

__all__ = [
    "N", "Q", "N_INV",
    "MLKEMParams", "DEFAULT_VARIANT", "get_params_by_id", "get_params_by_name",
    "EncodingError",
    "ExpandedKey", "MLKEM_UnpackPrivate",
    "MLKEM_KeyGen_internal", "MLKEM_Encaps_internal", "MLKEM_Decaps_internal",
    "K_PKE_ExpandPrivate", "K_PKE_KeyGen", "K_PKE_Encrypt", "K_PKE_Decrypt",
]
