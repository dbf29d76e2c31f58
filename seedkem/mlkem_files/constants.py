# Shared constants and parameter sets for ML-KEM (FIPS 203)

from dataclasses import dataclass

N = 256
Q = 3329
# 128^-1 mod q, the scaling factor of the inverse NTT
N_INV = 3303
ZETA = 17

SEED_SIZE = 32
SHARED_SECRET_SIZE = 32
ENCODE_SIZE_12 = N * 12 // 8


def bitrev7(x: int) -> int:
    return int(f"{x:07b}"[::-1], 2)


# zeta^BitRev7(i) mod q, FIPS 203 Appendix A
ZETAS_BITREV = [pow(ZETA, bitrev7(i), Q) for i in range(128)]

# zeta^(2*BitRev7(i)+1) mod q, the moduli X^2 - gamma_i of the NTT blocks
GAMMAS = [pow(ZETA, 2 * bitrev7(i) + 1, Q) for i in range(128)]


@dataclass(frozen=True)
class MLKEMParams:
    id: int
    name: str
    K: int
    ETA1: int
    ETA2: int
    DU: int
    DV: int

    @property
    def ek_size(self) -> int:
        return ENCODE_SIZE_12 * self.K + 32

    @property
    def dk_pke_size(self) -> int:
        return ENCODE_SIZE_12 * self.K

    @property
    def dk_size(self) -> int:
        return 768 * self.K + 96

    @property
    def ct_size(self) -> int:
        return 32 * (self.DU * self.K + self.DV)


PARAMS_BY_ID = [
    MLKEMParams(0, "ML-KEM-512",  2, 3, 2, 10, 4),
    MLKEMParams(1, "ML-KEM-768",  3, 2, 2, 10, 4),
    MLKEMParams(2, "ML-KEM-1024", 4, 2, 2, 11, 5),
]

DEFAULT_VARIANT = 1


def get_params_by_id(variant_id: int) -> MLKEMParams:
    if not isinstance(variant_id, int) or isinstance(variant_id, bool):
        raise ValueError("variant_id must be int 0,1,2")
    if 0 <= variant_id < len(PARAMS_BY_ID):
        return PARAMS_BY_ID[variant_id]
    raise ValueError("Unsupported variant_id (use 0,1,2)")


def get_params_by_name(name: str) -> MLKEMParams:
    """Looks up a parameter set by name, e.g. ``"ML-KEM-768"`` or ``"768"``."""
    for params in PARAMS_BY_ID:
        if name in (params.name, params.name.rsplit("-", 1)[-1]):
            return params
    raise ValueError(f"Unsupported parameter set {name!r}")
