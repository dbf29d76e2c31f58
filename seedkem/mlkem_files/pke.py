from .constants import ENCODE_SIZE_12, MLKEMParams
from .crypto_primitives import G, PRF
from .errors import EncodingError
from .field import Matrix, Vector, vec_add
from .ntt import NTT, InvNTT, DotNTT, MatrixVectorNTT
from .sampling import SampleNTT, SamplePolyCBD, SampleVector, SampleVectorNTT
from .utils import (
    ByteEncode,
    ByteDecode,
    CompressPoly,
    DecompressPoly,
    DecodeRingElement12,
)


def K_PKE_ExpandPrivate(rho: bytes, sigma: bytes, params: MLKEMParams) -> tuple[Matrix, Vector, Vector]:
    """
    Derives the working key material of K-PKE from its two seeds.
    Lines 3-18 of FIPS 203 Algorithm 13.

    Args:
        rho (bytes): 32-byte public matrix seed.
        sigma (bytes): 32-byte secret noise seed.
        params (MLKEMParams): Parameter set.

    Returns:
        tuple: (A_hat, t_hat, s_hat), all in the NTT domain.
    """
    A_hat = _generate_matrix(rho, params)
    s_hat, nonce = SampleVectorNTT(sigma, params.ETA1, params.K, 0)
    e_hat, _ = SampleVectorNTT(sigma, params.ETA1, params.K, nonce)
    t_hat = vec_add(MatrixVectorNTT(A_hat, s_hat), e_hat)
    return A_hat, t_hat, s_hat


def K_PKE_KeyGen(d: bytes, params: MLKEMParams) -> tuple[bytes, bytes]:
    """
    Classic K-PKE key generation, FIPS 203 Algorithm 13.

    Returns:
        tuple[bytes, bytes]: (ek_pke, dk_pke).
    """
    if len(d) != 32:
        raise ValueError("d must be 32 bytes")
    rho, sigma = G(d + bytes([params.K]))
    _, t_hat, s_hat = K_PKE_ExpandPrivate(rho, sigma, params)
    return EncodeEncryptionKey(t_hat, rho), EncodeVector12(s_hat)


def EncodeVector12(v: Vector) -> bytes:
    return b"".join(ByteEncode(poly, 12) for poly in v)


def EncodeEncryptionKey(t_hat: Vector, rho: bytes) -> bytes:
    """ek = ByteEncode_12(t_hat) || rho."""
    return EncodeVector12(t_hat) + rho


def K_PKE_ParseEncryptionKey(ek: bytes, params: MLKEMParams) -> tuple[Matrix, Vector]:
    """
    Recovers (A_hat, t_hat) from an encryption key.

    Raises:
        EncodingError: If ek has the wrong length.
    """
    if len(ek) != params.ek_size:
        raise EncodingError("ekPKE length mismatch")
    t_hat = [
        DecodeRingElement12(ek[i * ENCODE_SIZE_12:(i + 1) * ENCODE_SIZE_12])
        for i in range(params.K)
    ]
    rho = ek[ENCODE_SIZE_12 * params.K:]
    return _generate_matrix(rho, params), t_hat


def K_PKE_Encrypt(A_hat: Matrix, t_hat: Vector, m: bytes, r: bytes, params: MLKEMParams) -> bytes:
    """
    Encrypts a 32-byte message under (A_hat, t_hat) with randomness r.
    FIPS 203 Algorithm 14, taking the already expanded key.

    Returns:
        bytes: Ciphertext c1 || c2 of 32 * (du * k + dv) bytes.
    """
    if len(m) != 32 or len(r) != 32:
        raise ValueError("m and r must be 32 bytes")

    y_hat, nonce = SampleVectorNTT(r, params.ETA1, params.K, 0)
    e1, nonce = SampleVector(r, params.ETA2, params.K, nonce)
    e2 = SamplePolyCBD(PRF(params.ETA2, r, nonce), params.ETA2)

    u = vec_add([InvNTT(p) for p in MatrixVectorNTT(A_hat, y_hat, transpose=True)], e1)
    mu = DecompressPoly(ByteDecode(m, 1), 1)
    v = InvNTT(DotNTT(t_hat, y_hat)) + e2 + mu

    c1 = b"".join(ByteEncode(CompressPoly(poly, params.DU), params.DU) for poly in u)
    c2 = ByteEncode(CompressPoly(v, params.DV), params.DV)
    return c1 + c2


def K_PKE_Decrypt(s_hat: Vector, c: bytes, params: MLKEMParams) -> bytes:
    """
    Decrypts a ciphertext with the NTT-domain secret vector.
    FIPS 203 Algorithm 15.

    Returns:
        bytes: 32-byte message. Never fails for correctly sized input; a
        forged ciphertext decrypts to an unrelated message.

    Raises:
        EncodingError: If c has the wrong length.
    """
    if len(c) != params.ct_size:
        raise EncodingError("ciphertext length mismatch")

    block = 32 * params.DU
    split = block * params.K
    c1, c2 = c[:split], c[split:]

    u_prime = [
        DecompressPoly(ByteDecode(c1[i * block:(i + 1) * block], params.DU), params.DU)
        for i in range(params.K)
    ]
    v_prime = DecompressPoly(ByteDecode(c2, params.DV), params.DV)

    w = v_prime - InvNTT(DotNTT(s_hat, [NTT(poly) for poly in u_prime]))
    return ByteEncode(CompressPoly(w, 1), 1)


def _generate_matrix(rho: bytes, params: MLKEMParams) -> Matrix:
    # A_hat[i][j] is sampled from rho || j || i
    return [[SampleNTT(rho, j, i) for j in range(params.K)] for i in range(params.K)]
