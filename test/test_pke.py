# test/test_pke.py
import os
import unittest

from seedkem.mlkem_files.constants import PARAMS_BY_ID, Q, get_params_by_id
from seedkem.mlkem_files.crypto_primitives import G
from seedkem.mlkem_files.errors import EncodingError
from seedkem.mlkem_files.ntt import InvNTT, MatrixVectorNTT
from seedkem.mlkem_files.pke import (
    K_PKE_Decrypt,
    K_PKE_Encrypt,
    K_PKE_ExpandPrivate,
    K_PKE_KeyGen,
    K_PKE_ParseEncryptionKey,
)
from seedkem.mlkem_files.sampling import SampleNTT
from seedkem.mlkem_files.utils import ByteDecode

PARAMS = get_params_by_id(1)
RHO = bytes(range(32))
SIGMA = bytes(range(32, 64))


class TestExpandPrivate(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.A_hat, cls.t_hat, cls.s_hat = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)

    def test_deterministic(self):
        self.assertEqual(K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS), (self.A_hat, self.t_hat, self.s_hat))

    def test_shapes_and_domains(self):
        self.assertEqual(len(self.A_hat), PARAMS.K)
        self.assertTrue(all(len(row) == PARAMS.K for row in self.A_hat))
        for poly in self.t_hat + self.s_hat + [p for row in self.A_hat for p in row]:
            self.assertTrue(poly.is_ntt)

    def test_matrix_indexing(self):
        # A_hat[i][j] comes from rho || j || i
        self.assertEqual(self.A_hat[0][1], SampleNTT(RHO, 1, 0))
        self.assertEqual(self.A_hat[2][0], SampleNTT(RHO, 0, 2))

    def test_t_hat_relation(self):
        # t_hat - A_hat o s_hat is the NTT of a small error vector
        for t, As in zip(self.t_hat, MatrixVectorNTT(self.A_hat, self.s_hat)):
            e = InvNTT(t - As)
            self.assertTrue(all(c <= PARAMS.ETA1 or c >= Q - PARAMS.ETA1 for c in e))

    def test_sigma_changes_secret(self):
        _, t_hat, s_hat = K_PKE_ExpandPrivate(RHO, bytes(32), PARAMS)
        self.assertNotEqual(s_hat, self.s_hat)
        self.assertNotEqual(t_hat, self.t_hat)


class TestEncryptDecrypt(unittest.TestCase):

    def test_roundtrip_all_params(self):
        for params in PARAMS_BY_ID:
            d = os.urandom(32)
            ek, dk = K_PKE_KeyGen(d, params)
            self.assertEqual(len(ek), params.ek_size)
            self.assertEqual(len(dk), params.dk_pke_size)
            rho, sigma = G(d + bytes([params.K]))
            A_hat, _, s_hat = K_PKE_ExpandPrivate(rho, sigma, params)
            A_parsed, t_hat = K_PKE_ParseEncryptionKey(ek, params)
            self.assertEqual(A_parsed, A_hat)
            m = os.urandom(32)
            c = K_PKE_Encrypt(A_hat, t_hat, m, os.urandom(32), params)
            self.assertEqual(len(c), params.ct_size)
            self.assertEqual(K_PKE_Decrypt(s_hat, c, params), m, params.name)

    def test_encrypt_deterministic(self):
        A_hat, t_hat, _ = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)
        m, r = b"\x01" * 32, b"\x02" * 32
        self.assertEqual(
            K_PKE_Encrypt(A_hat, t_hat, m, r, PARAMS),
            K_PKE_Encrypt(A_hat, t_hat, m, r, PARAMS),
        )
        self.assertNotEqual(
            K_PKE_Encrypt(A_hat, t_hat, m, r, PARAMS),
            K_PKE_Encrypt(A_hat, t_hat, m, b"\x03" * 32, PARAMS),
        )

    def test_ciphertext_layout(self):
        A_hat, t_hat, _ = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)
        c = K_PKE_Encrypt(A_hat, t_hat, b"\x00" * 32, b"\x05" * 32, PARAMS)
        self.assertEqual(len(c), 1088)
        # every 10-bit and 4-bit field decodes within range
        self.assertTrue(all(x < 1 << 10 for x in ByteDecode(c[:320], 10)))
        self.assertTrue(all(x < 1 << 4 for x in ByteDecode(c[960:], 4)))

    def test_garbage_decrypts_to_well_formed_message(self):
        _, _, s_hat = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)
        m = K_PKE_Decrypt(s_hat, os.urandom(PARAMS.ct_size), PARAMS)
        self.assertEqual(len(m), 32)

    def test_decrypt_wrong_length(self):
        _, _, s_hat = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)
        with self.assertRaises(EncodingError):
            K_PKE_Decrypt(s_hat, b"\x00" * 1087, PARAMS)

    def test_parse_wrong_length(self):
        with self.assertRaises(EncodingError):
            K_PKE_ParseEncryptionKey(b"\x00" * 1183, PARAMS)

    def test_bad_message_size(self):
        A_hat, t_hat, _ = K_PKE_ExpandPrivate(RHO, SIGMA, PARAMS)
        with self.assertRaises(ValueError):
            K_PKE_Encrypt(A_hat, t_hat, b"\x00" * 31, b"\x00" * 32, PARAMS)


if __name__ == "__main__":
    unittest.main()
