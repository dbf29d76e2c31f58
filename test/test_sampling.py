# test/test_sampling.py
import os
import unittest

from seedkem.mlkem_files.constants import N, Q
from seedkem.mlkem_files.crypto_primitives import ExpandSeed, G, H, J, PRF, XOF
from seedkem.mlkem_files.field import Domain
from seedkem.mlkem_files.sampling import (
    SampleNTT,
    SamplePolyCBD,
    SampleVector,
    SampleVectorNTT,
)


class TestPrimitives(unittest.TestCase):

    def test_output_sizes(self):
        self.assertEqual(len(H(b"")), 32)
        self.assertEqual(len(J(b"")), 32)
        a, b = G(b"")
        self.assertEqual((len(a), len(b)), (32, 32))
        self.assertEqual(len(PRF(2, b"\x00" * 32, 0)), 128)
        self.assertEqual(len(PRF(3, b"\x00" * 32, 0)), 192)

    def test_sha3_256_empty(self):
        self.assertEqual(
            H(b"").hex(),
            "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a",
        )

    def test_shake256_empty(self):
        self.assertEqual(
            J(b"").hex(),
            "46b9dd2b0ba88d13233b3feb743eeb243fcd52ea62b81b82b50c27646ed5762f",
        )

    def test_prf_domain_separation(self):
        s = b"\x11" * 32
        self.assertNotEqual(PRF(2, s, 0), PRF(2, s, 1))

    def test_xof_streams(self):
        rho = b"\x22" * 32
        ctx = XOF(rho, 1, 2)
        first = ctx.read(168) + ctx.read(168)
        self.assertEqual(first, XOF(rho, 1, 2).read(336))

    def test_expand_seed(self):
        d, z = ExpandSeed(b"\x00" * 32)
        self.assertEqual((len(d), len(z)), (32, 32))
        self.assertNotEqual(d, z)
        self.assertEqual((d, z), ExpandSeed(b"\x00" * 32))


class TestSampleNTT(unittest.TestCase):

    def test_range_and_domain(self):
        a = SampleNTT(b"\x00" * 32, 0, 0)
        self.assertEqual(len(a), N)
        self.assertEqual(a.domain, Domain.NTT)
        self.assertTrue(all(0 <= c < Q for c in a))

    def test_deterministic(self):
        seed = b"\xab" * 32
        self.assertEqual(SampleNTT(seed, 1, 2), SampleNTT(seed, 1, 2))

    def test_index_order_matters(self):
        seed = b"\x00" * 32
        self.assertNotEqual(SampleNTT(seed, 0, 1), SampleNTT(seed, 1, 0))

    def test_matches_reference_stream(self):
        # Straight transcription of FIPS 203 Algorithm 7 over one long squeeze
        rho = bytes(range(32))
        stream = XOF(rho, 2, 1).read(168 * 10)
        expected = []
        pos = 0
        while len(expected) < N:
            d1 = stream[pos] + 256 * (stream[pos + 1] % 16)
            d2 = stream[pos + 1] // 16 + 16 * stream[pos + 2]
            if d1 < Q:
                expected.append(d1)
            if d2 < Q and len(expected) < N:
                expected.append(d2)
            pos += 3
        self.assertEqual(list(SampleNTT(rho, 2, 1)), expected)

    def test_bad_inputs(self):
        with self.assertRaises(ValueError):
            SampleNTT(b"\x00" * 31, 0, 0)
        with self.assertRaises(ValueError):
            SampleNTT(b"\x00" * 32, 256, 0)


class TestSamplePolyCBD(unittest.TestCase):

    def test_range(self):
        for eta in (2, 3):
            f = SamplePolyCBD(os.urandom(64 * eta), eta)
            allowed = {c % Q for c in range(-eta, eta + 1)}
            self.assertEqual(f.domain, Domain.COEFFICIENT)
            for c in f:
                self.assertIn(c, allowed)

    def test_known_patterns(self):
        self.assertEqual(list(SamplePolyCBD(b"\x00" * 128, 2)), [0] * N)
        self.assertEqual(list(SamplePolyCBD(b"\xff" * 128, 2)), [0] * N)
        # low nibble 0b0011 -> 2 - 0, high nibble 0 -> 0
        self.assertEqual(list(SamplePolyCBD(b"\x03" * 128, 2)), [2, 0] * 128)
        # low nibble 0b1100 -> 0 - 2
        self.assertEqual(list(SamplePolyCBD(b"\x0c" * 128, 2)), [Q - 2, 0] * 128)

    def test_eta3_bit_layout(self):
        # First 6 bits 0b000111: x = 3, y = 0
        data = bytearray(192)
        data[0] = 0x07
        f = SamplePolyCBD(bytes(data), 3)
        self.assertEqual(f[0], 3)
        self.assertEqual(list(f)[1:], [0] * (N - 1))

    def test_deterministic(self):
        data = b"\x55" * 128
        self.assertEqual(SamplePolyCBD(data, 2), SamplePolyCBD(data, 2))

    def test_bad_inputs(self):
        with self.assertRaises(ValueError):
            SamplePolyCBD(b"\x00" * 127, 2)
        with self.assertRaises(ValueError):
            SamplePolyCBD(b"", 0)


class TestSampleVector(unittest.TestCase):

    def test_sequential_counters(self):
        seed = b"\x42" * 32
        vec, nonce = SampleVector(seed, 2, 3, 0)
        self.assertEqual(nonce, 3)
        for i, poly in enumerate(vec):
            self.assertEqual(poly, SamplePolyCBD(PRF(2, seed, i), 2))
        vec2, nonce2 = SampleVector(seed, 2, 3, nonce)
        self.assertEqual(nonce2, 6)
        self.assertEqual(vec2[0], SamplePolyCBD(PRF(2, seed, 3), 2))

    def test_ntt_variant(self):
        seed = b"\x43" * 32
        vec_hat, nonce = SampleVectorNTT(seed, 3, 2, 4)
        self.assertEqual(nonce, 6)
        self.assertTrue(all(p.is_ntt for p in vec_hat))


if __name__ == "__main__":
    unittest.main()
