# Error types for ML-KEM


class EncodingError(ValueError):
    """
    Structural validation failure of externally supplied key or ciphertext bytes.

    Raised for wrong lengths, an encapsulation key that fails the modulus
    check, or a classic decapsulation key whose embedded H(ek) does not match.
    Messages stay generic and never carry key material.
    """
