"""Binary encoding of embedding vectors for hash storage (FLOAT32, little-endian)."""

import numpy as np

_FLOAT32_LE = np.dtype("<f4")


def encode_vector(vector: list[float]) -> bytes:
    return np.asarray(vector, dtype=_FLOAT32_LE).tobytes()