from __future__ import annotations

import numpy as np

from waveparser.core.errors import SampleRangeError

_INT16_LE = np.dtype("<i2")
_FLOAT32_LE = np.dtype("<f4")
_FLOAT_MIN = -1.0
_FLOAT_MAX = 1.0


def _whole_groups(payload: bytes, itemsize: int) -> bytes:
    usable = len(payload) - (len(payload) % itemsize)
    if usable != len(payload):
        return payload[:usable]
    return payload


def decode_int16_le(payload: bytes) -> np.ndarray:
    """Decode little-endian signed 16-bit PCM; a trailing odd byte is ignored."""
    frames = _whole_groups(payload, _INT16_LE.itemsize)
    return np.frombuffer(frames, dtype=_INT16_LE).astype(np.int16)


def decode_float32_le(payload: bytes) -> np.ndarray:
    """Decode little-endian IEEE float PCM, rejecting samples outside [-1, 1].

    Bytes past the last whole 4-byte group are ignored.
    """
    frames = _whole_groups(payload, _FLOAT32_LE.itemsize)
    samples = np.frombuffer(frames, dtype=_FLOAT32_LE).astype(np.float32)

    out_of_range = np.flatnonzero((samples < _FLOAT_MIN) | (samples > _FLOAT_MAX))
    if out_of_range.size:
        index = int(out_of_range[0])
        raise SampleRangeError(float(samples[index]), index)
    return samples
