from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from waveparser.core.errors import UnsupportedSampleFormatError
from waveparser.core.header import WaveFormat, WavHeader
from waveparser.dsp.samples import decode_float32_le, decode_int16_le


class SampleKind(Enum):
    INT16 = "int16"
    FLOAT32 = "float32"


@dataclass(frozen=True)
class DecodedSamples:
    kind: SampleKind
    samples: np.ndarray

    def __len__(self) -> int:
        return len(self.samples)


_DECODERS: dict[tuple[int, int], tuple[SampleKind, Callable[[bytes], np.ndarray]]] = {
    (WaveFormat.PCM, 16): (SampleKind.INT16, decode_int16_le),
    (WaveFormat.IEEE_FLOAT, 32): (SampleKind.FLOAT32, decode_float32_le),
}


def decode_samples(header: WavHeader, payload: bytes) -> DecodedSamples:
    """Decode ``payload`` with the decoder matching the header's format."""
    key = (header.fmt.audio_format, header.fmt.bits_per_sample)
    entry = _DECODERS.get(key)
    if entry is None:
        raise UnsupportedSampleFormatError(
            f"No sample decoder for format[{header.fmt.audio_format}] "
            f"at {header.fmt.bits_per_sample} bits per sample"
        )
    kind, decoder = entry
    return DecodedSamples(kind=kind, samples=decoder(payload))
