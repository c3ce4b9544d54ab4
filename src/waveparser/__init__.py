"""Parse RIFF/WAVE headers and decode PCM sample payloads."""

from waveparser.core.compare import diff_headers, render_header_diff
from waveparser.core.errors import (
    ConfigError,
    DataChunkNotFoundError,
    InvalidSignatureError,
    ResourceError,
    SampleRangeError,
    TruncatedHeaderError,
    UnexpectedChunkError,
    UnsupportedFormatError,
    UnsupportedSampleFormatError,
    WaveParserError,
)
from waveparser.core.header import (
    FormatChunk,
    RiffHeader,
    Wav,
    WaveFormat,
    WavHeader,
    header_to_dict,
    render_header_text,
)
from waveparser.core.load_config import LoadConfig, load_config, normalize_load_config
from waveparser.dsp.decoders import DecodedSamples, SampleKind, decode_samples
from waveparser.dsp.io import load_wav, parse_header
from waveparser.dsp.samples import decode_float32_le, decode_int16_le

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DataChunkNotFoundError",
    "DecodedSamples",
    "FormatChunk",
    "InvalidSignatureError",
    "LoadConfig",
    "RiffHeader",
    "SampleKind",
    "ResourceError",
    "SampleRangeError",
    "TruncatedHeaderError",
    "UnexpectedChunkError",
    "UnsupportedFormatError",
    "UnsupportedSampleFormatError",
    "Wav",
    "WaveFormat",
    "WavHeader",
    "WaveParserError",
    "decode_float32_le",
    "decode_int16_le",
    "decode_samples",
    "diff_headers",
    "header_to_dict",
    "load_config",
    "load_wav",
    "normalize_load_config",
    "parse_header",
    "render_header_diff",
    "render_header_text",
]
