from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

RIFF_HEADER_STRUCT = struct.Struct("<4sI4s")
FORMAT_CHUNK_STRUCT = struct.Struct("<IHHIIHH")
CANONICAL_FMT_LENGTH = 16


class WaveFormat(IntEnum):
    PCM = 0x0001
    IEEE_FLOAT = 0x0003
    ALAW = 0x0006
    MULAW = 0x0007
    EXTENSIBLE = 0xFFFE


_KNOWN_FORMATS = frozenset(int(tag) for tag in WaveFormat)


def is_valid_wave_format(audio_format: int) -> bool:
    return audio_format in _KNOWN_FORMATS


@dataclass(frozen=True)
class RiffHeader:
    ident: bytes
    chunk_size: int
    file_type: bytes

    @classmethod
    def from_bytes(cls, raw: bytes) -> "RiffHeader":
        ident, chunk_size, file_type = RIFF_HEADER_STRUCT.unpack(raw)
        return cls(ident=ident, chunk_size=chunk_size, file_type=file_type)


@dataclass(frozen=True)
class FormatChunk:
    length_of_header: int
    audio_format: int
    num_channels: int
    sample_rate: int
    bytes_per_sec: int
    bytes_per_block: int
    bits_per_sample: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> "FormatChunk":
        return cls(*FORMAT_CHUNK_STRUCT.unpack(raw))


@dataclass(frozen=True)
class WavHeader:
    """Parsed RIFF/WAVE header.

    ``first_sample_pos`` and ``data_block_size`` are discovered by walking the
    chunk list, since RIFF chunks have no fixed offsets.
    """

    riff: RiffHeader
    fmt: FormatChunk
    first_sample_pos: int
    data_block_size: int


@dataclass(frozen=True)
class Wav:
    header: WavHeader
    data: bytes


def _tag_text(tag: bytes) -> str:
    return tag.decode("ascii", errors="replace")


def render_header_text(header: WavHeader) -> str:
    """Return the two-section human-readable report for a header."""
    riff = header.riff
    fmt = header.fmt
    lines = [
        "=== RIFF Header ===",
        f"RIFF Ident: {_tag_text(riff.ident)}",
        f"RIFF Size: {riff.chunk_size} bytes",
        f"File type: {_tag_text(riff.file_type)}",
        "=== Fmt ===",
        f"Audio format: {fmt.audio_format}",
        f"Number of channels: {fmt.num_channels}",
        f"Sample rate: {fmt.sample_rate}",
        f"Bytes/seconds: {fmt.bytes_per_sec}",
        f"Bytes/block: {fmt.bytes_per_block}",
        f"Bits/sample: {fmt.bits_per_sample}",
    ]
    return "\n".join(lines)


def header_to_dict(header: WavHeader) -> dict[str, Any]:
    riff = header.riff
    fmt = header.fmt
    return {
        "riff_header": {
            "ident": _tag_text(riff.ident),
            "chunk_size": riff.chunk_size,
            "file_type": _tag_text(riff.file_type),
        },
        "fmt": {
            "length_of_header": fmt.length_of_header,
            "audio_format": fmt.audio_format,
            "num_channels": fmt.num_channels,
            "sample_rate": fmt.sample_rate,
            "bytes_per_sec": fmt.bytes_per_sec,
            "bytes_per_block": fmt.bytes_per_block,
            "bits_per_sample": fmt.bits_per_sample,
        },
        "first_sample_pos": header.first_sample_pos,
        "data_block_size": header.data_block_size,
    }
