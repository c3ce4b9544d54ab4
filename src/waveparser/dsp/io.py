from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import BinaryIO

from waveparser.core.errors import (
    DataChunkNotFoundError,
    InvalidSignatureError,
    TruncatedHeaderError,
    UnexpectedChunkError,
    UnsupportedFormatError,
    WaveParserError,
)
from waveparser.core.header import (
    CANONICAL_FMT_LENGTH,
    FORMAT_CHUNK_STRUCT,
    RIFF_HEADER_STRUCT,
    FormatChunk,
    RiffHeader,
    Wav,
    WavHeader,
    is_valid_wave_format,
)
from waveparser.core.load_config import DEFAULT_LOAD_CONFIG, LoadConfig

logger = logging.getLogger(__name__)

_RIFF_IDENT = b"RIFF"
_WAVE_FILE_TYPE = b"WAVE"
_FMT_TAG = b"fmt "
_DATA_TAG = b"data"
_EXTRA_PARAMS_STRUCT = struct.Struct("<H")
_CHUNK_SIZE_STRUCT = struct.Struct("<I")


def _read_exact(source: BinaryIO, size: int, what: str) -> bytes:
    try:
        raw = source.read(size)
    except (OSError, ValueError) as exc:
        raise TruncatedHeaderError(f"error reading {what}: {exc}") from exc
    if len(raw) != size:
        raise TruncatedHeaderError(
            f"truncated {what}: expected {size} bytes, got {len(raw)}"
        )
    return raw


def _skip(source: BinaryIO, size: int, what: str) -> None:
    try:
        source.seek(size, io.SEEK_CUR)
    except (OSError, ValueError) as exc:
        raise TruncatedHeaderError(f"error skipping {what}: {exc}") from exc


def _parse_riff_header(source: BinaryIO, *, strict_file_type: bool) -> RiffHeader:
    riff = RiffHeader.from_bytes(
        _read_exact(source, RIFF_HEADER_STRUCT.size, "RIFF header")
    )
    if riff.ident != _RIFF_IDENT:
        raise InvalidSignatureError(f"Invalid RIFF identification: {riff.ident!r}")
    if strict_file_type and riff.file_type != _WAVE_FILE_TYPE:
        raise InvalidSignatureError(f"Invalid RIFF file type: {riff.file_type!r}")
    return riff


def _parse_format_chunk(source: BinaryIO) -> FormatChunk:
    tag = _read_exact(source, 4, "fmt chunk id")
    if tag != _FMT_TAG:
        raise UnexpectedChunkError(f"Unexpected chunk type: {tag!r}")

    fmt = FormatChunk.from_bytes(
        _read_exact(source, FORMAT_CHUNK_STRUCT.size, "fmt chunk")
    )
    if not is_valid_wave_format(fmt.audio_format):
        raise UnsupportedFormatError(
            f"Isn't an audio format: format[{fmt.audio_format}]"
        )

    if fmt.length_of_header != CANONICAL_FMT_LENGTH:
        (extra_params,) = _EXTRA_PARAMS_STRUCT.unpack(
            _read_exact(source, _EXTRA_PARAMS_STRUCT.size, "extra fmt params size")
        )
        logger.debug(
            "fmt chunk length %d, skipping %d extra param bytes",
            fmt.length_of_header,
            extra_params,
        )
        _skip(source, extra_params, "extra fmt params")
    return fmt


def _find_data_chunk(source: BinaryIO, *, pad_odd_chunks: bool) -> int:
    """Walk sub-chunks until ``data``; return its declared size."""
    while True:
        try:
            tag = source.read(4)
        except (OSError, ValueError) as exc:
            raise TruncatedHeaderError(f"Expected data chunkid: {exc}") from exc
        if not tag:
            raise DataChunkNotFoundError("Expected data chunkid: end of input")
        if len(tag) != 4:
            raise TruncatedHeaderError(
                f"Expected data chunkid: got {len(tag)} of 4 bytes"
            )

        (chunk_size,) = _CHUNK_SIZE_STRUCT.unpack(
            _read_exact(source, _CHUNK_SIZE_STRUCT.size, f"{tag!r} chunk size")
        )
        if tag == _DATA_TAG:
            return chunk_size

        skip = chunk_size
        if pad_odd_chunks and chunk_size % 2 == 1:
            skip += 1
        logger.debug("skipping %r chunk (%d bytes)", tag, skip)
        _skip(source, skip, f"{tag!r} chunk")


def parse_header(
    source: BinaryIO, *, config: LoadConfig | None = None
) -> WavHeader:
    """Parse a RIFF/WAVE header and leave ``source`` at the first sample byte."""
    cfg = config or DEFAULT_LOAD_CONFIG
    riff = _parse_riff_header(source, strict_file_type=cfg.strict_file_type)
    fmt = _parse_format_chunk(source)
    data_block_size = _find_data_chunk(source, pad_odd_chunks=cfg.pad_odd_chunks)

    try:
        first_sample_pos = source.tell()
    except (OSError, ValueError) as exc:
        raise TruncatedHeaderError(f"error locating first sample: {exc}") from exc

    logger.debug(
        "data chunk at offset %d (%d bytes)", first_sample_pos, data_block_size
    )
    return WavHeader(
        riff=riff,
        fmt=fmt,
        first_sample_pos=first_sample_pos,
        data_block_size=data_block_size,
    )


def load_wav(path: Path | str, *, config: LoadConfig | None = None) -> Wav:
    """Parse the header of ``path`` and read the sample payload after it.

    By default the payload is everything after the header, including any
    trailing chunks. With ``truncate_payload`` it is limited to the declared
    data chunk size.
    """
    cfg = config or DEFAULT_LOAD_CONFIG
    wav_path = Path(path)
    try:
        with wav_path.open("rb") as handle:
            header = parse_header(handle, config=cfg)
            if cfg.truncate_payload:
                data = handle.read(header.data_block_size)
            else:
                data = handle.read()
    except OSError as exc:
        raise WaveParserError(f"Failed to read WAV file '{wav_path}': {exc}") from exc
    return Wav(header=header, data=data)
