import io
import struct
import tempfile
import unittest
from pathlib import Path

from _wav_builders import build_wav, chunk, fmt_chunk, write_wav

from waveparser.core.errors import (
    DataChunkNotFoundError,
    InvalidSignatureError,
    TruncatedHeaderError,
    UnexpectedChunkError,
    UnsupportedFormatError,
    WaveParserError,
)
from waveparser.core.header import WaveFormat
from waveparser.core.load_config import LoadConfig
from waveparser.dsp.io import load_wav, parse_header


class TestParseHeader(unittest.TestCase):
    def test_canonical_pcm_header_positions(self) -> None:
        data = struct.pack("<4h", 0, 1, -1, 32767)
        raw = build_wav(data=data)
        source = io.BytesIO(raw)

        header = parse_header(source)

        self.assertEqual(header.first_sample_pos, 44)
        self.assertEqual(header.data_block_size, len(data))
        self.assertEqual(source.tell(), 44)
        self.assertEqual(source.read(), data)

    def test_canonical_header_fields(self) -> None:
        raw = build_wav(
            fmt=fmt_chunk(channels=2, sample_rate=48000, bits_per_sample=16),
            data=b"\x00" * 8,
        )
        header = parse_header(io.BytesIO(raw))

        self.assertEqual(header.riff.ident, b"RIFF")
        self.assertEqual(header.riff.chunk_size, len(raw) - 8)
        self.assertEqual(header.riff.file_type, b"WAVE")
        self.assertEqual(header.fmt.length_of_header, 16)
        self.assertEqual(header.fmt.audio_format, WaveFormat.PCM)
        self.assertEqual(header.fmt.num_channels, 2)
        self.assertEqual(header.fmt.sample_rate, 48000)
        self.assertEqual(header.fmt.bytes_per_sec, 192000)
        self.assertEqual(header.fmt.bytes_per_block, 4)
        self.assertEqual(header.fmt.bits_per_sample, 16)

    def test_list_chunk_before_data_is_skipped(self) -> None:
        list_payload = b"INFOISFT" + struct.pack("<I", 14) + b"waveparser\x00\x00\x00\x00"
        raw = build_wav(before_data=[chunk(b"LIST", list_payload)], data=b"\x01\x02")

        header = parse_header(io.BytesIO(raw))

        self.assertEqual(header.first_sample_pos, 44 + 8 + len(list_payload))
        self.assertEqual(header.data_block_size, 2)

    def test_multiple_unknown_chunks_are_skipped(self) -> None:
        extras = [
            chunk(b"LIST", b"\x00" * 10),
            chunk(b"cue ", b"\x00" * 28),
            chunk(b"fact", struct.pack("<I", 4)),
        ]
        raw = build_wav(before_data=extras, data=b"\x00" * 6)

        header = parse_header(io.BytesIO(raw))

        self.assertEqual(header.first_sample_pos, 44 + sum(len(e) for e in extras))
        self.assertEqual(header.data_block_size, 6)

    def test_extended_fmt_chunk_skips_extra_params(self) -> None:
        extension = struct.pack("<HI16s", 24, 3, b"\x01" * 16)
        raw = build_wav(
            fmt=fmt_chunk(
                audio_format=WaveFormat.EXTENSIBLE,
                channels=2,
                bits_per_sample=24,
                extension=extension,
            ),
            data=b"\x00" * 12,
        )

        header = parse_header(io.BytesIO(raw))

        self.assertEqual(header.fmt.length_of_header, 18 + len(extension))
        self.assertEqual(header.fmt.audio_format, WaveFormat.EXTENSIBLE)
        self.assertEqual(header.first_sample_pos, 44 + 2 + len(extension))
        self.assertEqual(header.data_block_size, 12)

    def test_extended_fmt_chunk_with_empty_extension(self) -> None:
        raw = build_wav(
            fmt=fmt_chunk(audio_format=WaveFormat.IEEE_FLOAT, bits_per_sample=32, extension=b""),
            data=b"\x00" * 4,
        )
        header = parse_header(io.BytesIO(raw))
        self.assertEqual(header.first_sample_pos, 46)

    def test_recognized_format_tags_are_accepted(self) -> None:
        for audio_format in WaveFormat:
            with self.subTest(audio_format=audio_format):
                raw = build_wav(fmt=fmt_chunk(audio_format=audio_format))
                header = parse_header(io.BytesIO(raw))
                self.assertEqual(header.fmt.audio_format, audio_format)

    def test_rifx_signature_is_rejected(self) -> None:
        raw = build_wav(ident=b"RIFX")
        with self.assertRaises(InvalidSignatureError):
            parse_header(io.BytesIO(raw))

    def test_lowercase_signature_is_rejected(self) -> None:
        raw = build_wav(ident=b"riff")
        with self.assertRaises(InvalidSignatureError):
            parse_header(io.BytesIO(raw))

    def test_fmt_underscore_tag_is_unexpected(self) -> None:
        raw = build_wav(fmt=fmt_chunk(tag=b"fmt_"))
        with self.assertRaises(UnexpectedChunkError):
            parse_header(io.BytesIO(raw))

    def test_adpcm_format_is_unsupported(self) -> None:
        raw = build_wav(fmt=fmt_chunk(audio_format=2))
        with self.assertRaises(UnsupportedFormatError):
            parse_header(io.BytesIO(raw))

    def test_missing_data_chunk_is_truncated_header(self) -> None:
        raw = build_wav(include_data=False)
        with self.assertRaises(TruncatedHeaderError) as ctx:
            parse_header(io.BytesIO(raw))
        self.assertIsInstance(ctx.exception, DataChunkNotFoundError)

    def test_oversized_unknown_chunk_runs_past_end(self) -> None:
        raw = build_wav(
            before_data=[chunk(b"LIST", b"\x00" * 4, declared_size=4096)],
            include_data=False,
        )
        with self.assertRaises(TruncatedHeaderError):
            parse_header(io.BytesIO(raw))

    def test_partial_chunk_id_is_truncated(self) -> None:
        raw = build_wav(include_data=False) + b"da"
        with self.assertRaises(TruncatedHeaderError) as ctx:
            parse_header(io.BytesIO(raw))
        self.assertNotIsInstance(ctx.exception, DataChunkNotFoundError)

    def test_missing_data_chunk_size_is_truncated(self) -> None:
        raw = build_wav(include_data=False) + b"data\x10\x00"
        with self.assertRaises(TruncatedHeaderError):
            parse_header(io.BytesIO(raw))

    def test_short_riff_header_is_truncated(self) -> None:
        with self.assertRaises(TruncatedHeaderError):
            parse_header(io.BytesIO(b"RIFF\x00\x00"))

    def test_short_fmt_chunk_is_truncated(self) -> None:
        raw = build_wav()[:30]
        with self.assertRaises(TruncatedHeaderError):
            parse_header(io.BytesIO(raw))

    def test_missing_extra_params_size_is_truncated(self) -> None:
        fmt = chunk(b"fmt ", struct.pack("<HHIIHH", 1, 1, 8000, 16000, 2, 16), declared_size=18)
        raw = b"RIFF" + struct.pack("<I", 4 + len(fmt)) + b"WAVE" + fmt
        with self.assertRaises(TruncatedHeaderError):
            parse_header(io.BytesIO(raw))

    def test_errors_share_a_value_error_base(self) -> None:
        raw = build_wav(ident=b"RIFX")
        with self.assertRaises(ValueError):
            parse_header(io.BytesIO(raw))

    def test_file_type_is_not_checked_by_default(self) -> None:
        raw = build_wav(file_type=b"AVI ")
        header = parse_header(io.BytesIO(raw))
        self.assertEqual(header.riff.file_type, b"AVI ")

    def test_strict_file_type_rejects_non_wave(self) -> None:
        raw = build_wav(file_type=b"AVI ")
        with self.assertRaises(InvalidSignatureError):
            parse_header(io.BytesIO(raw), config=LoadConfig(strict_file_type=True))

    def test_pad_odd_chunks_skips_pad_byte(self) -> None:
        odd_chunk = chunk(b"LIST", b"\x00" * 5) + b"\x00"
        raw = build_wav(before_data=[odd_chunk], data=b"\x00\x00")

        header = parse_header(io.BytesIO(raw), config=LoadConfig(pad_odd_chunks=True))

        self.assertEqual(header.first_sample_pos, 44 + len(odd_chunk))
        self.assertEqual(header.data_block_size, 2)

    def test_odd_chunk_without_padding_by_default(self) -> None:
        odd_chunk = chunk(b"LIST", b"\x00" * 5)
        raw = build_wav(before_data=[odd_chunk], data=b"\x00\x00")

        header = parse_header(io.BytesIO(raw))

        self.assertEqual(header.first_sample_pos, 44 + len(odd_chunk))


    def test_chunk_walk_is_logged_at_debug(self) -> None:
        raw = build_wav(before_data=[chunk(b"LIST", b"\x00" * 4)], data=b"\x00\x00")

        with self.assertLogs("waveparser.dsp.io", level="DEBUG") as logs:
            parse_header(io.BytesIO(raw))

        messages = [record.getMessage() for record in logs.records]
        self.assertIn("skipping b'LIST' chunk (4 bytes)", messages)
        self.assertIn("data chunk at offset 56 (2 bytes)", messages)

    def test_fmt_extension_skip_is_logged(self) -> None:
        raw = build_wav(fmt=fmt_chunk(extension=b"\x00" * 4))

        with self.assertLogs("waveparser.dsp.io", level="DEBUG") as logs:
            parse_header(io.BytesIO(raw))

        messages = [record.getMessage() for record in logs.records]
        self.assertIn("fmt chunk length 22, skipping 4 extra param bytes", messages)


class TestLoadWav(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_payload_includes_trailing_chunks_by_default(self) -> None:
        data = struct.pack("<3h", 10, -10, 20)
        trailing = chunk(b"LIST", b"\x00" * 6)
        path = write_wav(self.tmp_dir / "a.wav", build_wav(data=data, after_data=trailing))

        wav = load_wav(path)

        self.assertEqual(wav.header.data_block_size, len(data))
        self.assertEqual(wav.data, data + trailing)

    def test_truncate_payload_limits_to_data_block(self) -> None:
        data = struct.pack("<3h", 10, -10, 20)
        trailing = chunk(b"LIST", b"\x00" * 6)
        path = write_wav(self.tmp_dir / "a.wav", build_wav(data=data, after_data=trailing))

        wav = load_wav(path, config=LoadConfig(truncate_payload=True))

        self.assertEqual(wav.data, data)

    def test_accepts_string_path(self) -> None:
        path = write_wav(self.tmp_dir / "a.wav", build_wav(data=b"\x01\x00"))
        wav = load_wav(str(path))
        self.assertEqual(wav.header.first_sample_pos, 44)
        self.assertEqual(wav.data, b"\x01\x00")

    def test_missing_file_is_reported(self) -> None:
        with self.assertRaises(WaveParserError) as ctx:
            load_wav(self.tmp_dir / "missing.wav")
        self.assertIn("missing.wav", str(ctx.exception))

    def test_parse_errors_propagate_unchanged(self) -> None:
        path = write_wav(self.tmp_dir / "bad.wav", build_wav(fmt=fmt_chunk(audio_format=2)))
        with self.assertRaises(UnsupportedFormatError):
            load_wav(path)


if __name__ == "__main__":
    unittest.main()
