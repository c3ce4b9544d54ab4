from __future__ import annotations

from waveparser.core.header import WavHeader

_FMT_FIELD_LABELS = (
    ("length_of_header", "Length Of Header"),
    ("audio_format", "Audio Format"),
    ("num_channels", "Number Of Channels"),
    ("sample_rate", "Samplerate"),
    ("bytes_per_sec", "Bytes Per Sec"),
    ("bytes_per_block", "Bytes Per Block"),
    ("bits_per_sample", "Bits Per Sample"),
)


def _diff_tag(label: str, left: bytes, right: bytes) -> list[str]:
    lines: list[str] = []
    for index, (a, b) in enumerate(zip(left, right)):
        if a != b:
            lines.append(f"{label} Byte[{index}] differs: [{a:x}] != [{b:x}]")
    return lines


def diff_headers(left: WavHeader, right: WavHeader) -> list[str]:
    """Return one line per differing field; empty when the headers match.

    Tags are compared byte by byte, every other field as a scalar.
    """
    lines: list[str] = []
    lines.extend(_diff_tag("RIFF Ident", left.riff.ident, right.riff.ident))

    if left.riff.chunk_size != right.riff.chunk_size:
        lines.append(
            f"ChunkSize: [{left.riff.chunk_size}] != [{right.riff.chunk_size}]"
        )

    lines.extend(_diff_tag("FileType", left.riff.file_type, right.riff.file_type))

    for field_name, label in _FMT_FIELD_LABELS:
        a = getattr(left.fmt, field_name)
        b = getattr(right.fmt, field_name)
        if a != b:
            lines.append(f"{label}: [{a}] != [{b}]")

    if left.first_sample_pos != right.first_sample_pos:
        lines.append(
            "First Sample Position: "
            f"[{left.first_sample_pos}] != [{right.first_sample_pos}]"
        )
    if left.data_block_size != right.data_block_size:
        lines.append(
            f"Data Block Size: [{left.data_block_size}] != [{right.data_block_size}]"
        )
    return lines


def render_header_diff(left_label: str, right_label: str, lines: list[str]) -> str:
    """Render diff lines under a banner naming both sides; empty when no diff."""
    if not lines:
        return ""
    banner = [
        f"[{left_label}] header differs from [{right_label}] header",
        f"[{left_label}] values will be on the left, [{right_label}] on the right",
        "",
    ]
    return "\n".join(banner + lines)
