from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from waveparser.core.errors import WaveParserError
from waveparser.core.header import header_to_dict, render_header_text
from waveparser.core.load_config import LoadConfig, resolve_load_config
from waveparser.dsp.decoders import decode_samples
from waveparser.dsp.io import load_wav
from waveparser.tools.wavediff import run_header_diff

_DEFAULT_SAMPLE_LIMIT = 16


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _run_show(path: str, output_format: str, config: LoadConfig) -> int:
    wav = load_wav(path, config=config)
    if output_format == "json":
        _print_json(header_to_dict(wav.header))
    else:
        print(render_header_text(wav.header))
        print(f"First sample position: {wav.header.first_sample_pos}")
        print(f"Data block size: {wav.header.data_block_size}")
    return 0


def _run_samples(path: str, limit: int, output_format: str, config: LoadConfig) -> int:
    wav = load_wav(path, config=config)
    decoded = decode_samples(wav.header, wav.data)
    head = decoded.samples[:limit].tolist()
    if output_format == "json":
        _print_json(
            {
                "kind": decoded.kind.value,
                "count": len(decoded),
                "samples": head,
            }
        )
        return 0

    print(f"Sample kind: {decoded.kind.value}")
    print(f"Sample count: {len(decoded)}")
    for index, value in enumerate(head):
        print(f"[{index}] {value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="RIFF/WAVE header and sample tools.")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional path to a load config JSON or YAML file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log chunk walk details to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Print a WAV file header.")
    show_parser.add_argument("wav", help="Path to a WAV file.")
    show_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format.",
    )

    samples_parser = subparsers.add_parser(
        "samples", help="Decode samples using the header's format and bit depth."
    )
    samples_parser.add_argument("wav", help="Path to a WAV file.")
    samples_parser.add_argument(
        "--limit",
        type=int,
        default=_DEFAULT_SAMPLE_LIMIT,
        help="Number of leading samples to print.",
    )
    samples_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format.",
    )

    diff_parser = subparsers.add_parser(
        "diff", help="Compare the headers of two WAV files."
    )
    diff_parser.add_argument("wav_a", help="Path to the first WAV file.")
    diff_parser.add_argument("wav_b", help="Path to the second WAV file.")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = resolve_load_config(args.config)
        if args.command == "show":
            return _run_show(args.wav, args.format, config)
        if args.command == "samples":
            if args.limit < 0:
                print("error: --limit must be >= 0.", file=sys.stderr)
                return 2
            return _run_samples(args.wav, args.limit, args.format, config)
        if args.command == "diff":
            return run_header_diff(args.wav_a, args.wav_b, config)
    except WaveParserError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 2
