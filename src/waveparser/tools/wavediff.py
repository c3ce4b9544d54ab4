"""Report container-level header differences between two WAV files.

Usage:
    wavediff a.wav b.wav
    python -m waveparser.tools.wavediff a.wav b.wav --config strict.yaml

Exit status is 0 when the headers match, 1 when they differ, 2 when a file
cannot be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys

from waveparser.core.compare import diff_headers, render_header_diff
from waveparser.core.errors import WaveParserError
from waveparser.core.load_config import LoadConfig, resolve_load_config
from waveparser.dsp.io import load_wav


def run_header_diff(path_a: str, path_b: str, config: LoadConfig) -> int:
    headers = []
    for path in (path_a, path_b):
        try:
            headers.append(load_wav(path, config=config).header)
        except WaveParserError as exc:
            print(f"error: [{exc}] loading [{path}]", file=sys.stderr)
            return 2

    lines = diff_headers(headers[0], headers[1])
    if not lines:
        return 0
    print(render_header_diff(path_a, path_b, lines))
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare the RIFF/WAVE headers of two files field by field.",
    )
    parser.add_argument("wav_a", help="Path to the first WAV file.")
    parser.add_argument("wav_b", help="Path to the second WAV file.")
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
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        config = resolve_load_config(args.config)
    except WaveParserError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return run_header_diff(args.wav_a, args.wav_b, config)


if __name__ == "__main__":
    raise SystemExit(main())
