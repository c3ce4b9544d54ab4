from __future__ import annotations


class WaveParserError(ValueError):
    """Base class for every malformed-input condition reported by waveparser."""


class InvalidSignatureError(WaveParserError):
    """The RIFF container identifier (or the WAVE file type) is wrong."""


class UnexpectedChunkError(WaveParserError):
    """The chunk after the RIFF header is not the fmt sub-chunk."""


class UnsupportedFormatError(WaveParserError):
    """The fmt chunk declares a format tag outside the recognized set."""


class TruncatedHeaderError(WaveParserError):
    """A structured read or seek failed before the data chunk was found."""


class DataChunkNotFoundError(TruncatedHeaderError):
    """The input ended before a data chunk appeared."""


class SampleRangeError(WaveParserError):
    """A float PCM sample lies outside [-1.0, 1.0]."""

    def __init__(self, value: float, index: int) -> None:
        self.value = value
        self.index = index
        super().__init__(
            f"sample[{value:f}] at index {index} is outside the valid value "
            "range for a PCM float"
        )


class UnsupportedSampleFormatError(WaveParserError):
    """No sample decoder exists for the header's format tag and bit depth."""


class ConfigError(WaveParserError):
    """A load config is malformed or fails schema validation."""


class ResourceError(WaveParserError):
    """Packaged data (schemas) cannot be located."""
