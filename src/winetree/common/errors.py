"""Error taxonomy shared by every pipeline stage."""

from __future__ import annotations


class WinetreeError(Exception):
    """Base class for errors raised by this package."""


class DataError(WinetreeError):
    """Input data could not be turned into a dataset."""


class FormatError(DataError):
    """Rows of a delimited table have differing field counts."""


class ParseError(DataError):
    """A cell is not a number in standard decimal notation."""


class EmptyInputError(DataError):
    """The input holds no data rows."""


class DecompressionError(DataError):
    """The gzip framing of a compressed stream is corrupt."""


class LabelCastError(DataError):
    """A label value cannot be used as a class index."""


class SplitError(WinetreeError):
    """The split stage was called with unusable arguments."""


class InvalidRatioError(SplitError):
    """Split ratio is outside the open interval (0, 1)."""


class InsufficientSamplesError(SplitError):
    """There are no samples to split."""


class ModelFitError(WinetreeError):
    """The tree backend refused to fit the training partition."""


__all__ = [
    "WinetreeError",
    "DataError",
    "FormatError",
    "ParseError",
    "EmptyInputError",
    "DecompressionError",
    "LabelCastError",
    "SplitError",
    "InvalidRatioError",
    "InsufficientSamplesError",
    "ModelFitError",
]
