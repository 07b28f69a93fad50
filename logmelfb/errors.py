# structured errors for filterbank construction and application
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

from enum import Enum


class Reason(str, Enum):
    HICUT_ABOVE_SAMPLE_RATE = "hicut_above_sample_rate"
    ZERO_BANDS = "zero_bands"
    FFT_SIZE_TOO_SMALL = "fft_size_too_small"
    NEGATIVE_LOCUT = "negative_locut"
    LOCUT_NOT_BELOW_HICUT = "locut_not_below_hicut"
    NON_POSITIVE_SAMPLE_RATE = "non_positive_sample_rate"
    NON_FINITE_PARAMETER = "non_finite_parameter"
    COLLAPSED_BANDS = "collapsed_bands"

    SPECTROGRAM_RANK = "spectrogram_rank"
    FRAME_TOO_SHORT = "frame_too_short"
    OUTPUT_SHAPE = "output_shape"
    OUTPUT_DTYPE = "output_dtype"


class FilterBankError(ValueError):
    """Base class; `kind` names the error family, `reason` the exact cause."""

    kind = "FilterBankError"

    def __init__(self, reason: Reason, message: str):
        super().__init__(message)
        self.reason = reason

    def __str__(self):
        return f"{self.kind}[{self.reason.value}]: {self.args[0]}"


class InvalidConfig(FilterBankError):
    kind = "InvalidConfig"


class PreconditionViolation(FilterBankError):
    kind = "PreconditionViolation"
