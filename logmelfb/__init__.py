# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

from .apply import apply_dense, apply_filterbank
from .config import FilterBankConfig, SAMPLE_RATE
from .errors import FilterBankError, InvalidConfig, PreconditionViolation, Reason
from .filterbank import (
    Filterbank,
    bin_size_hz,
    build_filterbank,
    fft_bin_count,
    frequency_to_mel,
    mel_to_frequency,
)
