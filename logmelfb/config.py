# filterbank configuration
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import math
from dataclasses import dataclass

from .errors import InvalidConfig, Reason

SAMPLE_RATE = 8000.0
N_FFT = 256
N_BANDS = 24
LO_CUT = 300.0
HI_CUT = 3400.0


@dataclass(frozen=True)
class FilterBankConfig:
    fft_size: int = N_FFT
    num_bands: int = N_BANDS
    lo_cut: float = LO_CUT
    hi_cut: float = HI_CUT
    sample_rate: float = SAMPLE_RATE

    def validate(self):
        """Raise InvalidConfig if the parameters cannot describe a filterbank."""
        for name in ("lo_cut", "hi_cut", "sample_rate"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfig(Reason.NON_FINITE_PARAMETER, f"{name} must be finite, got {value}")
        if self.sample_rate <= 0:
            raise InvalidConfig(
                Reason.NON_POSITIVE_SAMPLE_RATE,
                f"sample rate must be positive, got {self.sample_rate}",
            )
        if self.hi_cut > self.sample_rate:
            raise InvalidConfig(
                Reason.HICUT_ABOVE_SAMPLE_RATE,
                f"hi cut {self.hi_cut} Hz is above the sample rate {self.sample_rate} Hz",
            )
        if self.num_bands <= 0:
            raise InvalidConfig(Reason.ZERO_BANDS, f"number of bands is {self.num_bands}")
        if self.fft_size < 2:
            raise InvalidConfig(
                Reason.FFT_SIZE_TOO_SMALL,
                f"fft size must be at least 2, got {self.fft_size}",
            )
        if self.lo_cut < 0:
            raise InvalidConfig(Reason.NEGATIVE_LOCUT, f"lo cut {self.lo_cut} Hz is negative")
        if self.lo_cut >= self.hi_cut:
            raise InvalidConfig(
                Reason.LOCUT_NOT_BELOW_HICUT,
                f"lo cut {self.lo_cut} Hz must be below hi cut {self.hi_cut} Hz",
            )
        return self

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0
