# log-spaced triangular filterbank (num_bands x fb_size)
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import dataclasses
import logging

import librosa
import numpy as np

from .apply import apply_filterbank
from .config import FilterBankConfig
from .errors import InvalidConfig, Reason

logger = logging.getLogger(__name__)


def frequency_to_mel(freq_hz):
    """HTK mel mapping, 2595 * log10(1 + f / 700)."""
    return librosa.hz_to_mel(freq_hz, htk=True)


def mel_to_frequency(mel):
    """Inverse of frequency_to_mel, 700 * (10 ** (m / 2595) - 1)."""
    return librosa.mel_to_hz(mel, htk=True)


def fft_bin_count(fft_size: int) -> int:
    """Half of the next power of two >= fft_size, i.e. the real-FFT bin count used by the bank."""
    return (1 << (int(fft_size) - 1).bit_length()) // 2


def bin_size_hz(fb_size: int, sample_rate: float) -> float:
    return sample_rate / (2.0 * fb_size - 1.0)


def _round(x):
    # half away from zero; np.round is half-to-even
    return np.floor(x + 0.5)


def band_edges(config: FilterBankConfig, bin_size: float):
    """
    Lower, center and upper bin of every band.

    Centers are equally spaced on the mel axis between lo_cut and hi_cut and
    snapped to the nearest bin. Neighbouring bands share edges: the upper edge
    of band i is the center of band i + 1 and its lower edge the center of
    band i - 1. The upper edge of the last band is hi_cut / bin_size, left
    unrounded.
    """
    num_bands = config.num_bands
    lo_bins = np.empty(num_bands)
    center_bins = np.empty(num_bands)
    hi_bins = np.empty(num_bands)

    mel_lo = frequency_to_mel(config.lo_cut)
    delta = (frequency_to_mel(config.hi_cut) - mel_lo) / (num_bands + 1)

    mel_center = mel_lo
    lo_bins[0] = _round(config.lo_cut / bin_size)
    for i in range(num_bands):
        mel_center += delta
        center_bins[i] = _round(mel_to_frequency(mel_center) / bin_size)
        if i > 0:
            hi_bins[i - 1] = center_bins[i]
        if i < num_bands - 1:
            lo_bins[i + 1] = center_bins[i]
    hi_bins[num_bands - 1] = config.hi_cut / bin_size

    return lo_bins, center_bins, hi_bins


def triangular_weights(lo_bins, center_bins, hi_bins, fb_size: int):
    """Flat float32 buffer of len(center_bins) * fb_size triangular weights, row per band."""
    num_bands = len(center_bins)
    weights = np.zeros(num_bands * fb_size, dtype=np.float32)
    k = np.arange(fb_size, dtype=np.float64)

    for band in range(num_bands):
        lo, center, hi = lo_bins[band], center_bins[band], hi_bins[band]
        row = weights[band * fb_size:(band + 1) * fb_size]

        rising = (k > lo) & (k <= center)
        row[rising] = (k[rising] - lo) / (center - lo)
        falling = (k > center) & (k <= hi)
        row[falling] = (hi - k[falling]) / (hi - center)

    return weights


class Filterbank:
    """
    Immutable bank of triangular filters over fb_size spectrum bins.

    The weights are one owned contiguous float32 buffer; `weights` and the
    boundary arrays are exposed as read-only views.
    """

    def __init__(self, config, fb_size, bin_size, lo_bins, center_bins, hi_bins, weights):
        self.config = config
        self.fb_size = fb_size
        self.bin_size_hz = bin_size

        self._lo_bins = _readonly(lo_bins)
        self._center_bins = _readonly(center_bins)
        self._hi_bins = _readonly(hi_bins)
        self._weights = _readonly(weights)

        starts = np.floor(self._lo_bins).astype(np.intp)
        stops = np.minimum(np.ceil(self._hi_bins).astype(np.intp), fb_size)
        self._starts = _readonly(starts)
        self._stops = _readonly(np.maximum(stops, starts))

    @classmethod
    def from_config(cls, config: FilterBankConfig) -> "Filterbank":
        return build_filterbank(config)

    @property
    def num_bands(self) -> int:
        return self.config.num_bands

    @property
    def sample_rate(self) -> float:
        return self.config.sample_rate

    @property
    def lo_bins(self) -> np.ndarray:
        return self._lo_bins

    @property
    def center_bins(self) -> np.ndarray:
        return self._center_bins

    @property
    def hi_bins(self) -> np.ndarray:
        return self._hi_bins

    @property
    def weights(self) -> np.ndarray:
        """(num_bands, fb_size) read-only view of the weight buffer."""
        return self._weights.reshape(self.num_bands, self.fb_size)

    @property
    def center_frequencies(self) -> np.ndarray:
        return self._center_bins * self.bin_size_hz

    def band_support(self, band: int):
        """Half-open bin range [start, stop) outside of which the band's weights are zero."""
        return int(self._starts[band]), int(self._stops[band])

    @property
    def max_filter_size(self) -> int:
        return int(np.max(self._stops - self._starts))

    def apply(self, spectrogram, out=None):
        return apply_filterbank(self, spectrogram, out=out)

    def to_dict(self) -> dict:
        return {
            "config": dataclasses.asdict(self.config),
            "fb_size": self.fb_size,
            "bin_size_hz": self.bin_size_hz,
            "lo_bins": self._lo_bins.tolist(),
            "center_bins": self._center_bins.tolist(),
            "hi_bins": self._hi_bins.tolist(),
            "weights": self.weights.tolist(),
        }

    def __repr__(self):
        c = self.config
        return (
            f"Filterbank(num_bands={c.num_bands}, fb_size={self.fb_size}, "
            f"lo_cut={c.lo_cut}, hi_cut={c.hi_cut}, sample_rate={self.sample_rate})"
        )


def _readonly(array):
    array = np.ascontiguousarray(array)
    array.setflags(write=False)
    return array


def build_filterbank(config: FilterBankConfig) -> Filterbank:
    config.validate()

    fb_size = fft_bin_count(config.fft_size)
    bin_size = bin_size_hz(fb_size, config.sample_rate)
    lo_bins, center_bins, hi_bins = band_edges(config, bin_size)

    collapsed = np.flatnonzero(~((lo_bins < center_bins) & (center_bins < hi_bins)))
    if collapsed.size:
        band = int(collapsed[0])
        raise InvalidConfig(
            Reason.COLLAPSED_BANDS,
            f"band {band} has edges lo={lo_bins[band]} center={center_bins[band]} "
            f"hi={hi_bins[band]}; use fewer bands or a larger fft size",
        )

    if config.hi_cut > config.nyquist:
        logger.warning(
            "hi cut %.1f Hz is above Nyquist (%.1f Hz), bands beyond bin %d are truncated",
            config.hi_cut, config.nyquist, fb_size - 1,
        )

    weights = triangular_weights(lo_bins, center_bins, hi_bins, fb_size)
    logger.debug(
        "built %d bands over %d bins (%.3f Hz/bin), centers %s",
        config.num_bands, fb_size, bin_size, center_bins.tolist(),
    )
    return Filterbank(config, fb_size, bin_size, lo_bins, center_bins, hi_bins, weights)
