# band energies from spectrogram frames (num_windows x num_bands)
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import logging

import numpy as np

from .errors import PreconditionViolation, Reason

logger = logging.getLogger(__name__)


def _check_spectrogram(filterbank, spectrogram):
    spectrogram = np.asarray(spectrogram)
    if spectrogram.ndim == 1:
        spectrogram = spectrogram[np.newaxis, :]
    if spectrogram.ndim != 2:
        raise PreconditionViolation(
            Reason.SPECTROGRAM_RANK,
            f"spectrogram must be (num_windows, n_bins), got shape {spectrogram.shape}",
        )
    if spectrogram.shape[1] < filterbank.fb_size:
        raise PreconditionViolation(
            Reason.FRAME_TOO_SHORT,
            f"frames have {spectrogram.shape[1]} bins, filterbank needs {filterbank.fb_size}",
        )
    return spectrogram


def _check_output(out, shape):
    if out is None:
        return np.empty(shape, dtype=np.float32)
    if not isinstance(out, np.ndarray):
        raise PreconditionViolation(
            Reason.OUTPUT_SHAPE, f"output must be a numpy array of shape {shape}, got {type(out).__name__}"
        )
    if out.shape != shape:
        raise PreconditionViolation(
            Reason.OUTPUT_SHAPE, f"output has shape {out.shape}, expected {shape}"
        )
    if out.dtype != np.float32:
        raise PreconditionViolation(
            Reason.OUTPUT_DTYPE, f"output has dtype {out.dtype}, expected float32"
        )
    return out


def apply_filterbank(filterbank, spectrogram, out=None):
    """
    Weighted sum of every frame under every band's triangle.

    Only the bins in each band's support, ``filterbank.band_support(band)``,
    are touched; everything outside is zero weight anyway. The result is
    written to ``out`` (float32, ``(num_windows, num_bands)``), which is
    allocated when not given, and returned.
    """
    spectrogram = _check_spectrogram(filterbank, spectrogram)
    num_windows = spectrogram.shape[0]
    out = _check_output(out, (num_windows, filterbank.num_bands))

    weights = filterbank.weights
    max_filter_size = filterbank.max_filter_size
    logger.debug(
        "applying %d bands to %d windows, widest band %d bins",
        filterbank.num_bands, num_windows, max_filter_size,
    )

    # per call, so concurrent callers never share scratch
    frame_sparse = np.zeros((num_windows, max_filter_size), dtype=np.float32)
    filter_sparse = np.zeros(max_filter_size, dtype=np.float32)

    for band in range(filterbank.num_bands):
        start, stop = filterbank.band_support(band)
        filter_size = stop - start

        frame_sparse[:, :filter_size] = spectrogram[:, start:stop]
        frame_sparse[:, filter_size:] = 0
        filter_sparse[:filter_size] = weights[band, start:stop]
        filter_sparse[filter_size:] = 0

        frame_sparse *= filter_sparse
        out[:, band] = frame_sparse.sum(axis=1)

    return out


def apply_dense(filterbank, spectrogram):
    """Full-width reference: every bin of every frame against every weight row."""
    spectrogram = _check_spectrogram(filterbank, spectrogram)
    frames = spectrogram[:, :filterbank.fb_size].astype(np.float32)
    return frames @ filterbank.weights.T
