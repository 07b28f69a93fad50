# filterbank energies (N frames x num_bands)
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import argparse
import json
import logging

import librosa
import numpy as np
import torch
import torch.nn.functional as F

from logmelfb import FilterBankConfig, FilterBankError, apply_filterbank, build_filterbank
from logmelfb.config import HI_CUT, LO_CUT, N_BANDS, N_FFT, SAMPLE_RATE

HOP_LENGTH = 80

logger = logging.getLogger(__name__)


def power_spectrogram(
    audio: np.ndarray,
    n_fft: int,
    hop_length: int = HOP_LENGTH,
    padding: int = 0,
):
    """(N frames x n_fft // 2 + 1) power spectrum of a mono signal."""
    audio = torch.from_numpy(np.ascontiguousarray(audio, dtype=np.float32))
    if padding > 0:
        audio = F.pad(audio, (0, padding))
    window = torch.hann_window(n_fft).to(audio.device)
    stft = torch.stft(audio, n_fft, hop_length, window=window, return_complex=True)
    magnitudes = stft[..., :-1].abs() ** 2
    return magnitudes.T.contiguous().numpy()


def filterbank_energies(audio: np.ndarray, config: FilterBankConfig, hop_length: int = HOP_LENGTH, padding: int = 0):
    filterbank = build_filterbank(config)
    spectrogram = power_spectrogram(audio, 2 * filterbank.fb_size, hop_length, padding)
    logger.debug("spectrogram %s for %d samples", spectrogram.shape, len(audio))
    return apply_filterbank(filterbank, spectrogram)


def build_parser():
    parser = argparse.ArgumentParser(description="Dump filterbank energies of an audio file to JSON.")
    parser.add_argument("audio")
    parser.add_argument("--fft-size", type=int, default=N_FFT)
    parser.add_argument("--hop-length", type=int, default=HOP_LENGTH)
    parser.add_argument("--padding", type=int, default=0)
    parser.add_argument("--num-bands", type=int, default=N_BANDS)
    parser.add_argument("--lo-cut", type=float, default=LO_CUT)
    parser.add_argument("--hi-cut", type=float, default=HI_CUT)
    parser.add_argument("--sample-rate", type=float, default=SAMPLE_RATE)
    parser.add_argument("--output", default="mel_example.json")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = FilterBankConfig(
        fft_size=args.fft_size,
        num_bands=args.num_bands,
        lo_cut=args.lo_cut,
        hi_cut=args.hi_cut,
        sample_rate=args.sample_rate,
    )

    audio, _ = librosa.load(args.audio, sr=config.sample_rate, dtype=np.float32)
    print(audio.shape)
    print(audio)

    try:
        mel_spec = filterbank_energies(audio, config, args.hop_length, args.padding)
    except FilterBankError as e:
        parser.error(str(e))
    print(mel_spec.shape)
    print(mel_spec)

    with open(args.output, "w") as f:
        json.dump(mel_spec.tolist(), f)
    return mel_spec


if __name__ == "__main__":
    main()
