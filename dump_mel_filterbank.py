# log-spaced triangular filterbank (num_bands x fb_size)
# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import argparse
import json
import logging

from logmelfb import FilterBankConfig, FilterBankError, build_filterbank
from logmelfb.config import HI_CUT, LO_CUT, N_BANDS, N_FFT, SAMPLE_RATE


def build_parser():
    parser = argparse.ArgumentParser(description="Dump a log-spaced triangular filterbank to JSON.")
    parser.add_argument("--fft-size", type=int, default=N_FFT)
    parser.add_argument("--num-bands", type=int, default=N_BANDS)
    parser.add_argument("--lo-cut", type=float, default=LO_CUT)
    parser.add_argument("--hi-cut", type=float, default=HI_CUT)
    parser.add_argument("--sample-rate", type=float, default=SAMPLE_RATE)
    parser.add_argument("--output", default="mel_filterbank.json")
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
    try:
        mel_filterbank = build_filterbank(config)
    except FilterBankError as e:
        parser.error(str(e))

    print(mel_filterbank.weights.shape)
    print(mel_filterbank.weights)

    with open(args.output, "w") as f:
        json.dump(mel_filterbank.to_dict(), f)
    return mel_filterbank


if __name__ == "__main__":
    main()
