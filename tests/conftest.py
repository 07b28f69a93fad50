# Written by Kenta Iwasaki. All rights reserved.
# 2025-08-10

import numpy as np
import pytest

from logmelfb import FilterBankConfig, build_filterbank


@pytest.fixture
def telephone_config():
    return FilterBankConfig(fft_size=256, num_bands=4, lo_cut=300, hi_cut=3400, sample_rate=8000)


@pytest.fixture
def telephone_bank(telephone_config):
    return build_filterbank(telephone_config)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
