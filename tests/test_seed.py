import os
import random

import numpy as np

from explainlab.utils.seed import set_seed


def test_set_seed_repeats_draws() -> None:
    set_seed(0)
    first = (random.random(), np.random.rand())
    set_seed(0)
    assert (random.random(), np.random.rand()) == first
    assert os.environ["PYTHONHASHSEED"] == "0"
