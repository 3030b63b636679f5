import sys
from pathlib import Path

import numpy as np
import pytest

# Put the project directory on sys.path so the package imports without install
TEST_FILE = Path(__file__).resolve()
PROJECT_DIR = TEST_FILE.parents[1]  # directory containing the 'polycurve' package dir
sp = str(PROJECT_DIR)
if sp not in sys.path:
    sys.path.insert(0, sp)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
