import numpy as np
import pytest

from median_cut.spaces import build_registry


@pytest.fixture(scope="session")
def registry():
    return build_registry()


@pytest.fixture
def make_grid():
    def _make(rows):
        return np.array(rows, dtype=np.uint32)

    return _make


@pytest.fixture
def random_grid():
    def _make(height, width, seed=0, colours=None):
        rng = np.random.default_rng(seed)
        if colours is None:
            rgb = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint32)
        else:
            pool = np.array(colours, dtype=np.uint32)
            rgb = pool[rng.integers(0, len(pool), size=(height, width))]
        alpha = rng.integers(0, 256, size=(height, width), dtype=np.uint32)
        return (
            (alpha << np.uint32(24))
            | (rgb[..., 0] << np.uint32(16))
            | (rgb[..., 1] << np.uint32(8))
            | rgb[..., 2]
        ).astype(np.uint32)

    return _make
