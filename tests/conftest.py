import numpy as np
import pytest

from block_blast_rl.game import Shape, ShapeGenerator


SINGLE = ((0, 0),)


def _make_shape(cells=SINGLE, shape_id=1000, color=1) -> Shape:
    return Shape(id=shape_id, cells=tuple(cells), color=color)


@pytest.fixture()
def make_shape():
    return _make_shape


@pytest.fixture()
def checkerboard():
    """Board with every even-parity cell filled; nothing larger than one cell fits."""
    rows, cols = np.indices((8, 8))
    return np.where((rows + cols) % 2 == 0, 3, 0).astype(np.int8)


@pytest.fixture()
def generator():
    return ShapeGenerator(seed=1234)


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    d = tmp_path / "data"
    monkeypatch.setenv("BLOCK_BLAST_DATA_DIR", str(d))
    return d
