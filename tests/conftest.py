import numpy as np
import pytest

from orthogrid.model.grid import OrthoGrid
from orthogrid.model.profiles import CubeProfile, RenderProfile, StructureProfile


@pytest.fixture
def cube_shape():
    return CubeProfile(edge_length=20.0, separation=2.0, view_angle_deg=120)


@pytest.fixture
def render():
    return RenderProfile(False, (0, 0, 255), (255, 0, 0))


@pytest.fixture
def make_grid(cube_shape, render):
    def _make(rows=5, cols=5, behaviour=None, seed=0, build=True):
        return OrthoGrid(
            StructureProfile(100.0, 50.0, rows, cols),
            cube_shape,
            render,
            behaviour,
            rng=np.random.default_rng(seed),
            build=build,
        )
    return _make
