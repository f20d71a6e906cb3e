"""Pytest configuration for ray tracer tests.

Shared fixtures for all test modules. Taichi is only needed by the batch
ray generation tests, so its initialization is an opt-in session fixture
rather than an autouse one.
"""

import pytest


@pytest.fixture(scope="session")
def taichi_cpu():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    import taichi as ti

    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield
    # Note: We don't call ti.reset() here; later tests may still launch kernels


@pytest.fixture
def default_world():
    """Two concentric spheres lit by a white light at (-10, 10, -10)."""
    from whitted.scene.world import default_world as make_default_world

    return make_default_world()
