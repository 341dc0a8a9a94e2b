"""
Pytest configuration and fixtures for the pynoisey test suite.

Shared fixtures, marker registration and small deterministic fields used
across the unit and integration tests.
"""
import os
import sys

import pytest


def pytest_configure(config):
    """Configure pytest with custom settings."""
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("unit", "integration", "importtest", "slow"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Mark import tests for easy selection."""
    for item in items:
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


class ConstantField:
    """Field returning the same value everywhere, in 2D and 3D."""

    def __init__(self, value):
        self.value = value

    def get_2d(self, x, y):
        return self.value

    def get_3d(self, x, y, z):
        return self.value


class RecordingField:
    """Field returning ``x + 10 * y (+ 100 * z)`` and remembering every coordinate it saw."""

    def __init__(self):
        self.calls = []

    def get_2d(self, x, y):
        self.calls.append((x, y))
        return x + 10.0 * y

    def get_3d(self, x, y, z):
        self.calls.append((x, y, z))
        return x + 10.0 * y + 100.0 * z


class FixedRandomSource:
    """RandomSource with a given permutation and a repeating list of uniform draws."""

    def __init__(self, permutation=None, uniforms=(0.0,)):
        self.fixed_permutation = permutation
        self.uniforms = list(uniforms)
        self.draws = 0

    def uniform(self):
        value = self.uniforms[self.draws % len(self.uniforms)]
        self.draws += 1
        return value

    def permutation(self, n):
        if self.fixed_permutation is None:
            return list(range(n))
        return list(self.fixed_permutation)


SAMPLE_DOCUMENT = {
    "Seeds": {"Default": 1, "Other": 7},
    "Sources": {
        "perlin": {"SourceType": "perlin2d", "Quality": 2, "Seed": "Default"},
        "simplex": {"SourceType": "opensimplex2d", "Seed": "Other"},
    },
    "Generators": {
        "basic": {
            "GeneratorType": "fBm2d",
            "Sources": ["perlin"],
            "Octaves": 5,
            "Persistence": 0.25,
            "Lacunarity": 2,
            "Frequency": 1.13,
        },
    },
}


@pytest.fixture
def rng_factory():
    """Build fresh seeded random sources."""
    from pynoisey.rng import NumpyRandomSource

    return NumpyRandomSource


@pytest.fixture
def fixed_source():
    """Build random sources with hand-picked tables."""
    return FixedRandomSource


@pytest.fixture
def constant_field():
    return ConstantField


@pytest.fixture
def recording_field():
    return RecordingField()


@pytest.fixture
def sample_document():
    """A fresh copy of the basic noise document."""
    import copy

    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_config_file(tmp_path, sample_document):
    """The basic noise document written to disk."""
    import json

    path = tmp_path / "noise.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def random_points():
    """Reproducible scattered coordinates for range checks."""
    import numpy as np

    rng = np.random.default_rng(42)
    return rng.uniform(-100.0, 100.0, size=(1500, 3))
