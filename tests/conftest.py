"""
Pytest fixtures for cw-generator tests.

Provides:
- A fixed generation timestamp so seeded runs compare equal
- Context factories for driving single generators
- A session-wide generated dataset (seeded) for whole-pipeline properties
"""

from datetime import datetime, timezone

import pytest

from cw_generator.config import GenerationConfig
from cw_generator.generators import GeneratorContext
from cw_generator.pipeline import gen_full

SEED = 20240501
FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def full_config(**overrides) -> GenerationConfig:
    """
    Default options with enough labor contracts that every role is staffed.

    With the default 25 contracts a role can come up empty by chance.
    """
    values = {"labor_contract_count": 60}
    values.update(overrides)
    return GenerationConfig(**values)


@pytest.fixture
def make_ctx():
    """Factory: make_ctx(**config_overrides) -> seeded GeneratorContext."""

    def _make(seed: int = SEED, **overrides) -> GeneratorContext:
        return GeneratorContext.create(GenerationConfig(**overrides), seed=seed, now=FIXED_NOW)

    return _make


@pytest.fixture
def ctx(make_ctx) -> GeneratorContext:
    return make_ctx()


@pytest.fixture(scope="session")
def dataset():
    """One seeded dataset shared by read-only pipeline tests."""
    return gen_full(full_config(), seed=SEED, now=FIXED_NOW)
