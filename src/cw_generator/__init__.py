"""
cw-generator - Synthetic data for a phone-repair shop database.

This package generates a complete, referentially valid instance of the shop
schema (people, staff, suppliers, warehouse stock, orders and services) in
dependency order, and writes it to a JSON dump or pushes it into PostgreSQL.
"""

__version__ = "0.1.0"

from .config import GenerationConfig, load_config
from .errors import GenerationError, PushError
from .models import Dataset
from .pipeline import dependency_groups, gen_full, iter_groups

__all__ = [
    "GenerationConfig",
    "load_config",
    "GenerationError",
    "PushError",
    "Dataset",
    "dependency_groups",
    "gen_full",
    "iter_groups",
]
