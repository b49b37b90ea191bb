"""
Generation parameters.

GenerationConfig is a plain value object. Defaults produce a small shop:
250 people, 50 suppliers, 25 labor contracts. A YAML file can override any
subset of the options:

    person_count: 500
    labor_contract_weights: [2, 2, 14, 1, 1, 1]
    warehouse_stock: [1, 10]
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .types import AccountStatus, ContractStatus


@dataclass
class GenerationConfig:
    """Recognised generation options."""

    person_count: int = 250
    supplier_count: int = 50
    position_salary_scatter: float = 0.005  # fraction of base salary

    # LaborContract - one weight per ContractStatus member
    labor_contract_count: int = 25
    labor_contract_weights: tuple[int, ...] = (2, 2, 14, 1, 1, 1)

    # Staff
    staff_vacation_chance: float = 0.15

    # Account - one weight per AccountStatus member
    account_status_weights: tuple[int, ...] = (18, 1, 1)

    # SupplyContract
    supply_contract_chance: float = 0.8
    supply_contract_count: int = 3  # max per supplier

    # Phone - weights for 0, 1, ... extra phones per person
    phone_count: tuple[int, ...] = (10, 1)

    # Warehouse
    warehouse_variations: int = 5  # max suppliers per component
    warehouse_stock: tuple[int, int] = (1, 3)  # inclusive
    warehouse_item_price_scatter: float = 0.5  # fraction of kind base price

    # Order
    order_count: int = 3  # max per phone
    order_not_owner_chance: float = 0.01

    # Supply
    supply_count: int = 5  # max per contract

    def validate(self) -> "GenerationConfig":
        """
        Check value ranges and weight lengths.

        Returns:
            self, for chaining

        Raises:
            ConfigError: On the first invalid option
        """
        for name in (
            "person_count",
            "supplier_count",
            "labor_contract_count",
            "supply_contract_count",
            "warehouse_variations",
            "order_count",
            "supply_count",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")

        for name in (
            "staff_vacation_chance",
            "supply_contract_chance",
            "order_not_owner_chance",
        ):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ConfigError(f"{name} must be within [0, 1], got {value!r}")

        for name in ("position_salary_scatter", "warehouse_item_price_scatter"):
            value = getattr(self, name)
            if not (0.0 <= value < 1.0):
                raise ConfigError(f"{name} must be within [0, 1), got {value!r}")

        if len(self.labor_contract_weights) != len(ContractStatus):
            raise ConfigError(
                f"labor_contract_weights needs {len(ContractStatus)} values "
                f"(one per contract status), got {len(self.labor_contract_weights)}"
            )
        if len(self.account_status_weights) != len(AccountStatus):
            raise ConfigError(
                f"account_status_weights needs {len(AccountStatus)} values "
                f"(one per account status), got {len(self.account_status_weights)}"
            )
        if not self.phone_count:
            raise ConfigError("phone_count needs at least one weight")

        if len(self.warehouse_stock) != 2:
            raise ConfigError(f"warehouse_stock must be a (min, max) pair, got {self.warehouse_stock!r}")
        low, high = self.warehouse_stock
        if low < 0 or high < low:
            raise ConfigError(f"warehouse_stock must satisfy 0 <= min <= max, got {self.warehouse_stock!r}")
        if self.warehouse_variations < 1:
            raise ConfigError("warehouse_variations must be at least 1")

        return self

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "GenerationConfig":
        """
        Build a config from a mapping, falling back to defaults.

        Raises:
            ConfigError: If the mapping holds unknown option names
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(unknown)}")

        kwargs = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in values.items()
        }
        return cls(**kwargs).validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in asdict(self).items()
        }


def load_config(path: Path | str) -> GenerationConfig:
    """
    Load a GenerationConfig from a YAML file.

    An empty file yields the defaults.
    """
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return GenerationConfig().validate()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return GenerationConfig.from_dict(data)
