"""
Generators Package - group generators for the repair-shop dataset.

Shared state:
- GeneratorContext: config, seeded rng/Faker and hints
- SampleHints: catalog hints keyed by record UUID

Group Generators:
- group_0_reference: component kinds, services, positions, manufacturers,
  persons, suppliers
- group_1_2_people: labor contracts, phone models, staff, components, phones
- group_3_5_commerce: accounts, supply contracts, orders, supplies,
  warehouse, service prices
- group_6_7_relations: warehouse supplies, order services, order items
"""

from .base import GeneratorContext, SampleHints, sha256_hasher, staff_with_role, unique_values
from .group_0_reference import (
    gen_component_kind,
    gen_manufacturer,
    gen_person,
    gen_positions,
    gen_service,
    gen_supplier,
)
from .group_1_2_people import (
    gen_component,
    gen_labor_contract,
    gen_phone,
    gen_phone_model,
    gen_staff,
)
from .group_3_5_commerce import (
    gen_account,
    gen_order,
    gen_service_phone_model,
    gen_supply,
    gen_supply_contract,
    gen_warehouse,
)
from .group_6_7_relations import (
    chunk_for_position,
    gen_order_service,
    gen_order_warehouse,
    gen_warehouse_supply,
)

__all__ = [
    # Shared state
    "GeneratorContext",
    "SampleHints",
    "sha256_hasher",
    "staff_with_role",
    "unique_values",
    # Group 0
    "gen_component_kind",
    "gen_service",
    "gen_positions",
    "gen_manufacturer",
    "gen_person",
    "gen_supplier",
    # Groups 1-2
    "gen_labor_contract",
    "gen_phone_model",
    "gen_staff",
    "gen_component",
    "gen_phone",
    # Groups 3-5
    "gen_account",
    "gen_supply_contract",
    "gen_order",
    "gen_supply",
    "gen_warehouse",
    "gen_service_phone_model",
    # Groups 6-7
    "gen_warehouse_supply",
    "gen_order_service",
    "gen_order_warehouse",
    "chunk_for_position",
]
