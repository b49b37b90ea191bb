"""
Reference catalogs: component kinds, services, positions, manufacturers.

Each entry is materialised as exactly one record. Hint values (base prices,
implied roles, implied component kinds) stay here and are attached to the
generated records through SampleHints.
"""

from ..types import AccountRole

COMPONENT_KINDS = [
    {"name": "Battery", "details": None, "base_price": 5000.0},
    {"name": "Screen Display", "details": None, "base_price": 10000.0},
    {"name": "RAM", "details": None, "base_price": 20000.0},
    {"name": "Memory", "details": None, "base_price": 18500.0},
    {"name": "Screen Glass", "details": None, "base_price": 12500.0},
]

SERVICES = [
    {
        "name": "Battery replacement",
        "description": None,
        "base_price": 10000.0,
        "component_kind": "Battery",
    },
    {
        "name": "Screen display replacement",
        "description": None,
        "base_price": 15000.0,
        "component_kind": "Screen Display",
    },
    {
        "name": "RAM Fix",
        "description": "Replace malfunctioning RAM bank",
        "base_price": 25000.0,
        "component_kind": "RAM",
    },
    {
        "name": "Memory Fix",
        "description": "Replace malfunctioning memory bank",
        "base_price": 20000.0,
        "component_kind": "Memory",
    },
    {
        "name": "Screen glass replacement",
        "description": None,
        "base_price": 12500.0,
        "component_kind": "Screen Glass",
    },
]

# weight: relative chance a new hire lands in the position
POSITIONS = [
    {"name": "Director", "salary": 150000, "weight": 1, "role": AccountRole.ADMINISTRATOR},
    {"name": "Manager", "salary": 90000, "weight": 4, "role": AccountRole.MANAGER},
    {"name": "Warehouse Worker", "salary": 45000, "weight": 4, "role": AccountRole.WAREHOUSE_WORKER},
    {"name": "Serviceman", "salary": 70000, "weight": 5, "role": AccountRole.SERVICEMAN},
    {"name": "Shopman", "salary": 50000, "weight": 4, "role": AccountRole.SHOPMAN},
]

MANUFACTURERS = [
    {"name": "Apple", "country": "US"},
    {"name": "Samsung", "country": "KR"},
    {"name": "FoxCon", "country": "TW"},
]
