"""
Entity records for the repair-shop schema and the Dataset aggregate.

Every record is a frozen dataclass. ``TABLE`` names the PostgreSQL table the
push sink writes to, and ``REFERENCES`` maps each foreign-key field to the
collection whose ``uuid`` it points at.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Iterator
from uuid import UUID

from .types import (
    AccountRole,
    AccountStatus,
    Color,
    ContractStatus,
    MetaTime,
    OrderStatus,
    StaffStatus,
    SupplyStatus,
)


# =============================================================================
# Group 0: seeded from samples and fakers
# =============================================================================


@dataclass(frozen=True)
class ComponentKind:
    TABLE: ClassVar[str] = "ComponentKind"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    name: str
    details: str | None


@dataclass(frozen=True)
class Service:
    TABLE: ClassVar[str] = "Service"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    name: str
    description: str | None
    meta: MetaTime


@dataclass(frozen=True)
class Position:
    TABLE: ClassVar[str] = "Position"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    name: str
    details: str | None
    salary: Decimal
    meta: MetaTime


@dataclass(frozen=True)
class Manufacturer:
    TABLE: ClassVar[str] = "Manufacturer"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    name: str
    country: str


@dataclass(frozen=True)
class Person:
    TABLE: ClassVar[str] = "Person"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    first_name: str
    middle_name: str | None
    last_name: str
    email: str
    phone: str
    meta: MetaTime


@dataclass(frozen=True)
class Supplier:
    TABLE: ClassVar[str] = "Supplier"
    REFERENCES: ClassVar[dict[str, str]] = {}

    uuid: UUID
    name: str
    iban: str
    swift: str
    address: str
    country: str


# =============================================================================
# Groups 1-2
# =============================================================================


@dataclass(frozen=True)
class LaborContract:
    TABLE: ClassVar[str] = "LaborContract"
    REFERENCES: ClassVar[dict[str, str]] = {"person": "person"}

    uuid: UUID
    person: UUID
    passport: str
    status: ContractStatus
    signed: datetime | None
    meta: MetaTime


@dataclass(frozen=True)
class PhoneModel:
    TABLE: ClassVar[str] = "PhoneModel"
    REFERENCES: ClassVar[dict[str, str]] = {"manufacturer": "manufacturer"}

    uuid: UUID
    name: str
    description: str | None
    manufacturer: UUID


@dataclass(frozen=True)
class Staff:
    TABLE: ClassVar[str] = "Staff"
    REFERENCES: ClassVar[dict[str, str]] = {
        "contract": "labor_contract",
        "position": "position",
    }

    uuid: UUID
    contract: UUID
    position: UUID
    status: StaffStatus


@dataclass(frozen=True)
class Component:
    TABLE: ClassVar[str] = "Component"
    REFERENCES: ClassVar[dict[str, str]] = {
        "kind": "component_kind",
        "phone_model": "phone_model",
        "manufacturer": "manufacturer",
    }

    uuid: UUID
    name: str
    kind: UUID
    phone_model: UUID
    manufacturer: UUID


@dataclass(frozen=True)
class Phone:
    TABLE: ClassVar[str] = "Phone"
    REFERENCES: ClassVar[dict[str, str]] = {"person": "person", "model": "phone_model"}

    uuid: UUID
    person: UUID
    imei: str
    wifi: str
    bluetooth: str
    model: UUID
    color: Color
    meta: MetaTime


# =============================================================================
# Groups 3-5
# =============================================================================


@dataclass(frozen=True)
class Account:
    TABLE: ClassVar[str] = "Account"
    REFERENCES: ClassVar[dict[str, str]] = {"staff": "staff"}

    uuid: UUID
    staff: UUID
    login: str
    password: str
    role: AccountRole
    status: AccountStatus
    meta: MetaTime


@dataclass(frozen=True)
class SupplyContract:
    TABLE: ClassVar[str] = "SupplyContract"
    REFERENCES: ClassVar[dict[str, str]] = {"supplier": "supplier", "manager": "staff"}

    uuid: UUID
    supplier: UUID
    manager: UUID
    status: ContractStatus
    signed: datetime | None
    meta: MetaTime


@dataclass(frozen=True)
class Order:
    TABLE: ClassVar[str] = "Order"
    REFERENCES: ClassVar[dict[str, str]] = {
        "client": "person",
        "phone": "phone",
        "serviceman": "staff",
        "shopman": "staff",
    }

    uuid: UUID
    client: UUID
    phone: UUID
    serviceman: UUID
    shopman: UUID
    status: OrderStatus
    meta: MetaTime


@dataclass(frozen=True)
class Supply:
    TABLE: ClassVar[str] = "Supply"
    REFERENCES: ClassVar[dict[str, str]] = {"contract": "supply_contract", "staff": "staff"}

    uuid: UUID
    contract: UUID
    staff: UUID
    status: SupplyStatus
    signed: datetime | None
    meta: MetaTime


@dataclass(frozen=True)
class Warehouse:
    TABLE: ClassVar[str] = "Warehouse"
    REFERENCES: ClassVar[dict[str, str]] = {
        "component": "component",
        "supplier": "supplier",
    }

    uuid: UUID
    component: UUID
    supplier: UUID
    price: Decimal
    amount: int
    meta: MetaTime


# =============================================================================
# Relation tables (keyed by their foreign-key pair)
# =============================================================================


@dataclass(frozen=True)
class ServicePhoneModel:
    TABLE: ClassVar[str] = "ServicePhoneModel"
    REFERENCES: ClassVar[dict[str, str]] = {
        "service": "service",
        "phone_model": "phone_model",
    }

    service: UUID
    phone_model: UUID
    price: Decimal  # recommended price
    meta: MetaTime


@dataclass(frozen=True)
class WarehouseSupply:
    TABLE: ClassVar[str] = "WarehouseSupply"
    REFERENCES: ClassVar[dict[str, str]] = {"item": "warehouse", "supply": "supply"}

    item: UUID
    supply: UUID
    amount: int
    created: datetime


@dataclass(frozen=True)
class OrderService:
    TABLE: ClassVar[str] = "OrderService"
    REFERENCES: ClassVar[dict[str, str]] = {"order": "order", "service": "service"}

    order: UUID
    service: UUID
    price: Decimal


@dataclass(frozen=True)
class OrderWarehouse:
    TABLE: ClassVar[str] = "OrderWarehouse"
    REFERENCES: ClassVar[dict[str, str]] = {"order": "order", "item": "warehouse"}

    order: UUID
    item: UUID
    amount: int
    price: Decimal


# =============================================================================
# Dataset aggregate
# =============================================================================


@dataclass
class Dataset:
    """
    One complete generated instance of the schema.

    Field order is the fixed collection order used by the dump format.
    """

    component_kind: list[ComponentKind]
    service: list[Service]
    position: list[Position]
    manufacturer: list[Manufacturer]
    person: list[Person]
    supplier: list[Supplier]
    labor_contract: list[LaborContract]
    phone_model: list[PhoneModel]
    staff: list[Staff]
    component: list[Component]
    phone: list[Phone]
    account: list[Account]
    supply_contract: list[SupplyContract]
    order: list[Order]
    supply: list[Supply]
    warehouse: list[Warehouse]
    service_phone_model: list[ServicePhoneModel]
    warehouse_supply: list[WarehouseSupply]
    order_service: list[OrderService]
    order_warehouse: list[OrderWarehouse]

    def collections(self) -> Iterator[tuple[str, list[Any]]]:
        """Yield (collection name, records) pairs in the fixed order."""
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def get(self, name: str) -> list[Any]:
        if name not in COLLECTION_TYPES:
            raise KeyError(f"Unknown collection '{name}'. Valid: {list(COLLECTIONS)}")
        return getattr(self, name)

    def row_counts(self) -> dict[str, int]:
        return {name: len(records) for name, records in self.collections()}

    def total_rows(self) -> int:
        return sum(len(records) for _, records in self.collections())


COLLECTION_TYPES: dict[str, type] = {
    "component_kind": ComponentKind,
    "service": Service,
    "position": Position,
    "manufacturer": Manufacturer,
    "person": Person,
    "supplier": Supplier,
    "labor_contract": LaborContract,
    "phone_model": PhoneModel,
    "staff": Staff,
    "component": Component,
    "phone": Phone,
    "account": Account,
    "supply_contract": SupplyContract,
    "order": Order,
    "supply": Supply,
    "warehouse": Warehouse,
    "service_phone_model": ServicePhoneModel,
    "warehouse_supply": WarehouseSupply,
    "order_service": OrderService,
    "order_warehouse": OrderWarehouse,
}

COLLECTIONS: tuple[str, ...] = tuple(f.name for f in fields(Dataset))
