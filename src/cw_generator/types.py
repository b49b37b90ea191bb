"""
Status enums and shared value types for the repair-shop schema.

Enum values match the PostgreSQL enum labels, so a member's ``value`` can be
bound directly into an INSERT statement or written to a JSON dump.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class ContractStatus(Enum):
    REVIEW = "Review"
    NEGOTIATION = "Negotiation"
    ACTIVE = "Active"
    EXPIRED = "Expired"
    VOID = "Void"
    REJECTED = "Rejected"


class StaffStatus(Enum):
    WORKING = "Working"
    ON_VACATION = "OnVacation"
    SUSPENDED = "Suspended"
    FIRED = "Fired"


class AccountRole(Enum):
    ADMINISTRATOR = "Administrator"
    MANAGER = "Manager"
    WAREHOUSE_WORKER = "WarehouseWorker"
    SERVICEMAN = "Serviceman"
    SHOPMAN = "Shopman"


class AccountStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    BANNED = "Banned"


class SupplyStatus(Enum):
    REVIEW = "Review"
    NEGOTIATION = "Negotiation"
    SIGNED = "Signed"
    PAID = "Paid"
    DISPATCHED = "Dispatched"
    DELIVERED = "Delivered"
    FAILED = "Failed"
    REJECTED = "Rejected"


class OrderStatus(Enum):
    PROCESSING = "Processing"
    READY = "Ready"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Color(Enum):
    BLACK = "Black"
    WHITE = "White"
    SILVER = "Silver"
    GOLD = "Gold"
    BLUE = "Blue"
    RED = "Red"
    GREEN = "Green"


# Statuses whose records carry a "signed" timestamp
LABOR_CONTRACT_SIGNED = frozenset(
    {
        ContractStatus.ACTIVE,
        ContractStatus.EXPIRED,
        ContractStatus.VOID,
        ContractStatus.REJECTED,
    }
)
SUPPLY_CONTRACT_SIGNED = frozenset(
    {ContractStatus.ACTIVE, ContractStatus.EXPIRED, ContractStatus.VOID}
)
SUPPLY_SIGNED = frozenset(
    {
        SupplyStatus.SIGNED,
        SupplyStatus.PAID,
        SupplyStatus.DISPATCHED,
        SupplyStatus.DELIVERED,
        SupplyStatus.FAILED,
    }
)

# Contracts that were actually executed (staff hired, goods supplied)
EXECUTED_CONTRACT = frozenset(
    {ContractStatus.ACTIVE, ContractStatus.EXPIRED, ContractStatus.VOID}
)

# Only the newest contract/supply in a sequence may still be open
OPEN_CONTRACT_STATUSES = (
    ContractStatus.REVIEW,
    ContractStatus.NEGOTIATION,
    ContractStatus.ACTIVE,
)
CLOSED_CONTRACT_STATUSES = (
    ContractStatus.EXPIRED,
    ContractStatus.VOID,
    ContractStatus.REJECTED,
)
OPEN_SUPPLY_STATUSES = (
    SupplyStatus.REVIEW,
    SupplyStatus.NEGOTIATION,
    SupplyStatus.SIGNED,
    SupplyStatus.PAID,
    SupplyStatus.DISPATCHED,
)
CLOSED_SUPPLY_STATUSES = (
    SupplyStatus.DELIVERED,
    SupplyStatus.FAILED,
    SupplyStatus.REJECTED,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MetaTime:
    """Creation/update timestamp pair stored in the ``metatime`` column."""

    created: datetime
    updated: datetime

    @classmethod
    def at(cls, moment: datetime) -> "MetaTime":
        return cls(created=moment, updated=moment)


CENTS = Decimal("0.01")


def money(value: float | Decimal) -> Decimal:
    """Quantise an amount to the two decimal places of the ``money`` type."""
    if not isinstance(value, Decimal):
        value = Decimal(str(float(value)))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
