"""
Group 3-5 Generator: Accounts, contracts, orders and stock.

Group 3 Tables:
- account (one per staff member)

Group 4 Tables:
- supply_contract (0..=supply_contract_count per supplier, chance-gated)
- order (0..=order_count per phone)

Group 5 Tables:
- supply (0..=supply_count per executed supply contract)
- warehouse (1..=warehouse_variations suppliers per component)
- service_phone_model (service x phone model)

Contracts and supplies are generated as per-parent sequences in which only
the newest record may still be open; every earlier one is closed.
"""

import logging

from .base import GeneratorContext, staff_with_role, unique_values
from ..distributions import Bernoulli, UniformChoice, WeightedIndex, uniform_band
from ..errors import PreconditionError
from ..models import (
    Account,
    Component,
    Order,
    Person,
    Phone,
    PhoneModel,
    Position,
    Service,
    ServicePhoneModel,
    Staff,
    Supplier,
    Supply,
    SupplyContract,
    Warehouse,
)
from ..types import (
    CLOSED_CONTRACT_STATUSES,
    CLOSED_SUPPLY_STATUSES,
    EXECUTED_CONTRACT,
    OPEN_CONTRACT_STATUSES,
    OPEN_SUPPLY_STATUSES,
    SUPPLY_CONTRACT_SIGNED,
    SUPPLY_SIGNED,
    AccountRole,
    AccountStatus,
    OrderStatus,
    money,
)

logger = logging.getLogger(__name__)

LOGIN_MAX_LEN = 24
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 32


# =============================================================================
# Group 3
# =============================================================================


def gen_account(
    ctx: GeneratorContext,
    staff: list[Staff],
    positions: list[Position],
) -> list[Account]:
    """
    Open one account per staff member.

    The role comes from the hint recorded for the member's position; the
    stored password is ``ctx.password_hasher`` applied to a random one.

    Raises:
        PreconditionError: If a staff member's position is not in ``positions``
        SampleLookupError: If a position carries no role hint
        UniquenessExhaustedError: If no fresh login could be drawn
    """
    fake = ctx.faker("en_US")
    statuses = list(AccountStatus)
    status_weights = WeightedIndex(ctx.config.account_status_weights)
    known_positions = {p.uuid for p in positions}

    records = []
    for member in staff:
        if member.position not in known_positions:
            raise PreconditionError(
                f"Staff {member.uuid} references unknown position {member.position}"
            )
        length = int(ctx.rng.integers(PASSWORD_MIN_LEN, PASSWORD_MAX_LEN + 1))
        password = fake.password(length=length)
        with unique_values("account.login"):
            login = fake.unique.user_name()[:LOGIN_MAX_LEN]
        records.append(
            Account(
                uuid=ctx.new_uuid(),
                staff=member.uuid,
                login=login,
                password=ctx.password_hasher(password),
                role=ctx.hints.lookup("position_role", member.position),
                status=statuses[status_weights.sample(ctx.rng)],
                meta=ctx.meta(),
            )
        )
    return records


# =============================================================================
# Group 4
# =============================================================================


def gen_supply_contract(
    ctx: GeneratorContext,
    suppliers: list[Supplier],
    staff: list[Staff],
    accounts: list[Account],
) -> list[SupplyContract]:
    """
    Sign a sequence of contracts with some suppliers.

    With ``supply_contract_chance`` a supplier gets 0..=supply_contract_count
    contracts, each handled by a random manager. The last contract is
    Review/Negotiation/Active, earlier ones Expired/Void/Rejected.

    Raises:
        MissingRoleError: If there are no managers on staff
    """
    managers = staff_with_role(staff, accounts, AccountRole.MANAGER, "managers")
    has_contracts = Bernoulli(ctx.config.supply_contract_chance)
    open_statuses = UniformChoice(OPEN_CONTRACT_STATUSES)
    closed_statuses = UniformChoice(CLOSED_CONTRACT_STATUSES)

    records = []
    for supplier in suppliers:
        if not has_contracts.sample(ctx.rng):
            continue

        count = int(ctx.rng.integers(0, ctx.config.supply_contract_count + 1))
        for i in range(count):
            status = open_statuses.sample(ctx.rng) if i + 1 == count else closed_statuses.sample(ctx.rng)
            records.append(
                SupplyContract(
                    uuid=ctx.new_uuid(),
                    supplier=supplier.uuid,
                    manager=ctx.pick(managers).uuid,
                    status=status,
                    signed=ctx.now if status in SUPPLY_CONTRACT_SIGNED else None,
                    meta=ctx.meta(),
                )
            )
    return records


def gen_order(
    ctx: GeneratorContext,
    persons: list[Person],
    staff: list[Staff],
    accounts: list[Account],
    phones: list[Phone],
) -> list[Order]:
    """
    Place 0..=order_count repair orders per phone.

    The client is the phone's owner, except that with
    ``order_not_owner_chance`` somebody else brings the phone in.

    Raises:
        MissingRoleError: If there are no servicemen or no shopmen on staff
    """
    servicemen = staff_with_role(staff, accounts, AccountRole.SERVICEMAN, "servicemen")
    shopmen = staff_with_role(staff, accounts, AccountRole.SHOPMAN, "shopmen")
    not_owner = Bernoulli(ctx.config.order_not_owner_chance)
    statuses = UniformChoice(list(OrderStatus))

    records = []
    for phone in phones:
        count = int(ctx.rng.integers(0, ctx.config.order_count + 1))
        for _ in range(count):
            client = phone.person
            if len(persons) > 1 and not_owner.sample(ctx.rng):
                others = [p for p in persons if p.uuid != phone.person]
                client = ctx.pick(others).uuid
            records.append(
                Order(
                    uuid=ctx.new_uuid(),
                    client=client,
                    phone=phone.uuid,
                    serviceman=ctx.pick(servicemen).uuid,
                    shopman=ctx.pick(shopmen).uuid,
                    status=statuses.sample(ctx.rng),
                    meta=ctx.meta(),
                )
            )
    return records


# =============================================================================
# Group 5
# =============================================================================


def gen_supply(
    ctx: GeneratorContext,
    supply_contracts: list[SupplyContract],
    staff: list[Staff],
    accounts: list[Account],
) -> list[Supply]:
    """
    Schedule 0..=supply_count supplies under every executed supply contract.

    The last supply of a contract is still in progress
    (Review..Dispatched); earlier ones are Delivered, Failed or Rejected.

    Raises:
        MissingRoleError: If there are no warehouse workers on staff
    """
    workers = staff_with_role(
        staff, accounts, AccountRole.WAREHOUSE_WORKER, "warehouse workers"
    )
    open_statuses = UniformChoice(OPEN_SUPPLY_STATUSES)
    closed_statuses = UniformChoice(CLOSED_SUPPLY_STATUSES)

    records = []
    for contract in supply_contracts:
        if contract.status not in EXECUTED_CONTRACT:
            continue

        count = int(ctx.rng.integers(0, ctx.config.supply_count + 1))
        for i in range(count):
            status = open_statuses.sample(ctx.rng) if i + 1 == count else closed_statuses.sample(ctx.rng)
            records.append(
                Supply(
                    uuid=ctx.new_uuid(),
                    contract=contract.uuid,
                    staff=ctx.pick(workers).uuid,
                    status=status,
                    signed=ctx.now if status in SUPPLY_SIGNED else None,
                    meta=ctx.meta(),
                )
            )
    return records


def gen_warehouse(
    ctx: GeneratorContext,
    components: list[Component],
    supply_contracts: list[SupplyContract],
) -> list[Warehouse]:
    """
    Stock every component from a few distinct suppliers.

    Suppliers are those holding at least one executed supply contract. Each
    component gets 1..=warehouse_variations of them (capped at how many
    exist), priced at the component kind's base price jittered by
    ``warehouse_item_price_scatter``.

    Raises:
        PreconditionError: If no supplier holds an executed contract
        SampleLookupError: If a component kind carries no price hint
    """
    suppliers = list(
        dict.fromkeys(c.supplier for c in supply_contracts if c.status in EXECUTED_CONTRACT)
    )
    if not suppliers:
        raise PreconditionError(
            "There are no suppliers with executed supply contracts to stock the warehouse"
        )

    scatter = ctx.config.warehouse_item_price_scatter
    stock_min, stock_max = ctx.config.warehouse_stock
    max_variations = min(ctx.config.warehouse_variations, len(suppliers))

    records = []
    for component in components:
        base_price = ctx.hints.lookup("component_kind_price", component.kind)
        variations = int(ctx.rng.integers(1, max_variations + 1))
        chosen = ctx.rng.choice(len(suppliers), size=variations, replace=False)
        for idx in chosen:
            records.append(
                Warehouse(
                    uuid=ctx.new_uuid(),
                    component=component.uuid,
                    supplier=suppliers[int(idx)],
                    price=money(uniform_band(ctx.rng, base_price, scatter)),
                    amount=int(ctx.rng.integers(stock_min, stock_max + 1)),
                    meta=ctx.meta(),
                )
            )
    logger.debug(
        "Stocked %d components from %d suppliers (%d items)",
        len(components),
        len(suppliers),
        len(records),
    )
    return records


def gen_service_phone_model(
    ctx: GeneratorContext,
    services: list[Service],
    phone_models: list[PhoneModel],
) -> list[ServicePhoneModel]:
    """Price every service for every phone model: base price x model coefficient."""
    records = []
    for service in services:
        base_price = ctx.hints.lookup("service_base_price", service.uuid)
        for model in phone_models:
            coefficient = ctx.hints.lookup("phone_model_coefficient", model.uuid)
            records.append(
                ServicePhoneModel(
                    service=service.uuid,
                    phone_model=model.uuid,
                    price=money(base_price * coefficient),
                    meta=ctx.meta(),
                )
            )
    return records
