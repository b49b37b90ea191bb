"""
Group 6-7 Generator: Relation tables.

Group 6 Tables:
- warehouse_supply (supplier stock split across the supplier's supplies)
- order_service (one priced service per order)

Group 7 Tables:
- order_warehouse (one stock item per order, matched to its service)
"""

import logging

from .base import GeneratorContext
from ..errors import PreconditionError
from ..lookup_builder import LookupBuilder
from ..models import (
    Component,
    ComponentKind,
    Order,
    OrderService,
    OrderWarehouse,
    Phone,
    Service,
    ServicePhoneModel,
    Supply,
    SupplyContract,
    Warehouse,
    WarehouseSupply,
)

logger = logging.getLogger(__name__)


def chunk_for_position(items: list, sibling_count: int, position: int) -> list:
    """
    Slice of ``items`` belonging to the sibling at ``position``.

    Items are cut into chunks of ``max(1, len(items) // sibling_count)``.
    The sibling at ``position`` takes chunk ``position``; if the chunk after
    it is undersized (the tail) it is absorbed as well, so no item is left
    behind. Siblings past the last chunk get nothing.

    Example:
        >>> chunk_for_position([1, 2, 3, 4, 5], 2, 1)
        [3, 4, 5]
    """
    step = max(1, len(items) // sibling_count)
    start = position * step
    chunk = items[start:start + step]
    if not chunk:
        return []

    following = items[start + step:start + 2 * step]
    if following and len(following) != step:
        chunk = chunk + following
    return chunk


def gen_warehouse_supply(
    ctx: GeneratorContext,
    warehouse: list[Warehouse],
    supplies: list[Supply],
    supply_contracts: list[SupplyContract],
) -> list[WarehouseSupply]:
    """
    Attribute warehouse stock to the supplies that delivered it.

    For every supply, the stock items of its supplier are divided among all
    supplies of that supplier (across all of its contracts) with
    chunk_for_position. Each record carries the item's stock amount and the
    supply's last update time.

    Raises:
        SampleLookupError: If a supply references an unknown contract
    """
    contracts_by_uuid = LookupBuilder.build(supply_contracts, "uuid")
    items_by_supplier = LookupBuilder.build(warehouse, "supplier")

    supplies_by_supplier: dict = {}
    for supply in supplies:
        supplier = contracts_by_uuid.get_single(supply.contract).supplier
        supplies_by_supplier.setdefault(supplier, []).append(supply)

    records = []
    for supplier, siblings in supplies_by_supplier.items():
        items = items_by_supplier.get(supplier)
        for position, supply in enumerate(siblings):
            for item in chunk_for_position(items, len(siblings), position):
                records.append(
                    WarehouseSupply(
                        item=item.uuid,
                        supply=supply.uuid,
                        amount=item.amount,
                        created=supply.meta.updated,
                    )
                )
    return records


def gen_order_service(
    ctx: GeneratorContext,
    orders: list[Order],
    phones: list[Phone],
    service_phone_model: list[ServicePhoneModel],
) -> list[OrderService]:
    """
    Pick one service offered for the order's phone model, at its listed price.

    Raises:
        PreconditionError: If no service is priced for the phone's model
    """
    phones_by_uuid = LookupBuilder.build_unique(phones, "uuid")
    offers_by_model = LookupBuilder.build(service_phone_model, "phone_model")

    records = []
    for order in orders:
        model = phones_by_uuid[order.phone].model
        offers = offers_by_model.get(model)
        if not offers:
            raise PreconditionError(
                f"No Service-PhoneModel relations found for phone model {model}"
            )
        offer = ctx.pick(offers)
        records.append(OrderService(order=order.uuid, service=offer.service, price=offer.price))
    return records


def gen_order_warehouse(
    ctx: GeneratorContext,
    orders: list[Order],
    order_service: list[OrderService],
    services: list[Service],
    component_kinds: list[ComponentKind],
    phones: list[Phone],
    components: list[Component],
    warehouse: list[Warehouse],
) -> list[OrderWarehouse]:
    """
    Reserve one stock item per order.

    Follows order -> service -> implied component kind -> component for the
    phone's model -> warehouse items, and picks one item uniformly. The item
    is recorded with amount 1 at its current price.

    Raises:
        SampleLookupError: If any step of the chain has no match
        PreconditionError: If the component is not stocked
    """
    service_by_order = LookupBuilder.build(order_service, "order")
    services_by_uuid = LookupBuilder.build(services, "uuid")
    kinds_by_name = LookupBuilder.build(component_kinds, "name")
    phones_by_uuid = LookupBuilder.build_unique(phones, "uuid")
    components_by_key = LookupBuilder.build_composite(components, ("kind", "phone_model"))
    items_by_component = LookupBuilder.build(warehouse, "component")

    records = []
    for order in orders:
        service = services_by_uuid.get_single(service_by_order.get_single(order.uuid).service)
        kind_name = ctx.hints.lookup("service_component_kind", service.uuid)
        kind = kinds_by_name.get_single(kind_name)
        model = phones_by_uuid[order.phone].model
        component = components_by_key.get_single((kind.uuid, model))

        items = items_by_component.get(component.uuid)
        if not items:
            raise PreconditionError(f"Component '{component.name}' is not stocked in the warehouse")
        item = ctx.pick(items)
        records.append(OrderWarehouse(order=order.uuid, item=item.uuid, amount=1, price=item.price))
    return records
