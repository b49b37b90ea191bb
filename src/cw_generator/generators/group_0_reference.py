"""
Group 0 Generator: Reference data and independent entities.

Group 0 Tables:
- component_kind (one per sample, 5)
- service (one per sample, 5)
- position (one per sample, 5, salary jittered)
- manufacturer (one per sample, 3)
- person (person_count, Faker en_US)
- supplier (supplier_count, Faker en_US / zh_CN / zh_TW)

Sample-backed generators also record catalog hints (base prices, implied
roles, implied component kinds) in ``ctx.hints`` keyed by the new record's
UUID.
"""

import logging

from .base import SUPPLIER_LOCALES, GeneratorContext, unique_values
from ..constants import COMPONENT_KINDS, MANUFACTURERS, POSITIONS, SERVICES
from ..distributions import uniform_band
from ..models import ComponentKind, Manufacturer, Person, Position, Service, Supplier
from ..types import money

logger = logging.getLogger(__name__)

IBAN_DIGITS = 30


def gen_component_kind(ctx: GeneratorContext) -> list[ComponentKind]:
    """One ComponentKind per sample; base price kept as a hint."""
    records = []
    for sample in COMPONENT_KINDS:
        kind = ComponentKind(
            uuid=ctx.new_uuid(),
            name=sample["name"],
            details=sample["details"],
        )
        ctx.hints.component_kind_price[kind.uuid] = sample["base_price"]
        records.append(kind)
    return records


def gen_service(ctx: GeneratorContext) -> list[Service]:
    """One Service per sample; base price and implied component kind kept as hints."""
    records = []
    for sample in SERVICES:
        service = Service(
            uuid=ctx.new_uuid(),
            name=sample["name"],
            description=sample["description"],
            meta=ctx.meta(),
        )
        ctx.hints.service_base_price[service.uuid] = sample["base_price"]
        ctx.hints.service_component_kind[service.uuid] = sample["component_kind"]
        records.append(service)
    return records


def gen_positions(ctx: GeneratorContext) -> list[Position]:
    """
    One Position per sample with a jittered salary.

    The salary is drawn uniformly from
    ``[base - base*scatter, base + base*scatter]`` where scatter is
    ``position_salary_scatter``.
    """
    scatter = ctx.config.position_salary_scatter
    records = []
    for sample in POSITIONS:
        salary = uniform_band(ctx.rng, float(sample["salary"]), scatter)
        position = Position(
            uuid=ctx.new_uuid(),
            name=sample["name"],
            details=None,
            salary=money(salary),
            meta=ctx.meta(),
        )
        ctx.hints.position_role[position.uuid] = sample["role"]
        ctx.hints.position_weight[position.uuid] = sample["weight"]
        records.append(position)
    return records


def gen_manufacturer(ctx: GeneratorContext) -> list[Manufacturer]:
    return [
        Manufacturer(uuid=ctx.new_uuid(), name=sample["name"], country=sample["country"])
        for sample in MANUFACTURERS
    ]


def gen_person(ctx: GeneratorContext) -> list[Person]:
    """
    Generate ``person_count`` people.

    Email and phone carry UNIQUE constraints, so both are drawn through
    Faker's ``unique`` proxy.

    Raises:
        UniquenessExhaustedError: If Faker keeps repeating emails or phones
    """
    fake = ctx.faker("en_US")
    records = []
    with unique_values("person.email/phone"):
        for _ in range(ctx.config.person_count):
            records.append(
                Person(
                    uuid=ctx.new_uuid(),
                    first_name=fake.first_name(),
                    middle_name=None,
                    last_name=fake.last_name(),
                    email=fake.unique.free_email(),
                    phone=fake.unique.basic_phone_number(),
                    meta=ctx.meta(),
                )
            )
    logger.debug("Generated %d persons", len(records))
    return records


def gen_supplier(ctx: GeneratorContext) -> list[Supplier]:
    """
    Generate ``supplier_count`` suppliers across the supplier locales.

    Each supplier draws its locale uniformly; name, SWIFT code and address
    come from that locale's Faker. The IBAN is the country code followed by
    30 random digits, so its checksum is deliberately invalid.

    Raises:
        UniquenessExhaustedError: If no fresh IBAN could be drawn
    """
    locales = list(SUPPLIER_LOCALES)
    records = []
    for _ in range(ctx.config.supplier_count):
        locale = ctx.pick(locales)
        country = SUPPLIER_LOCALES[locale]
        fake = ctx.faker(locale)

        with unique_values("supplier.iban"):
            iban = country + fake.unique.numerify("#" * IBAN_DIGITS)
        address = (
            f"{country} {fake.postcode()}, {fake.city()}, {fake.street_address()}"
        )
        records.append(
            Supplier(
                uuid=ctx.new_uuid(),
                name=fake.company(),
                iban=iban,
                swift=fake.swift(),
                address=address,
                country=country,
            )
        )
    logger.debug("Generated %d suppliers", len(records))
    return records
