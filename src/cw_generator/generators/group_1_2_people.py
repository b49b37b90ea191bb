"""
Group 1-2 Generator: Contracts, catalog joins and personal devices.

Group 1 Tables:
- labor_contract (labor_contract_count, one per distinct person)
- phone_model (one per sample)

Group 2 Tables:
- staff (one per executed labor contract)
- component (kind x phone model grid)
- phone (1 + weighted extra phones per person)
"""

import logging

from .base import GeneratorContext, unique_values
from ..constants import COMPONENTS, PHONE_MODELS
from ..distributions import Bernoulli, UniformChoice, WeightedIndex, digit_string
from ..errors import InsufficientPersonsError
from ..lookup_builder import LookupBuilder
from ..models import (
    Component,
    ComponentKind,
    LaborContract,
    Manufacturer,
    Person,
    Phone,
    PhoneModel,
    Position,
    Staff,
)
from ..types import (
    EXECUTED_CONTRACT,
    LABOR_CONTRACT_SIGNED,
    Color,
    ContractStatus,
    StaffStatus,
)

logger = logging.getLogger(__name__)

PASSPORT_DIGITS = 10
IMEI_DIGITS = 17


# =============================================================================
# Group 1
# =============================================================================


def gen_labor_contract(ctx: GeneratorContext, persons: list[Person]) -> list[LaborContract]:
    """
    Sign ``labor_contract_count`` contracts with distinct persons.

    Persons are shuffled once and the first N taken, so the assignment is
    injective without any retry loop.

    Raises:
        InsufficientPersonsError: If more contracts are requested than persons exist
    """
    count = ctx.config.labor_contract_count
    if count > len(persons):
        raise InsufficientPersonsError(count, len(persons))

    statuses = list(ContractStatus)
    status_weights = WeightedIndex(ctx.config.labor_contract_weights)
    order = ctx.rng.permutation(len(persons))[:count]
    fake = ctx.faker()

    records = []
    for idx in order:
        status = statuses[status_weights.sample(ctx.rng)]
        with unique_values("labor_contract.passport"):
            passport = fake.unique.numerify("#" * PASSPORT_DIGITS)
        records.append(
            LaborContract(
                uuid=ctx.new_uuid(),
                person=persons[int(idx)].uuid,
                passport=passport,
                status=status,
                signed=ctx.now if status in LABOR_CONTRACT_SIGNED else None,
                meta=ctx.meta(),
            )
        )
    return records


def gen_phone_model(ctx: GeneratorContext, manufacturers: list[Manufacturer]) -> list[PhoneModel]:
    """
    One PhoneModel per sample, joined to its manufacturer by name.

    Raises:
        SampleLookupError: If a sample names an unknown manufacturer
    """
    manufacturers_by_name = LookupBuilder.build(manufacturers, "name")
    records = []
    for sample in PHONE_MODELS:
        manufacturer = manufacturers_by_name.get_single(sample["manufacturer"])
        model = PhoneModel(
            uuid=ctx.new_uuid(),
            name=sample["name"],
            description=sample["description"],
            manufacturer=manufacturer.uuid,
        )
        ctx.hints.phone_model_coefficient[model.uuid] = sample["coefficient"]
        records.append(model)
    return records


# =============================================================================
# Group 2
# =============================================================================


def gen_staff(
    ctx: GeneratorContext,
    labor_contracts: list[LaborContract],
    positions: list[Position],
) -> list[Staff]:
    """
    Employ the holders of executed labor contracts.

    Contract status maps to staff status:
    Active -> OnVacation (staff_vacation_chance) or Working,
    Expired -> Suspended, Void -> Fired.
    """
    on_vacation = Bernoulli(ctx.config.staff_vacation_chance)
    position_weights = WeightedIndex(
        [ctx.hints.lookup("position_weight", p.uuid) for p in positions]
    )

    records = []
    for contract in labor_contracts:
        if contract.status not in EXECUTED_CONTRACT:
            continue

        if contract.status is ContractStatus.ACTIVE:
            status = StaffStatus.ON_VACATION if on_vacation.sample(ctx.rng) else StaffStatus.WORKING
        elif contract.status is ContractStatus.EXPIRED:
            status = StaffStatus.SUSPENDED
        else:
            status = StaffStatus.FIRED

        records.append(
            Staff(
                uuid=ctx.new_uuid(),
                contract=contract.uuid,
                position=positions[position_weights.sample(ctx.rng)].uuid,
                status=status,
            )
        )
    logger.debug("Employed %d of %d contract holders", len(records), len(labor_contracts))
    return records


def gen_component(
    ctx: GeneratorContext,
    manufacturers: list[Manufacturer],
    component_kinds: list[ComponentKind],
    phone_models: list[PhoneModel],
) -> list[Component]:
    """
    One Component per sample, resolving kind, model and maker by name.

    Raises:
        SampleLookupError: If any of the three names is unknown
    """
    kinds_by_name = LookupBuilder.build(component_kinds, "name")
    models_by_name = LookupBuilder.build(phone_models, "name")
    manufacturers_by_name = LookupBuilder.build(manufacturers, "name")

    return [
        Component(
            uuid=ctx.new_uuid(),
            name=sample["name"],
            kind=kinds_by_name.get_single(sample["kind"]).uuid,
            phone_model=models_by_name.get_single(sample["phone_model"]).uuid,
            manufacturer=manufacturers_by_name.get_single(sample["manufacturer"]).uuid,
        )
        for sample in COMPONENTS
    ]


def gen_phone(
    ctx: GeneratorContext,
    persons: list[Person],
    phone_models: list[PhoneModel],
) -> list[Phone]:
    """Give every person one phone plus a weighted number of extra ones."""
    fake = ctx.faker("en_US")
    extra_phones = WeightedIndex(ctx.config.phone_count)
    models = UniformChoice(phone_models)
    colors = UniformChoice(list(Color))

    records = []
    extra_counts = extra_phones.sample_n(ctx.rng, len(persons))
    for person, extra in zip(persons, extra_counts):
        for _ in range(1 + extra):
            records.append(
                Phone(
                    uuid=ctx.new_uuid(),
                    person=person.uuid,
                    imei=digit_string(ctx.rng, IMEI_DIGITS),
                    wifi=fake.mac_address(),
                    bluetooth=fake.mac_address(),
                    model=models.sample(ctx.rng).uuid,
                    color=colors.sample(ctx.rng),
                    meta=ctx.meta(),
                )
            )
    return records
