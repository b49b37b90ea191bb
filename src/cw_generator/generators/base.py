"""
Shared state for the group generators.

This module provides:
- SampleHints: hint values captured when records are materialised from the
  sample catalogs, keyed by the generated record's UUID
- GeneratorContext: config, seeded randomness and hints threaded through
  every generator call
- unique_values: turns Faker uniqueness exhaustion into a generation error
- role helpers used by generators that need staff holding a given role

Design Principles:
- Generators are plain functions: (ctx, *upstream collections) -> new list
- The context owns all randomness, so a seed reproduces a whole run
- Upstream collections are read-only; generators never mutate them
"""

import hashlib
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable
from uuid import UUID

import numpy as np
from faker import Faker
from faker.exceptions import UniquenessException

from ..config import GenerationConfig
from ..errors import MissingRoleError, SampleLookupError, UniquenessExhaustedError
from ..lookup_builder import LookupBuilder
from ..models import Account, Staff
from ..types import AccountRole, MetaTime, utc_now

# Supplier locales and the ISO country each one stands for
SUPPLIER_LOCALES = {
    "en_US": "US",
    "zh_CN": "CN",
    "zh_TW": "TW",
}
DEFAULT_LOCALE = "en_US"


@contextmanager
def unique_values(column: str):
    """
    Scope for draws through a Faker ``.unique`` proxy.

    Raises:
        UniquenessExhaustedError: If Faker ran out of fresh values for ``column``
    """
    try:
        yield
    except UniquenessException as exc:
        raise UniquenessExhaustedError(f"Could not draw a unique value for '{column}': {exc}") from exc


def sha256_hasher(password: str) -> str:
    """Default password hasher; real deployments pass their own."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


@dataclass
class SampleHints:
    """
    Catalog hints for generated records, keyed by record UUID.

    Filled once by the group 0/1 generators so later generators never need
    to match a record's name back into the catalogs.
    """

    position_role: dict[UUID, AccountRole] = field(default_factory=dict)
    position_weight: dict[UUID, float] = field(default_factory=dict)
    component_kind_price: dict[UUID, float] = field(default_factory=dict)
    service_base_price: dict[UUID, float] = field(default_factory=dict)
    service_component_kind: dict[UUID, str] = field(default_factory=dict)
    phone_model_coefficient: dict[UUID, float] = field(default_factory=dict)

    def lookup(self, table: str, uuid: UUID):
        """
        Read one hint table.

        Raises:
            SampleLookupError: If the record was not materialised from a sample
        """
        values = getattr(self, table)
        if uuid not in values:
            raise SampleLookupError(f"No '{table}' hint recorded for record {uuid}")
        return values[uuid]


@dataclass
class GeneratorContext:
    """
    Everything a generator needs besides its upstream collections.

    Attributes:
        config: Generation parameters
        seed: Seed used for rng and Faker (None for an unseeded run)
        rng: NumPy random generator, the single randomness stream
        fake: Multi-locale Faker proxy (index by locale, e.g. fake["zh_CN"])
        now: Timestamp stamped on every record of the run
        hints: Catalog hints keyed by record UUID
        password_hasher: Turns a plain password into the stored value
    """

    config: GenerationConfig
    seed: int | None
    rng: np.random.Generator
    fake: Faker
    now: datetime
    hints: SampleHints = field(default_factory=SampleHints)
    password_hasher: Callable[[str], str] = sha256_hasher

    @classmethod
    def create(
        cls,
        config: GenerationConfig | None = None,
        seed: int | None = None,
        now: datetime | None = None,
        password_hasher: Callable[[str], str] = sha256_hasher,
    ) -> "GeneratorContext":
        """Build a context with a validated config and seeded randomness."""
        config = (config or GenerationConfig()).validate()
        fake = Faker(list(SUPPLIER_LOCALES))
        if seed is not None:
            fake.seed_instance(seed)
        return cls(
            config=config,
            seed=seed,
            rng=np.random.default_rng(seed),
            fake=fake,
            now=now or utc_now(),
            password_hasher=password_hasher,
        )

    def faker(self, locale: str = DEFAULT_LOCALE) -> Faker:
        """Single-locale Faker generator."""
        return self.fake[locale]

    def new_uuid(self) -> UUID:
        """Random version 4 UUID drawn from the run's rng."""
        return UUID(bytes=self.rng.bytes(16), version=4)

    def meta(self) -> MetaTime:
        return MetaTime.at(self.now)

    def pick(self, values: list):
        """Uniformly pick one element of a non-empty list."""
        return values[int(self.rng.integers(len(values)))]


def staff_with_role(
    staff: list[Staff],
    accounts: list[Account],
    role: AccountRole,
    holders: str,
) -> list[Staff]:
    """
    Staff members whose account holds ``role``.

    Raises:
        MissingRoleError: If nobody on staff holds the role
        SampleLookupError: If a staff member has no account
    """
    accounts_by_staff = LookupBuilder.build(accounts, "staff")
    matched = []
    for member in staff:
        account = accounts_by_staff.get_single(member.uuid)
        if account.role is role:
            matched.append(member)

    if not matched:
        raise MissingRoleError(role.value, holders)
    return matched
