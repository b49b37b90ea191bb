"""
Tests for dependency ordering and whole-dataset properties of gen_full.
"""

import pytest

from cw_generator.constants import SERVICES
from cw_generator.errors import GenerationError
from cw_generator.models import COLLECTION_TYPES, COLLECTIONS
from cw_generator.pipeline import ENTITY_GRAPH, dependency_groups, gen_full, iter_groups
from cw_generator.types import LABOR_CONTRACT_SIGNED, SUPPLY_SIGNED

from conftest import FIXED_NOW, SEED, full_config


def group_of() -> dict[str, int]:
    return {name: i for i, group in enumerate(dependency_groups()) for name in group}


class TestDependencyGroups:
    """Tests for dependency_groups()."""

    def test_covers_every_collection_once(self):
        names = [name for group in dependency_groups() for name in group]
        assert sorted(names) == sorted(COLLECTIONS)

    def test_upstreams_come_first(self):
        groups = group_of()
        for name, (_, upstream) in ENTITY_GRAPH.items():
            for dep in upstream:
                assert groups[dep] < groups[name], (dep, name)

    def test_foreign_keys_point_to_earlier_groups(self):
        groups = group_of()
        for name, record_type in COLLECTION_TYPES.items():
            for target in record_type.REFERENCES.values():
                assert groups[target] < groups[name], (name, target)

    def test_reference_data_is_group_zero(self):
        assert set(dependency_groups()[0]) == {
            "component_kind",
            "service",
            "position",
            "manufacturer",
            "person",
            "supplier",
        }

    def test_cycle_rejected(self):
        graph = {
            "a": (None, ("b",)),
            "b": (None, ("a",)),
        }
        with pytest.raises(GenerationError, match="cycle"):
            dependency_groups(graph)

    def test_unknown_upstream_rejected(self):
        with pytest.raises(GenerationError, match="unknown collection 'ghost'"):
            dependency_groups({"a": (None, ("ghost",))})


class TestGenFull:
    """Tests for the generated dataset."""

    def test_every_collection_populated(self, dataset):
        for name, records in dataset.collections():
            assert records, name

    def test_referential_closure(self, dataset):
        groups = group_of()
        uuids = {
            name: {r.uuid for r in dataset.get(name)}
            for name in COLLECTIONS
            if "uuid" in COLLECTION_TYPES[name].__dataclass_fields__
        }
        for name, records in dataset.collections():
            for field_name, target in COLLECTION_TYPES[name].REFERENCES.items():
                assert groups[target] < groups[name]
                for record in records:
                    assert getattr(record, field_name) in uuids[target], (name, field_name)

    def test_identities_unique(self, dataset):
        seen = set()
        for name in COLLECTIONS:
            for record in dataset.get(name):
                if hasattr(record, "uuid"):
                    assert record.uuid not in seen
                    assert record.uuid.version == 4
                    seen.add(record.uuid)

    def test_labor_contracts_injective(self, dataset):
        people = [c.person for c in dataset.labor_contract]
        assert len(people) == len(set(people)) == full_config().labor_contract_count

    def test_signed_coupling(self, dataset):
        for contract in dataset.labor_contract:
            assert (contract.signed is not None) == (contract.status in LABOR_CONTRACT_SIGNED)
        for supply in dataset.supply:
            assert (supply.signed is not None) == (supply.status in SUPPLY_SIGNED)

    def test_one_service_and_item_per_order(self, dataset):
        orders = {o.uuid for o in dataset.order}
        assert [s.order for s in dataset.order_service] == [o.uuid for o in dataset.order]
        assert {w.order for w in dataset.order_warehouse} == orders

    def test_order_item_fits_phone_and_service(self, dataset):
        phone_model = {p.uuid: p.model for p in dataset.phone}
        order_phone = {o.uuid: o.phone for o in dataset.order}
        item_component = {w.uuid: w.component for w in dataset.warehouse}
        item_price = {w.uuid: w.price for w in dataset.warehouse}
        component_model = {c.uuid: c.phone_model for c in dataset.component}

        for row in dataset.order_warehouse:
            component = item_component[row.item]
            assert component_model[component] == phone_model[order_phone[row.order]]
            assert row.amount == 1
            assert row.price == item_price[row.item]

    def test_reproducible_with_seed(self, dataset):
        again = gen_full(full_config(), seed=SEED, now=FIXED_NOW)
        assert again == dataset

    def test_different_seed_differs(self, dataset):
        other = gen_full(full_config(), seed=SEED + 1, now=FIXED_NOW)
        assert other.person != dataset.person

    def test_iter_groups_order(self, dataset):
        seen = []
        for index, collections in iter_groups(dataset):
            for name, records in collections:
                assert records is dataset.get(name)
                seen.append(name)
        assert sorted(seen) == sorted(COLLECTIONS)

    def test_row_counts(self, dataset):
        counts = dataset.row_counts()
        assert list(counts) == list(COLLECTIONS)
        assert sum(counts.values()) == dataset.total_rows()
        assert counts["component"] == 30

    def test_order_service_priced_for_phone_model(self, dataset):
        offers = {(row.service, row.phone_model): row.price for row in dataset.service_phone_model}
        phone_model = {p.uuid: p.model for p in dataset.phone}
        order_phone = {o.uuid: o.phone for o in dataset.order}

        for row in dataset.order_service:
            key = (row.service, phone_model[order_phone[row.order]])
            assert key in offers, key
            assert row.price == offers[key]

    def test_order_item_kind_follows_service(self, dataset):
        kind_by_name = {k.name: k.uuid for k in dataset.component_kind}
        implied_kind = {
            s.uuid: kind_by_name[sample["component_kind"]]
            for s in dataset.service
            for sample in SERVICES
            if sample["name"] == s.name
        }
        service_of = {row.order: row.service for row in dataset.order_service}
        item_component = {w.uuid: w.component for w in dataset.warehouse}
        component_kind = {c.uuid: c.kind for c in dataset.component}

        for row in dataset.order_warehouse:
            kind = component_kind[item_component[row.item]]
            assert kind == implied_kind[service_of[row.order]]
