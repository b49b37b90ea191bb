"""
Tests for LookupBuilder indexes, Faker uniqueness errors and sample hints.
"""

from uuid import uuid4

import pytest
from faker.exceptions import UniquenessException

from cw_generator.errors import SampleLookupError, UniquenessExhaustedError
from cw_generator.generators import SampleHints, unique_values
from cw_generator.lookup_builder import LookupBuilder
from cw_generator.models import Manufacturer


@pytest.fixture
def manufacturers():
    return [
        Manufacturer(uuid=uuid4(), name="Apple", country="US"),
        Manufacturer(uuid=uuid4(), name="Samsung", country="KR"),
        Manufacturer(uuid=uuid4(), name="FoxCon", country="TW"),
        Manufacturer(uuid=uuid4(), name="Clone", country="US"),
    ]


class TestLookupBuilder:
    """Tests for LookupIndex / LookupBuilder."""

    def test_build_groups_in_order(self, manufacturers):
        by_country = LookupBuilder.build(manufacturers, "country")
        assert len(by_country) == 3
        assert "KR" in by_country
        assert [m.name for m in by_country.get("US")] == ["Apple", "Clone"]
        assert by_country.get("DE") == []

    def test_get_single_hit(self, manufacturers):
        by_name = LookupBuilder.build(manufacturers, "name")
        assert by_name.get_single("Samsung") is manufacturers[1]

    def test_get_single_miss(self, manufacturers):
        by_name = LookupBuilder.build(manufacturers, "name")
        with pytest.raises(SampleLookupError, match="Nokia"):
            by_name.get_single("Nokia")

    def test_get_single_ambiguous(self, manufacturers):
        by_country = LookupBuilder.build(manufacturers, "country")
        with pytest.raises(SampleLookupError, match="found 2"):
            by_country.get_single("US")

    def test_build_composite(self, manufacturers):
        index = LookupBuilder.build_composite(manufacturers, ("name", "country"))
        assert index.get_single(("FoxCon", "TW")) is manufacturers[2]

    def test_build_unique_rejects_duplicates(self, manufacturers):
        with pytest.raises(ValueError):
            LookupBuilder.build_unique(manufacturers, "country")
        assert len(LookupBuilder.build_unique(manufacturers, "uuid")) == 4


class TestUniqueValues:
    """Tests for unique_values."""

    def test_converts_faker_exhaustion(self):
        with pytest.raises(UniquenessExhaustedError, match="'person.email'") as excinfo:
            with unique_values("person.email"):
                raise UniquenessException("Got duplicated values after 1,000 iterations.")
        assert isinstance(excinfo.value.__cause__, UniquenessException)

    def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            with unique_values("person.email"):
                raise KeyError("x")


class TestSampleHints:
    """Tests for SampleHints.lookup."""

    def test_lookup(self):
        hints = SampleHints()
        key = uuid4()
        hints.phone_model_coefficient[key] = 1.3
        assert hints.lookup("phone_model_coefficient", key) == 1.3
        with pytest.raises(SampleLookupError):
            hints.lookup("phone_model_coefficient", uuid4())
