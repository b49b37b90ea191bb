"""
Tests for GenerationConfig validation and YAML loading.
"""

import pytest

from cw_generator.config import GenerationConfig, load_config
from cw_generator.errors import ConfigError


class TestGenerationConfig:
    """Tests for defaults and validate()."""

    def test_defaults_are_valid(self):
        config = GenerationConfig().validate()
        assert config.person_count == 250
        assert config.supplier_count == 50
        assert config.labor_contract_count == 25
        assert config.labor_contract_weights == (2, 2, 14, 1, 1, 1)
        assert config.account_status_weights == (18, 1, 1)
        assert config.phone_count == (10, 1)
        assert config.warehouse_stock == (1, 3)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"person_count": -1},
            {"staff_vacation_chance": 1.5},
            {"supply_contract_chance": -0.2},
            {"position_salary_scatter": 1.0},
            {"labor_contract_weights": (1, 2, 3)},
            {"account_status_weights": (1, 1)},
            {"phone_count": ()},
            {"warehouse_stock": (5, 2)},
            {"warehouse_variations": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigError):
            GenerationConfig(**overrides).validate()

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigError, match="persons"):
            GenerationConfig.from_dict({"persons": 10})

    def test_from_dict_coerces_lists(self):
        config = GenerationConfig.from_dict({"phone_count": [5, 3, 1], "warehouse_stock": [2, 4]})
        assert config.phone_count == (5, 3, 1)
        assert config.warehouse_stock == (2, 4)

    def test_to_dict_round_trip(self):
        config = GenerationConfig(person_count=12)
        assert GenerationConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_overrides(self, tmp_path):
        path = tmp_path / "shop.yaml"
        path.write_text(
            "person_count: 40\n"
            "labor_contract_weights: [0, 0, 1, 0, 0, 0]\n"
            "order_not_owner_chance: 0.5\n"
        )
        config = load_config(path)
        assert config.person_count == 40
        assert config.labor_contract_weights == (0, 0, 1, 0, 0, 0)
        assert config.order_not_owner_chance == 0.5
        assert config.supplier_count == 50

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GenerationConfig()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_config(path)
