"""
Tests for the dump and push sinks and the command line entry point.

Push tests use an in-memory store; no database is needed.
"""

import json
import threading

import pytest

from cw_generator.cli import main
from cw_generator.config import GenerationConfig
from cw_generator.errors import MissingRoleError, PushError
from cw_generator.models import COLLECTIONS
from cw_generator.pipeline import dependency_groups, gen_full
from cw_generator.sinks import dump_dataset, load_dataset, push_dataset
from cw_generator.sinks.push import record_columns

from conftest import FIXED_NOW


class MemoryStore:
    """RecordStore that keeps inserts in memory, optionally failing on one table."""

    def __init__(self, fail_table: str | None = None):
        self.fail_table = fail_table
        self.inserted: list[tuple[str, object]] = []
        self._lock = threading.Lock()

    def insert(self, table, record):
        if table == self.fail_table:
            raise RuntimeError(f"duplicate key value violates unique constraint on {table}")
        with self._lock:
            self.inserted.append((table, record))


class TestDump:
    """Tests for dump_dataset / load_dataset."""

    def test_all_keys_non_empty(self, dataset, tmp_path):
        path = dump_dataset(dataset, tmp_path / "dataset.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert list(data) == list(COLLECTIONS)
        for name in COLLECTIONS:
            assert isinstance(data[name], list)
            assert data[name], name

    def test_default_options_fill_every_collection(self, tmp_path):
        # Default staffing leaves a role empty for a few seeds in a hundred
        for seed in range(6):
            try:
                dataset = gen_full(GenerationConfig(), seed=seed, now=FIXED_NOW)
            except MissingRoleError:
                continue
            break
        else:
            pytest.fail("default options never staffed every role")

        data = json.loads(dump_dataset(dataset, tmp_path / "defaults.json").read_text(encoding="utf-8"))
        assert list(data) == list(COLLECTIONS)
        assert all(data[name] for name in COLLECTIONS)
        assert len(data["person"]) == GenerationConfig().person_count

    def test_field_encoding(self, dataset, tmp_path):
        path = dump_dataset(dataset, tmp_path / "dataset.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        account = data["account"][0]
        assert account["uuid"] == str(dataset.account[0].uuid)
        assert account["role"] == dataset.account[0].role.value
        assert set(account["meta"]) == {"created", "updated"}
        assert data["position"][0]["salary"] == str(dataset.position[0].salary)

    def test_round_trip(self, dataset, tmp_path):
        path = dump_dataset(dataset, tmp_path / "dataset.json")
        assert load_dataset(path) == dataset

    def test_load_rejects_missing_collections(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"person": []}))
        with pytest.raises(ValueError, match="missing"):
            load_dataset(path)


class TestPush:
    """Tests for push_dataset."""

    def test_pushes_everything_in_group_order(self, dataset):
        store = MemoryStore()
        inserted = push_dataset(dataset, store, max_workers=4)

        assert inserted == dataset.total_rows() == len(store.inserted)

        table_group = {}
        for index, group in enumerate(dependency_groups()):
            for name in group:
                table_group[dataset.get(name)[0].TABLE] = index
        groups_seen = [table_group[table] for table, _ in store.inserted]
        assert groups_seen == sorted(groups_seen)

    def test_first_failure_aborts(self, dataset):
        store = MemoryStore(fail_table="Account")
        with pytest.raises(PushError) as excinfo:
            push_dataset(dataset, store, max_workers=4)

        error = excinfo.value
        assert error.collection == "account"
        assert error.record in dataset.account
        assert isinstance(error.__cause__, RuntimeError)

        failed_group = error.group
        later = {
            dataset.get(name)[0].TABLE
            for group in dependency_groups()[failed_group + 1:]
            for name in group
        }
        assert not any(table in later for table, _ in store.inserted)

    def test_rejects_bad_worker_count(self, dataset):
        with pytest.raises(ValueError):
            push_dataset(dataset, MemoryStore(), max_workers=0)

    def test_record_columns(self, dataset):
        account = dataset.account[0]
        columns, values = record_columns(account)
        assert "meta" not in columns
        assert columns == ["uuid", "staff", "login", "password", "role", "status"]
        assert values[4] == account.role.value


class TestCli:
    """Tests for the cw-generate entry point."""

    def test_dump(self, tmp_path, capsys):
        config = tmp_path / "shop.yaml"
        config.write_text("person_count: 120\nlabor_contract_count: 60\n")
        output = tmp_path / "out.json"

        assert main(["--config", str(config), "--seed", "3", "dump", str(output)]) == 0
        assert set(json.loads(output.read_text(encoding="utf-8"))) == set(COLLECTIONS)
        assert "Generation Summary" in capsys.readouterr().out

    def test_generation_error_exit_code(self, tmp_path, capsys):
        config = tmp_path / "shop.yaml"
        config.write_text("person_count: 5\nlabor_contract_count: 20\n")

        assert main(["--config", str(config), "dump", str(tmp_path / "out.json")]) == 1
        assert "Insufficient unique persons" in capsys.readouterr().err

    def test_bad_config_exit_code(self, tmp_path, capsys):
        config = tmp_path / "shop.yaml"
        config.write_text("persons: 5\n")

        assert main(["--config", str(config), "dump", str(tmp_path / "out.json")]) == 1
        assert "Unknown config option" in capsys.readouterr().err

    def test_unwritable_output_exit_code(self, tmp_path, capsys):
        config = tmp_path / "shop.yaml"
        config.write_text("person_count: 120\nlabor_contract_count: 60\n")
        output = tmp_path / "missing" / "out.json"

        assert main(["--config", str(config), "--seed", "3", "dump", str(output)]) == 1
        assert "could not write dump" in capsys.readouterr().err

    def test_rejects_zero_workers(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["push", "-u", "postgres", "-p", "secret", "--workers", "0"])
        assert excinfo.value.code == 2
        assert "--workers must be at least 1" in capsys.readouterr().err
