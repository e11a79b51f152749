"""Tests for database and table enumeration."""

import pytest

from conftest import FakeRunner
from mysql_backup.enumerator import Enumerator, table_header
from mysql_backup.errors import EnumerationError, TableEnumerationError


def test_list_databases_in_order(config):
    runner = FakeRunner({"mysql": [], "information_schema": [], "shop": []})
    assert Enumerator(config, runner).list_databases() == ["mysql", "information_schema", "shop"]
    assert runner.calls == ["/usr/bin/mysql --skip-column-names <<< show databases;"]


def test_list_tables_drops_header_artifact(config):
    runner = FakeRunner({"shop": [table_header("shop"), "orders", "", "customers"]})
    assert Enumerator(config, runner).list_tables("shop") == ["orders", "customers"]


def test_list_tables_of_empty_database(config):
    assert Enumerator(config, FakeRunner({"empty": []})).list_tables("empty") == []


def test_database_listing_failure(config):
    runner = FakeRunner({"shop": []})
    runner.failures["show databases"] = "ERROR 1045: Access denied"
    with pytest.raises(EnumerationError) as excinfo:
        Enumerator(config, runner).list_databases()
    assert excinfo.value.exit_code == 4


def test_table_listing_failure(config):
    runner = FakeRunner({"shop": ["orders"]})
    runner.failures["show tables"] = "ERROR 1049: Unknown database"
    with pytest.raises(TableEnumerationError) as excinfo:
        Enumerator(config, runner).list_tables("shop")
    assert excinfo.value.exit_code == 5


def test_client_reads_configured_credentials_file(config, tmp_path):
    custom = tmp_path / "backup.cnf"
    custom.write_text("[client]\nuser=backup\n")
    config.credentials_file = custom
    runner = FakeRunner({"shop": ["orders"]})

    enumerator = Enumerator(config, runner)
    enumerator.list_databases()
    enumerator.list_tables("shop")

    assert [command[1] for command in runner.commands] == [f"--defaults-extra-file={custom}"] * 2
