"""Tests for the precondition checks."""

import pytest

from mysql_backup.checks import check_preconditions
from mysql_backup.errors import ConfigError, PrivilegeError, UsageError
from mysql_backup.modes import BackupMode


class TestCredentials:
    @pytest.mark.parametrize("mode", [None, *BackupMode])
    def test_missing_credentials_fails_first(self, config, tmp_path, mode):
        """A missing credentials file is reported whatever the mode."""
        config.credentials_file = tmp_path / "missing.cnf"
        with pytest.raises(ConfigError):
            check_preconditions(config, mode)

    def test_credentials_checked_before_privileges(self, config, tmp_path, monkeypatch):
        monkeypatch.setattr("os.geteuid", lambda: 1000)
        config.require_root = True
        config.credentials_file = tmp_path / "missing.cnf"
        with pytest.raises(ConfigError):
            check_preconditions(config, BackupMode.ALL)


class TestPrivileges:
    def test_non_root_rejected(self, config, monkeypatch):
        monkeypatch.setattr("os.geteuid", lambda: 1000)
        config.require_root = True
        with pytest.raises(PrivilegeError):
            check_preconditions(config, BackupMode.DATABASES)

    def test_root_accepted(self, config, monkeypatch):
        monkeypatch.setattr("os.geteuid", lambda: 0)
        config.require_root = True
        assert check_preconditions(config, BackupMode.DATABASES) is BackupMode.DATABASES

    def test_check_can_be_disabled(self, config, monkeypatch):
        monkeypatch.setattr("os.geteuid", lambda: 1000)
        assert check_preconditions(config, BackupMode.PURGE) is BackupMode.PURGE


class TestModes:
    def test_missing_mode(self, config):
        with pytest.raises(UsageError):
            check_preconditions(config, None)

    def test_help_is_not_success(self, config):
        with pytest.raises(UsageError):
            check_preconditions(config, BackupMode.HELP)

    @pytest.mark.parametrize("mode", [m for m in BackupMode if m is not BackupMode.HELP])
    def test_valid_modes(self, config, mode):
        assert check_preconditions(config, mode) is mode
