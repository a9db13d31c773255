"""Tests for SettingsRegistry batch operations."""
import logging

import pytest

from settingsnapshot import RegistrySnapshot, SettingsRegistry


class TestLookup:
    """Container behaviour."""

    def test_names_in_discovery_order(self, service_config):
        registry = SettingsRegistry(service_config)
        assert registry.names == ['timeout', 'name']
        assert len(registry) == 2

    def test_iteration_yields_settings(self, service_config):
        registry = SettingsRegistry(service_config)
        assert [s.name for s in registry] == ['timeout', 'name']

    def test_contains_and_getitem(self, render_config):
        registry = SettingsRegistry(render_config)
        assert 'retries' in registry
        assert 'version' not in registry
        assert registry['retries'].value == 3

    def test_unknown_name(self, render_config):
        registry = SettingsRegistry(render_config)
        with pytest.raises(KeyError, match="version"):
            registry['version']
        assert registry.get('version') is None

    def test_none_target(self):
        with pytest.raises(ValueError):
            SettingsRegistry(None)

    def test_target_kept(self, service_config):
        assert SettingsRegistry(service_config).target is service_config


class TestBatchOperations:
    """reload_all / reset_all sweeps."""

    def test_changed_lists_only_modified(self, worker_config):
        registry = SettingsRegistry(worker_config)
        assert registry.changed() == []
        assert not registry.is_changed

        worker_config.debug = True
        assert [s.name for s in registry.changed()] == ['debug']
        assert registry.is_changed

    def test_reload_all(self, worker_config):
        registry = SettingsRegistry(worker_config)
        worker_config.num_workers = 16
        worker_config.learning_rate = 0.5

        registry.reload_all()

        assert not registry.is_changed
        assert registry['num_workers'].default == 16
        assert registry['learning_rate'].default == 0.5

    def test_reset_all(self, worker_config):
        registry = SettingsRegistry(worker_config)
        worker_config.num_workers = 16
        worker_config.debug = True

        registry.reset_all()

        assert worker_config.num_workers == 8
        assert worker_config.debug is False
        assert not registry.is_changed

    def test_reset_all_continues_after_failure(self, render_config, caplog):
        """One failing setting does not stop the others from being reset."""
        registry = SettingsRegistry(render_config)
        registry['retries'].default = -1
        render_config.scale = 2.0
        render_config.mode = "slow"

        with caplog.at_level(logging.WARNING):
            registry.reset_all()

        assert render_config.scale == 1.0
        assert render_config.mode == "fast"
        assert render_config.retries == 3
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1

    def test_single_reload_and_reset(self, service_config):
        registry = SettingsRegistry(service_config)
        service_config.timeout = 60
        service_config.name = "api"

        registry.reload('timeout')
        registry.reset('name')

        assert registry['timeout'].default == 60
        assert service_config.name == "svc"
        assert not registry.is_changed

    def test_logger_passed_to_settings(self, service_config, caplog):
        registry = SettingsRegistry(service_config, logger=logging.getLogger('tests.registry'))
        with caplog.at_level(logging.WARNING):
            registry['timeout'].value = "soon"
        assert [r.name for r in caplog.records if r.levelno == logging.WARNING] == ['tests.registry']


class TestDiagnostics:
    """snapshot() and describe()."""

    def test_snapshot(self, service_config):
        registry = SettingsRegistry(service_config)
        service_config.timeout = 45

        snapshot = registry.snapshot()

        assert isinstance(snapshot, RegistrySnapshot)
        assert snapshot.target_type.endswith('ServiceConfig')
        assert snapshot.changed_names == ('timeout',)
        assert snapshot['timeout'].value == 45
        assert snapshot['timeout'].default == 30
        assert snapshot['name'].type_name == 'str'

    def test_snapshot_detached_from_target(self, service_config):
        registry = SettingsRegistry(service_config)
        snapshot = registry.snapshot()
        service_config.timeout = 99
        assert snapshot['timeout'].value == 30

    def test_describe(self, service_config):
        registry = SettingsRegistry(service_config)
        service_config.name = "api"
        lines = registry.describe()
        assert len(lines) == 2
        assert lines[0].endswith('ServiceConfig.timeout = 30')
        assert lines[1].endswith('ServiceConfig.name* = api')

    def test_repr(self, service_config):
        registry = SettingsRegistry(service_config)
        assert repr(registry) == "SettingsRegistry(ServiceConfig, settings=['timeout', 'name'])"
