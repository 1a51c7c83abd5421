"""
Unit Tests for the Registry Environment Variables Provider

Tests construction, loading, failure handling, publishing and the
builder registration helpers.

Author: registry_env Project
License: MIT
"""

import threading

import pytest
from unittest.mock import Mock

from registry_env.config.builder import ConfigurationBuilder
from registry_env.core.errors import InvalidArgument, LoadFailure
from registry_env.providers.registry_env import (
    RegistryEnvironmentVariablesProvider,
    RegistryEnvironmentVariablesSource,
    add_registry_environment_variables,
)
from registry_env.stores.base import EnvironmentVariableTarget
from registry_env.stores.memory import InMemoryEnvironmentStore


@pytest.fixture
def store():
    return InMemoryEnvironmentStore(
        user={
            "NestedTest__NestedProperty2": "2024-01-01T00:00:00Z",
            "MYSQLCONNSTR_main": "server=x",
            "APP_NestedTest__NestedProperty1": "v",
            "OTHER_X": "v2",
        },
        machine={"Property1": "machine-value"},
    )


class FailingStore:
    """Store whose enumeration always fails."""

    def read(self, target):
        raise PermissionError("access denied")


class TestConstruction:
    """Test suite for provider construction."""

    @pytest.mark.parametrize("target", [
        EnvironmentVariableTarget.USER,
        EnvironmentVariableTarget.MACHINE,
        "User",
        "Machine",
    ])
    def test_supported_targets(self, target):
        """Test that User and Machine are accepted."""
        provider = RegistryEnvironmentVariablesProvider(target)

        assert provider.target in (EnvironmentVariableTarget.USER, EnvironmentVariableTarget.MACHINE)

    @pytest.mark.parametrize("target", [
        EnvironmentVariableTarget.PROCESS, "Process", "user", 2, None,
    ])
    def test_unsupported_target_raises(self, target):
        """Test that any other target fails with InvalidArgument."""
        with pytest.raises(InvalidArgument) as exc_info:
            RegistryEnvironmentVariablesProvider(target)

        assert exc_info.value.param_name == "target"
        assert isinstance(exc_info.value, ValueError)

    def test_no_io_at_construction(self):
        """Test that construction does not touch the store."""
        store = Mock()

        RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)

        store.read.assert_not_called()

    def test_str_without_prefix(self):
        """Test the identity string without a prefix."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER)

        assert str(provider) == "RegistryEnvironmentVariablesProvider"

    def test_str_with_prefix(self):
        """Test the identity string includes the prefix."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, "APP_")

        assert str(provider) == "RegistryEnvironmentVariablesProvider Prefix: 'APP_'"


class TestLoad:
    """Test suite for load()."""

    def test_idle_provider_is_empty(self, store):
        """Test a provider has no data before load()."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)

        assert len(provider.data) == 0
        assert provider.get("OTHER_X") is None

    def test_load_without_prefix(self, store):
        """Test the full transform with no prefix filter."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()

        assert provider.get("NestedTest:NestedProperty2") == "2024-01-01T00:00:00Z"
        assert provider.get("ConnectionStrings:main") == "server=x"
        assert provider.get("ConnectionStrings:main_ProviderName") == "MySql.Data.MySqlClient"
        assert provider.get("APP_NestedTest:NestedProperty1") == "v"
        assert provider.get("OTHER_X") == "v2"

    def test_load_reads_configured_target(self, store):
        """Test that only the configured target is read."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.MACHINE, store=store)
        provider.load()

        assert dict(provider.data) == {"Property1": "machine-value"}

    def test_load_with_prefix(self, store):
        """Test prefix filtering and stripping."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, "APP_", store=store)
        provider.load()

        assert dict(provider.data) == {"NestedTest:NestedProperty1": "v"}
        assert provider.get("OTHER_X") is None

    def test_get_is_case_insensitive(self, store):
        """Test case-insensitive reads."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()

        assert provider.get("nestedtest:nestedproperty2") == "2024-01-01T00:00:00Z"

    def test_try_get_distinguishes_none(self):
        """Test that a None value is found, a missing key is not."""
        store = InMemoryEnvironmentStore(user={"Flag": None})
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()

        assert provider.try_get("flag") == (True, None)
        assert provider.try_get("other") == (False, None)

    def test_reload_replaces_data(self, store):
        """Test that a reload drops keys no longer in the store."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()
        store.remove(EnvironmentVariableTarget.USER, "OTHER_X")
        store.set(EnvironmentVariableTarget.USER, "New__Key", "n")

        provider.load()

        assert provider.get("OTHER_X") is None
        assert provider.get("New:Key") == "n"

    def test_load_replaces_map_object(self, store):
        """Test that load publishes a new map rather than mutating the old one."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()
        first = provider.data

        provider.load()

        assert provider.data is not first

    def test_on_reload_callback(self, store):
        """Test reload callbacks fire after each publish."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        callback = Mock()
        provider.on_reload(callback)

        provider.load()
        provider.load()

        assert callback.call_count == 2
        callback.assert_called_with(provider)

    def test_set_is_copy_on_write(self, store):
        """Test set() leaves previously obtained maps untouched."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()
        snapshot = provider.data

        provider.set("Extra", "x")

        assert provider.get("extra") == "x"
        assert "Extra" not in snapshot

    def test_get_child_keys(self, store):
        """Test child key enumeration."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()

        children = provider.get_child_keys([], "ConnectionStrings")

        assert children == ["main", "main_ProviderName"]


class TestLoadFailure:
    """Test suite for enumeration failures."""

    def test_failure_is_wrapped(self):
        """Test enumeration errors are raised as LoadFailure."""
        provider = RegistryEnvironmentVariablesProvider(
            EnvironmentVariableTarget.MACHINE, store=FailingStore()
        )

        with pytest.raises(LoadFailure) as exc_info:
            provider.load()

        assert "Machine" in str(exc_info.value)
        assert exc_info.value.target == "Machine"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_failure_keeps_previous_data(self, store):
        """Test that a failed load leaves the published map unchanged."""
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()
        before = provider.data
        provider._store = FailingStore()

        with pytest.raises(LoadFailure):
            provider.load()

        assert provider.data is before
        assert provider.get("OTHER_X") == "v2"

    def test_failure_does_not_fire_callbacks(self):
        """Test callbacks only fire on successful loads."""
        provider = RegistryEnvironmentVariablesProvider(
            EnvironmentVariableTarget.USER, store=FailingStore()
        )
        callback = Mock()
        provider.on_reload(callback)

        with pytest.raises(LoadFailure):
            provider.load()

        callback.assert_not_called()

    def test_empty_store_is_not_an_error(self):
        """Test an empty store yields an empty map."""
        provider = RegistryEnvironmentVariablesProvider(
            EnvironmentVariableTarget.USER, store=InMemoryEnvironmentStore()
        )
        provider.load()

        assert len(provider.data) == 0


class TestConcurrentReads:
    """Test suite for readers during load()."""

    def test_readers_see_complete_maps(self):
        """Test readers never observe a partially loaded map."""
        old = {f"Old__{i}": "o" for i in range(200)}
        new = {f"New__{i}": "n" for i in range(200)}
        store = InMemoryEnvironmentStore(user=old)
        provider = RegistryEnvironmentVariablesProvider(EnvironmentVariableTarget.USER, store=store)
        provider.load()

        errors = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                data = provider.data
                keys = set(k.split(":")[0] for k in data)
                if len(data) != 200 or len(keys) != 1:
                    errors.append(len(data))

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        try:
            for i in range(50):
                store._variables[EnvironmentVariableTarget.USER] = dict(new if i % 2 == 0 else old)
                provider.load()
        finally:
            stop.set()
            for t in threads:
                t.join()

        assert errors == []


class TestSourceAndBuilder:
    """Test suite for source and builder registration."""

    def test_source_defaults(self):
        """Test the source defaults to the Machine target."""
        source = RegistryEnvironmentVariablesSource()

        assert source.target == EnvironmentVariableTarget.MACHINE
        assert source.prefix is None

    def test_source_builds_provider(self, store):
        """Test the source builds a configured provider."""
        source = RegistryEnvironmentVariablesSource(EnvironmentVariableTarget.USER, "APP_", store)

        provider = source.build(ConfigurationBuilder())

        assert isinstance(provider, RegistryEnvironmentVariablesProvider)
        assert provider.prefix == "APP_"
        assert provider.target == EnvironmentVariableTarget.USER

    def test_source_with_bad_target_fails_on_build(self):
        """Test an invalid target surfaces when the provider is built."""
        source = RegistryEnvironmentVariablesSource(EnvironmentVariableTarget.PROCESS)

        with pytest.raises(InvalidArgument):
            source.build(ConfigurationBuilder())

    def test_add_with_target(self, store):
        """Test registration with a target only."""
        builder = ConfigurationBuilder()

        result = add_registry_environment_variables(
            builder, target=EnvironmentVariableTarget.USER, store=store
        )
        configuration = result.build()

        assert result is builder
        assert configuration.get("ConnectionStrings:main") == "server=x"

    def test_add_with_prefix(self, store):
        """Test registration with a prefix."""
        configuration = (
            ConfigurationBuilder()
            .add_registry_environment_variables("APP_", EnvironmentVariableTarget.USER, store=store)
            .build()
        )

        assert configuration.get("NestedTest:NestedProperty1") == "v"
        assert configuration.get("OTHER_X") is None

    def test_add_with_configure_callback(self, store):
        """Test registration with a configure callback."""
        def configure(source):
            source.target = EnvironmentVariableTarget.MACHINE
            source.store = store

        configuration = (
            ConfigurationBuilder()
            .add_registry_environment_variables(configure_source=configure)
            .build()
        )

        assert configuration.get("property1") == "machine-value"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
