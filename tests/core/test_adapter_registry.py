"""Tests for the adapter registry and ``get_adapter()`` factory."""

from __future__ import annotations

import pytest

from nulldb.core.adapters import (
    AdapterRegistry,
    AdapterType,
    NullDBAdapter,
    adapter_registry,
    get_adapter,
)
from nulldb.core.errors import ConfigError


class RecordingAdapter(NullDBAdapter):
    """Stand-in for a host's real adapter."""

    @property
    def adapter_name(self) -> str:
        return "Recording"


class TestAdapterRegistry:
    def test_nulldb_preregistered(self):
        assert AdapterRegistry().list_adapters() == ["nulldb"]

    def test_create_nulldb(self):
        adapter = AdapterRegistry().create("nulldb", start_id=3)
        assert isinstance(adapter, NullDBAdapter)
        assert adapter.insert("INSERT") == 4

    def test_names_are_case_insensitive(self):
        assert isinstance(AdapterRegistry().create("NullDB"), NullDBAdapter)

    def test_register_and_unregister(self):
        registry = AdapterRegistry()
        registry.register("Recording", RecordingAdapter)
        assert registry.list_adapters() == ["nulldb", "recording"]
        assert registry.create("recording").adapter_name == "Recording"

        registry.unregister("recording")
        assert registry.list_adapters() == ["nulldb"]

    def test_unregister_unknown_is_noop(self):
        registry = AdapterRegistry()
        registry.unregister("postgresql")
        assert registry.list_adapters() == ["nulldb"]

    def test_unknown_adapter(self):
        with pytest.raises(ConfigError, match="Unknown database adapter: oracle") as exc_info:
            AdapterRegistry().create("oracle")
        assert exc_info.value.context.adapter == "oracle"


class TestGetAdapter:
    def test_default_is_nulldb(self):
        assert isinstance(get_adapter(), NullDBAdapter)

    def test_by_enum_and_name(self):
        assert isinstance(get_adapter(AdapterType.NULLDB), NullDBAdapter)
        assert isinstance(get_adapter("nulldb"), NullDBAdapter)

    def test_options_forwarded(self, tmp_path):
        adapter = get_adapter("nulldb", schema="db/schema.py", project_root=tmp_path)
        assert adapter.config.schema == "db/schema.py"
        assert adapter.config.project_root == tmp_path

    def test_uses_global_registry(self):
        adapter_registry.register("recording", RecordingAdapter)
        try:
            assert get_adapter("recording").adapter_name == "Recording"
        finally:
            adapter_registry.unregister("recording")
