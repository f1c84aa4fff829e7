import pytest

from airdrop_analyzer.parsers import backpack, pacifica
from airdrop_analyzer.parsers.exchange_adapter import ExchangeAdapter
from airdrop_analyzer.parsers.registry import AdapterRegistry, UnknownExchangeError, default_registry


class TestDefaultRegistry:
    def test_builtin_exchanges(self):
        registry = default_registry()
        assert registry.ids() == ["backpack", "pacifica"]
        assert registry.options() == [("backpack", "Backpack"), ("pacifica", "Pacifica")]
        assert len(registry) == 2
        assert "pacifica" in registry
        assert "binance" not in registry

    def test_get(self):
        registry = default_registry()
        assert registry.get("backpack") is backpack.ADAPTER
        assert registry.get("pacifica") is pacifica.ADAPTER

    def test_unknown_exchange(self):
        with pytest.raises(UnknownExchangeError) as exc_info:
            default_registry().get("binance")
        assert exc_info.value.exchange_id == "binance"
        assert exc_info.value.known == ("backpack", "pacifica")
        assert "binance" in str(exc_info.value)

    def test_unknown_exchange_is_a_key_error(self):
        with pytest.raises(KeyError):
            default_registry().get("")

    def test_fresh_instance_each_call(self):
        first = default_registry()
        first.register(ExchangeAdapter("other", "Other", backpack.SCHEMA, backpack.normalize_position_row))
        assert "other" not in default_registry()


class TestRegister:
    def test_duplicate_id(self):
        registry = AdapterRegistry([backpack.ADAPTER])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(backpack.ADAPTER)

    def test_iteration_order(self):
        registry = AdapterRegistry([pacifica.ADAPTER, backpack.ADAPTER])
        assert [a.id for a in registry] == ["pacifica", "backpack"]
