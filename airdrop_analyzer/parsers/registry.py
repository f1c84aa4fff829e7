"""Exchange id -> adapter lookup.

New exchanges are added by registering another ExchangeAdapter; callers only
ever go through get() / options().
"""

from __future__ import annotations

from typing import Iterable, Iterator

from airdrop_analyzer.parsers import backpack, pacifica
from airdrop_analyzer.parsers.exchange_adapter import ExchangeAdapter


class UnknownExchangeError(KeyError):
    """Raised when no adapter is registered for an exchange id."""

    def __init__(self, exchange_id: str, known: Iterable[str]) -> None:
        self.exchange_id = exchange_id
        self.known = tuple(known)
        super().__init__(f"Unknown exchange '{exchange_id}'. Available: {list(self.known)}")

    def __str__(self) -> str:
        return self.args[0]


class AdapterRegistry:
    def __init__(self, adapters: Iterable[ExchangeAdapter] = ()) -> None:
        self._adapters: dict[str, ExchangeAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: ExchangeAdapter) -> ExchangeAdapter:
        if adapter.id in self._adapters:
            raise ValueError(f"Exchange '{adapter.id}' is already registered")
        self._adapters[adapter.id] = adapter
        return adapter

    def get(self, exchange_id: str) -> ExchangeAdapter:
        try:
            return self._adapters[exchange_id]
        except KeyError:
            raise UnknownExchangeError(exchange_id, self._adapters) from None

    def ids(self) -> list[str]:
        return list(self._adapters)

    def options(self) -> list[tuple[str, str]]:
        """(id, label) pairs in registration order, for selection menus."""
        return [(a.id, a.label) for a in self._adapters.values()]

    def __contains__(self, exchange_id: object) -> bool:
        return exchange_id in self._adapters

    def __iter__(self) -> Iterator[ExchangeAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)


def default_registry() -> AdapterRegistry:
    """A fresh registry holding every built-in exchange."""
    return AdapterRegistry([backpack.ADAPTER, pacifica.ADAPTER])
