"""
File acquisition boundary: read sources concurrently, then parse.

Reading is the only async step. Each source is read independently, so a
failing read becomes that file's FILE_READ_ERROR instead of failing the
batch. ParseSession keeps a generation counter: when a newer parse() (or
cancel()) starts while an older one is still reading, the older call
returns None and its result is never surfaced.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Hashable, Iterable, Optional, Protocol, Sequence

from airdrop_analyzer.models import ExchangeParseResult, RawFile
from airdrop_analyzer.parsers.registry import AdapterRegistry, default_registry

logger = logging.getLogger(__name__)


class FileSource(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def key(self) -> Hashable: ...

    async def read(self) -> str: ...


@dataclass(frozen=True)
class InMemorySource:
    """Content already in memory, e.g. handed over by a UI."""

    name: str
    content: str

    @property
    def key(self) -> Hashable:
        return (self.name, self.content)

    async def read(self) -> str:
        return self.content


@dataclass(frozen=True)
class PathSource:
    path: Path
    encoding: str = "utf-8-sig"

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def key(self) -> Hashable:
        return str(self.path.resolve())

    async def read(self) -> str:
        return await asyncio.to_thread(self.path.read_text, encoding=self.encoding)


def sources_from_pairs(pairs: Iterable[tuple[str, str]]) -> list[InMemorySource]:
    return [InMemorySource(name=name, content=content) for name, content in pairs]


def unique_sources(sources: Iterable[FileSource]) -> list[FileSource]:
    """Drop repeated sources; a repeat replaces the earlier one in place."""
    keyed: dict[Hashable, FileSource] = {}
    for source in sources:
        keyed[source.key] = source
    return list(keyed.values())


async def _read_source(source: FileSource) -> RawFile:
    if not source.name.lower().endswith(".csv"):
        # rejected by the adapter without reading
        return RawFile(name=source.name)
    try:
        content = await source.read()
    except Exception as e:
        logger.warning("[Ingest] Failed to read %s: %s", source.name, e)
        return RawFile(name=source.name, read_error=str(e) or type(e).__name__)
    return RawFile(name=source.name, content=content)


async def read_sources(sources: Sequence[FileSource]) -> list[RawFile]:
    """Read every source concurrently, preserving input order."""
    return list(await asyncio.gather(*(_read_source(s) for s in sources)))


class ParseSession:
    """Last-call-wins wrapper around an exchange adapter."""

    def __init__(self, registry: Optional[AdapterRegistry] = None) -> None:
        self.registry = registry or default_registry()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        """Discard whatever parse is in flight."""
        self._generation += 1

    async def parse(
        self,
        exchange_id: str,
        sources: Iterable[FileSource],
    ) -> Optional[ExchangeParseResult]:
        """Parse sources with the exchange's adapter.

        Returns None if superseded by a later parse() or cancel().
        Raises UnknownExchangeError for an unregistered exchange id.
        """
        self._generation += 1
        generation = self._generation

        adapter = self.registry.get(exchange_id)
        unique = unique_sources(sources)
        if not unique:
            return ExchangeParseResult.empty(exchange_id)

        files = await read_sources(unique)
        if generation != self._generation:
            logger.debug(
                "[Ingest] Discarding parse #%d for %s (superseded by #%d)",
                generation, exchange_id, self._generation,
            )
            return None

        result = adapter.parse_files(files)
        logger.info(
            "[Ingest] %s: %d files, %d ok, %d rows",
            adapter.label, len(result.files), len(result.ok_files), len(result.rows),
        )
        return result
