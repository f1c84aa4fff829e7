"""Tests for concurrent file reading and last-call-wins parsing."""

import asyncio

import pytest

from airdrop_analyzer.ingest import (
    InMemorySource,
    ParseSession,
    PathSource,
    read_sources,
    sources_from_pairs,
    unique_sources,
)
from airdrop_analyzer.parsers.registry import UnknownExchangeError


def _run(coro):
    return asyncio.run(coro)


class FailingSource:
    def __init__(self, name, error=None):
        self.name = name
        self.key = ("failing", name)
        self.error = error or OSError("disk error")
        self.reads = 0

    async def read(self):
        self.reads += 1
        raise self.error


class GatedSource:
    """Blocks in read() until the gate opens."""

    def __init__(self, name, content, gate):
        self.name = name
        self.key = ("gated", name)
        self.content = content
        self.gate = gate

    async def read(self):
        await self.gate.wait()
        return self.content


class TestReadSources:
    def test_order_and_failures(self, backpack_csv):
        files = _run(read_sources([
            InMemorySource("a.csv", backpack_csv),
            FailingSource("b.csv"),
        ]))
        assert [f.name for f in files] == ["a.csv", "b.csv"]
        assert files[0].content == backpack_csv
        assert files[1].content is None
        assert files[1].read_error == "disk error"

    def test_non_csv_is_not_read(self):
        source = FailingSource("notes.txt")
        files = _run(read_sources([source]))
        assert source.reads == 0
        assert files[0].read_error is None

    def test_path_source(self, fixtures_dir, backpack_csv):
        files = _run(read_sources([PathSource(fixtures_dir / "backpack_mixed_locale.csv")]))
        assert files[0].name == "backpack_mixed_locale.csv"
        assert files[0].content == backpack_csv

    def test_missing_path(self, tmp_path):
        files = _run(read_sources([PathSource(tmp_path / "gone.csv")]))
        assert files[0].read_error


class TestUniqueSources:
    def test_duplicates_dropped(self):
        sources = sources_from_pairs([("a.csv", "x"), ("b.csv", "y"), ("a.csv", "x")])
        assert [s.name for s in unique_sources(sources)] == ["a.csv", "b.csv"]

    def test_same_name_different_content_kept(self):
        sources = sources_from_pairs([("a.csv", "x"), ("a.csv", "y")])
        assert len(unique_sources(sources)) == 2

    def test_same_path_twice(self, fixtures_dir):
        path = fixtures_dir / "backpack_mixed_locale.csv"
        assert len(unique_sources([PathSource(path), PathSource(path)])) == 1


class TestParseSession:
    def test_read_failure_is_isolated(self, backpack_csv):
        session = ParseSession()
        result = _run(session.parse("backpack", [
            FailingSource("broken.csv"),
            InMemorySource("good.csv", backpack_csv),
        ]))
        broken, good = result.files
        assert broken.status == "error"
        assert broken.error_codes == ["file_read_error"]
        assert broken.errors == ["Could not read file: disk error"]
        assert good.status == "ok"
        assert len(result.rows) == 2

    def test_non_csv_reported_as_unsupported(self):
        result = _run(ParseSession().parse("backpack", [FailingSource("notes.txt")]))
        assert result.files[0].error_codes == ["unsupported_file_type"]

    def test_duplicates_parsed_once(self, backpack_csv):
        sources = sources_from_pairs([("a.csv", backpack_csv), ("a.csv", backpack_csv)])
        result = _run(ParseSession().parse("backpack", sources))
        assert len(result.files) == 1
        assert len(result.rows) == 2

    def test_no_sources(self):
        result = _run(ParseSession().parse("pacifica", []))
        assert result.exchange_id == "pacifica"
        assert result.files == []
        assert result.rows == []

    def test_unknown_exchange(self):
        with pytest.raises(UnknownExchangeError):
            _run(ParseSession().parse("binance", []))

    def test_last_call_wins(self, backpack_csv, pacifica_csv):
        session = ParseSession()

        async def scenario():
            gate = asyncio.Event()
            first = asyncio.create_task(
                session.parse("backpack", [GatedSource("slow.csv", backpack_csv, gate)])
            )
            await asyncio.sleep(0)
            second = await session.parse("pacifica", [InMemorySource("fast.csv", pacifica_csv)])
            gate.set()
            return await first, second

        stale, latest = _run(scenario())
        assert stale is None
        assert latest.exchange_id == "pacifica"
        assert [f.source_file for f in latest.files] == ["fast.csv"]

    def test_cancel_discards_in_flight_parse(self, backpack_csv):
        session = ParseSession()

        async def scenario():
            gate = asyncio.Event()
            task = asyncio.create_task(
                session.parse("backpack", [GatedSource("slow.csv", backpack_csv, gate)])
            )
            await asyncio.sleep(0)
            session.cancel()
            gate.set()
            return await task

        assert _run(scenario()) is None
        assert session.generation == 2
