from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def backpack_csv() -> str:
    return (FIXTURES / "backpack_mixed_locale.csv").read_text(encoding="utf-8-sig")


@pytest.fixture
def pacifica_csv() -> str:
    return (FIXTURES / "pacifica_trade_history.csv").read_text(encoding="utf-8-sig")
