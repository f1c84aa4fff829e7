"""Environment-driven settings for the analyzer CLI and file sources."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from airdrop_analyzer.models import RISK_PROFILES

logger = logging.getLogger(__name__)

ENV_PREFIX = "AIRDROP_ANALYZER_"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    default_exchange: str = "backpack"
    encoding: str = "utf-8-sig"  # handle BOM from spreadsheet exports
    points_own: str = "0"
    points_free: str = "0"
    point_to_token: str = "0.5"
    token_price: str = "1"
    risk_profile: str = "moderate"


def _env(name: str, default: str) -> str:
    value = os.environ.get(ENV_PREFIX + name, "").strip()
    return value or default


@lru_cache()
def get_settings() -> Settings:
    """Read settings once; call get_settings.cache_clear() to re-read."""
    defaults = Settings()

    risk_profile = _env("RISK_PROFILE", defaults.risk_profile).lower()
    if risk_profile not in RISK_PROFILES:
        logger.warning(
            "Ignoring %sRISK_PROFILE=%r (expected one of %s)",
            ENV_PREFIX, risk_profile, ", ".join(RISK_PROFILES),
        )
        risk_profile = defaults.risk_profile

    return Settings(
        log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
        default_exchange=_env("EXCHANGE", defaults.default_exchange).lower(),
        encoding=_env("ENCODING", defaults.encoding),
        points_own=_env("POINTS_OWN", defaults.points_own),
        points_free=_env("POINTS_FREE", defaults.points_free),
        point_to_token=_env("POINT_TO_TOKEN", defaults.point_to_token),
        token_price=_env("TOKEN_PRICE", defaults.token_price),
        risk_profile=risk_profile,
    )
