# config.py

import os
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Snapshot caps. The candidate pool is rescanned per request, so raising these
# makes results more complete but changes the scoring distribution.
RECOMMENDATION_CANDIDATE_LIMIT = 500
RANKING_SNAPSHOT_LIMIT = 800
COMMUNITY_SNAPSHOT_LIMIT = 600
READY_LIST_POOL_LIMIT = 400

DEFAULT_RECOMMENDATION_LIMIT = 12
DEFAULT_RANKING_LIMIT = 100
COMMUNITY_PRIOR_VOTES = 20
READY_LIST_SIZE = 10
RECOMMENDATION_CACHE_SIZE = 256
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the discovery service"""
    catalog_path: str = 'data/games.json'
    cache_dir: str = 'cache'
    recommendation_candidate_limit: int = RECOMMENDATION_CANDIDATE_LIMIT
    ranking_snapshot_limit: int = RANKING_SNAPSHOT_LIMIT
    community_snapshot_limit: int = COMMUNITY_SNAPSHOT_LIMIT
    community_prior_votes: int = COMMUNITY_PRIOR_VOTES
    ready_list_pool_limit: int = READY_LIST_POOL_LIMIT
    ready_list_size: int = READY_LIST_SIZE
    default_recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT
    recommendation_cache_size: int = RECOMMENDATION_CACHE_SIZE
    admin_principals: FrozenSet[str] = field(default_factory=frozenset)
    log_level: str = 'INFO'

    def is_admin(self, principal: Optional[str]) -> bool:
        """Check a principal identifier (e.g. an email) against the admin allowlist"""
        if not principal:
            return False
        return normalize_principal(principal) in self.admin_principals


def normalize_principal(value: str) -> str:
    return value.strip().lower()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"⚠️ Invalid integer for {name}: {raw!r}, using default {default}")
        return default

    if value < 0:
        logger.warning(f"⚠️ Negative value for {name}: {value}, using default {default}")
        return default

    return value


def _env_principals(name: str) -> FrozenSet[str]:
    raw = os.getenv(name, '')
    return frozenset(
        normalize_principal(item) for item in raw.split(',') if item.strip()
    )


def load_settings() -> Settings:
    """Read settings from the environment (and .env, if present)"""
    load_dotenv()

    log_level = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in LOG_LEVELS:
        logger.warning(f"⚠️ Unknown LOG_LEVEL {log_level!r}, using INFO")
        log_level = 'INFO'

    return Settings(
        catalog_path=os.getenv('CATALOG_PATH', 'data/games.json'),
        cache_dir=os.getenv('CACHE_DIR', 'cache'),
        recommendation_candidate_limit=_env_int('RECOMMENDATION_CANDIDATE_LIMIT', RECOMMENDATION_CANDIDATE_LIMIT),
        ranking_snapshot_limit=_env_int('RANKING_SNAPSHOT_LIMIT', RANKING_SNAPSHOT_LIMIT),
        community_snapshot_limit=_env_int('COMMUNITY_SNAPSHOT_LIMIT', COMMUNITY_SNAPSHOT_LIMIT),
        community_prior_votes=_env_int('COMMUNITY_PRIOR_VOTES', COMMUNITY_PRIOR_VOTES),
        ready_list_pool_limit=_env_int('READY_LIST_POOL_LIMIT', READY_LIST_POOL_LIMIT),
        ready_list_size=_env_int('READY_LIST_SIZE', READY_LIST_SIZE),
        default_recommendation_limit=_env_int('DEFAULT_RECOMMENDATION_LIMIT', DEFAULT_RECOMMENDATION_LIMIT),
        recommendation_cache_size=_env_int('RECOMMENDATION_CACHE_SIZE', RECOMMENDATION_CACHE_SIZE),
        admin_principals=_env_principals('ADMIN_PRINCIPALS'),
        log_level=log_level,
    )
