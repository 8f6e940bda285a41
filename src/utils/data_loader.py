# data_loader.py

import hashlib
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from models.records import GameRecord

logger = logging.getLogger(__name__)

TEXT_COLUMNS = [
    'title', 'genre', 'image', 'short_description', 'price', 'price_original',
    'release_date', 'developer', 'publisher', 'steam_url',
]
NUMERIC_COLUMNS = ['active_players', 'community_rating', 'discount_percent']
LABEL_COLUMNS = ['tags', 'platforms']


class CatalogNotFoundError(FileNotFoundError):
    pass


def parse_labels(value: Any) -> List[str]:
    """Tags/platforms arrive as lists (JSON) or '|' separated strings (CSV)"""
    if isinstance(value, (list, tuple, np.ndarray)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    if isinstance(value, str):
        return [part.strip() for part in value.split('|') if part.strip()]
    return []


class CatalogSnapshotLoader:
    """Loads the catalog export written by the Steam sync scripts into a DataFrame"""

    def __init__(self, catalog_path: str, cache_dir: str = 'cache'):
        self.catalog_path = Path(catalog_path)
        self.df: Optional[pd.DataFrame] = None
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        # One cache file per export path, so same-named exports never share a pickle
        path_hash = hashlib.md5(str(self.catalog_path.resolve()).encode()).hexdigest()[:12]
        self.processed_cache = self.cache_dir / f"catalog_{self.catalog_path.stem}_{path_hash}.pkl"

    def load_dataset(self) -> pd.DataFrame:
        """Read the raw export (JSON array, JSON lines or CSV)"""
        if not self.catalog_path.exists():
            raise CatalogNotFoundError(f"Catalog export not found: {self.catalog_path}")

        suffix = self.catalog_path.suffix.lower()
        logger.info(f"🎮 Loading catalog export from {self.catalog_path}...")

        if suffix == '.json':
            raw_df = pd.read_json(self.catalog_path, orient='records', dtype=False, convert_dates=False)
        elif suffix in ('.jsonl', '.ndjson'):
            raw_df = pd.read_json(self.catalog_path, orient='records', lines=True, dtype=False, convert_dates=False)
        elif suffix == '.csv':
            raw_df = pd.read_csv(self.catalog_path)
        else:
            raise ValueError(f"Unsupported catalog format: {suffix or '(none)'}")

        logger.info(f"✅ Loaded {len(raw_df):,} raw catalog rows")
        return raw_df

    def load_and_process_data(self) -> pd.DataFrame:
        """Load and clean the catalog, reusing the processed cache while it is fresh"""
        if self._cache_is_fresh():
            try:
                self.df = pd.read_pickle(self.processed_cache)
                logger.info(f"🚀 Loaded {len(self.df):,} processed games from cache")
                return self.df
            except Exception as e:
                logger.warning(f"⚠️ Cache loading failed: {e}")

        raw_df = self.load_dataset()
        self.df = self.clean_and_process_data(raw_df)

        try:
            self.df.to_pickle(self.processed_cache)
            logger.info(f"💾 Processed catalog cached to {self.processed_cache}")
        except Exception as e:
            logger.error(f"❌ Cache saving failed: {e}")

        return self.df

    def _cache_is_fresh(self) -> bool:
        if not (self.processed_cache.exists() and self.catalog_path.exists()):
            return False
        return self.processed_cache.stat().st_mtime >= self.catalog_path.stat().st_mtime

    @staticmethod
    def clean_and_process_data(raw_df: pd.DataFrame) -> pd.DataFrame:
        """Normalize malformed upstream data instead of rejecting it"""
        processed_df = raw_df.copy()

        if 'app_id' not in processed_df.columns:
            processed_df['app_id'] = np.nan

        # Rows without a usable identity can't be scored or deduplicated
        processed_df['app_id'] = pd.to_numeric(processed_df['app_id'], errors='coerce')
        initial_count = len(processed_df)
        processed_df = processed_df[processed_df['app_id'].notna()].copy()
        processed_df['app_id'] = processed_df['app_id'].astype('int64')
        processed_df = processed_df.drop_duplicates(subset='app_id', keep='first')

        dropped = initial_count - len(processed_df)
        if dropped > 0:
            logger.warning(f"🗑️ Dropped {dropped:,} rows with missing or duplicate app_id")

        for column in TEXT_COLUMNS:
            if column not in processed_df.columns:
                processed_df[column] = ''
            processed_df[column] = processed_df[column].fillna('').astype(str)

        # Non-numeric and non-finite values become NaN (absent); scoring reads them as 0
        for column in NUMERIC_COLUMNS:
            if column not in processed_df.columns:
                processed_df[column] = np.nan
            values = pd.to_numeric(processed_df[column], errors='coerce')
            processed_df[column] = values.replace([np.inf, -np.inf], np.nan)

        processed_df['active_players'] = processed_df['active_players'].clip(lower=0)

        for column in LABEL_COLUMNS:
            if column not in processed_df.columns:
                processed_df[column] = [[] for _ in range(len(processed_df))]
            processed_df[column] = processed_df[column].apply(parse_labels)

        processed_df = processed_df.reset_index(drop=True)
        logger.info(f"✅ Processed {len(processed_df):,} catalog games")
        return processed_df

    def _require_df(self) -> pd.DataFrame:
        if self.df is None:
            self.load_and_process_data()
        return self.df

    def get_candidate_games(self, limit: int) -> pd.DataFrame:
        """Highest community_rating first (stable; missing ratings sort last)"""
        df = self._require_df()
        ordered = df.sort_values('community_rating', ascending=False, kind='mergesort', na_position='last')
        return ordered.head(limit)

    def get_ranking_snapshot(self, limit: int) -> pd.DataFrame:
        """First rows in export order, mirroring an unordered fetch"""
        return self._require_df().head(limit)

    def get_games_by_ids(self, app_ids: Iterable[int]) -> pd.DataFrame:
        df = self._require_df()
        return df[df['app_id'].isin(list(set(app_ids)))]

    @staticmethod
    def to_records(df: pd.DataFrame) -> List[GameRecord]:
        return [GameRecord.from_mapping(row) for row in df.to_dict('records')]

    def get_data_summary(self) -> Dict[str, Any]:
        """Small catalog summary for status endpoints"""
        df = self._require_df()

        all_tokens = []
        for genre in df['genre']:
            all_tokens.extend(token.strip().lower() for token in genre.split(',') if token.strip())
        genre_counts = pd.Series(all_tokens, dtype=object).value_counts().head(10)

        return {
            'total_games': len(df),
            'games_with_tags': int((df['tags'].apply(len) > 0).sum()),
            'games_with_rating': int(df['community_rating'].notna().sum()),
            'top_genres': {str(k): int(v) for k, v in genre_counts.items()},
        }
