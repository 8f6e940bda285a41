from difflib import SequenceMatcher
from typing import Any, Dict, List, Optional, Sequence
import logging

from models.records import GameRecord
from utils.text import normalize_title

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class GameSearchService:
    def __init__(self, games: Sequence[GameRecord]):
        """Index the catalog snapshot by app_id and normalized title"""
        self.games = list(games)
        self.game_id_to_index: Dict[int, int] = {}
        for idx, game in enumerate(self.games):
            self.game_id_to_index.setdefault(game.app_id, idx)
        self.normalized_titles = [normalize_title(game.title).strip() for game in self.games]
        logger.info(f"🔍 GameSearchService initialized with {len(self.games):,} games")

    @staticmethod
    def match_score(query: str, title: str) -> float:
        """Rank a normalized title against a normalized query (0 = no match)"""
        if not title:
            return 0

        # 1. Exact match
        if query == title:
            return 100

        # 2. Starts with
        if title.startswith(query):
            return 90

        # 3. Contains query
        if query in title:
            return 70 + (len(query) / len(title)) * 20

        # 4. String similarity (handles typos)
        if len(query) >= 3:
            similarity = SequenceMatcher(None, query, title).ratio()
            if similarity >= 0.8:
                return 60 + (similarity - 0.8) * 50
            if similarity >= 0.6:
                return 40 + (similarity - 0.6) * 50

        # 5. Word matching for multi-word queries
        query_words = query.split()
        if len(query_words) >= 2:
            title_words = title.split()
            match_ratio = sum(1 for word in query_words if word in title_words) / len(query_words)
            if match_ratio >= 0.6:
                return 20 + match_ratio * 20

        return 0

    def search_games_by_name(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Diacritic-insensitive fuzzy search over catalog titles"""
        normalized_query = normalize_title(query).strip()
        if len(normalized_query) < MIN_QUERY_LENGTH:
            return []

        games_with_scores = []
        seen = set()
        for game, title in zip(self.games, self.normalized_titles):
            if game.app_id in seen:
                continue
            score = self.match_score(normalized_query, title)
            if score > 0:
                seen.add(game.app_id)
                games_with_scores.append({**game.to_dict(), 'match_score': score})

        # Sort by match score and return top results
        games_with_scores.sort(key=lambda x: x['match_score'], reverse=True)

        logger.info(f"🔍 Found {len(games_with_scores)} games matching '{query}'")
        return games_with_scores[:max(0, limit)]

    def get_game_by_id(self, app_id: int) -> Optional[GameRecord]:
        """Get a catalog game by app_id"""
        idx = self.game_id_to_index.get(app_id)
        if idx is None:
            return None
        return self.games[idx]
