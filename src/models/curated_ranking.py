import logging
from typing import List, Optional, Sequence, Set, Tuple

from models.records import CuratedEntry, GameRecord, RankedGame
from utils.config import DEFAULT_RANKING_LIMIT
from utils.text import game_tokens, matches_filters, normalize_title

logger = logging.getLogger(__name__)


class CuratedRankingMerger:
    """
    Front-loads a hand-curated, ordered list of titles and fills the rest of
    the ranking with the catalog sorted by popularity.

    Curated entries are matched by diacritic-insensitive substring against
    game titles. The first curated entry in list order wins a title, even if
    a later entry has a more specific match string. Every claimed app_id goes
    into a claimed set, which is what keeps the output free of duplicates.
    """

    def __init__(self, curated_entries: Sequence[CuratedEntry]):
        self.curated_entries = list(curated_entries)
        # Match strings are normalized once, titles once per call
        self._normalized_matches: List[Tuple[str, ...]] = [
            tuple(normalize_title(value) for value in entry.match if value)
            for entry in self.curated_entries
        ]
        logger.info(f"🏆 CuratedRankingMerger ready with {len(self.curated_entries)} curated entries")

    def rank(
            self,
            catalog_snapshot: Sequence[GameRecord],
            genre_filter: str = '',
            tag_filter: str = '',
            limit: int = DEFAULT_RANKING_LIMIT
    ) -> List[RankedGame]:
        """Curated hits (configured order) followed by the popularity-sorted remainder"""
        limit = max(0, limit)

        eligible = [
            game for game in catalog_snapshot
            if matches_filters(game_tokens(game.genre, game.tags), genre_filter, tag_filter)
        ]
        titles = [normalize_title(game.title) for game in eligible]

        claimed: Set[int] = set()
        curated: List[RankedGame] = []
        for entry, matches in zip(self.curated_entries, self._normalized_matches):
            game = self._find_match(eligible, titles, matches, claimed)
            if game is None:
                logger.debug(f"No catalog match for curated entry '{entry.label}'")
                continue
            claimed.add(game.app_id)
            curated.append(RankedGame(game=game, is_curated=True))

        remainder: List[GameRecord] = []
        for game in eligible:
            # Also guards against snapshots that repeat an app_id
            if game.app_id in claimed:
                continue
            claimed.add(game.app_id)
            remainder.append(game)

        remainder = sorted(remainder, key=lambda game: (game.players, game.rating), reverse=True)

        ranking = curated + [RankedGame(game=game, is_curated=False) for game in remainder]
        logger.info(f"📊 Ranking built: {len(curated)} curated + {len(remainder)} fill (limit {limit})")
        return ranking[:limit]

    @staticmethod
    def _find_match(
            eligible: Sequence[GameRecord],
            titles: Sequence[str],
            matches: Tuple[str, ...],
            claimed: Set[int]
    ) -> Optional[GameRecord]:
        if not matches:
            return None

        for game, title in zip(eligible, titles):
            if game.app_id in claimed:
                continue
            if any(match in title for match in matches):
                return game
        return None


def compute_curated_ranking(
        curated_entries: Sequence[CuratedEntry],
        catalog_snapshot: Sequence[GameRecord],
        genre_filter: str = '',
        tag_filter: str = '',
        limit: int = DEFAULT_RANKING_LIMIT
) -> List[RankedGame]:
    """Pure entry point for the curated ranking"""
    return CuratedRankingMerger(curated_entries).rank(catalog_snapshot, genre_filter, tag_filter, limit)
