import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

import numpy as np

from models.records import GameRecord, LibraryEntry, ReviewEntry, RecommendedGame, to_number
from utils.config import DEFAULT_RECOMMENDATION_LIMIT
from utils.text import game_tokens

logger = logging.getLogger(__name__)

# Library signals
BASE_WEIGHT = 2.0
FAVORITE_BONUS = 2.0
PLATINUM_BONUS = 3.0
COMPLETED_BONUS = 1.0
HOURS_PER_POINT = 40.0
MAX_HOURS_BONUS = 3.0

# Review signals
POSITIVE_REVIEW_WEIGHT = 2.0
NEGATIVE_REVIEW_WEIGHT = -1.0

# Candidate scoring
RATING_FACTOR = 0.08
POPULARITY_FACTOR = 3.0
MAX_MATCHED_TAGS = 3


class TagAffinityRecommender:
    """
    Content-based recommender over genre/tag tokens.

    Builds a per-user token weight map from library entries and reviews, then
    scores every unowned candidate by the positive weights of the tokens it
    shares, plus small rating and popularity terms. All state is local to a
    single call, so one instance can serve concurrent requests.
    """

    def __init__(self, default_limit: int = DEFAULT_RECOMMENDATION_LIMIT):
        self.default_limit = default_limit

    @staticmethod
    def library_weight(entry: LibraryEntry) -> float:
        """Weight an owned game contributes to each of its tokens"""
        weight = BASE_WEIGHT
        if entry.is_favorite:
            weight += FAVORITE_BONUS
        if entry.is_platinumed:
            weight += PLATINUM_BONUS
        if entry.status == 'completed':
            weight += COMPLETED_BONUS

        hours = to_number(entry.hours_played)
        if hours is not None and hours > 0:
            weight += min(MAX_HOURS_BONUS, hours / HOURS_PER_POINT)

        return weight

    @staticmethod
    def review_weight(review: ReviewEntry) -> float:
        return POSITIVE_REVIEW_WEIGHT if review.is_positive_signal else NEGATIVE_REVIEW_WEIGHT

    def build_token_weights(
            self,
            library_entries: Sequence[LibraryEntry],
            review_entries: Sequence[ReviewEntry],
            owned_game_records: Iterable[GameRecord]
    ) -> Dict[str, float]:
        """Accumulate token weights; tokens may end up negative"""
        library_app_ids = {entry.app_id for entry in library_entries}
        owned_tokens = {
            game.app_id: game_tokens(game.genre, game.tags)
            for game in owned_game_records
            if game.app_id in library_app_ids
        }
        token_weights: Dict[str, float] = {}

        for entry in library_entries:
            tokens = owned_tokens.get(entry.app_id)
            if tokens is None:
                continue
            weight = self.library_weight(entry)
            for token in tokens:
                token_weights[token] = token_weights.get(token, 0.0) + weight

        # Reviews only count for games whose tokens are known from the library
        for review in review_entries:
            tokens = owned_tokens.get(review.app_id)
            if tokens is None:
                continue
            weight = self.review_weight(review)
            for token in tokens:
                token_weights[token] = token_weights.get(token, 0.0) + weight

        return token_weights

    @staticmethod
    def rating_score(game: GameRecord) -> float:
        return game.rating * RATING_FACTOR

    @staticmethod
    def popularity_score(game: GameRecord) -> float:
        if not game.players:
            return 0.0
        return float(np.log10(game.players + 1) * POPULARITY_FACTOR)

    def score_candidate(self, game: GameRecord, token_weights: Dict[str, float]) -> Optional[RecommendedGame]:
        """Score one candidate; None when it shares no positively weighted token"""
        tokens = game_tokens(game.genre, game.tags)
        if not tokens:
            return None

        tag_score = 0.0
        matched_tags: List[str] = []
        for token in tokens:
            weight = token_weights.get(token, 0.0)
            if weight > 0:
                tag_score += weight
                matched_tags.append(token)

        if tag_score <= 0:
            return None

        score = tag_score + self.rating_score(game) + self.popularity_score(game)
        return RecommendedGame(
            game=game,
            recommendation_score=score,
            matched_tags=tuple(matched_tags[:MAX_MATCHED_TAGS]),
        )

    def recommend(
            self,
            library_entries: Sequence[LibraryEntry],
            review_entries: Sequence[ReviewEntry],
            owned_game_records: Iterable[GameRecord],
            candidate_games: Sequence[GameRecord],
            limit: Optional[int] = None
    ) -> List[RecommendedGame]:
        """Generate ranked recommendations, falling back to the most played games"""
        if limit is None:
            limit = self.default_limit
        limit = max(0, limit)

        owned_app_ids: Set[int] = {entry.app_id for entry in library_entries}
        token_weights = self.build_token_weights(library_entries, review_entries, owned_game_records)

        scored: List[RecommendedGame] = []
        seen: Set[int] = set()
        for game in candidate_games:
            if game.app_id in owned_app_ids or game.app_id in seen:
                continue
            seen.add(game.app_id)
            recommendation = self.score_candidate(game, token_weights)
            if recommendation is not None:
                scored.append(recommendation)

        if not scored:
            logger.info("🆕 No tag overlap found, falling back to most played games")
            return self.popularity_fallback(candidate_games, owned_app_ids, limit)

        # sorted() is stable, so ties keep catalog order
        scored = sorted(scored, key=lambda rec: rec.recommendation_score, reverse=True)

        logger.info(f"🎯 Scored {len(scored)} candidates from {len(token_weights)} weighted tokens")
        return scored[:limit]

    @staticmethod
    def popularity_fallback(
            candidate_games: Sequence[GameRecord],
            owned_app_ids: Set[int],
            limit: int
    ) -> List[RecommendedGame]:
        unowned: List[GameRecord] = []
        seen: Set[int] = set()
        for game in candidate_games:
            if game.app_id in owned_app_ids or game.app_id in seen:
                continue
            seen.add(game.app_id)
            unowned.append(game)

        unowned = sorted(unowned, key=lambda game: game.players, reverse=True)

        return [
            RecommendedGame(game=game, recommendation_score=0.0, matched_tags=())
            for game in unowned[:limit]
        ]


def compute_recommendations(
        library_entries: Sequence[LibraryEntry],
        review_entries: Sequence[ReviewEntry],
        owned_game_records: Iterable[GameRecord],
        candidate_games: Sequence[GameRecord],
        limit: int = DEFAULT_RECOMMENDATION_LIMIT
) -> List[RecommendedGame]:
    """Pure entry point: rank candidates for one user's library and reviews"""
    return TagAffinityRecommender().recommend(
        library_entries, review_entries, owned_game_records, candidate_games, limit
    )


def is_fallback(recommendations: Sequence[RecommendedGame]) -> bool:
    """True when the list came from the popularity fallback rather than tag scoring"""
    # Scored recommendations always carry at least one matched tag
    return bool(recommendations) and not recommendations[0].matched_tags
