import logging
from typing import Dict, List, Sequence, Tuple

from models.records import CommunityRankedGame, GameRecord, ReviewScore, to_number
from utils.config import COMMUNITY_PRIOR_VOTES, DEFAULT_RANKING_LIMIT
from utils.text import game_tokens, matches_filters

logger = logging.getLogger(__name__)


class CommunityRanking:
    """
    Bayesian weighted ranking of review scores (the MyAnimeList formula).

    weighted = v / (v + m) * average + m / (v + m) * global_average

    Games with few votes are pulled towards the global average, so a single
    perfect score cannot top the chart.
    """

    def __init__(self, prior_votes: int = COMMUNITY_PRIOR_VOTES):
        self.prior_votes = prior_votes

    def rank(
            self,
            review_scores: Sequence[ReviewScore],
            catalog_snapshot: Sequence[GameRecord],
            genre_filter: str = '',
            tag_filter: str = '',
            limit: int = DEFAULT_RANKING_LIMIT
    ) -> List[CommunityRankedGame]:
        scores = []
        for row in review_scores:
            score = to_number(row.score)
            if score is not None:
                scores.append((row.app_id, score))

        if not scores or not catalog_snapshot:
            return []

        global_average = sum(score for _, score in scores) / len(scores)

        stats: Dict[int, Tuple[float, int]] = {}
        for app_id, score in scores:
            total, votes = stats.get(app_id, (0.0, 0))
            stats[app_id] = (total + score, votes + 1)

        ranked: List[CommunityRankedGame] = []
        seen = set()
        for game in catalog_snapshot:
            if game.app_id in seen or game.app_id not in stats:
                continue
            seen.add(game.app_id)
            if not matches_filters(game_tokens(game.genre, game.tags), genre_filter, tag_filter):
                continue

            total, votes = stats[game.app_id]
            average = total / votes
            weight = votes / (votes + self.prior_votes)
            ranked.append(CommunityRankedGame(
                game=game,
                weighted_score=weight * average + (1 - weight) * global_average,
                average_score=average,
                votes=votes,
            ))

        ranked.sort(key=lambda item: (item.weighted_score, item.votes, item.game.players), reverse=True)

        logger.info(f"🗳️ Community ranking: {len(ranked)} games from {len(scores)} scores "
                    f"(global average {global_average:.2f})")
        return ranked[:max(0, limit)]
