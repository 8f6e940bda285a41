import logging
from typing import List, Optional, Sequence

from models.records import GameRecord, ReadyList, ResolvedReadyList
from utils.config import READY_LIST_SIZE
from utils.text import game_tokens, normalize_token

logger = logging.getLogger(__name__)


def resolve_ready_list(
        ready_list: ReadyList,
        catalog: Sequence[GameRecord],
        pool: Optional[Sequence[GameRecord]] = None,
        size: int = READY_LIST_SIZE
) -> ResolvedReadyList:
    """
    Pinned games first (in list order), topped up with keyword matches.

    Pinned app_ids are looked up in the whole catalog; the keyword fallback
    only scans `pool` (defaults to the catalog) and is sorted by active
    players, then community rating.
    """
    if pool is None:
        pool = catalog

    by_id = {}
    for game in catalog:
        by_id.setdefault(game.app_id, game)

    pinned: List[GameRecord] = []
    selected = set()
    for app_id in ready_list.app_ids:
        game = by_id.get(app_id)
        if game is None or app_id in selected:
            continue
        pinned.append(game)
        selected.add(app_id)

    keywords = [normalize_token(keyword) for keyword in ready_list.fallback_keywords]
    keywords = [keyword for keyword in keywords if keyword]

    fallback: List[GameRecord] = []
    for game in pool:
        if game.app_id in selected:
            continue
        tokens = game_tokens(game.genre, game.tags)
        if any(keyword in token for keyword in keywords for token in tokens):
            fallback.append(game)
            selected.add(game.app_id)

    fallback.sort(key=lambda game: (game.players, game.rating), reverse=True)
    fallback = fallback[:max(0, size - len(pinned))]

    return ResolvedReadyList(ready_list=ready_list, games=pinned + fallback, pinned_count=len(pinned))


def resolve_ready_lists(
        ready_lists: Sequence[ReadyList],
        catalog: Sequence[GameRecord],
        pool: Optional[Sequence[GameRecord]] = None,
        size: int = READY_LIST_SIZE
) -> List[ResolvedReadyList]:
    resolved = [resolve_ready_list(ready_list, catalog, pool, size) for ready_list in ready_lists]
    logger.info(f"📚 Resolved {len(resolved)} ready lists against {len(catalog):,} games")
    return resolved
