from fastapi import APIRouter, HTTPException, Query
from typing import List
import time
import logging

from api.models import (
    CommunityRankedGameModel, CommunityRankingRequest, CommunityRankingResponse,
    RankedGameModel, RankingResponse, ReadyListModel, ReadyListsResponse,
)
from models.community_ranking import CommunityRanking
from models.curated_ranking import CuratedRankingMerger
from models.ready_lists import resolve_ready_lists
from models.records import GameRecord
from utils.config import Settings
from utils.curated_lists import CURATED_TOP_GAMES, READY_LISTS
from utils.data_loader import CatalogSnapshotLoader

logger = logging.getLogger(__name__)
router = APIRouter()

# Global ranking state (set in main.py)
curated_merger: CuratedRankingMerger = None
community_ranking: CommunityRanking = None
ranking_snapshot: List[GameRecord] = []
community_snapshot: List[GameRecord] = []
catalog_games: List[GameRecord] = []
ready_list_pool: List[GameRecord] = []
ready_list_size: int = 10


def initialize_rankings(loader: CatalogSnapshotLoader, settings: Settings):
    """Prepare the ranking snapshots and engines"""
    global curated_merger, community_ranking, ranking_snapshot, community_snapshot
    global catalog_games, ready_list_pool, ready_list_size
    logger.info("🏆 Initializing ranking engines...")

    ranking_snapshot = loader.to_records(loader.get_ranking_snapshot(settings.ranking_snapshot_limit))
    community_snapshot = loader.to_records(loader.get_ranking_snapshot(settings.community_snapshot_limit))
    catalog_games = loader.to_records(loader.df)
    ready_list_pool = catalog_games[:settings.ready_list_pool_limit]
    ready_list_size = settings.ready_list_size

    curated_merger = CuratedRankingMerger(CURATED_TOP_GAMES)
    community_ranking = CommunityRanking(prior_votes=settings.community_prior_votes)

    logger.info(f"✅ Ranking engines ready ({len(ranking_snapshot):,} games in curated snapshot)")


@router.get("/curated", response_model=RankingResponse)
async def get_curated_ranking(
        genre: str = Query(default='', description="Genre substring filter"),
        tag: str = Query(default='', description="Tag substring filter"),
        limit: int = Query(default=100, ge=1, le=800)
):
    """Curated top games first, then the catalog sorted by active players"""
    if curated_merger is None:
        raise HTTPException(status_code=503, detail="Ranking engine not initialized")

    start_time = time.time()

    try:
        ranking = curated_merger.rank(ranking_snapshot, genre_filter=genre, tag_filter=tag, limit=limit)
        games = [RankedGameModel(**ranked.to_dict()) for ranked in ranking]

        processing_time = (time.time() - start_time) * 1000

        return RankingResponse(
            games=games,
            total_found=len(games),
            curated_count=sum(1 for game in games if game.is_curated),
            algorithm="curated_merge",
            processing_time_ms=round(processing_time, 2)
        )

    except Exception as e:
        logger.error(f"❌ Curated ranking error: {e}")
        raise HTTPException(status_code=500, detail=f"Curated ranking failed: {str(e)}")


@router.post("/community", response_model=CommunityRankingResponse)
async def get_community_ranking(request: CommunityRankingRequest):
    """Bayesian weighted ranking of community review scores"""
    if community_ranking is None:
        raise HTTPException(status_code=503, detail="Ranking engine not initialized")

    start_time = time.time()

    try:
        ranking = community_ranking.rank(
            review_scores=[row.to_score() for row in request.scores],
            catalog_snapshot=community_snapshot,
            genre_filter=request.genre,
            tag_filter=request.tag,
            limit=request.limit
        )
        games = [CommunityRankedGameModel(**ranked.to_dict()) for ranked in ranking]

        processing_time = (time.time() - start_time) * 1000

        return CommunityRankingResponse(
            games=games,
            total_found=len(games),
            prior_votes=community_ranking.prior_votes,
            algorithm="bayesian_weighted_average",
            processing_time_ms=round(processing_time, 2)
        )

    except Exception as e:
        logger.error(f"❌ Community ranking error: {e}")
        raise HTTPException(status_code=500, detail=f"Community ranking failed: {str(e)}")


@router.get("/ready-lists", response_model=ReadyListsResponse)
async def get_ready_lists():
    """Themed collections: pinned picks topped up by keyword matches"""
    if curated_merger is None:
        raise HTTPException(status_code=503, detail="Ranking engine not initialized")

    resolved = resolve_ready_lists(READY_LISTS, catalog_games, pool=ready_list_pool, size=ready_list_size)
    return ReadyListsResponse(lists=[ReadyListModel(**item.to_dict()) for item in resolved])
