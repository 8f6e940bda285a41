from fastapi import APIRouter, HTTPException
from typing import List
import time
import logging

from api.models import RecommendationRequest, RecommendationResponse, RecommendedGameModel
from models.records import GameRecord
from models.tag_affinity import TagAffinityRecommender, is_fallback
from services.recommendation_cache import RecommendationCache
from utils.config import Settings
from utils.data_loader import CatalogSnapshotLoader

logger = logging.getLogger(__name__)
router = APIRouter()

# Global state (loaded once at startup, replaced on catalog reload)
catalog_loader: CatalogSnapshotLoader = None
tag_recommender: TagAffinityRecommender = None
candidate_games: List[GameRecord] = []
recommendation_cache: RecommendationCache = None


def initialize_recommender(loader: CatalogSnapshotLoader, settings: Settings):
    """Initialize the recommender with the candidate slice of the catalog"""
    global catalog_loader, tag_recommender, candidate_games, recommendation_cache
    logger.info("🤖 Initializing tag affinity recommender...")

    catalog_loader = loader
    candidate_games = loader.to_records(loader.get_candidate_games(settings.recommendation_candidate_limit))
    logger.info(f"📊 Using {len(candidate_games):,} top-rated games as candidates "
                f"(cap {settings.recommendation_candidate_limit})")

    tag_recommender = TagAffinityRecommender(default_limit=settings.default_recommendation_limit)

    # Cached results were computed against the previous snapshot
    if recommendation_cache is not None:
        recommendation_cache.clear()
    recommendation_cache = RecommendationCache(max_size=settings.recommendation_cache_size)

    logger.info("✅ Recommendation engine ready!")


@router.post("/", response_model=RecommendationResponse)
async def get_recommendations(request: RecommendationRequest):
    """Get personal recommendations from library and review tag affinity"""
    if tag_recommender is None or catalog_loader is None:
        raise HTTPException(status_code=503, detail="Recommendation engine not initialized")

    start_time = time.time()

    try:
        library = [entry.to_entry() for entry in request.library]
        reviews = [review.to_entry() for review in request.reviews]

        cache_key = None
        recommendations = None
        if request.user_id and recommendation_cache is not None:
            cache_key = recommendation_cache.make_key(request.user_id, request.limit, library, reviews)
            recommendations = recommendation_cache.get(cache_key)

        cached = recommendations is not None
        if not cached:
            owned_games = []
            if library:
                owned_df = catalog_loader.get_games_by_ids(entry.app_id for entry in library)
                owned_games = catalog_loader.to_records(owned_df)

            recommendations = tag_recommender.recommend(
                library_entries=library,
                review_entries=reviews,
                owned_game_records=owned_games,
                candidate_games=candidate_games,
                limit=request.limit
            )
            if cache_key is not None:
                recommendation_cache.put(cache_key, recommendations)

        game_recs = [RecommendedGameModel(**rec.to_dict()) for rec in recommendations]

        processing_time = (time.time() - start_time) * 1000

        return RecommendationResponse(
            recommendations=game_recs,
            total_found=len(game_recs),
            algorithm="popularity_fallback" if is_fallback(recommendations) else "tag_affinity",
            processing_time_ms=round(processing_time, 2),
            cached=cached
        )

    except Exception as e:
        logger.error(f"❌ Recommendation error: {e}")
        raise HTTPException(status_code=500, detail=f"Recommendation failed: {str(e)}")


@router.get("/models/status")
async def get_models_status():
    """Get status of the recommendation engine"""
    return {
        "tag_affinity_model": "loaded" if tag_recommender is not None else "not_loaded",
        "candidate_games": len(candidate_games),
        "cache": {
            "enabled": recommendation_cache is not None and recommendation_cache.enabled,
            "entries": len(recommendation_cache) if recommendation_cache is not None else 0,
            "hits": recommendation_cache.hits if recommendation_cache is not None else 0,
            "misses": recommendation_cache.misses if recommendation_cache is not None else 0,
        }
    }
