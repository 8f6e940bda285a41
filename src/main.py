# main.py

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging
from api.models import CatalogReloadResponse
from api.rankings import initialize_rankings, router as rankings_router
from api.recommendations import initialize_recommender, router as recommendations_router
from api.games import router as games_router
from utils.config import Settings, load_settings
from utils.data_loader import CatalogNotFoundError, CatalogSnapshotLoader

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings: Settings = None
games_df = None
loader = None


def initialize_services(current_settings: Settings):
    """Load the catalog snapshot and (re)build every engine on top of it"""
    global games_df, loader

    # Load before touching any engine so a missing export keeps the previous snapshot
    new_loader = CatalogSnapshotLoader(current_settings.catalog_path, current_settings.cache_dir)
    new_df = new_loader.load_and_process_data()

    initialize_recommender(new_loader, current_settings)
    initialize_rankings(new_loader, current_settings)

    from services.game_search import GameSearchService
    import api.games as games_api

    games_api.search_service = GameSearchService(new_loader.to_records(new_df))

    loader, games_df = new_loader, new_df
    logger.info(f"✅ Loaded {len(games_df):,} catalog games")


@asynccontextmanager
async def lifespan(app: FastAPI):
    global settings
    logger.info("🚀 Starting SpotLight discovery API...")

    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    try:
        initialize_services(settings)
    except (CatalogNotFoundError, ValueError) as e:
        # Serve health checks; engine endpoints answer 503 until a reload succeeds
        logger.error(f"❌ {e}")

    yield
    logger.info("🛑 Shutting down SpotLight discovery API...")


app = FastAPI(
    title="SpotLight Discovery API",
    description="Tag affinity recommendations and curated rankings over the SpotLight Steam catalog",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {
        "message": "🎮 SpotLight discovery API is running!",
        "games_loaded": len(games_df) if games_df is not None else 0,
        "catalog": loader.get_data_summary() if loader is not None else None
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "spotlight-discovery",
        "games_loaded": len(games_df) if games_df is not None else 0
    }


@app.post("/api/catalog/reload", response_model=CatalogReloadResponse)
def reload_catalog(x_principal: Optional[str] = Header(default=None)):
    """Reload the catalog snapshot from disk (admins only)"""
    if settings is None or not settings.is_admin(x_principal):
        raise HTTPException(status_code=403, detail="Admin access required")

    try:
        initialize_services(settings)
    except (CatalogNotFoundError, ValueError) as e:
        # The previous snapshot stays in service
        logger.error(f"❌ Catalog reload failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    from api import rankings, recommendations

    return CatalogReloadResponse(
        games_loaded=len(games_df),
        candidate_games=len(recommendations.candidate_games),
        ranking_snapshot=len(rankings.ranking_snapshot)
    )


app.include_router(recommendations_router, prefix="/api/recommendations", tags=["recommendations"])
app.include_router(rankings_router, prefix="/api/rankings", tags=["rankings"])
app.include_router(games_router, prefix="/api/games", tags=["games"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
