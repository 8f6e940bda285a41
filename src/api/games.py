# api/games.py

from fastapi import APIRouter, HTTPException, Query
from typing import List
from api.models import GameModel
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

# Global search service (set in main.py)
search_service = None


@router.get("/search", response_model=List[GameModel])
async def search_games(
        name: str = Query(..., description="Title to look for (accents and case ignored)"),
        limit: int = Query(default=10, ge=1, le=50)
):
    """Search catalog games by title"""
    if search_service is None:
        raise HTTPException(status_code=503, detail="Search service not initialized")

    results = search_service.search_games_by_name(name, limit)
    # match_score only orders results
    return [{k: v for k, v in game.items() if k != "match_score"} for game in results]


@router.get("/{app_id}", response_model=GameModel)
async def get_game_by_id(app_id: int):
    """Get catalog game details by Steam app id"""
    if search_service is None:
        raise HTTPException(status_code=503, detail="Search service not initialized")

    game = search_service.get_game_by_id(app_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")

    return game.to_dict()
