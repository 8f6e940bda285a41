from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from models.records import LibraryEntry, ReviewEntry, ReviewScore


class LibraryEntryModel(BaseModel):
    """One game in the user's library"""
    app_id: int = Field(..., description="Steam app id", examples=[413150])
    status: Literal['wishlist', 'playing', 'completed', 'dropped'] = Field(default='wishlist')
    is_favorite: bool = False
    is_platinumed: bool = False
    hours_played: Optional[float] = Field(default=None, description="Hours played, if known")

    def to_entry(self) -> LibraryEntry:
        return LibraryEntry(
            app_id=self.app_id,
            status=self.status,
            is_favorite=self.is_favorite,
            is_platinumed=self.is_platinumed,
            hours_played=self.hours_played,
        )


class ReviewEntryModel(BaseModel):
    """The user's review of one game"""
    app_id: int
    is_positive: bool = False
    score: Optional[int] = Field(default=None, ge=1, le=5, description="1-5 score; overrides is_positive when set")

    def to_entry(self) -> ReviewEntry:
        return ReviewEntry(app_id=self.app_id, is_positive=self.is_positive, score=self.score)


class RecommendationRequest(BaseModel):
    """Request model for personal recommendations"""
    user_id: Optional[str] = Field(default=None, description="Enables result caching for this user when set")
    library: List[LibraryEntryModel] = Field(default_factory=list, description="The user's library entries")
    reviews: List[ReviewEntryModel] = Field(default_factory=list, description="The user's reviews")
    limit: int = Field(default=12, ge=1, le=50, description="Number of recommendations to return")


class GameModel(BaseModel):
    """Catalog game - unified format"""
    app_id: int
    title: str
    genre: str = ''
    tags: List[str] = Field(default_factory=list)
    active_players: Optional[int] = None
    community_rating: Optional[int] = None
    image: str = ''
    short_description: Optional[str] = None
    price: Optional[str] = None
    price_original: Optional[str] = None
    discount_percent: Optional[int] = None
    release_date: Optional[str] = None
    developer: Optional[str] = None
    publisher: Optional[str] = None
    platforms: List[str] = Field(default_factory=list)
    steam_url: Optional[str] = None


class RecommendedGameModel(GameModel):
    recommendation_score: float
    matched_tags: List[str] = Field(default_factory=list)


class RecommendationResponse(BaseModel):
    """Response model for recommendations"""
    recommendations: List[RecommendedGameModel]
    total_found: int
    algorithm: str
    processing_time_ms: float
    cached: bool = False


class RankedGameModel(GameModel):
    is_curated: bool


class RankingResponse(BaseModel):
    """Curated ranking: curated hits first, then popularity fill"""
    games: List[RankedGameModel]
    total_found: int
    curated_count: int
    algorithm: str
    processing_time_ms: float


class ReviewScoreModel(BaseModel):
    app_id: int
    score: Optional[float] = None

    def to_score(self) -> ReviewScore:
        return ReviewScore(app_id=self.app_id, score=self.score)


class CommunityRankingRequest(BaseModel):
    """Review scores from every user, plus optional filters"""
    scores: List[ReviewScoreModel] = Field(default_factory=list)
    genre: str = Field(default='', description="Case-insensitive genre substring filter (e.g. 'rpg')")
    tag: str = Field(default='', description="Case-insensitive tag substring filter (e.g. 'co-op')")
    limit: int = Field(default=100, ge=1, le=500)


class CommunityRankedGameModel(GameModel):
    weighted_score: float
    average_score: float
    votes: int


class CommunityRankingResponse(BaseModel):
    games: List[CommunityRankedGameModel]
    total_found: int
    prior_votes: int
    algorithm: str
    processing_time_ms: float


class ReadyListModel(BaseModel):
    id: str
    title: str
    subtitle: str
    pinned_count: int
    games: List[GameModel]


class ReadyListsResponse(BaseModel):
    lists: List[ReadyListModel]


class CatalogReloadResponse(BaseModel):
    games_loaded: int
    candidate_games: int
    ranking_snapshot: int
