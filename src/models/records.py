import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

LIBRARY_STATUSES = ('wishlist', 'playing', 'completed', 'dropped')


def to_number(value: Any) -> Optional[float]:
    """Coerce a raw numeric field; absent, malformed and non-finite values become None"""
    if value is None or isinstance(value, bool):
        return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number):
        return None
    return number


def to_count(value: Any) -> Optional[int]:
    number = to_number(value)
    if number is None:
        return None
    return max(0, int(number))


def to_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and math.isnan(value):
        return ''
    return str(value)


def to_labels(value: Any) -> Tuple[str, ...]:
    """Parse a tags/platforms field: list-like, or a '|' separated string"""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part for part in value.split('|') if part.strip())
    if isinstance(value, float):
        return ()

    try:
        return tuple(str(item) for item in value if item is not None)
    except TypeError:
        return ()


def _optional_text(value: Any) -> Optional[str]:
    text = to_text(value)
    return text or None


@dataclass(frozen=True)
class GameRecord:
    """A catalog entry. Only genre, tags, active_players and community_rating are used for scoring."""
    app_id: int
    title: str
    genre: str = ''
    tags: Tuple[str, ...] = ()
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
    platforms: Tuple[str, ...] = ()
    steam_url: Optional[str] = None

    # Scoring reads absent, malformed, non-finite and negative values as 0
    @property
    def players(self) -> int:
        return to_count(self.active_players) or 0

    @property
    def rating(self) -> float:
        rating = to_number(self.community_rating)
        if rating is None:
            return 0
        return max(0.0, rating)

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> 'GameRecord':
        """Build a record from a catalog row (dict or pandas Series)"""
        rating = to_number(row.get('community_rating'))

        return cls(
            app_id=int(to_number(row.get('app_id')) or 0),
            title=to_text(row.get('title')),
            genre=to_text(row.get('genre')),
            tags=to_labels(row.get('tags')),
            active_players=to_count(row.get('active_players')),
            community_rating=int(rating) if rating is not None else None,
            image=to_text(row.get('image')),
            short_description=_optional_text(row.get('short_description')),
            price=_optional_text(row.get('price')),
            price_original=_optional_text(row.get('price_original')),
            discount_percent=to_count(row.get('discount_percent')),
            release_date=_optional_text(row.get('release_date')),
            developer=_optional_text(row.get('developer')),
            publisher=_optional_text(row.get('publisher')),
            platforms=to_labels(row.get('platforms')),
            steam_url=_optional_text(row.get('steam_url')),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['tags'] = list(self.tags)
        data['platforms'] = list(self.platforms)
        return data


@dataclass(frozen=True)
class LibraryEntry:
    app_id: int
    status: str = 'wishlist'
    is_favorite: bool = False
    is_platinumed: bool = False
    hours_played: Optional[float] = None


@dataclass(frozen=True)
class ReviewEntry:
    app_id: int
    is_positive: bool = False
    score: Optional[int] = None

    @property
    def is_positive_signal(self) -> bool:
        # An explicit score wins over the thumbs up/down flag
        score = to_number(self.score)
        if score is not None:
            return score >= 3
        return bool(self.is_positive)


@dataclass(frozen=True)
class ReviewScore:
    """One review score row, as used by the community ranking"""
    app_id: int
    score: Optional[float] = None


@dataclass(frozen=True)
class CuratedEntry:
    label: str
    match: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReadyList:
    id: str
    title: str
    subtitle: str
    app_ids: Tuple[int, ...] = ()
    fallback_keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendedGame:
    game: GameRecord
    recommendation_score: float
    matched_tags: Tuple[str, ...] = ()

    @property
    def app_id(self) -> int:
        return self.game.app_id

    def to_dict(self) -> Dict[str, Any]:
        data = self.game.to_dict()
        data['recommendation_score'] = self.recommendation_score
        data['matched_tags'] = list(self.matched_tags)
        return data


@dataclass(frozen=True)
class RankedGame:
    game: GameRecord
    is_curated: bool = False

    @property
    def app_id(self) -> int:
        return self.game.app_id

    def to_dict(self) -> Dict[str, Any]:
        data = self.game.to_dict()
        data['is_curated'] = self.is_curated
        return data


@dataclass(frozen=True)
class CommunityRankedGame:
    game: GameRecord
    weighted_score: float
    average_score: float
    votes: int

    @property
    def app_id(self) -> int:
        return self.game.app_id

    def to_dict(self) -> Dict[str, Any]:
        data = self.game.to_dict()
        data.update({
            'weighted_score': self.weighted_score,
            'average_score': self.average_score,
            'votes': self.votes,
        })
        return data


@dataclass(frozen=True)
class ResolvedReadyList:
    ready_list: ReadyList
    games: List[GameRecord] = field(default_factory=list)
    pinned_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.ready_list.id,
            'title': self.ready_list.title,
            'subtitle': self.ready_list.subtitle,
            'pinned_count': self.pinned_count,
            'games': [game.to_dict() for game in self.games],
        }
