import unicodedata
from typing import Iterable, List


def normalize_token(value: str) -> str:
    return value.strip().lower()


def game_tokens(genre: str, tags: Iterable[str]) -> List[str]:
    """Genre (comma separated) and tag labels as normalized, deduplicated tokens"""
    tokens = [normalize_token(token) for token in (genre or '').split(',')]
    tokens.extend(normalize_token(str(tag)) for tag in (tags or ()))

    # dict keeps the first occurrence order
    return list(dict.fromkeys(token for token in tokens if token))


def normalize_title(value: str) -> str:
    """Lowercase and strip diacritics ("Pokémon" -> "pokemon")"""
    decomposed = unicodedata.normalize('NFD', value or '')
    stripped = ''.join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.lower()


def matches_filters(tokens: Iterable[str], genre_filter: str = '', tag_filter: str = '') -> bool:
    """Case-insensitive substring filters over a game's tokens; empty filters pass everything"""
    needles = [normalize_token(value or '') for value in (genre_filter, tag_filter)]
    needles = [needle for needle in needles if needle]
    if not needles:
        return True

    tokens = list(tokens)
    return all(any(needle in token for token in tokens) for needle in needles)
