"""
Pytest fixtures and configuration for SpotLight discovery tests
"""
import json

import pytest

from models.records import GameRecord


@pytest.fixture
def make_game():
    """Factory for catalog records with sensible defaults"""
    def _make_game(app_id, title=None, genre='', tags=(), active_players=None, community_rating=None):
        return GameRecord(
            app_id=app_id,
            title=title if title is not None else f"Game {app_id}",
            genre=genre,
            tags=tuple(tags),
            active_players=active_players,
            community_rating=community_rating,
        )
    return _make_game


@pytest.fixture
def catalog_rows():
    """Raw catalog export rows, as written by the Steam sync scripts"""
    return [
        {
            'app_id': 413150, 'title': 'Stardew Valley', 'genre': 'Indie, RPG, Simulation',
            'tags': ['Farming Sim', 'Relaxing', 'Pixel Graphics'],
            'active_players': 60000, 'community_rating': 98, 'image': 'stardew.jpg',
        },
        {
            'app_id': 1145360, 'title': 'Hades', 'genre': 'Action, Indie, RPG',
            'tags': ['Roguelike', 'Action Roguelike', 'Hack and Slash'],
            'active_players': 20000, 'community_rating': 98,
        },
        {
            'app_id': 367520, 'title': 'Hollow Knight', 'genre': 'Action, Indie',
            'tags': ['Metroidvania', 'Souls-like', 'Platformer'],
            'active_players': 15000, 'community_rating': 97,
        },
        {
            'app_id': 1245620, 'title': 'ELDEN RING', 'genre': 'Action, RPG',
            'tags': ['Souls-like', 'Open World', 'Dark Fantasy'],
            'active_players': 90000, 'community_rating': 93,
        },
        {
            'app_id': 588650, 'title': 'Dead Cells', 'genre': 'Action, Indie',
            'tags': ['Roguelike', 'Metroidvania', 'Action Roguelike'],
            'active_players': 5000, 'community_rating': 96,
        },
        {
            'app_id': 1794680, 'title': 'Vampire Survivors', 'genre': 'Action, Casual, Indie',
            'tags': ['Roguelite', 'Bullet Hell', 'Arcade'],
            'active_players': 25000, 'community_rating': 97,
        },
        {
            'app_id': 218620, 'title': 'PAYDAY 2', 'genre': 'Action, RPG',
            'tags': ['Co-op', 'Heist', 'Online Co-Op'],
            'active_players': 30000, 'community_rating': 'not a number',
        },
        {
            'app_id': 1000001, 'title': 'Pokémon Tower', 'genre': '',
            'tags': [],
            'active_players': None, 'community_rating': None,
        },
    ]


@pytest.fixture
def catalog_file(tmp_path, catalog_rows):
    """Catalog export written to a temporary JSON file"""
    path = tmp_path / 'games.json'
    path.write_text(json.dumps(catalog_rows), encoding='utf-8')
    return path
