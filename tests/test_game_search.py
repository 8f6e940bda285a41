"""
Tests for catalog title search
"""
import pytest

from services.game_search import GameSearchService


@pytest.fixture
def search_service(make_game):
    return GameSearchService([
        make_game(1, 'Portal'),
        make_game(2, 'Portal 2'),
        make_game(3, 'Pokémon Tower'),
        make_game(4, 'Hollow Knight'),
        make_game(5, 'Hollow Knight'),
        make_game(1, 'Portal (duplicate row)'),
    ])


class TestSearch:

    def test_exact_match_ranks_first(self, search_service):
        results = search_service.search_games_by_name('portal')

        assert [game['app_id'] for game in results] == [1, 2]
        assert results[0]['match_score'] == 100

    def test_diacritic_insensitive(self, search_service):
        results = search_service.search_games_by_name('pokemon')

        assert [game['app_id'] for game in results] == [3]

    def test_typo_tolerance(self, search_service):
        results = search_service.search_games_by_name('holow knight')

        assert {game['app_id'] for game in results} == {4, 5}

    def test_short_query_returns_nothing(self, search_service):
        assert search_service.search_games_by_name('p') == []
        assert search_service.search_games_by_name('   ') == []

    def test_limit(self, search_service):
        assert len(search_service.search_games_by_name('portal', limit=1)) == 1


class TestGetById:

    def test_first_row_wins(self, search_service):
        assert search_service.get_game_by_id(1).title == 'Portal'

    def test_missing(self, search_service):
        assert search_service.get_game_by_id(404) is None
