"""
Tests for token and title normalization helpers
"""
from utils.text import game_tokens, matches_filters, normalize_title


class TestGameTokens:

    def test_genre_split_and_tags_appended(self):
        assert game_tokens('Action, RPG', ['Souls-like']) == ['action', 'rpg', 'souls-like']

    def test_duplicates_and_blanks_removed(self):
        assert game_tokens(' RPG ,, rpg', ['RPG', '  ', 'Co-op']) == ['rpg', 'co-op']

    def test_missing_values(self):
        assert game_tokens('', ()) == []
        assert game_tokens(None, None) == []


class TestNormalizeTitle:

    def test_strips_diacritics(self):
        assert normalize_title('Pokémon Épée') == 'pokemon epee'

    def test_empty(self):
        assert normalize_title('') == ''
        assert normalize_title(None) == ''


class TestMatchesFilters:

    def test_empty_filters_pass(self):
        assert matches_filters([], '', '')
        assert matches_filters(['rpg'], '  ', None)

    def test_substring_match(self):
        assert matches_filters(['action rpg'], genre_filter='RPG')
        assert not matches_filters(['action'], genre_filter='rpg')

    def test_both_filters_required(self):
        tokens = ['rpg', 'co-op']
        assert matches_filters(tokens, 'rpg', 'co-op')
        assert not matches_filters(tokens, 'rpg', 'racing')
