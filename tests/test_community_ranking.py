"""
Tests for the Bayesian community ranking
"""
import pytest

from models.community_ranking import CommunityRanking
from models.records import ReviewScore


def scores(*rows):
    return [ReviewScore(app_id=app_id, score=score) for app_id, score in rows]


class TestCommunityRanking:

    def test_weighted_score_formula(self, make_game):
        catalog = [make_game(1), make_game(2)]
        rows = scores((1, 5), (1, 5), (2, 2))

        ranking = CommunityRanking(prior_votes=20).rank(rows, catalog)

        global_average = 4.0
        expected = 2 / 22 * 5 + 20 / 22 * global_average
        assert ranking[0].app_id == 1
        assert ranking[0].weighted_score == pytest.approx(expected)
        assert ranking[0].average_score == 5
        assert ranking[0].votes == 2

    def test_games_without_votes_are_skipped(self, make_game):
        catalog = [make_game(1), make_game(2)]

        ranking = CommunityRanking().rank(scores((1, 4)), catalog)

        assert [item.app_id for item in ranking] == [1]

    def test_empty_inputs(self, make_game):
        assert CommunityRanking().rank([], [make_game(1)]) == []
        assert CommunityRanking().rank(scores((1, 4)), []) == []
        assert CommunityRanking().rank(scores((1, None)), [make_game(1)]) == []

    def test_ties_broken_by_votes_then_players(self, make_game):
        catalog = [
            make_game(1, active_players=10),
            make_game(2, active_players=500),
            make_game(3, active_players=1),
        ]
        # Without a prior every weighted score is the plain average
        rows = scores((1, 4), (2, 4), (3, 4), (3, 4))

        ranking = CommunityRanking(prior_votes=0).rank(rows, catalog)

        assert [item.app_id for item in ranking] == [3, 2, 1]

    def test_filters_and_limit(self, make_game):
        catalog = [
            make_game(1, genre='RPG'),
            make_game(2, genre='Racing'),
            make_game(3, tags=['JRPG']),
        ]
        rows = scores((1, 5), (2, 5), (3, 1))

        ranking = CommunityRanking().rank(rows, catalog, genre_filter='rpg')
        assert [item.app_id for item in ranking] == [1, 3]

        assert len(CommunityRanking().rank(rows, catalog, limit=1)) == 1

    def test_prior_pulls_single_votes_towards_average(self, make_game):
        catalog = [make_game(1), make_game(2), make_game(3)]
        rows = scores((1, 5), *[(2, 4)] * 30, *[(3, 1)] * 10)

        ranking = CommunityRanking().rank(rows, catalog)

        assert [item.app_id for item in ranking] == [2, 1, 3]
        assert ranking[1].average_score > ranking[0].average_score
