"""
Tests for the catalog snapshot loader
"""
import json
import os

import pandas as pd
import pytest

from utils.data_loader import CatalogNotFoundError, CatalogSnapshotLoader, parse_labels


@pytest.fixture
def loader(catalog_file, tmp_path):
    return CatalogSnapshotLoader(str(catalog_file), cache_dir=str(tmp_path / 'cache'))


class TestParseLabels:

    def test_list_values(self):
        assert parse_labels(['Co-op', ' RPG ', '', None]) == ['Co-op', 'RPG']

    def test_pipe_separated_string(self):
        assert parse_labels('Co-op| RPG ||Indie') == ['Co-op', 'RPG', 'Indie']

    def test_missing_values(self):
        assert parse_labels(None) == []
        assert parse_labels(float('nan')) == []


class TestLoadAndProcess:

    def test_malformed_numbers_become_absent(self, loader):
        df = loader.load_and_process_data()
        payday = df[df['app_id'] == 218620].iloc[0]

        assert len(df) == 8
        assert pd.isna(payday['community_rating'])
        assert payday['active_players'] == 30000

    def test_missing_columns_are_filled(self, loader):
        df = loader.load_and_process_data()

        assert (df['publisher'] == '').all()
        assert df['platforms'].apply(lambda labels: labels == []).all()

    def test_missing_and_duplicate_ids_dropped(self, tmp_path, catalog_rows):
        rows = catalog_rows + [dict(catalog_rows[0], title='Duplicate'), {'title': 'No id'}, {'app_id': 'abc'}]
        path = tmp_path / 'dirty.json'
        path.write_text(json.dumps(rows), encoding='utf-8')

        df = CatalogSnapshotLoader(str(path), cache_dir=str(tmp_path / 'cache')).load_and_process_data()

        assert len(df) == 8
        assert df['app_id'].is_unique
        assert df[df['app_id'] == 413150].iloc[0]['title'] == 'Stardew Valley'

    def test_negative_and_infinite_values(self):
        raw = pd.DataFrame([
            {'app_id': 1, 'active_players': -5, 'community_rating': float('inf')},
            {'app_id': 2, 'active_players': '12', 'community_rating': '88'},
        ])

        df = CatalogSnapshotLoader.clean_and_process_data(raw)

        assert df.loc[0, 'active_players'] == 0
        assert pd.isna(df.loc[0, 'community_rating'])
        assert df.loc[1, 'active_players'] == 12
        assert df.loc[1, 'community_rating'] == 88

    def test_csv_with_pipe_tags(self, tmp_path):
        path = tmp_path / 'games.csv'
        path.write_text(
            'app_id,title,genre,tags,active_players,community_rating\n'
            '10,Alpha,"Action, RPG",Souls-like|Co-op,100,90\n',
            encoding='utf-8',
        )

        df = CatalogSnapshotLoader(str(path), cache_dir=str(tmp_path / 'cache')).load_and_process_data()

        assert df.loc[0, 'tags'] == ['Souls-like', 'Co-op']
        assert df.loc[0, 'genre'] == 'Action, RPG'

    def test_json_lines(self, tmp_path, catalog_rows):
        path = tmp_path / 'games.jsonl'
        path.write_text('\n'.join(json.dumps(row) for row in catalog_rows[:3]), encoding='utf-8')

        df = CatalogSnapshotLoader(str(path), cache_dir=str(tmp_path / 'cache')).load_and_process_data()

        assert list(df['app_id']) == [413150, 1145360, 367520]

    def test_missing_file(self, tmp_path):
        loader = CatalogSnapshotLoader(str(tmp_path / 'missing.json'), cache_dir=str(tmp_path / 'cache'))

        with pytest.raises(CatalogNotFoundError):
            loader.load_and_process_data()

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / 'games.xml'
        path.write_text('<games/>', encoding='utf-8')

        with pytest.raises(ValueError):
            CatalogSnapshotLoader(str(path), cache_dir=str(tmp_path / 'cache')).load_dataset()


class TestProcessedCache:

    def test_cache_is_written_and_reused(self, loader, monkeypatch):
        loader.load_and_process_data()
        assert loader.processed_cache.exists()

        def fail():
            raise AssertionError('raw export should not be read again')

        monkeypatch.setattr(loader, 'load_dataset', fail)
        df = loader.load_and_process_data()

        assert len(df) == 8

    def test_stale_cache_is_ignored(self, loader, catalog_file, catalog_rows):
        loader.load_and_process_data()

        catalog_file.write_text(json.dumps(catalog_rows[:2]), encoding='utf-8')
        cache_mtime = loader.processed_cache.stat().st_mtime
        os.utime(catalog_file, (cache_mtime + 10, cache_mtime + 10))

        assert len(loader.load_and_process_data()) == 2

    def test_same_named_exports_do_not_share_cache(self, tmp_path):
        cache_dir = str(tmp_path / 'cache')
        older = tmp_path / 'b' / 'games.json'
        newer = tmp_path / 'a' / 'games.json'
        for path, app_id in ((older, 2), (newer, 1)):
            path.parent.mkdir()
            path.write_text(json.dumps([{'app_id': app_id, 'title': f"Game {app_id}"}]), encoding='utf-8')
        os.utime(older, (1_000_000, 1_000_000))

        first = CatalogSnapshotLoader(str(newer), cache_dir=cache_dir)
        second = CatalogSnapshotLoader(str(older), cache_dir=cache_dir)

        assert list(first.load_and_process_data()['app_id']) == [1]
        assert list(second.load_and_process_data()['app_id']) == [2]
        assert first.processed_cache != second.processed_cache


class TestSnapshots:

    def test_candidates_by_rating_missing_last(self, loader):
        candidates = loader.get_candidate_games(limit=100)

        assert list(candidates['app_id']) == [
            413150, 1145360, 367520, 1794680, 588650, 1245620, 218620, 1000001,
        ]

    def test_candidate_limit(self, loader):
        assert list(loader.get_candidate_games(limit=2)['app_id']) == [413150, 1145360]

    def test_ranking_snapshot_keeps_export_order(self, loader):
        assert list(loader.get_ranking_snapshot(limit=3)['app_id']) == [413150, 1145360, 367520]

    def test_games_by_ids(self, loader):
        owned = loader.get_games_by_ids([367520, 367520, 404])

        assert list(owned['app_id']) == [367520]

    def test_to_records(self, loader):
        records = loader.to_records(loader.get_ranking_snapshot(limit=100))
        by_id = {record.app_id: record for record in records}

        assert by_id[413150].tags == ('Farming Sim', 'Relaxing', 'Pixel Graphics')
        assert by_id[413150].community_rating == 98
        assert by_id[218620].community_rating is None
        assert by_id[1000001].active_players is None
        assert by_id[1000001].players == 0
        assert by_id[1000001].short_description is None

    def test_data_summary(self, loader):
        summary = loader.get_data_summary()

        assert summary['total_games'] == 8
        assert summary['games_with_tags'] == 7
        assert summary['games_with_rating'] == 6
        assert summary['top_genres']['action'] == 6
