"""
Tests for the seeding script's local snapshot output
"""

import importlib.util
import json
import os
import random

import pytest

from config.seed_profiles import SEED_ATHLETES
from dashboard.utils.data_loader import DataLoader
from dashboard.utils.firestore_client import FirestoreError


SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                      'scripts', 'seed_firestore.py')


@pytest.fixture(scope='module')
def seed_script():
    spec = importlib.util.spec_from_file_location('seed_firestore', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def no_firestore(monkeypatch, tmp_path):
    monkeypatch.delenv('FIREBASE_PROJECT_ID', raising=False)
    monkeypatch.setenv('SCOUT_DATA_DIR', str(tmp_path / 'data'))
    monkeypatch.chdir(tmp_path)


class TestSeedScript:

    def test_writes_snapshots_the_loader_reads(self, seed_script, local_config, tmp_path):
        out = str(tmp_path / 'data')
        code = seed_script.main(['--seed', '1', '--output-dir', out,
                                 '--min-events', '2', '--max-events', '3'])
        assert code == 0

        with open(os.path.join(out, 'jumpLogs.json'), encoding='utf-8') as f:
            rows = json.load(f)
        assert len(rows) == 2 * len(SEED_ATHLETES)
        assert all(len(row['id']) == 20 for row in rows)
        assert all(row['uploadedAt'].endswith('Z') for row in rows)

        loader = DataLoader(local_config)
        assert len(loader.fetch_athletes()) == len(SEED_ATHLETES)
        assert len(loader.fetch_feed()) == len(rows)

    def test_dry_run_writes_nothing(self, seed_script, tmp_path):
        assert seed_script.main(['--seed', '1', '--dry-run']) == 0
        assert not os.path.exists(tmp_path / 'data' / 'athletes.json')

    def test_invalid_event_range(self, seed_script):
        assert seed_script.main(['--min-events', '10', '--max-events', '5']) == 2

    def test_event_ids_are_reproducible(self, seed_script):
        assert seed_script.event_id(random.Random(3)) == seed_script.event_id(random.Random(3))


class FakeClient:

    def __init__(self, fail_on_event=None):
        self.committed = []
        self.added = []
        self.fail_on_event = fail_on_event

    def commit(self, writes):
        self.committed.extend(writes)
        return len(self.committed)

    def add_document(self, collection, data):
        if self.fail_on_event is not None and len(self.added) == self.fail_on_event:
            raise FirestoreError('quota exceeded', 429)
        self.added.append((collection, data))
        return f'id-{len(self.added)}'


class TestFirestoreWrites:

    def _dataset(self, now):
        from dashboard.utils.seed_generator import generate_seed_dataset
        return generate_seed_dataset(rng=random.Random(4), now=now, event_count=(1, 2))

    def test_athletes_upserted_then_events_added(self, seed_script, local_config, now):
        athletes, events = self._dataset(now)
        client = FakeClient()
        logger = seed_script.get_logger('scout.seed.test')

        total = seed_script.write_firestore(client, local_config, athletes, events, logger)

        assert total == len(athletes) + len(events)
        assert [w[1] for w in client.committed] == [a.id for a in athletes]
        assert {c for c, _ in client.added} == {'jumpLogs'}

    def test_failure_propagates(self, seed_script, local_config, now):
        athletes, events = self._dataset(now)
        logger = seed_script.get_logger('scout.seed.test')
        with pytest.raises(FirestoreError):
            seed_script.write_firestore(FakeClient(fail_on_event=0), local_config,
                                        athletes, events, logger)
