"""
Unit tests for local snapshot loading and polling feeds
"""

import json
import os
from datetime import timedelta

from dashboard.utils.data_loader import DataLoader, SnapshotFeed
from dashboard.utils.firestore_client import FirestoreError
from dashboard.utils.models import Athlete, Event


ATHLETES = [
    {'id': 'p1', 'name': 'Rahul Sharma', 'age': 16, 'position': 'Midfielder', 'country': 'India'},
    {'id': 'p2', 'name': 'Lucas Silva', 'age': 17, 'position': 'Defender', 'country': 'Brazil'},
]

EVENTS = [
    {'id': 'e1', 'athleteId': 'p1', 'timestamp': '2026-10-05T12:00:00.000Z', 'riskLevel': 'LOW',
     'efficiencyScore': 88},
    {'id': 'e2', 'athleteId': 'p2', 'timestamp': '2026-10-05T14:00:00.000Z', 'riskLevel': 'HIGH',
     'efficiencyScore': 61},
    {'id': 'e3', 'athleteId': 'p1', 'timestamp': '2026-10-05T13:00:00.000Z', 'riskLevel': 'HIGH',
     'efficiencyScore': 70},
    {'id': 'e4', 'athleteId': 'p1', 'riskLevel': 'LOW', 'efficiencyScore': 75},
]


def _write(config, collection, rows):
    os.makedirs(config.DATA_DIR, exist_ok=True)
    with open(config.local_snapshot_path(collection), 'w', encoding='utf-8') as f:
        json.dump(rows, f)


def _loader(local_config):
    _write(local_config, local_config.ATHLETES_COLLECTION, ATHLETES)
    _write(local_config, local_config.EVENTS_COLLECTION, EVENTS)
    return DataLoader(local_config)


class TestLocalSnapshots:

    def test_no_firestore_client_without_project(self, local_config):
        assert DataLoader(local_config).client is None

    def test_missing_snapshot_is_empty(self, local_config):
        loader = DataLoader(local_config)
        assert loader.fetch_athletes() == []
        assert loader.fetch_feed() == []

    def test_fetch_athletes(self, local_config):
        athletes = _loader(local_config).fetch_athletes()
        assert [a.id for a in athletes] == ['p1', 'p2']
        assert athletes[0].age == 16

    def test_fetch_athlete(self, local_config):
        loader = _loader(local_config)
        assert loader.fetch_athlete('p2').name == 'Lucas Silva'
        assert loader.fetch_athlete('nobody') is None

    def test_feed_is_newest_first_and_limited(self, local_config):
        loader = _loader(local_config)
        assert [e.id for e in loader.fetch_feed()] == ['e2', 'e3', 'e1', 'e4']
        assert [e.id for e in loader.fetch_feed(limit=2)] == ['e2', 'e3']

    def test_athlete_events(self, local_config):
        loader = _loader(local_config)
        assert [e.id for e in loader.fetch_athlete_events('p1')] == ['e3', 'e1', 'e4']
        assert loader.fetch_athlete_events('nobody') == []

    def test_latest_event(self, local_config):
        loader = _loader(local_config)
        assert loader.fetch_latest_event('p1').id == 'e3'
        assert loader.fetch_latest_event('nobody') is None

    def test_fetch_collection_parses_by_collection(self, local_config):
        loader = _loader(local_config)
        assert all(isinstance(a, Athlete) for a in loader.fetch_collection('athletes'))
        assert all(isinstance(e, Event) for e in loader.fetch_collection('jumpLogs'))

    def test_subscribe_with_predicate(self, local_config):
        loader = _loader(local_config)
        feed = loader.subscribe('jumpLogs', predicate=lambda e: e.risk_level == 'HIGH')
        assert feed.loading

        assert sorted(e.id for e in feed.refresh()) == ['e2', 'e3']
        assert feed.loaded

    def test_subscription_sees_new_snapshot(self, local_config):
        loader = _loader(local_config)
        feed = loader.subscribe('athletes')
        feed.refresh()

        _write(local_config, 'athletes', ATHLETES + [{'id': 'p3', 'name': 'Kenji'}])
        assert [a.id for a in feed.refresh()] == ['p1', 'p2', 'p3']


class FakeFirestore:
    """Records queries instead of talking to Firestore"""

    def __init__(self, documents):
        self.documents = documents
        self.queries = []

    def run_query(self, collection, where=(), order_by=None, limit=None):
        self.queries.append((collection, list(where), order_by, limit))
        return self.documents

    def get_document(self, collection, doc_id):
        return None


class TestFirestoreQueries:

    def test_feed_query(self, config):
        client = FakeFirestore([('e1', {'athleteId': 'p1'})])
        events = DataLoader(config, client=client).fetch_feed()

        assert [e.id for e in events] == ['e1']
        assert client.queries == [('jumpLogs', [], ('timestamp', 'DESCENDING'), config.FEED_LIMIT)]

    def test_athlete_events_sorted_client_side(self, config):
        client = FakeFirestore([
            ('old', {'athleteId': 'p1', 'timestamp': '2026-10-01T00:00:00Z'}),
            ('new', {'athleteId': 'p1', 'timestamp': '2026-10-02T00:00:00Z'}),
        ])
        events = DataLoader(config, client=client).fetch_athlete_events('p1')

        assert [e.id for e in events] == ['new', 'old']
        assert client.queries[0][1] == [('athleteId', 'EQUAL', 'p1')]
        assert client.queries[0][2] is None

    def test_missing_athlete(self, config):
        assert DataLoader(config, client=FakeFirestore([])).fetch_athlete('x') is None


class TestSnapshotFeed:

    def test_failed_refresh_keeps_last_known_good(self):
        results = [['a', 'b'], FirestoreError('unavailable', 503)]

        def fetch():
            item = results.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        feed = SnapshotFeed(fetch)
        assert feed.refresh() == ['a', 'b']
        assert feed.refresh() == ['a', 'b']
        assert feed.error == 'unavailable'
        assert feed.loaded
        assert not feed.loading

    def test_error_before_first_snapshot(self):
        def fetch():
            raise OSError('disk gone')

        feed = SnapshotFeed(fetch)
        feed.refresh()
        assert feed.records == []
        assert not feed.loading
        assert not feed.loaded

    def test_subscribers_get_full_snapshots(self):
        snapshots = iter([[1], [1, 2]])
        feed = SnapshotFeed(lambda: next(snapshots))
        received = []
        unsubscribe = feed.subscribe(received.append)

        feed.refresh()
        unsubscribe()
        feed.refresh()

        assert received == [[1]]
        assert feed.records == [1, 2]

    def test_refresh_if_stale(self, now):
        calls = []
        feed = SnapshotFeed(lambda: calls.append(1) or list(calls))

        feed.refresh_if_stale(5, now=now)
        assert len(calls) == 1

        feed.updated_at = now
        feed.refresh_if_stale(5, now=now + timedelta(seconds=2))
        assert len(calls) == 1

        feed.refresh_if_stale(5, now=now + timedelta(seconds=5))
        assert len(calls) == 2
