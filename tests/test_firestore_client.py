"""
Unit tests for the Firestore REST client and its value codec
"""

from datetime import datetime, timezone

import pytest
import requests

from conftest import FakeResponse, FakeSession
from dashboard.utils.firestore_client import (
    COMMIT_BATCH_SIZE,
    FirestoreAuthError,
    FirestoreClient,
    FirestoreError,
    decode_document,
    decode_value,
    encode_fields,
    encode_value,
)


INSTANT = datetime(2026, 1, 31, 9, 15, 30, 250000, tzinfo=timezone.utc)
DOC_PREFIX = 'projects/scout-test/databases/(default)/documents'


def _client(config, responses):
    session = FakeSession(responses)
    sleeps = []
    client = FirestoreClient(config, id_token='token-1', session=session, sleep=sleeps.append)
    return client, session, sleeps


def _doc(collection, doc_id, **fields):
    return {'name': f'{DOC_PREFIX}/{collection}/{doc_id}', 'fields': encode_fields(fields)}


class TestValueCodec:

    def test_scalars(self):
        assert encode_value(42) == {'integerValue': '42'}
        assert encode_value(4.5) == {'doubleValue': 4.5}
        assert encode_value(True) == {'booleanValue': True}
        assert encode_value(None) == {'nullValue': None}
        assert encode_value('LOW') == {'stringValue': 'LOW'}

    def test_integer_strings_decode_to_int(self):
        assert decode_value({'integerValue': '87'}) == 87
        assert decode_value({'integerValue': 'x'}) is None

    def test_timestamp_decodes_to_same_instant_as_iso_string(self):
        encoded = encode_value(INSTANT)
        assert encoded == {'timestampValue': '2026-01-31T09:15:30.250000Z'}
        assert decode_value(encoded) == INSTANT
        assert decode_value({'timestampValue': '2026-01-31T09:15:30.25Z'}) == INSTANT

    def test_nested_values(self):
        value = {'tags': ['a', 1], 'meta': {'ok': False}}
        assert decode_value(encode_value(value)) == value

    def test_unknown_type_is_none(self):
        assert decode_value({}) is None

    def test_decode_document(self):
        doc_id, fields = decode_document(_doc('athletes', 'player-001', name='Rahul', age=16))
        assert doc_id == 'player-001'
        assert fields == {'name': 'Rahul', 'age': 16}


class TestRequests:

    def test_sends_token_and_key(self, config):
        client, session, _ = _client(config, [FakeResponse(200, {'documents': []})])
        client.list_documents('athletes')

        method, url, kwargs = session.calls[0]
        assert method == 'GET'
        assert url.endswith('/documents/athletes')
        assert kwargs['headers']['Authorization'] == 'Bearer token-1'
        assert kwargs['params']['key'] == 'test-key'

    def test_retries_server_errors(self, config):
        client, session, sleeps = _client(config, [
            FakeResponse(503, text='unavailable'),
            FakeResponse(200, {'documents': [_doc('athletes', 'a1', name='Kenji')]}),
        ])
        assert client.list_documents('athletes') == [('a1', {'name': 'Kenji'})]
        assert len(session.calls) == 2
        assert len(sleeps) == 1

    def test_retries_network_errors(self, config):
        client, _, _ = _client(config, [
            requests.ConnectionError('reset'),
            FakeResponse(200, {'documents': []}),
        ])
        assert client.list_documents('athletes') == []

    def test_gives_up_after_max_retries(self, config):
        client, session, _ = _client(config, [FakeResponse(500, text='boom')] * config.MAX_RETRIES)
        with pytest.raises(FirestoreError, match='after 3 attempts'):
            client.list_documents('athletes')
        assert len(session.calls) == config.MAX_RETRIES

    def test_auth_failure_is_not_retried(self, config):
        client, session, _ = _client(config, [FakeResponse(401, text='denied')])
        with pytest.raises(FirestoreAuthError) as excinfo:
            client.list_documents('athletes')
        assert excinfo.value.status_code == 401
        assert len(session.calls) == 1

    def test_client_error(self, config):
        client, _, _ = _client(config, [FakeResponse(400, text='bad query')])
        with pytest.raises(FirestoreError) as excinfo:
            client.list_documents('athletes')
        assert not isinstance(excinfo.value, FirestoreAuthError)
        assert excinfo.value.status_code == 400


class TestReads:

    def test_list_follows_page_tokens(self, config):
        client, session, _ = _client(config, [
            FakeResponse(200, {'documents': [_doc('athletes', 'a1')], 'nextPageToken': 'p2'}),
            FakeResponse(200, {'documents': [_doc('athletes', 'a2')]}),
        ])
        assert [d[0] for d in client.list_documents('athletes')] == ['a1', 'a2']
        assert session.calls[1][2]['params']['pageToken'] == 'p2'

    def test_list_stops_at_limit(self, config):
        client, session, _ = _client(config, [
            FakeResponse(200, {'documents': [_doc('jumpLogs', 'e1'), _doc('jumpLogs', 'e2')],
                               'nextPageToken': 'more'}),
        ])
        assert len(client.list_documents('jumpLogs', limit=1)) == 1
        assert len(session.calls) == 1

    def test_run_query_body(self, config):
        client, session, _ = _client(config, [FakeResponse(200, [
            {'document': _doc('jumpLogs', 'e1', athleteId='p1', efficiencyScore=80)},
            {'readTime': '2026-01-31T09:15:00Z'},
        ])])
        rows = client.run_query('jumpLogs', where=[('athleteId', 'EQUAL', 'p1')],
                                order_by=('timestamp', 'DESCENDING'), limit=100)

        assert rows == [('e1', {'athleteId': 'p1', 'efficiencyScore': 80})]
        method, url, kwargs = session.calls[0]
        assert method == 'POST'
        assert url.endswith('/documents:runQuery')
        query = kwargs['json']['structuredQuery']
        assert query['from'] == [{'collectionId': 'jumpLogs'}]
        assert query['where']['fieldFilter']['value'] == {'stringValue': 'p1'}
        assert query['orderBy'][0]['direction'] == 'DESCENDING'
        assert query['limit'] == 100

    def test_run_query_combines_filters(self, config):
        client, session, _ = _client(config, [FakeResponse(200, [])])
        client.run_query('jumpLogs', where=[('athleteId', 'EQUAL', 'p1'),
                                            ('riskLevel', 'EQUAL', 'HIGH')])
        where = session.calls[0][2]['json']['structuredQuery']['where']
        assert where['compositeFilter']['op'] == 'AND'
        assert len(where['compositeFilter']['filters']) == 2

    def test_get_document(self, config):
        client, _, _ = _client(config, [FakeResponse(200, _doc('athletes', 'p1', name='Emma'))])
        assert client.get_document('athletes', 'p1') == {'name': 'Emma'}

    def test_missing_document_is_none(self, config):
        client, _, _ = _client(config, [FakeResponse(404, text='not found')])
        assert client.get_document('athletes', 'nobody') is None


class TestWrites:

    def test_add_document_returns_assigned_id(self, config):
        client, session, _ = _client(config, [FakeResponse(200, _doc('jumpLogs', 'auto-id'))])
        assert client.add_document('jumpLogs', {'athleteId': 'p1', 'efficiencyScore': 70}) == 'auto-id'
        fields = session.calls[0][2]['json']['fields']
        assert fields['efficiencyScore'] == {'integerValue': '70'}

    def test_set_document_patches_by_id(self, config):
        client, session, _ = _client(config, [FakeResponse(200, _doc('athletes', 'p1'))])
        client.set_document('athletes', 'p1', {'name': 'Omar'})
        method, url, _ = session.calls[0]
        assert method == 'PATCH'
        assert url.endswith('/athletes/p1')

    def test_commit_chunks_writes(self, config):
        total = COMMIT_BATCH_SIZE + 20
        client, session, _ = _client(config, [FakeResponse(200, {}), FakeResponse(200, {})])
        writes = [('athletes', f'p{i}', {'name': f'n{i}'}) for i in range(total)]

        assert client.commit(writes) == total
        assert [len(c[2]['json']['writes']) for c in session.calls] == [COMMIT_BATCH_SIZE, 20]
        first = session.calls[0][2]['json']['writes'][0]['update']
        assert first['name'] == f'{DOC_PREFIX}/athletes/p0'
