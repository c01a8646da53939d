"""
Firestore REST Client
Scout Dashboard - reads and writes the athletes / jumpLogs collections

Talks to the Firestore v1 REST API with requests. Documents travel as typed
values ({"stringValue": ...}, {"integerValue": "42"}, {"timestampValue":
...}); encode_value / decode_value convert between those and plain Python.
Timestamps stored natively decode to aware UTC datetimes, the same type ISO
strings normalize to in the models.
"""

import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import requests

from .models import to_datetime


Document = Tuple[str, Dict[str, Any]]

COMMIT_BATCH_SIZE = 500


class FirestoreError(Exception):
    """Request to Firestore failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FirestoreAuthError(FirestoreError):
    """Firestore rejected the credentials (401 / 403)"""


# ============================================================================
# VALUE CODEC
# ============================================================================

def encode_value(value: Any) -> Dict[str, Any]:
    """Plain Python value -> Firestore typed value"""
    if value is None:
        return {'nullValue': None}
    if isinstance(value, bool):
        return {'booleanValue': value}
    if isinstance(value, int):
        return {'integerValue': str(value)}
    if isinstance(value, float):
        return {'doubleValue': value}
    if isinstance(value, datetime):
        dt = to_datetime(value)
        return {'timestampValue': dt.strftime('%Y-%m-%dT%H:%M:%S.%fZ')}
    if isinstance(value, str):
        return {'stringValue': value}
    if isinstance(value, Mapping):
        return {'mapValue': {'fields': encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {'arrayValue': {'values': [encode_value(v) for v in value]}}
    return {'stringValue': str(value)}


def encode_fields(data: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    return {str(k): encode_value(v) for k, v in data.items()}


def decode_value(value: Mapping[str, Any]) -> Any:
    """Firestore typed value -> plain Python value"""
    if 'nullValue' in value:
        return None
    if 'booleanValue' in value:
        return bool(value['booleanValue'])
    if 'integerValue' in value:
        try:
            return int(value['integerValue'])
        except (TypeError, ValueError):
            return None
    if 'doubleValue' in value:
        try:
            return float(value['doubleValue'])
        except (TypeError, ValueError):
            return None
    if 'timestampValue' in value:
        return to_datetime(value['timestampValue'])
    if 'stringValue' in value:
        return value['stringValue']
    if 'mapValue' in value:
        return decode_fields(value['mapValue'].get('fields', {}))
    if 'arrayValue' in value:
        return [decode_value(v) for v in value['arrayValue'].get('values', [])]
    if 'referenceValue' in value:
        return value['referenceValue']
    if 'geoPointValue' in value:
        return dict(value['geoPointValue'])
    if 'bytesValue' in value:
        return value['bytesValue']
    return None


def decode_fields(fields: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    return {k: decode_value(v) for k, v in fields.items()}


def decode_document(document: Mapping[str, Any]) -> Document:
    """REST document -> (id, fields)"""
    name = document.get('name', '')
    return name.rsplit('/', 1)[-1], decode_fields(document.get('fields', {}))


# ============================================================================
# CLIENT
# ============================================================================

class FirestoreClient:
    """Minimal Firestore REST client with retry logic"""

    def __init__(self, config, id_token: Optional[str] = None,
                 logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.id_token = id_token
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.sleep = sleep
        self.base_url = config.get_endpoint('firestore')

    @property
    def database_path(self) -> str:
        return f'projects/{self.config.FIREBASE_PROJECT_ID}/databases/(default)/documents'

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.id_token:
            headers['Authorization'] = f'Bearer {self.id_token}'
        return headers

    def _params(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = dict(params or {})
        if self.config.FIREBASE_API_KEY:
            params['key'] = self.config.FIREBASE_API_KEY
        return params

    def _request(self, method: str, url: str, params: Optional[Dict[str, Any]] = None,
                 body: Optional[Dict[str, Any]] = None) -> Any:
        """Make an API call, retrying rate limits, server errors and network failures"""
        last_error = None

        for attempt in range(self.config.MAX_RETRIES):
            try:
                response = self.session.request(
                    method, url,
                    params=self._params(params),
                    json=body,
                    headers=self._headers(),
                    timeout=self.config.REQUEST_TIMEOUT,
                )
            except requests.RequestException as e:
                last_error = e
                self.logger.error(f"Firestore request error (attempt {attempt + 1}): {e}")
                self._backoff(attempt)
                continue

            if response.status_code == 429 or response.status_code >= 500:
                last_error = f"HTTP {response.status_code}"
                self.logger.warning(f"Firestore returned {response.status_code}, retrying...")
                self._backoff(attempt)
                continue

            if response.status_code in (401, 403):
                raise FirestoreAuthError(
                    f"Firestore denied access: {response.status_code} - {response.text[:200]}",
                    response.status_code,
                )

            if response.status_code == 200:
                return response.json() if response.content else {}

            raise FirestoreError(
                f"Firestore request failed: {response.status_code} - {response.text[:200]}",
                response.status_code,
            )

        raise FirestoreError(
            f"Firestore request failed after {self.config.MAX_RETRIES} attempts: {last_error}"
        )

    def _backoff(self, attempt: int):
        if attempt < self.config.MAX_RETRIES - 1:
            self.sleep(self.config.RETRY_BACKOFF_FACTOR ** attempt)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_documents(self, collection: str, limit: Optional[int] = None) -> List[Document]:
        """All documents of a collection (paged), optionally capped at `limit`"""
        url = f'{self.base_url}/{collection}'
        documents: List[Document] = []
        page_token = None

        while True:
            params = {'pageSize': self.config.LIST_PAGE_SIZE}
            if page_token:
                params['pageToken'] = page_token

            data = self._request('GET', url, params=params)
            for doc in data.get('documents', []):
                documents.append(decode_document(doc))
                if limit is not None and len(documents) >= limit:
                    return documents

            page_token = data.get('nextPageToken')
            if not page_token:
                break

        self.logger.debug(f"Listed {len(documents)} documents from {collection}")
        return documents

    def run_query(self, collection: str,
                  where: Sequence[Tuple[str, str, Any]] = (),
                  order_by: Optional[Tuple[str, str]] = None,
                  limit: Optional[int] = None) -> List[Document]:
        """
        Structured query on one collection.

        where: (field, op, value) tuples with REST operators ('EQUAL', ...)
        order_by: (field, 'ASCENDING' | 'DESCENDING')
        """
        query: Dict[str, Any] = {'from': [{'collectionId': collection}]}

        filters = [
            {'fieldFilter': {'field': {'fieldPath': f}, 'op': op, 'value': encode_value(v)}}
            for f, op, v in where
        ]
        if len(filters) == 1:
            query['where'] = filters[0]
        elif filters:
            query['where'] = {'compositeFilter': {'op': 'AND', 'filters': filters}}

        if order_by:
            field_path, direction = order_by
            query['orderBy'] = [{'field': {'fieldPath': field_path}, 'direction': direction}]
        if limit:
            query['limit'] = limit

        rows = self._request('POST', f'{self.base_url}:runQuery', body={'structuredQuery': query})
        return [decode_document(row['document']) for row in rows or [] if 'document' in row]

    def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """One document's fields, or None when it does not exist"""
        try:
            data = self._request('GET', f'{self.base_url}/{collection}/{doc_id}')
        except FirestoreError as e:
            if e.status_code == 404:
                return None
            raise
        return decode_document(data)[1]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_document(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or overwrite a document with a known id"""
        self._request('PATCH', f'{self.base_url}/{collection}/{doc_id}',
                      body={'fields': encode_fields(data)})

    def add_document(self, collection: str, data: Mapping[str, Any]) -> str:
        """Create a document with a storage-assigned id; returns the id"""
        created = self._request('POST', f'{self.base_url}/{collection}',
                                body={'fields': encode_fields(data)})
        return decode_document(created)[0]

    def commit(self, writes: Iterable[Tuple[str, str, Mapping[str, Any]]]) -> int:
        """Batch upserts of (collection, doc_id, data); returns the number written"""
        pending = [
            {'update': {
                'name': f'{self.database_path}/{collection}/{doc_id}',
                'fields': encode_fields(data),
            }}
            for collection, doc_id, data in writes
        ]

        for start in range(0, len(pending), COMMIT_BATCH_SIZE):
            chunk = pending[start:start + COMMIT_BATCH_SIZE]
            self._request('POST', f'{self.base_url}:commit', body={'writes': chunk})
            self.logger.info(f"Committed {len(chunk)} writes")

        return len(pending)
