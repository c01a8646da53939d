"""
Data Loading and Snapshot Utilities
Scout Dashboard - athletes / jumpLogs

Supports both local JSON snapshots (written by scripts/seed_firestore.py)
and Firestore. When no Firestore project is configured the local snapshots
are read instead.

Every read returns a full snapshot of the matching records, never a diff.
SnapshotFeed wraps a fetch so pages can poll it: a failed refresh keeps the
last-known-good records and exposes the error.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import streamlit as st

from config.scout_config import ScoutConfig

from .aggregates import latest_event, sort_newest_first
from .firestore_client import Document, FirestoreClient, FirestoreError
from .logger import get_logger
from .models import Athlete, Event


Predicate = Callable[[Any], bool]


# ============================================================================
# CONFIG
# ============================================================================

def load_config(env_path: Optional[str] = None) -> ScoutConfig:
    """Config from .env / environment, overlaid with Streamlit secrets when present."""
    config = ScoutConfig.from_env(env_path)
    try:
        if hasattr(st, 'secrets') and 'firebase' in st.secrets:
            config = ScoutConfig.from_streamlit_secrets(st.secrets, fallback=config)
    except Exception:
        # No secrets.toml outside Streamlit Cloud
        pass
    return config


# ============================================================================
# SNAPSHOT FEED
# ============================================================================

class SnapshotFeed:
    """Polling subscription delivering full snapshots to subscribers"""

    def __init__(self, fetch: Callable[[], List[Any]], name: str = 'feed',
                 logger: Optional[logging.Logger] = None):
        self._fetch = fetch
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.records: List[Any] = []
        self.error: Optional[str] = None
        self.loaded = False
        self.updated_at: Optional[datetime] = None
        self._subscribers: List[Callable[[List[Any]], None]] = []

    @property
    def loading(self) -> bool:
        return not self.loaded and self.error is None

    def subscribe(self, callback: Callable[[List[Any]], None]) -> Callable[[], None]:
        """Register a snapshot callback; returns an unsubscribe function"""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def refresh(self) -> List[Any]:
        """Fetch a full snapshot; on failure keep the last-known-good records"""
        try:
            snapshot = list(self._fetch())
        except (FirestoreError, OSError, ValueError) as e:
            self.error = str(e)
            self.logger.error(f"{self.name} refresh failed, keeping {len(self.records)} records: {e}")
            return self.records

        self.records = snapshot
        self.error = None
        self.loaded = True
        self.updated_at = datetime.now(timezone.utc)

        for callback in list(self._subscribers):
            callback(snapshot)

        return snapshot

    def refresh_if_stale(self, max_age_seconds: float, now: Optional[datetime] = None) -> List[Any]:
        now = now or datetime.now(timezone.utc)
        if self.updated_at is None or (now - self.updated_at).total_seconds() >= max_age_seconds:
            return self.refresh()
        return self.records


# ============================================================================
# MAIN DATA LOADER
# ============================================================================

class DataLoader:
    """
    Reads athletes and events from local snapshots or Firestore.

    Priority:
    1. Firestore (when FIREBASE_PROJECT_ID is configured)
    2. Local JSON snapshots in DATA_DIR
    """

    def __init__(self, config: ScoutConfig, client: Optional[FirestoreClient] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or get_logger('scout.data_loader', config)
        if client is None and config.use_firestore:
            client = FirestoreClient(config, logger=self.logger)
        self.client = client

    # ------------------------------------------------------------------
    # Raw documents
    # ------------------------------------------------------------------

    def _read_local(self, collection: str) -> List[Document]:
        path = self.config.local_snapshot_path(collection)
        if not os.path.exists(path):
            self.logger.warning(f"No local snapshot for {collection} at {path}")
            return []

        with open(path, encoding='utf-8') as f:
            rows = json.load(f)

        documents = []
        for i, row in enumerate(rows):
            data = {k: v for k, v in row.items() if k != 'id'}
            documents.append((str(row.get('id', f'{collection}-{i}')), data))
        return documents

    def _documents(self, collection: str, limit: Optional[int] = None) -> List[Document]:
        if self.client is not None:
            return self.client.list_documents(collection, limit=limit)
        documents = self._read_local(collection)
        return documents[:limit] if limit is not None else documents

    # ------------------------------------------------------------------
    # Typed reads
    # ------------------------------------------------------------------

    def fetch_athletes(self) -> List[Athlete]:
        return [Athlete.from_document(doc_id, data)
                for doc_id, data in self._documents(self.config.ATHLETES_COLLECTION)]

    def fetch_athlete(self, athlete_id: str) -> Optional[Athlete]:
        if self.client is not None:
            data = self.client.get_document(self.config.ATHLETES_COLLECTION, athlete_id)
            return Athlete.from_document(athlete_id, data) if data is not None else None

        for doc_id, data in self._read_local(self.config.ATHLETES_COLLECTION):
            if doc_id == athlete_id:
                return Athlete.from_document(doc_id, data)
        return None

    def fetch_feed(self, limit: Optional[int] = None) -> List[Event]:
        """Most recent events across all athletes, newest first"""
        limit = limit or self.config.FEED_LIMIT
        collection = self.config.EVENTS_COLLECTION

        if self.client is not None:
            documents = self.client.run_query(collection, order_by=('timestamp', 'DESCENDING'),
                                              limit=limit)
            return [Event.from_document(doc_id, data) for doc_id, data in documents]

        events = [Event.from_document(doc_id, data) for doc_id, data in self._read_local(collection)]
        return sort_newest_first(events)[:limit]

    def fetch_athlete_events(self, athlete_id: str, limit: Optional[int] = None) -> List[Event]:
        """One athlete's events, sorted newest first client-side"""
        limit = limit or self.config.ATHLETE_EVENT_LIMIT
        collection = self.config.EVENTS_COLLECTION

        if self.client is not None:
            documents = self.client.run_query(collection, where=[('athleteId', 'EQUAL', athlete_id)],
                                              limit=limit)
            events = [Event.from_document(doc_id, data) for doc_id, data in documents]
        else:
            events = [Event.from_document(doc_id, data)
                      for doc_id, data in self._read_local(collection)
                      if data.get('athleteId') == athlete_id][:limit]

        return sort_newest_first(events)

    def fetch_latest_event(self, athlete_id: str) -> Optional[Event]:
        return latest_event(self.fetch_athlete_events(athlete_id, self.config.LATEST_EVENT_WINDOW))

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def fetch_collection(self, collection: str, predicate: Optional[Predicate] = None,
                         limit: Optional[int] = None) -> List[Any]:
        """Every record of a collection as models, optionally filtered by a predicate"""
        if collection == self.config.ATHLETES_COLLECTION:
            def parse(doc_id, data):
                return Athlete.from_document(doc_id, data)
        else:
            def parse(doc_id, data):
                return Event.from_document(doc_id, data)

        records = [parse(doc_id, data) for doc_id, data in self._documents(collection, limit)]
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        return records

    def subscribe(self, collection: str, predicate: Optional[Predicate] = None,
                  limit: Optional[int] = None) -> SnapshotFeed:
        """Snapshot feed over a collection, optionally filtered by a predicate"""
        return SnapshotFeed(lambda: self.fetch_collection(collection, predicate, limit),
                            name=collection, logger=self.logger)


# ============================================================================
# STREAMLIT SESSION FEEDS
# ============================================================================

def session_feed(key: str, make_feed: Callable[[], SnapshotFeed],
                 max_age_seconds: float) -> SnapshotFeed:
    """
    A SnapshotFeed kept in st.session_state and refreshed when stale.

    Keeping it in the session preserves the last-known-good snapshot across
    reruns when the store is unreachable.
    """
    feeds: Dict[str, SnapshotFeed] = st.session_state.setdefault('_snapshot_feeds', {})
    feed = feeds.get(key)
    if feed is None:
        feed = make_feed()
        feeds[key] = feed
    feed.refresh_if_stale(max_age_seconds)
    return feed
