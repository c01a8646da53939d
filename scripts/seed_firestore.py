"""
Seed the scout dashboard with the demo roster and generated jump/cut events.

Writes to Firestore when FIREBASE_PROJECT_ID is configured, otherwise to the
local JSON snapshots the dashboard reads (data/athletes.json, data/jumpLogs.json).

Usage:
    python scripts/seed_firestore.py                      # Firestore, or data/ when no project is set
    python scripts/seed_firestore.py --output-dir data    # Always write local snapshots
    python scripts/seed_firestore.py --seed 42 --dry-run  # Reproducible batch, write nothing
    python scripts/seed_firestore.py --min-events 5 --max-events 10
"""
import argparse
import json
import os
import random
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.scout_config import ScoutConfig
from config.seed_profiles import SEED_ATHLETES
from dashboard.utils.firestore_client import FirestoreClient, FirestoreError
from dashboard.utils.logger import get_logger
from dashboard.utils.models import Athlete, Event, to_iso_string
from dashboard.utils.seed_generator import generate_seed_dataset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Seed athletes and jump/cut events')
    parser.add_argument('--seed', type=int, help='Random seed for a reproducible batch')
    parser.add_argument('--dry-run', action='store_true', help='Generate and summarize without writing')
    parser.add_argument('--output-dir', help='Write local JSON snapshots to this directory instead of Firestore')
    parser.add_argument('--min-events', type=int, default=25, help='Minimum events per athlete (inclusive)')
    parser.add_argument('--max-events', type=int, default=50, help='Maximum events per athlete (exclusive)')
    return parser


def event_id(rng: random.Random) -> str:
    """20-character id in the style of storage-assigned document ids"""
    return '%020x' % rng.getrandbits(80)


def _json_default(value):
    if isinstance(value, datetime):
        return to_iso_string(value)
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def write_local(athletes: List[Athlete], events: List[Event], output_dir: str,
                config: ScoutConfig, rng: random.Random) -> List[str]:
    """Write {collection}.json snapshot files; returns the paths written"""
    os.makedirs(output_dir, exist_ok=True)

    snapshots = {
        config.ATHLETES_COLLECTION: [{'id': a.id, **a.to_document()} for a in athletes],
        config.EVENTS_COLLECTION: [{'id': e.id or event_id(rng), **e.to_document()} for e in events],
    }

    paths = []
    for collection, rows in snapshots.items():
        path = os.path.join(output_dir, f'{collection}.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(rows, f, indent=2, ensure_ascii=False, default=_json_default)
        paths.append(path)

    return paths


def write_firestore(client: FirestoreClient, config: ScoutConfig,
                    athletes: List[Athlete], events: List[Event], logger) -> int:
    """Upsert athletes by id, then add every event with a storage-assigned id"""
    written = client.commit(
        (config.ATHLETES_COLLECTION, a.id, a.to_document()) for a in athletes
    )
    logger.info(f"Wrote {written} athletes to {config.ATHLETES_COLLECTION}")

    for i, event in enumerate(events, 1):
        client.add_document(config.EVENTS_COLLECTION, event.to_document())
        if i % 50 == 0:
            logger.info(f"  {i}/{len(events)} events written")

    logger.info(f"Wrote {len(events)} events to {config.EVENTS_COLLECTION}")
    return written + len(events)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ScoutConfig.from_env()
    logger = get_logger('scout.seed', config)

    if args.min_events < 0 or args.max_events < args.min_events:
        logger.error(f"Invalid event range: [{args.min_events}, {args.max_events})")
        return 2

    rng = random.Random(args.seed)
    now = datetime.now(timezone.utc)

    athletes, events = generate_seed_dataset(
        SEED_ATHLETES, rng=rng, now=now, event_count=(args.min_events, args.max_events),
    )
    for event in events:
        event.uploaded_at = now

    high = sum(1 for e in events if e.risk_level == 'HIGH')
    logger.info(f"Generated {len(athletes)} athletes, {len(events)} events ({high} high risk)")

    if args.dry_run:
        for athlete in athletes:
            count = sum(1 for e in events if e.athlete_id == athlete.id)
            logger.info(f"  {athlete.display_name:<20} {athlete.position or '-':<12} {count} events")
        logger.info("Dry run - nothing written")
        return 0

    if args.output_dir or not config.use_firestore:
        output_dir = args.output_dir or config.DATA_DIR
        try:
            paths = write_local(athletes, events, output_dir, config, rng)
        except OSError as e:
            logger.error(f"Could not write snapshots to {output_dir}: {e}")
            return 1
        for path in paths:
            logger.info(f"Saved {path}")
        return 0

    if not config.SERVICE_TOKEN:
        logger.warning("FIREBASE_SERVICE_TOKEN not set - writes rely on open security rules")

    client = FirestoreClient(config, id_token=config.SERVICE_TOKEN, logger=logger)
    try:
        total = write_firestore(client, config, athletes, events, logger)
    except FirestoreError as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info(f"Seed complete: {total} documents in project {config.FIREBASE_PROJECT_ID}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
