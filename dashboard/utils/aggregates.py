"""
Per-Athlete Aggregation over Events
Scout Dashboard

Athlete-level metrics are always recomputed from the athlete's events (the
authoritative fact stream). Stored athlete aggregates are only used when an
athlete has no events loaded yet.
"""

import math
from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .filters import format_day_month, resolve_score
from .models import PLACEHOLDER, Athlete, Event, FeedEntry


TREND_WINDOW = 30


@dataclass(frozen=True)
class AthleteSummary:
    """Averages over an athlete's events"""
    total_events: int
    avg_score: Optional[int]
    avg_valgus_angle: Optional[float]
    avg_peak_vertical_g: Optional[float]
    avg_peak_lateral_g: Optional[float]
    avg_rotational_vel: Optional[float]
    high_risk_events: int
    last_event_at: Optional[datetime]


@dataclass(frozen=True)
class RiskSlice:
    name: str
    value: int
    pct: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean(frame: pd.DataFrame, column: str, decimals: int) -> Optional[float]:
    """Mean of the present values in a column; None when no event has one."""
    if column not in frame.columns:
        return None
    values = pd.to_numeric(frame[column], errors='coerce').dropna()
    if values.empty:
        return None
    return round(float(values.mean()), decimals)


# ============================================================================
# ORDERING / FRAMES
# ============================================================================

def sort_newest_first(events: Iterable[Event]) -> List[Event]:
    """Newest first; events without a timestamp go last (stable)."""
    items = list(events)
    dated = [e for e in items if e.timestamp is not None]
    undated = [e for e in items if e.timestamp is None]
    return sorted(dated, key=lambda e: e.timestamp, reverse=True) + undated


def latest_event(events: Iterable[Event]) -> Optional[Event]:
    ordered = sort_newest_first(events)
    return ordered[0] if ordered else None


def events_to_frame(events: Iterable[Event]) -> pd.DataFrame:
    """One row per event (FeedEntry rows also carry the profile columns)."""
    rows = []
    for item in events:
        if isinstance(item, FeedEntry):
            row = asdict(item.event)
            row.update(name=item.name, position=item.position, club=item.club,
                       country=item.country, age=item.age)
        else:
            row = asdict(item)
        rows.append(row)

    columns = [f.name for f in Event.__dataclass_fields__.values()]
    frame = pd.DataFrame(rows)
    if frame.empty:
        return pd.DataFrame(columns=columns)
    return frame


# ============================================================================
# SUMMARIES
# ============================================================================

def summarize_events(events: Sequence[Event]) -> AthleteSummary:
    """Live averages computed directly from events"""
    frame = events_to_frame(events)
    ordered = sort_newest_first(events)

    if frame.empty:
        return AthleteSummary(0, 0, 0.0, 0.0, 0.0, 0.0, 0, None)

    scores = pd.to_numeric(frame['efficiency_score'], errors='coerce').dropna()
    avg_score = _round_half_up(float(scores.mean())) if not scores.empty else None

    return AthleteSummary(
        total_events=len(frame),
        avg_score=avg_score,
        avg_valgus_angle=_mean(frame, 'valgus_angle', 1),
        avg_peak_vertical_g=_mean(frame, 'peak_vertical_g', 2),
        avg_peak_lateral_g=_mean(frame, 'peak_lateral_g', 2),
        avg_rotational_vel=_mean(frame, 'peak_rotational_vel', 2),
        high_risk_events=int((frame['risk_level'] == 'HIGH').sum()),
        last_event_at=ordered[0].timestamp if ordered else None,
    )


def risk_distribution(events: Sequence[Event]) -> List[RiskSlice]:
    """Low / High risk counts with whole-number percentages"""
    high = sum(1 for e in events if e.risk_level == 'HIGH')
    low = sum(1 for e in events if e.risk_level == 'LOW')
    total = high + low

    def pct(count: int) -> int:
        return _round_half_up(count / total * 100) if total else 0

    return [
        RiskSlice('Low Risk', low, pct(low)),
        RiskSlice('High Risk', high, pct(high)),
    ]


def trend_series(events: Sequence[Event], metric: str, window: int = TREND_WINDOW) -> pd.DataFrame:
    """
    The most recent `window` events as an oldest-to-newest series.

    Columns: index (1-based), label (day/month or '#n'), value.
    """
    recent = sort_newest_first(events)[:window]
    recent.reverse()

    rows = []
    for i, event in enumerate(recent):
        label = format_day_month(event.timestamp) if event.timestamp else f'#{i + 1}'
        rows.append({'index': i + 1, 'label': label, 'value': getattr(event, metric, None)})

    return pd.DataFrame(rows, columns=['index', 'label', 'value'])


def paginate(items: Sequence, page: int, page_size: int) -> Tuple[list, int]:
    """Slice for a 0-based page and the total page count"""
    total_pages = math.ceil(len(items) / page_size) if page_size > 0 else 0
    page = max(0, min(page, max(total_pages - 1, 0)))
    start = page * page_size
    return list(items[start:start + page_size]), total_pages


# ============================================================================
# ATHLETE JOIN / RECONCILIATION
# ============================================================================

def placeholder_name(athlete_id: Optional[str], length: int = 6) -> str:
    return f'Athlete {athlete_id[:length]}' if athlete_id else 'Athlete ?'


def index_athletes(athletes: Iterable[Athlete]) -> Dict[str, Athlete]:
    return {a.id: a for a in athletes}


def enrich_events(events: Iterable[Event], athletes_by_id: Mapping[str, Athlete]) -> List[FeedEntry]:
    """
    Join events with athlete profiles.

    Athletes that have not loaded yet (or do not exist) get a placeholder
    name derived from the id and '—' for the other profile fields.
    """
    entries = []
    for event in events:
        athlete = athletes_by_id.get(event.athlete_id) if event.athlete_id else None
        if athlete is None:
            entries.append(FeedEntry(event=event, name=placeholder_name(event.athlete_id)))
            continue

        entries.append(FeedEntry(
            event=event,
            name=athlete.name or placeholder_name(event.athlete_id),
            position=athlete.position or PLACEHOLDER,
            club=athlete.club or PLACEHOLDER,
            country=athlete.country or PLACEHOLDER,
            age=athlete.age if athlete.age is not None else PLACEHOLDER,
        ))
    return entries


def reconcile_athlete(athlete: Optional[Athlete], events: Sequence[Event],
                      athlete_id: Optional[str] = None) -> Optional[Athlete]:
    """
    Athlete with aggregates recomputed from its events.

    The per-event averages win over stored athlete-level fields whenever
    the events carry that metric.
    """
    if athlete is None:
        owner = athlete_id or next((e.athlete_id for e in events if e.athlete_id), None)
        if owner is None:
            return None
        athlete = Athlete(id=owner)

    if not events:
        return athlete

    summary = summarize_events(events)
    recomputed = {
        'avg_efficiency_score': summary.avg_score,
        'avg_valgus_angle': summary.avg_valgus_angle,
        'avg_peak_vertical_g': summary.avg_peak_vertical_g,
        'avg_peak_lateral_g': summary.avg_peak_lateral_g,
        'avg_rotational_vel': summary.avg_rotational_vel,
    }
    # A metric no event carries keeps its stored value
    return replace(
        athlete,
        total_jumps=summary.total_events,
        **{name: value for name, value in recomputed.items() if value is not None},
    )


def group_events_by_athlete(events: Iterable[Event]) -> Dict[str, List[Event]]:
    grouped: Dict[str, List[Event]] = {}
    for event in events:
        if event.athlete_id:
            grouped.setdefault(event.athlete_id, []).append(event)
    return grouped


def rank_athletes(athletes: Iterable[Athlete], events: Iterable[Event] = ()) -> List[Athlete]:
    """Athletes reconciled against their events, best score first"""
    grouped = group_events_by_athlete(events)
    reconciled = [reconcile_athlete(a, grouped.get(a.id, [])) for a in athletes]
    return sorted(reconciled, key=resolve_score, reverse=True)
