"""
Classification, Formatting and Filtering Utilities
Scout Dashboard

Pure functions mapping raw metrics (score, valgus angle, risk level,
timestamps, age) to display classifications, plus the filter engine used by
the live feed and the scouting list. None of these raise: missing or
malformed input falls back to a placeholder ("—" / "Never").
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .models import PLACEHOLDER, as_float, to_datetime


ALL = 'All'

POSITIONS = [ALL, 'Forward', 'Midfielder', 'Defender', 'Goalkeeper']
AGE_GROUPS = [ALL, 'Under 15', '15-17', 'Over 17']
RISK_LEVELS = [ALL, 'HIGH', 'LOW']

ELITE_THRESHOLD = 80
GOOD_THRESHOLD = 60
VALGUS_WARN_THRESHOLD = 10.0
VALGUS_DANGER_THRESHOLD = 15.0

MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

SEARCH_FIELDS = ('name', 'club', 'country', 'position', 'movement_type')

# snake_case attribute -> camelCase document key, for records passed as dicts
_DOCUMENT_KEYS = {
    'movement_type': 'movementType',
    'risk_level': 'riskLevel',
    'avg_efficiency_score': 'avgEfficiencyScore',
    'efficiency_score': 'efficiencyScore',
    'athlete_id': 'athleteId',
}


@dataclass(frozen=True)
class Badge:
    label: str
    status: str  # theme status: excellent / warning / danger


@dataclass(frozen=True)
class ValgusInfo:
    status: str  # unknown / good / warn / danger
    label: str


# ============================================================================
# FIELD ACCESS
# ============================================================================

def get_field(record: Any, name: str) -> Any:
    """Read a field from a dataclass-like record or a document mapping."""
    if isinstance(record, dict):
        if name in record:
            return record[name]
        return record.get(_DOCUMENT_KEYS.get(name, name))
    return getattr(record, name, None)


def raw_score(record: Any) -> Optional[float]:
    """
    A record's efficiency score as stored, without rounding.

    Fallback chain: avg_efficiency_score (aggregate name), then
    efficiency_score (legacy / per-event name), then None.
    """
    if record is None:
        return None
    for name in ('avg_efficiency_score', 'efficiency_score'):
        value = as_float(get_field(record, name))
        if value is not None:
            return value
    return None


def resolve_score(record: Any) -> int:
    """Displayed score: raw_score rounded half up, 0 when absent."""
    value = raw_score(record)
    if value is None:
        return 0
    return int(math.floor(value + 0.5))


# ============================================================================
# SCORE / VALGUS / RISK / AGE
# ============================================================================

def _score_value(score: Any) -> float:
    value = as_float(score)
    return 0.0 if value is None else value


def score_tier(score: Any) -> str:
    """Elite (>= 80), Good (>= 60) or Needs Work. Missing scores count as 0."""
    value = _score_value(score)
    if value >= ELITE_THRESHOLD:
        return 'Elite'
    if value >= GOOD_THRESHOLD:
        return 'Good'
    return 'Needs Work'


def score_class(score: Any) -> str:
    value = _score_value(score)
    if value >= ELITE_THRESHOLD:
        return 'score-high'
    if value >= GOOD_THRESHOLD:
        return 'score-mid'
    return 'score-low'


def score_badge(score: Any) -> Badge:
    tier = score_tier(score)
    status = {'Elite': 'excellent', 'Good': 'warning'}.get(tier, 'danger')
    return Badge(label=tier, status=status)


def valgus_class(angle: Any) -> str:
    """unknown when absent, good < 10°, warn < 15°, danger otherwise"""
    value = as_float(angle)
    if value is None:
        return 'unknown'
    if value < VALGUS_WARN_THRESHOLD:
        return 'good'
    if value < VALGUS_DANGER_THRESHOLD:
        return 'warn'
    return 'danger'


def valgus_label(angle: Any) -> ValgusInfo:
    status = valgus_class(angle)
    if status == 'unknown':
        return ValgusInfo(status=status, label=PLACEHOLDER)
    return ValgusInfo(status=status, label=f'{as_float(angle):.1f}°')


def risk_badge(risk: Any) -> str:
    # Two-way switch: anything other than LOW is styled as danger
    return 'safe' if risk == 'LOW' else 'danger'


def get_age_group(age: Any) -> str:
    value = as_float(age)
    if value is None:
        return PLACEHOLDER
    if value < 15:
        return 'Under 15'
    if value <= 17:
        return '15-17'
    return 'Over 17'


def rank_medal(rank: int) -> str:
    medals = {1: '🥇', 2: '🥈', 3: '🥉'}
    return medals.get(rank, f'#{rank}')


# ============================================================================
# TIME FORMATTING
# ============================================================================

def format_short_date(value: Any) -> str:
    """e.g. '5 Oct 2026' (UTC); '—' when invalid"""
    dt = to_datetime(value)
    if dt is None:
        return PLACEHOLDER
    return f'{dt.day} {MONTHS[dt.month - 1]} {dt.year}'


def format_day_month(value: Any) -> str:
    """e.g. '05 Oct' (UTC), used as chart axis labels"""
    dt = to_datetime(value)
    if dt is None:
        return PLACEHOLDER
    return f'{dt.day:02d} {MONTHS[dt.month - 1]}'


def time_ago(value: Any, now: Optional[datetime] = None) -> str:
    """Relative time string; 'Never' for missing or unparseable instants."""
    dt = to_datetime(value)
    if dt is None:
        return 'Never'

    current = to_datetime(now) or datetime.now(timezone.utc)
    diff_sec = math.floor((current - dt).total_seconds())
    diff_min = diff_sec // 60
    diff_hr = diff_min // 60
    diff_day = diff_hr // 24

    if diff_sec < 30:
        return 'Just now'
    if diff_sec < 60:
        return f'{diff_sec}s ago'
    if diff_min < 60:
        return f'{diff_min}m ago'
    if diff_hr < 24:
        return f'{diff_hr}h ago'
    if diff_day < 7:
        return f'{diff_day}d ago'
    return format_short_date(dt)


def format_timestamp(value: Any) -> str:
    """Absolute date-time, e.g. '05 Oct 2026, 14:32' (UTC); '—' when invalid."""
    dt = to_datetime(value)
    if dt is None:
        return PLACEHOLDER
    return f'{dt.day:02d} {MONTHS[dt.month - 1]} {dt.year}, {dt.hour:02d}:{dt.minute:02d}'


def format_metric(value: Any, decimals: int = 2, unit: str = '') -> str:
    number = as_float(value)
    if number is None:
        return PLACEHOLDER
    return f'{number:.{decimals}f}{unit}'


# ============================================================================
# FILTER ENGINE
# ============================================================================

@dataclass(frozen=True)
class FilterSpec:
    """Filter settings; 'All' / 0 / '' mean no constraint"""

    position: Optional[str] = ALL
    country: Optional[str] = ALL
    risk_level: Optional[str] = ALL
    movement_type: Optional[str] = ALL
    age_group: Optional[str] = ALL
    min_score: float = 0
    search: str = ''

    def is_dirty(self) -> bool:
        """True when any constraint is active (the Reset button shows)."""
        return (
            any(_is_active(getattr(self, name))
                for name in ('position', 'country', 'risk_level', 'movement_type', 'age_group'))
            or (as_float(self.min_score) or 0) > 0
            or bool((self.search or '').strip())
        )

    def update(self, **changes) -> 'FilterSpec':
        return replace(self, **changes)


def _is_active(value: Optional[str]) -> bool:
    return value not in (None, '', ALL)


def _matches_exact(record: Any, name: str, wanted: Optional[str]) -> bool:
    if not _is_active(wanted):
        return True
    actual = get_field(record, name)
    return actual is not None and actual == wanted


def _matches_search(record: Any, query: str) -> bool:
    needle = query.lower()
    for name in SEARCH_FIELDS:
        value = get_field(record, name)
        if value is not None and needle in str(value).lower():
            return True
    return False


def matches(record: Any, spec: FilterSpec) -> bool:
    """True when the record satisfies every active constraint of the spec."""
    for name in ('position', 'country', 'risk_level', 'movement_type'):
        if not _matches_exact(record, name, getattr(spec, name)):
            return False

    min_score = as_float(spec.min_score) or 0
    if min_score > 0 and (raw_score(record) or 0) < min_score:
        return False

    if _is_active(spec.age_group):
        if get_age_group(get_field(record, 'age')) != spec.age_group:
            return False

    query = (spec.search or '').strip()
    if query and not _matches_search(record, query):
        return False

    return True


def apply_filters(records: Iterable[Any], spec: Optional[FilterSpec] = None) -> List[Any]:
    """Order-preserving subset of records matching spec; input is not modified."""
    if spec is None:
        return list(records)
    return [record for record in records if matches(record, spec)]


def with_ranks(records: Sequence[Any]) -> List[Tuple[int, Any]]:
    """Pair records with their 1-based position."""
    return [(i + 1, record) for i, record in enumerate(records)]


def unique_options(records: Iterable[Any], name: str, sort: bool = False) -> List[str]:
    """['All', ...] distinct non-empty values of a field (first-seen order unless sorted)."""
    seen = []
    for record in records:
        value = get_field(record, name)
        if value in (None, '', PLACEHOLDER) or value in seen:
            continue
        seen.append(value)
    if sort:
        seen = sorted(seen, key=lambda v: str(v).lower())
    return [ALL] + seen


def get_unique_countries(records: Iterable[Any]) -> List[str]:
    return unique_options(records, 'country', sort=True)
