"""
Athlete and Event Records
Scout Dashboard - typed views over the athletes / jumpLogs documents

Documents arrive as loosely-typed mappings (camelCase keys, numbers that may
be strings, timestamps as ISO strings or storage-native timestamp values).
Everything is normalized here so the rest of the dashboard works with
explicit optionals instead of raw dicts.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

import pandas as pd


PLACEHOLDER = '—'


# ============================================================================
# VALUE NORMALIZATION
# ============================================================================

def to_datetime(value: Any) -> Optional[datetime]:
    """
    Normalize any supported timestamp form to an aware UTC datetime.

    Accepts datetime / pandas.Timestamp (naive values are taken as UTC),
    ISO-8601 strings, objects exposing to_datetime() or ToDatetime()
    (client-library timestamp types), {'seconds', 'nanos'} mappings and
    epoch seconds. Returns None for anything missing or unparseable.
    """
    if value is None or value is pd.NaT or isinstance(value, bool):
        return None

    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        value = value.to_pydatetime()

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    for attr in ('to_datetime', 'ToDatetime'):
        converter = getattr(value, attr, None)
        if callable(converter):
            try:
                return to_datetime(converter())
            except (TypeError, ValueError, OverflowError):
                return None

    if isinstance(value, Mapping):
        seconds = value.get('seconds', value.get('_seconds'))
        nanos = value.get('nanos', value.get('_nanoseconds', 0))
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(float(seconds) + float(nanos or 0) / 1e9, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = pd.to_datetime(text, utc=True, errors='coerce')
        if pd.isna(parsed):
            return None
        return parsed.to_pydatetime()

    return None


def to_iso_string(value: Any) -> Optional[str]:
    """Serialize an instant the way the seed script writes it: 2026-01-31T09:15:00.000Z"""
    dt = to_datetime(value)
    if dt is None:
        return None
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f'{dt.microsecond // 1000:03d}Z'


def as_float(value: Any) -> Optional[float]:
    """Coerce to a finite float, None otherwise."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_int(value: Any) -> Optional[int]:
    """Coerce to an int (rounding floats), None otherwise."""
    number = as_float(value)
    if number is None:
        return None
    return int(round(number))


def as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ============================================================================
# ATHLETE
# ============================================================================

@dataclass
class Athlete:
    """A scouted athlete profile (athletes collection)"""

    id: str
    name: Optional[str] = None
    age: Optional[int] = None
    position: Optional[str] = None
    club: Optional[str] = None
    country: Optional[str] = None
    last_active: Optional[datetime] = None

    # Aggregates: avgEfficiencyScore is the current name, efficiencyScore the legacy one
    avg_efficiency_score: Optional[int] = None
    efficiency_score: Optional[int] = None
    total_jumps: Optional[int] = None
    avg_valgus_angle: Optional[float] = None
    avg_peak_vertical_g: Optional[float] = None
    avg_peak_lateral_g: Optional[float] = None
    avg_rotational_vel: Optional[float] = None

    user_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> 'Athlete':
        return cls(
            id=str(doc_id),
            name=as_text(data.get('name')),
            age=as_int(data.get('age')),
            position=as_text(data.get('position')),
            club=as_text(data.get('club')),
            country=as_text(data.get('country')),
            last_active=to_datetime(data.get('lastActive') or data.get('createdAt')),
            avg_efficiency_score=as_int(data.get('avgEfficiencyScore')),
            efficiency_score=as_int(data.get('efficiencyScore')),
            total_jumps=as_int(data.get('totalJumps')),
            avg_valgus_angle=as_float(data.get('avgValgusAngle')),
            avg_peak_vertical_g=as_float(data.get('avgPeakVerticalG')),
            avg_peak_lateral_g=as_float(data.get('avgPeakLateralG')),
            avg_rotational_vel=as_float(data.get('avgRotationalVel')),
            user_id=as_text(data.get('userId')),
        )

    def to_document(self) -> Dict[str, Any]:
        """Document fields (without the id), omitting unset values."""
        return _drop_none({
            'name': self.name,
            'age': self.age,
            'position': self.position,
            'club': self.club,
            'country': self.country,
            'lastActive': to_iso_string(self.last_active),
            'avgEfficiencyScore': self.avg_efficiency_score,
            'efficiencyScore': self.efficiency_score,
            'totalJumps': self.total_jumps,
            'avgValgusAngle': self.avg_valgus_angle,
            'avgPeakVerticalG': self.avg_peak_vertical_g,
            'avgPeakLateralG': self.avg_peak_lateral_g,
            'avgRotationalVel': self.avg_rotational_vel,
            'userId': self.user_id,
        })

    @property
    def display_name(self) -> str:
        return self.name or f'Athlete {self.id[:8]}'


# ============================================================================
# EVENT
# ============================================================================

@dataclass
class Event:
    """One jump/cut telemetry record (jumpLogs collection)"""

    id: Optional[str] = None
    athlete_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    movement_type: Optional[str] = None
    risk_level: Optional[str] = None
    valgus_angle: Optional[float] = None
    peak_vertical_g: Optional[float] = None
    peak_lateral_g: Optional[float] = None
    peak_rotational_vel: Optional[float] = None
    vertical_std_dev: Optional[float] = None
    lateral_std_dev: Optional[float] = None
    efficiency_score: Optional[int] = None
    tip: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: Optional[str], data: Mapping[str, Any]) -> 'Event':
        return cls(
            id=str(doc_id) if doc_id is not None else None,
            athlete_id=as_text(data.get('athleteId')),
            timestamp=to_datetime(data.get('timestamp')),
            movement_type=as_text(data.get('movementType')),
            risk_level=as_text(data.get('riskLevel')),
            valgus_angle=as_float(data.get('valgusAngle')),
            peak_vertical_g=as_float(data.get('peakVerticalG')),
            peak_lateral_g=as_float(data.get('peakLateralG')),
            peak_rotational_vel=as_float(data.get('peakRotationalVel')),
            vertical_std_dev=as_float(data.get('verticalStdDev')),
            lateral_std_dev=as_float(data.get('lateralStdDev')),
            efficiency_score=as_int(data.get('efficiencyScore')),
            tip=as_text(data.get('tip')),
            uploaded_at=to_datetime(data.get('uploadedAt')),
        )

    def to_document(self) -> Dict[str, Any]:
        """Document fields (without the id), omitting unset values."""
        return _drop_none({
            'athleteId': self.athlete_id,
            'timestamp': to_iso_string(self.timestamp),
            'movementType': self.movement_type,
            'riskLevel': self.risk_level,
            'valgusAngle': self.valgus_angle,
            'peakVerticalG': self.peak_vertical_g,
            'peakLateralG': self.peak_lateral_g,
            'peakRotationalVel': self.peak_rotational_vel,
            'verticalStdDev': self.vertical_std_dev,
            'lateralStdDev': self.lateral_std_dev,
            'efficiencyScore': self.efficiency_score,
            'tip': self.tip,
            'uploadedAt': self.uploaded_at,
        })


# ============================================================================
# FEED ENTRY (event joined with athlete profile)
# ============================================================================

@dataclass
class FeedEntry:
    """An event enriched with its athlete's profile for the live feed"""

    event: Event
    name: str
    position: str = PLACEHOLDER
    club: str = PLACEHOLDER
    country: str = PLACEHOLDER
    age: Union[int, str] = PLACEHOLDER
    rank: Optional[int] = field(default=None, compare=False)

    @property
    def id(self) -> Optional[str]:
        return self.event.id

    @property
    def athlete_id(self) -> Optional[str]:
        return self.event.athlete_id

    @property
    def timestamp(self) -> Optional[datetime]:
        return self.event.timestamp

    @property
    def movement_type(self) -> Optional[str]:
        return self.event.movement_type

    @property
    def risk_level(self) -> Optional[str]:
        return self.event.risk_level

    @property
    def efficiency_score(self) -> Optional[int]:
        return self.event.efficiency_score

    @property
    def valgus_angle(self) -> Optional[float]:
        return self.event.valgus_angle

    @property
    def peak_vertical_g(self) -> Optional[float]:
        return self.event.peak_vertical_g

    @property
    def peak_lateral_g(self) -> Optional[float]:
        return self.event.peak_lateral_g

    @property
    def peak_rotational_vel(self) -> Optional[float]:
        return self.event.peak_rotational_vel

    @property
    def tip(self) -> Optional[str]:
        return self.event.tip
