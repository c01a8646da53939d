"""
Synthetic Jump/Cut Event Generator
Scout Dashboard - demonstration data for seeding the backing store

Produces plausible events around an athlete's baseline efficiency score.
Lower baseline skill gives a higher modeled injury-risk frequency, and the
valgus angle range follows the risk level so the two stay visibly
correlated. Randomness comes from an injected random.Random so a seed
reproduces the same batch.
"""

import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from config.seed_profiles import (
    DEFAULT_PARAMS,
    MOVEMENT_TYPES,
    RISK_TIPS,
    SEED_ATHLETES,
    GeneratorParams,
)

from .models import Athlete, Event


def _uniform(rng: random.Random, bounds: Tuple[float, float], decimals: int) -> float:
    """Uniform draw from [lo, hi) rounded to `decimals`, kept below hi after rounding."""
    lo, hi = bounds
    value = round(lo + rng.random() * (hi - lo), decimals)
    ceiling = hi - 10 ** -decimals
    return round(min(max(value, lo), ceiling), decimals)


def _clamp(value: int, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(hi, value))


def high_risk_probability(base_score: float, params: GeneratorParams = DEFAULT_PARAMS) -> float:
    if base_score < params.low_skill_threshold:
        return params.high_risk_probability_low_skill
    return params.high_risk_probability


def draw_event_count(rng: random.Random, params: GeneratorParams = DEFAULT_PARAMS) -> int:
    lo, hi = params.event_count
    return rng.randrange(lo, hi) if hi > lo else lo


def generate_event(athlete_id: str, base_score: float, timestamp: datetime,
                   rng: random.Random, params: GeneratorParams = DEFAULT_PARAMS) -> Event:
    """One synthetic event at the given instant"""
    is_high = rng.random() < high_risk_probability(base_score, params)
    risk = 'HIGH' if is_high else 'LOW'

    jitter = rng.randrange(*params.score_jitter)
    score = _clamp(int(base_score) + jitter, params.score_bounds)

    valgus_bounds = params.valgus_high_risk if is_high else params.valgus_low_risk

    return Event(
        athlete_id=athlete_id,
        timestamp=timestamp,
        movement_type=rng.choice(MOVEMENT_TYPES),
        risk_level=risk,
        valgus_angle=_uniform(rng, valgus_bounds, 1),
        peak_vertical_g=_uniform(rng, params.peak_vertical_g, 2),
        peak_lateral_g=_uniform(rng, params.peak_lateral_g, 2),
        peak_rotational_vel=_uniform(rng, params.peak_rotational_vel, 2),
        vertical_std_dev=_uniform(rng, params.vertical_std_dev, 2),
        lateral_std_dev=_uniform(rng, params.lateral_std_dev, 2),
        efficiency_score=score,
        tip=rng.choice(RISK_TIPS[risk]),
    )


def generate_events(athlete_id: str, base_score: float, count: int = 30,
                    rng: Optional[random.Random] = None, now: Optional[datetime] = None,
                    params: GeneratorParams = DEFAULT_PARAMS) -> List[Event]:
    """
    Generate `count` events for one athlete, newest first.

    Event 0 is stamped `now`; each following event sits a further
    uniform(5, 120) minutes in the past, so timestamps never increase
    with the index. Each athlete's batch is independent.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    events = []
    offset_minutes = 0.0
    gap_lo, gap_hi = params.gap_minutes

    for i in range(max(0, count)):
        if i > 0:
            offset_minutes += gap_lo + rng.random() * (gap_hi - gap_lo)
        timestamp = now - timedelta(minutes=offset_minutes)
        events.append(generate_event(athlete_id, base_score, timestamp, rng, params))

    return events


def build_athlete(profile: Dict, rng: random.Random, now: Optional[datetime] = None,
                  params: GeneratorParams = DEFAULT_PARAMS) -> Athlete:
    """Seed athlete record with userId and a recent lastActive"""
    now = now or datetime.now(timezone.utc)
    lo, hi = params.last_active_minutes
    data = {k: v for k, v in profile.items() if k != 'id'}
    data['userId'] = profile['id']
    data['lastActive'] = now - timedelta(minutes=rng.randrange(lo, hi))
    return Athlete.from_document(profile['id'], data)


def generate_seed_dataset(profiles: Iterable[Dict] = SEED_ATHLETES,
                          rng: Optional[random.Random] = None,
                          now: Optional[datetime] = None,
                          event_count: Optional[Tuple[int, int]] = None,
                          params: GeneratorParams = DEFAULT_PARAMS) -> Tuple[List[Athlete], List[Event]]:
    """
    Athletes plus generated events for every profile.

    Event counts are drawn per athlete from `event_count` ([lo, hi)),
    defaulting to the parameters' 25-50 range.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    if event_count is not None:
        params = replace(params, event_count=event_count)

    athletes = []
    events = []
    for profile in profiles:
        athlete = build_athlete(profile, rng, now, params)
        athletes.append(athlete)

        base_score = profile.get('efficiencyScore', 0)
        count = draw_event_count(rng, params)
        events.extend(generate_events(athlete.id, base_score, count, rng, now, params))

    return athletes, events

