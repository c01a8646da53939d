"""
Unit tests for per-athlete aggregation, enrichment and ranking
"""

from datetime import timedelta

from dashboard.utils.aggregates import (
    enrich_events,
    index_athletes,
    latest_event,
    paginate,
    placeholder_name,
    rank_athletes,
    reconcile_athlete,
    risk_distribution,
    sort_newest_first,
    summarize_events,
    trend_series,
)
from dashboard.utils.filters import resolve_score, valgus_label
from dashboard.utils.models import Athlete, Event


def _events(now):
    return [
        Event(id='e1', athlete_id='p1', timestamp=now - timedelta(hours=2), risk_level='LOW',
              efficiency_score=80, valgus_angle=8.0, peak_vertical_g=4.0, peak_lateral_g=2.0,
              peak_rotational_vel=2.0),
        Event(id='e2', athlete_id='p1', timestamp=now, risk_level='HIGH',
              efficiency_score=71, valgus_angle=15.0, peak_vertical_g=5.0, peak_lateral_g=None,
              peak_rotational_vel=3.0),
        Event(id='e3', athlete_id='p1', timestamp=now - timedelta(hours=1), risk_level='LOW',
              efficiency_score=None, valgus_angle=None, peak_vertical_g=3.0, peak_lateral_g=3.0,
              peak_rotational_vel=None),
    ]


class TestOrdering:

    def test_newest_first(self, now):
        assert [e.id for e in sort_newest_first(_events(now))] == ['e2', 'e3', 'e1']

    def test_undated_last(self, now):
        events = _events(now) + [Event(id='x')]
        assert sort_newest_first(events)[-1].id == 'x'

    def test_latest_event(self, now):
        assert latest_event(_events(now)).id == 'e2'
        assert latest_event([]) is None


class TestSummaries:

    def test_averages_skip_missing_values(self, now):
        summary = summarize_events(_events(now))

        assert summary.total_events == 3
        assert summary.avg_score == 76  # (80 + 71) / 2 = 75.5, half rounds up
        assert summary.avg_valgus_angle == 11.5
        assert summary.avg_peak_vertical_g == 4.0
        assert summary.avg_peak_lateral_g == 2.5
        assert summary.avg_rotational_vel == 2.5
        assert summary.high_risk_events == 1
        assert summary.last_event_at == now

    def test_empty(self):
        summary = summarize_events([])
        assert summary.total_events == 0
        assert summary.avg_score == 0
        assert summary.last_event_at is None

    def test_metric_missing_from_every_event(self, now):
        events = [Event(id='e1', athlete_id='p1', timestamp=now, risk_level='LOW')]
        summary = summarize_events(events)

        assert summary.total_events == 1
        assert summary.avg_score is None
        assert summary.avg_valgus_angle is None
        assert summary.avg_peak_vertical_g is None

    def test_risk_distribution(self, now):
        low, high = risk_distribution(_events(now))
        assert (low.name, low.value, low.pct) == ('Low Risk', 2, 67)
        assert (high.name, high.value, high.pct) == ('High Risk', 1, 33)

    def test_risk_distribution_empty(self):
        assert [s.pct for s in risk_distribution([])] == [0, 0]

    def test_trend_series_oldest_to_newest(self, now):
        series = trend_series(_events(now), 'efficiency_score')
        assert list(series['index']) == [1, 2, 3]
        assert series['value'].iloc[0] == 80
        assert series['value'].iloc[-1] == 71
        assert series['label'].iloc[-1] == '05 Oct'

    def test_trend_window(self, now):
        events = [Event(id=str(i), timestamp=now - timedelta(minutes=i), efficiency_score=i)
                  for i in range(50)]
        series = trend_series(events, 'efficiency_score', window=30)
        assert len(series) == 30
        assert series['value'].iloc[-1] == 0

    def test_paginate(self):
        items = list(range(32))
        page, total = paginate(items, 2, 15)
        assert page == [30, 31]
        assert total == 3
        assert paginate(items, 99, 15)[0] == [30, 31]
        assert paginate([], 0, 15) == ([], 0)


class TestEnrichment:

    def test_joins_profiles(self, now):
        athletes = index_athletes([Athlete(id='p1', name='Rahul Sharma', position='Midfielder',
                                           club='United', country='India', age=16)])
        entries = enrich_events(_events(now), athletes)

        assert [e.name for e in entries] == ['Rahul Sharma'] * 3
        assert entries[0].country == 'India'
        assert entries[0].age == 16

    def test_missing_athlete_gets_placeholder(self, now):
        event = Event(id='e9', athlete_id='abc123xyz', timestamp=now)
        entry = enrich_events([event], {})[0]

        assert entry.name == 'Athlete abc123'
        assert entry.position == '—'
        assert entry.club == '—'
        assert entry.country == '—'
        assert entry.age == '—'

    def test_placeholder_name(self):
        assert placeholder_name('abcdefghij', 8) == 'Athlete abcdefgh'
        assert placeholder_name(None) == 'Athlete ?'


class TestReconciliation:

    def test_events_override_stored_aggregates(self, now):
        stored = Athlete(id='p1', name='Rahul', avg_efficiency_score=99, total_jumps=500,
                         avg_valgus_angle=1.0)
        athlete = reconcile_athlete(stored, _events(now))

        assert athlete.avg_efficiency_score == 76
        assert athlete.total_jumps == 3
        assert athlete.avg_valgus_angle == 11.5
        assert athlete.name == 'Rahul'
        assert stored.avg_efficiency_score == 99

    def test_metric_absent_from_events_keeps_stored_value(self, now):
        stored = Athlete(id='p1', avg_efficiency_score=88, avg_valgus_angle=17.3)
        events = [Event(id='e1', athlete_id='p1', timestamp=now, peak_vertical_g=4.2)]
        athlete = reconcile_athlete(stored, events)

        assert resolve_score(athlete) == 88
        assert valgus_label(athlete.avg_valgus_angle).label == '17.3°'
        assert athlete.avg_peak_vertical_g == 4.2
        assert athlete.total_jumps == 1

    def test_metric_absent_everywhere_shows_placeholder(self, now):
        events = [Event(id='e1', athlete_id='p1', timestamp=now)]
        athlete = reconcile_athlete(None, events)

        assert athlete.avg_valgus_angle is None
        assert valgus_label(athlete.avg_valgus_angle).label == '—'
        assert resolve_score(athlete) == 0

    def test_no_events_keeps_stored(self):
        stored = Athlete(id='p1', efficiency_score=73)
        assert reconcile_athlete(stored, []) is stored

    def test_unknown_athlete_with_events(self, now):
        athlete = reconcile_athlete(None, _events(now))
        assert athlete.id == 'p1'
        assert athlete.total_jumps == 3

    def test_nothing_known(self):
        assert reconcile_athlete(None, []) is None

    def test_rank_athletes(self, now):
        athletes = [
            Athlete(id='p1', efficiency_score=99),
            Athlete(id='p2', efficiency_score=80),
            Athlete(id='p3', efficiency_score=50),
        ]
        ranked = rank_athletes(athletes, _events(now))
        # p1 drops to its live average of 76
        assert [a.id for a in ranked] == ['p2', 'p1', 'p3']
