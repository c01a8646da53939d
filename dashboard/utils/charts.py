"""
Athlete Detail Charts
Scout Dashboard - score trend, valgus trend and risk distribution

Each builder returns None when there is not enough data to plot, so the
page can show a placeholder instead of an empty figure.
"""

from typing import Optional, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from dashboard.theme import (
    DANGER, RISK_COLORS, SUCCESS, WARNING,
    add_reference_line, add_reference_zone, apply_scout_theme,
)

from .aggregates import TREND_WINDOW, risk_distribution, trend_series
from .filters import ELITE_THRESHOLD, GOOD_THRESHOLD, VALGUS_DANGER_THRESHOLD, VALGUS_WARN_THRESHOLD
from .models import Event


MIN_TREND_POINTS = 2


def _plottable(series: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose value is missing or not finite"""
    values = pd.to_numeric(series['value'], errors='coerce').to_numpy(dtype=float)
    return series[np.isfinite(values)]


def trend_title(events: Sequence[Event], label: str, window: int = TREND_WINDOW) -> str:
    return f'{label} - Last {min(len(events), window)} Events'


def create_score_trend_chart(events: Sequence[Event], window: int = TREND_WINDOW) -> Optional[go.Figure]:
    """Efficiency score over the most recent events, oldest to newest"""
    series = _plottable(trend_series(events, 'efficiency_score', window))
    if len(series) < MIN_TREND_POINTS:
        return None

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series['index'],
        y=series['value'],
        customdata=series['label'],
        mode='lines+markers',
        name='Efficiency Score',
        line=dict(color=SUCCESS, width=2, shape='spline'),
        marker=dict(size=6, color=SUCCESS),
        hovertemplate='%{customdata}<br><b>%{y}</b> Efficiency Score<extra></extra>',
    ))

    add_reference_line(fig, ELITE_THRESHOLD, SUCCESS, 'Elite')
    add_reference_line(fig, GOOD_THRESHOLD, WARNING, 'Good')

    fig.update_xaxes(tickmode='array', tickvals=series['index'], ticktext=series['label'])
    fig.update_yaxes(range=[0, 100])

    apply_scout_theme(fig, title=trend_title(events, 'Score Trend', window), show_legend=False)
    fig.update_layout(height=280)
    return fig


def create_valgus_trend_chart(events: Sequence[Event], window: int = TREND_WINDOW) -> Optional[go.Figure]:
    """Valgus angle over the most recent events with safe / caution / danger bands"""
    series = _plottable(trend_series(events, 'valgus_angle', window))
    if len(series) < MIN_TREND_POINTS:
        return None

    y_max = max(25.0, float(series['value'].max()) + 2)

    fig = go.Figure()
    add_reference_zone(fig, 0, VALGUS_WARN_THRESHOLD, 'elite')
    add_reference_zone(fig, VALGUS_WARN_THRESHOLD, VALGUS_DANGER_THRESHOLD, 'good')
    add_reference_zone(fig, VALGUS_DANGER_THRESHOLD, y_max, 'danger')

    fig.add_trace(go.Scatter(
        x=series['index'],
        y=series['value'],
        customdata=series['label'],
        mode='lines+markers',
        name='Valgus Angle',
        line=dict(color=WARNING, width=2),
        marker=dict(size=6, color=WARNING),
        hovertemplate='%{customdata}<br><b>%{y:.1f}°</b> Valgus<extra></extra>',
    ))

    add_reference_line(fig, VALGUS_WARN_THRESHOLD, WARNING, 'Caution')
    add_reference_line(fig, VALGUS_DANGER_THRESHOLD, DANGER, 'Danger')

    fig.update_xaxes(tickmode='array', tickvals=series['index'], ticktext=series['label'])
    fig.update_yaxes(range=[0, y_max], ticksuffix='°')

    apply_scout_theme(fig, title=trend_title(events, 'Valgus Angle', window), show_legend=False)
    fig.update_layout(height=280)
    return fig


def create_risk_donut(events: Sequence[Event]) -> Optional[go.Figure]:
    """Low vs High risk share of the athlete's events"""
    slices = risk_distribution(events)
    if sum(s.value for s in slices) == 0:
        return None

    fig = go.Figure(go.Pie(
        labels=[f'{s.name} ({s.pct}%)' for s in slices],
        values=[s.value for s in slices],
        hole=0.6,
        sort=False,
        marker=dict(colors=[RISK_COLORS[s.name] for s in slices], line=dict(color='white', width=2)),
        textinfo='none',
        hovertemplate='%{label}<br>%{value} events<extra></extra>',
    ))

    apply_scout_theme(fig, title='Risk Distribution')
    fig.update_layout(height=280, legend=dict(orientation='h', y=-0.1))
    return fig
