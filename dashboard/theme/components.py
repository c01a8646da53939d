"""
Reusable Styled Components for the Scout Dashboard
Pitch theme

The *_html helpers return markup strings (usable inside tables and other
markup); the render_* / card functions write straight to the page.
"""

from html import escape

import streamlit as st

from .colors import PITCH_PRIMARY, STATUS_COLORS, TEXT_PRIMARY, TEXT_SECONDARY


POSITION_ICONS = {
    'Forward': '⚡',
    'Midfielder': '🎯',
    'Defender': '🛡️',
    'Goalkeeper': '🧤',
}
DEFAULT_POSITION_ICON = '⚽'

# Athlete metric cards: (field, label, unit, icon, description, good(v), warn(v))
METRIC_CARDS = [
    ('avg_valgus_angle', 'Avg Valgus Angle', '°', '📐',
     'Knee inward collapse - lower is safer', lambda v: v < 10, lambda v: v < 15),
    ('avg_peak_vertical_g', 'Peak Vertical G', 'G', '⬆️',
     'Impact force on landing', lambda v: v <= 4, lambda v: v <= 5.5),
    ('avg_peak_lateral_g', 'Peak Lateral G', 'G', '↔️',
     'Side-to-side force during cuts', lambda v: v <= 2, lambda v: v <= 3),
    ('avg_rotational_vel', 'Rotational Velocity', 'rad/s', '🔄',
     'Twisting speed at the knee', lambda v: v <= 2.5, lambda v: v <= 3.5),
    ('total_jumps', 'Total Events', '', '📊',
     'Total jump/cut events recorded', lambda v: True, lambda v: True),
]


def position_icon(position: str) -> str:
    return POSITION_ICONS.get(position, DEFAULT_POSITION_ICON)


def metric_status(value, good, warn) -> str:
    """'excellent' / 'warning' / 'danger' for a metric card's thresholds"""
    if good(value):
        return 'excellent'
    if warn(value):
        return 'warning'
    return 'danger'


# ============================================================================
# INLINE MARKUP
# ============================================================================

def status_badge(text: str, status: str = 'neutral') -> str:
    """
    Return HTML for a status badge.

    Args:
        text: Badge text
        status: 'excellent', 'safe', 'warning', 'danger' or 'neutral'
    """
    return f'<span class="sc-badge sc-badge-{status}">{escape(str(text))}</span>'


def score_pill(score: int, css_class: str) -> str:
    """Score in a pill coloured by its tier class (score-high / -mid / -low)"""
    return f'<span class="sc-score {css_class}">{score}</span>'


def valgus_html(label: str, status: str) -> str:
    return f'<span class="valgus-{status}">{escape(label)}</span>'


# ============================================================================
# PAGE COMPONENTS
# ============================================================================

def render_header(title: str, subtitle: str = None, live: bool = False):
    """
    Render the branded page header.

    Args:
        title: Main header title
        subtitle: Optional subtitle text
        live: Show the pulsing live indicator before the title
    """
    subtitle_html = f'<p>{subtitle}</p>' if subtitle else ''
    live_html = '<span class="sc-live-dot"></span>' if live else ''

    st.markdown(f"""
    <div class="sc-header sc-animate-in">
        <h1>{live_html}{title}</h1>
        {subtitle_html}
    </div>
    """, unsafe_allow_html=True)


def section_header(title: str, icon: str = None):
    icon_html = f"{icon} " if icon else ""
    st.markdown(f'<div class="sc-section-header">{icon_html}{title}</div>',
                unsafe_allow_html=True)


def metric_card(label: str, value: str, status: str = None, sub: str = None, icon: str = None):
    """
    Render a styled metric card.

    Args:
        label: Metric label text
        value: Metric value to display
        status: Status for border/value color ('excellent', 'warning', 'danger')
        sub: Optional description line
        icon: Optional emoji shown above the value
    """
    color = STATUS_COLORS.get(status, PITCH_PRIMARY)
    icon_html = f'<div>{icon}</div>' if icon else ''
    sub_html = f'<div class="sc-metric-sub">{sub}</div>' if sub else ''

    st.markdown(f"""
    <div class="sc-metric-card" style="border-bottom: 3px solid {color};">
        {icon_html}
        <div class="sc-metric-value" style="color: {color};">{value}</div>
        <div class="sc-metric-label">{label}</div>
        {sub_html}
    </div>
    """, unsafe_allow_html=True)


def empty_state(title: str = 'No data found', message: str = 'Try adjusting your filters.',
                icon: str = '📭'):
    st.markdown(f"""
    <div class="sc-empty">
        <div style="font-size: 2.5rem; opacity: 0.4;">{icon}</div>
        <h3 style="margin: 0.5rem 0 0.25rem 0; text-transform: uppercase;">{title}</h3>
        <p style="margin: 0;">{message}</p>
    </div>
    """, unsafe_allow_html=True)


def error_state(message: str):
    """Storage error panel; the page keeps showing its last snapshot below it"""
    alert_box(f'<strong>Data error</strong><br><code>{escape(message)}</code><br>'
              'Check your .env file and Firestore security rules.', 'danger')


def alert_box(message: str, alert_type: str = 'info'):
    """
    Render a styled alert box.

    Args:
        message: Alert message (may contain markup)
        alert_type: 'info', 'success', 'warning' or 'danger'
    """
    colors = {
        'info': ('#0ea5e9', 'rgba(14, 165, 233, 0.1)'),
        'success': (STATUS_COLORS['excellent'], 'rgba(34, 197, 94, 0.1)'),
        'warning': (STATUS_COLORS['warning'], 'rgba(245, 158, 11, 0.1)'),
        'danger': (STATUS_COLORS['danger'], 'rgba(239, 68, 68, 0.1)'),
    }
    border_color, bg_color = colors.get(alert_type, colors['info'])

    st.markdown(f"""
    <div style="
        background: {bg_color};
        border-left: 4px solid {border_color};
        border-radius: 8px;
        padding: 1rem 1.25rem;
        margin: 0.75rem 0;
    ">{message}</div>
    """, unsafe_allow_html=True)


def render_athlete_card(name: str, position: str, details: list, score: int,
                        score_class: str, badge_label: str, badge_status: str):
    """
    Render the athlete profile card.

    Args:
        name: Athlete display name
        position: Playing position (picks the icon)
        details: Already formatted detail strings (club, country, age, ...)
        score: Resolved efficiency score
        score_class: score-high / score-mid / score-low
        badge_label, badge_status: tier badge
    """
    initial = escape(name[:1].upper()) if name else '?'
    details_html = ' &nbsp;·&nbsp; '.join(escape(str(d)) for d in details)

    st.markdown(f"""
    <div class="sc-card sc-animate-in" style="display: flex; gap: 1.25rem; align-items: center;">
        <div style="width: 72px; height: 72px; border-radius: 16px; background: {PITCH_PRIMARY};
                    display: flex; align-items: center; justify-content: center;
                    color: white; font-size: 2rem; font-weight: 700;">{initial}</div>
        <div style="flex: 1;">
            <h2 style="margin: 0; color: {TEXT_PRIMARY}; text-transform: uppercase;">
                {escape(name)} {status_badge(badge_label, badge_status)}
            </h2>
            <p style="margin: 0.35rem 0; color: {TEXT_SECONDARY}; font-size: 0.9rem;">
                {position_icon(position)} {escape(position or '—')} &nbsp;·&nbsp; {details_html}
            </p>
            <div>{score_pill(score, score_class)}
                <span style="color: {TEXT_SECONDARY}; font-size: 0.85rem;">Biomechanical Efficiency Score</span>
            </div>
        </div>
    </div>
    """, unsafe_allow_html=True)


# ============================================================================
# LANDING
# ============================================================================

LANDING_STATS = [
    ('0–100', 'Efficiency Score'),
    ('Live', 'Real-time Updates'),
    ('4', 'Biomechanical Metrics'),
]

LANDING_STEPS = [
    ('🦵', 'Athlete wears the sleeve',
     'Valgus angle, G-force and rotational velocity are captured on every jump and cut.'),
    ('☁️', 'Data streams to Firebase',
     'Each movement uploads with an efficiency score and a risk classification.'),
    ('🔭', 'Scouts see it live',
     'Leaderboard, trend charts and risk alerts update the moment a player moves.'),
]


def landing_html() -> str:
    """Public intro shown above the sign-in form"""
    stats = ''.join(
        f'<div class="sc-landing-stat"><strong>{escape(value)}</strong>'
        f'<span>{escape(label)}</span></div>'
        for value, label in LANDING_STATS
    )
    steps = ''.join(
        f'<div class="sc-landing-step"><div>{icon}</div><h4>{escape(title)}</h4>'
        f'<p>{escape(desc)}</p></div>'
        for icon, title, desc in LANDING_STEPS
    )
    return (
        '<div class="sc-landing">'
        '<p class="sc-landing-lead">Objective biomechanics for talent scouting: '
        'see injury risk and movement quality that the eye cannot.</p>'
        f'<div class="sc-landing-stats">{stats}</div>'
        f'<div class="sc-landing-steps">{steps}</div>'
        '</div>'
    )


def render_landing():
    st.markdown(landing_html(), unsafe_allow_html=True)
