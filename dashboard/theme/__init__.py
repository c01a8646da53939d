"""
Scout Dashboard Theme Module

This module provides centralized styling including:
- Color palette and design tokens
- CSS stylesheet
- Reusable UI components
- Plotly chart theming

Usage:
    from dashboard.theme import get_main_css, render_header, metric_card, apply_scout_theme
    from dashboard.theme import PITCH_PRIMARY, STATUS_COLORS
"""

# Color constants and palettes
from .colors import (
    # Primary colors
    PITCH_PRIMARY,
    PITCH_DARK,
    PITCH_LIGHT,
    LIME_ACCENT,
    GRAY_BLUE,
    # Text colors
    TEXT_PRIMARY,
    TEXT_SECONDARY,
    # Status colors
    SUCCESS,
    WARNING,
    DANGER,
    INFO,
    # Collections
    STATUS_COLORS,
    RISK_COLORS,
    ZONE_COLORS,
)

# CSS stylesheet functions
from .css_styles import (
    get_main_css,
    get_login_css,
)

# UI component functions
from .components import (
    POSITION_ICONS,
    METRIC_CARDS,
    position_icon,
    metric_status,
    status_badge,
    score_pill,
    valgus_html,
    render_header,
    section_header,
    metric_card,
    empty_state,
    error_state,
    alert_box,
    render_athlete_card,
    landing_html,
    render_landing,
)

# Plotly theming functions
from .plotly_theme import (
    apply_scout_theme,
    get_plotly_layout,
    get_axis_style,
    add_reference_line,
    add_reference_zone,
)

__version__ = '1.0.0'
__all__ = [
    # Colors
    'PITCH_PRIMARY', 'PITCH_DARK', 'PITCH_LIGHT', 'LIME_ACCENT', 'GRAY_BLUE',
    'TEXT_PRIMARY', 'TEXT_SECONDARY', 'SUCCESS', 'WARNING', 'DANGER', 'INFO',
    'STATUS_COLORS', 'RISK_COLORS', 'ZONE_COLORS',
    # CSS
    'get_main_css', 'get_login_css',
    # Components
    'POSITION_ICONS', 'METRIC_CARDS', 'position_icon', 'metric_status',
    'status_badge', 'score_pill', 'valgus_html', 'render_header', 'section_header',
    'metric_card', 'empty_state', 'error_state', 'alert_box', 'render_athlete_card',
    'landing_html', 'render_landing',
    # Plotly
    'apply_scout_theme', 'get_plotly_layout', 'get_axis_style',
    'add_reference_line', 'add_reference_zone',
]
