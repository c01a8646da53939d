"""
Scout Dashboard Color Palette and Design Tokens
Pitch green on dark turf, with lime highlights
"""

# Primary Brand Colors (pitch)
PITCH_PRIMARY = '#1B7A3E'     # Pitch green - headers, primary actions
PITCH_DARK = '#0F4D26'        # Darker green for hover states
PITCH_LIGHT = '#2E9E57'       # Lighter green for secondary
LIME_ACCENT = '#B6F23A'       # Lime - highlights, live indicators
GRAY_BLUE = '#78909C'         # Neutral

# UI Colors
BACKGROUND = '#f6f8f5'        # App background
SURFACE = '#ffffff'           # Card/container background
BORDER = '#e3e9e1'            # Subtle borders

# Text Colors
TEXT_PRIMARY = '#14201a'      # Headings
TEXT_SECONDARY = '#4b5a52'    # Body text

# Status Colors
SUCCESS = '#22c55e'           # Elite score / low risk / good valgus
WARNING = '#f59e0b'           # Good score / valgus 10-15°
DANGER = '#ef4444'            # Needs work / high risk / valgus >= 15°
INFO = '#0ea5e9'              # Informational

# Badge status -> color (status names from dashboard.utils.filters)
STATUS_COLORS = {
    'excellent': SUCCESS,
    'safe': SUCCESS,
    'good': SUCCESS,
    'warning': WARNING,
    'warn': WARNING,
    'danger': DANGER,
    'unknown': GRAY_BLUE,
    'neutral': GRAY_BLUE,
}

# Risk level colors for the donut and feed badges
RISK_COLORS = {
    'Low Risk': SUCCESS,
    'High Risk': DANGER,
    'LOW': SUCCESS,
    'HIGH': DANGER,
}

# Reference band colors (with transparency)
ZONE_COLORS = {
    'elite': 'rgba(34, 197, 94, 0.10)',
    'good': 'rgba(245, 158, 11, 0.08)',
    'danger': 'rgba(239, 68, 68, 0.08)',
}

