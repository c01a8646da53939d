"""
Main CSS Stylesheet for the Scout Dashboard
Pitch theme - score pills, risk badges, valgus colouring, live indicator
"""

from .colors import (
    PITCH_PRIMARY, PITCH_DARK, PITCH_LIGHT, LIME_ACCENT, GRAY_BLUE,
    BACKGROUND, SURFACE, TEXT_PRIMARY, TEXT_SECONDARY, BORDER,
    SUCCESS, WARNING, DANGER
)


def get_main_css():
    """Return the main CSS stylesheet as a string."""
    return f"""
    <style>
    /* ============================================
       1. CSS CUSTOM PROPERTIES (Variables)
       ============================================ */
    :root {{
        --pitch-primary: {PITCH_PRIMARY};
        --pitch-dark: {PITCH_DARK};
        --pitch-light: {PITCH_LIGHT};
        --lime-accent: {LIME_ACCENT};
        --gray-blue: {GRAY_BLUE};

        --bg-primary: {BACKGROUND};
        --bg-surface: {SURFACE};
        --text-primary: {TEXT_PRIMARY};
        --text-secondary: {TEXT_SECONDARY};
        --border: {BORDER};

        --success: {SUCCESS};
        --warning: {WARNING};
        --danger: {DANGER};

        --shadow-card: 0 4px 12px rgba(0, 0, 0, 0.08);
        --shadow-hover: 0 8px 25px rgba(27, 122, 62, 0.15);

        --radius-md: 8px;
        --radius-lg: 12px;

        --transition-fast: 0.2s ease;
    }}

    /* ============================================
       2. BASE STYLES & FONTS
       ============================================ */
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=Space+Grotesk:wght@500;600;700&display=swap');

    .stApp {{
        font-family: 'Inter', sans-serif;
        background: var(--bg-primary);
    }}

    .main .block-container {{
        padding: 1.5rem 2rem;
        max-width: 1400px;
    }}

    /* ============================================
       3. HEADER
       ============================================ */
    .sc-header {{
        background: linear-gradient(135deg, var(--pitch-primary) 0%, var(--pitch-dark) 100%);
        padding: 1.5rem 2rem;
        border-radius: var(--radius-lg);
        margin-bottom: 1.5rem;
        border-top: 4px solid var(--lime-accent);
        box-shadow: var(--shadow-card);
    }}

    .sc-header h1 {{
        color: white;
        font-family: 'Space Grotesk', sans-serif;
        font-weight: 700;
        font-size: 1.75rem;
        margin: 0;
    }}

    .sc-header p {{
        color: rgba(255, 255, 255, 0.9);
        margin: 0.5rem 0 0 0;
        font-size: 0.95rem;
    }}

    .sc-live-dot {{
        display: inline-block;
        width: 10px;
        height: 10px;
        border-radius: 50%;
        background: var(--lime-accent);
        margin-right: 0.5rem;
        animation: pulse 1.5s infinite;
    }}

    /* ============================================
       4. CARDS
       ============================================ */
    .sc-card {{
        background: var(--bg-surface);
        border-radius: var(--radius-lg);
        padding: 1.25rem 1.5rem;
        box-shadow: var(--shadow-card);
        border-left: 4px solid var(--pitch-primary);
        transition: transform var(--transition-fast);
    }}

    .sc-card:hover {{
        transform: translateY(-2px);
        box-shadow: var(--shadow-hover);
    }}

    .sc-metric-card {{
        background: var(--bg-surface);
        border-radius: var(--radius-lg);
        padding: 1.1rem;
        text-align: center;
        box-shadow: var(--shadow-card);
    }}

    .sc-metric-value {{
        font-size: 1.75rem;
        font-weight: 700;
        color: var(--pitch-primary);
        font-family: 'Space Grotesk', sans-serif;
        line-height: 1.2;
    }}

    .sc-metric-label {{
        font-size: 0.78rem;
        color: var(--text-secondary);
        text-transform: uppercase;
        letter-spacing: 0.5px;
        margin-bottom: 0.25rem;
    }}

    .sc-metric-sub {{
        font-size: 0.78rem;
        color: var(--text-secondary);
        margin-top: 0.25rem;
    }}

    .sc-empty {{
        text-align: center;
        padding: 2.5rem 1rem;
        color: var(--text-secondary);
        border: 2px dashed var(--border);
        border-radius: var(--radius-lg);
    }}

    /* ============================================
       5. SCORE PILLS / BADGES / VALGUS
       ============================================ */
    .sc-badge {{
        display: inline-block;
        padding: 0.3rem 0.8rem;
        border-radius: 9999px;
        font-weight: 600;
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.3px;
        color: white;
    }}

    .sc-badge-excellent, .sc-badge-safe {{ background: var(--success); }}
    .sc-badge-warning {{ background: var(--warning); }}
    .sc-badge-danger {{ background: var(--danger); }}
    .sc-badge-neutral {{ background: var(--gray-blue); }}

    .sc-score {{
        display: inline-block;
        min-width: 2.5rem;
        padding: 0.2rem 0.6rem;
        border-radius: 9999px;
        text-align: center;
        font-weight: 700;
        font-family: 'Space Grotesk', sans-serif;
    }}

    .score-high {{ background: rgba(34, 197, 94, 0.15); color: #15803d; }}
    .score-mid {{ background: rgba(245, 158, 11, 0.15); color: #b45309; }}
    .score-low {{ background: rgba(239, 68, 68, 0.15); color: #b91c1c; }}

    .valgus-good {{ color: var(--success); font-weight: 600; }}
    .valgus-warn {{ color: var(--warning); font-weight: 600; }}
    .valgus-danger {{ color: var(--danger); font-weight: 600; }}
    .valgus-unknown {{ color: var(--gray-blue); }}

    /* ============================================
       6. SIDEBAR
       ============================================ */
    [data-testid="stSidebar"] {{
        background: linear-gradient(180deg, var(--pitch-dark) 0%, #0a2f18 100%);
        border-right: 3px solid var(--lime-accent);
    }}

    [data-testid="stSidebar"] * {{
        color: white !important;
    }}

    [data-testid="stSidebar"] hr {{
        border-color: rgba(255, 255, 255, 0.2);
    }}

    /* ============================================
       7. BUTTONS
       ============================================ */
    .stButton > button {{
        background: var(--pitch-primary);
        color: white;
        border: none;
        border-radius: var(--radius-md);
        padding: 0.5rem 1.2rem;
        font-weight: 600;
        transition: all var(--transition-fast);
    }}

    .stButton > button:hover {{
        background: var(--pitch-light);
        color: white;
    }}

    /* ============================================
       8. DATA TABLES / CHARTS
       ============================================ */
    .stDataFrame {{
        border-radius: var(--radius-md);
        overflow: hidden;
        box-shadow: var(--shadow-card);
    }}

    .js-plotly-plot {{
        border-radius: var(--radius-lg);
        box-shadow: var(--shadow-card);
        overflow: hidden;
    }}

    /* ============================================
       9. ANIMATIONS
       ============================================ */
    @keyframes pulse {{
        0% {{ opacity: 1; }}
        50% {{ opacity: 0.35; }}
        100% {{ opacity: 1; }}
    }}

    @keyframes fadeIn {{
        from {{ opacity: 0; transform: translateY(10px); }}
        to {{ opacity: 1; transform: translateY(0); }}
    }}

    .sc-animate-in {{
        animation: fadeIn 0.4s ease-out;
    }}

    /* ============================================
       10. RESPONSIVE ADJUSTMENTS
       ============================================ */
    @media (max-width: 768px) {{
        .sc-header {{
            padding: 1.1rem;
        }}

        .sc-header h1 {{
            font-size: 1.35rem;
        }}

        .main .block-container {{
            padding: 1rem;
        }}
    }}

    .sc-section-header {{
        color: var(--text-primary);
        font-weight: 600;
        font-size: 1.1rem;
        margin: 1.5rem 0 1rem 0;
        padding-bottom: 0.5rem;
        border-bottom: 2px solid var(--border);
    }}
    </style>
    """


def get_login_css():
    """Return the CSS for the centered login card."""
    return """
    <style>
    .sc-login {
        max-width: 420px;
        margin: 4rem auto 1rem auto;
        text-align: center;
    }

    .sc-login h1 {
        font-family: 'Space Grotesk', sans-serif;
        margin-bottom: 0.25rem;
    }

    .sc-landing {
        max-width: 860px;
        margin: 0 auto 1.5rem auto;
        text-align: center;
    }

    .sc-landing-lead {
        color: var(--text-secondary);
        font-size: 1.05rem;
    }

    .sc-landing-stats, .sc-landing-steps {
        display: flex;
        gap: 1rem;
        justify-content: center;
        margin-top: 1rem;
    }

    .sc-landing-stat strong {
        display: block;
        font-size: 1.6rem;
        color: var(--pitch-primary);
    }

    .sc-landing-step {
        flex: 1;
        background: var(--bg-surface);
        border: 1px solid var(--border);
        border-radius: 12px;
        padding: 1rem;
    }

    .sc-landing-step h4 {
        margin: 0.4rem 0;
        text-transform: uppercase;
    }
    </style>
    """
