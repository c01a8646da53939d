"""
Plotly Chart Theming for the Scout Dashboard
Pitch theme: white plot area, muted grid, green/lime accents
"""

from .colors import BORDER, TEXT_PRIMARY, TEXT_SECONDARY, ZONE_COLORS


TITLE_FONT = 'Space Grotesk, Inter, sans-serif'


def get_plotly_layout():
    """
    Shared layout for every dashboard figure.

    Returns:
        dict: font, background, margin, hover and legend settings
    """
    return {
        'font': {'family': 'Inter, sans-serif', 'color': TEXT_PRIMARY, 'size': 12},
        'paper_bgcolor': 'white',
        'plot_bgcolor': 'white',
        'margin': {'l': 48, 'r': 64, 't': 48, 'b': 36},
        'hovermode': 'x unified',
        'legend': {
            'bgcolor': 'rgba(255, 255, 255, 0.9)',
            'bordercolor': BORDER,
            'borderwidth': 1,
            'orientation': 'h',
            'y': -0.2,
        },
    }


def get_axis_style():
    return {
        'gridcolor': 'rgba(27, 122, 62, 0.08)',
        'linecolor': BORDER,
        'tickfont': {'size': 11, 'color': TEXT_SECONDARY},
        'title': {'font': {'size': 12, 'color': TEXT_PRIMARY}},
        'zeroline': False,
    }


def apply_scout_theme(fig, title: str = None, show_legend: bool = True):
    """
    Style a figure in place and return it.

    Args:
        fig: Plotly figure
        title: left-aligned chart title, omitted when None
        show_legend: hide the legend for single-series charts
    """
    layout = get_plotly_layout()
    legend = layout.pop('legend')

    fig.update_layout(showlegend=show_legend, **layout)
    if show_legend:
        fig.update_layout(legend=legend)

    if title:
        fig.update_layout(title={
            'text': title,
            'font': {'size': 14, 'family': TITLE_FONT, 'color': TEXT_PRIMARY},
            'x': 0,
            'xanchor': 'left',
        })

    axis_style = get_axis_style()
    fig.update_xaxes(**axis_style)
    fig.update_yaxes(**axis_style)
    return fig


def add_reference_line(fig, value: float, color: str, label: str = None):
    """Dashed horizontal threshold (e.g. score 80 = Elite), labelled on the right"""
    fig.add_hline(
        y=value,
        line_dash='dash',
        line_color=color,
        line_width=1.5,
        annotation_text=label,
        annotation_position='right',
        annotation_font_color=color,
        annotation_font_size=10,
    )
    return fig


def add_reference_zone(fig, y_min: float, y_max: float, zone_type: str = 'good'):
    # Unknown zone types shade like 'good'
    color = ZONE_COLORS.get(zone_type, ZONE_COLORS['good'])
    fig.add_hrect(y0=y_min, y1=y_max, fillcolor=color, line_width=0, layer='below')
    return fig
