"""
SCOUT DASHBOARD
Athlete jump/cut telemetry for talent scouts

Pages:
- Live Jump Feed: most recent events across all athletes, filterable and ranked
- Athlete Scouting: athlete list with aggregates recomputed from events
- Athlete Detail: profile, metric cards, trend charts, paginated event history
- Live Demo: one showcase athlete, auto-refreshing

Data comes from Firestore (REST) when a project is configured, otherwise
from the local JSON snapshots written by scripts/seed_firestore.py.

Run: streamlit run dashboard/scout_dashboard.py
"""

import os
import sys
from typing import List, Optional

import pandas as pd
import streamlit as st

# Add parent directory to path for imports (works locally and on Streamlit Cloud)
_current_dir = os.path.dirname(os.path.abspath(__file__))
_parent_dir = os.path.dirname(_current_dir)
if _parent_dir not in sys.path:
    sys.path.insert(0, _parent_dir)

from config.scout_config import ScoutConfig
from dashboard.theme import (
    METRIC_CARDS,
    alert_box,
    empty_state,
    error_state,
    get_login_css,
    get_main_css,
    metric_card,
    metric_status,
    render_athlete_card,
    render_header,
    render_landing,
    score_pill,
    section_header,
    status_badge,
    valgus_html,
)
from dashboard.utils.aggregates import (
    enrich_events,
    index_athletes,
    latest_event,
    paginate,
    placeholder_name,
    rank_athletes,
    reconcile_athlete,
)
from dashboard.utils.auth import AuthError, AuthSession, FirebaseAuthClient
from dashboard.utils.charts import create_risk_donut, create_score_trend_chart, create_valgus_trend_chart
from dashboard.utils.data_loader import DataLoader, SnapshotFeed, load_config, session_feed
from dashboard.utils.filters import (
    AGE_GROUPS,
    ALL,
    RISK_LEVELS,
    FilterSpec,
    apply_filters,
    format_metric,
    format_timestamp,
    get_age_group,
    get_unique_countries,
    rank_medal,
    resolve_score,
    risk_badge,
    score_badge,
    score_class,
    score_tier,
    time_ago,
    unique_options,
    valgus_label,
    with_ranks,
)
from dashboard.utils.logger import get_logger


PAGES = ['Live Jump Feed', 'Athlete Scouting', 'Athlete Detail', 'Live Demo']

FILTER_DEFAULTS = {
    'position': ALL,
    'country': ALL,
    'risk_level': ALL,
    'movement_type': ALL,
    'age_group': ALL,
    'min_score': 0,
    'search': '',
}


# ============================================================================
# PAGE CONFIG
# ============================================================================

st.set_page_config(
    page_title="Scout Dashboard",
    page_icon="⚽",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(get_main_css(), unsafe_allow_html=True)


@st.cache_resource
def get_config() -> ScoutConfig:
    return load_config()


@st.cache_resource
def get_auth_client(_config: ScoutConfig) -> FirebaseAuthClient:
    return FirebaseAuthClient(_config, logger=get_logger('scout.auth', _config))


config = get_config()
logger = get_logger('scout.dashboard', config)


# ============================================================================
# AUTH
# ============================================================================

def auth_required() -> bool:
    """Sign-in gates the dashboard whenever a Firebase API key is configured"""
    return bool(config.FIREBASE_API_KEY)


def current_session() -> Optional[AuthSession]:
    auth_session = st.session_state.get('auth')
    if auth_session is None:
        return None

    try:
        auth_session = get_auth_client(config).ensure_fresh(auth_session)
    except AuthError as e:
        logger.warning(f"Session refresh failed, signing out: {e.code}")
        sign_out()
        return None

    st.session_state['auth'] = auth_session
    return auth_session


def sign_out():
    for key in ('auth', '_loader', '_snapshot_feeds'):
        st.session_state.pop(key, None)


def render_login():
    st.markdown(get_login_css(), unsafe_allow_html=True)
    st.markdown("""
    <div class="sc-login">
        <h1>⚽ Scout Dashboard</h1>
        <p>Sign in to view athlete telemetry</p>
    </div>
    """, unsafe_allow_html=True)
    render_landing()

    _, center, _ = st.columns([1, 2, 1])
    with center:
        with st.form('login'):
            email = st.text_input('Email', placeholder='scout@club.com')
            password = st.text_input('Password', type='password')
            submitted = st.form_submit_button('Sign In', use_container_width=True)

        if submitted:
            try:
                st.session_state['auth'] = get_auth_client(config).sign_in(email, password)
            except AuthError as e:
                st.error(e.message)
                return
            st.rerun()


# ============================================================================
# DATA
# ============================================================================

def get_loader(auth_session: Optional[AuthSession]) -> DataLoader:
    """One loader per browser session; its client follows the current ID token"""
    loader = st.session_state.get('_loader')
    if loader is None:
        loader = DataLoader(config, logger=get_logger('scout.data_loader', config))
        st.session_state['_loader'] = loader
    if loader.client is not None:
        loader.client.id_token = auth_session.id_token if auth_session else None
    return loader


def athletes_feed(loader: DataLoader) -> SnapshotFeed:
    return session_feed(
        'athletes',
        lambda: SnapshotFeed(loader.fetch_athletes, name='athletes', logger=loader.logger),
        config.REFRESH_SECONDS,
    )


def jump_feed(loader: DataLoader) -> SnapshotFeed:
    return session_feed(
        'jump_feed',
        lambda: SnapshotFeed(lambda: loader.fetch_feed(config.FEED_LIMIT), name='jump_feed',
                             logger=loader.logger),
        config.REFRESH_SECONDS,
    )


def all_events_feed(loader: DataLoader) -> SnapshotFeed:
    return session_feed(
        'all_events',
        lambda: loader.subscribe(config.EVENTS_COLLECTION),
        config.REFRESH_SECONDS,
    )


def athlete_events_feed(loader: DataLoader, athlete_id: str) -> SnapshotFeed:
    return session_feed(
        f'events:{athlete_id}',
        lambda: SnapshotFeed(lambda: loader.fetch_athlete_events(athlete_id),
                             name=f'events:{athlete_id}', logger=loader.logger),
        config.REFRESH_SECONDS,
    )


def latest_event_feed(loader: DataLoader, athlete_id: str) -> SnapshotFeed:
    def fetch() -> List:
        event = loader.fetch_latest_event(athlete_id)
        return [event] if event is not None else []

    return session_feed(
        f'latest:{athlete_id}',
        lambda: SnapshotFeed(fetch, name=f'latest:{athlete_id}', logger=loader.logger),
        config.REFRESH_SECONDS / 2,
    )


def open_athlete(athlete_id: str):
    """Switch to the detail page on the next full run (safe from inside fragments)"""
    st.session_state['pending_athlete'] = athlete_id
    st.rerun(scope='app')


def apply_pending_navigation():
    athlete_id = st.session_state.pop('pending_athlete', None)
    if athlete_id:
        st.session_state['athlete_id'] = athlete_id
        st.session_state['page'] = 'Athlete Detail'


# ============================================================================
# FILTER BAR
# ============================================================================

def _reset_filters(prefix: str):
    for name, default in FILTER_DEFAULTS.items():
        key = f'{prefix}_{name}'
        if key in st.session_state:
            st.session_state[key] = default


def _select(prefix: str, name: str, label: str, options: List[str]) -> str:
    key = f'{prefix}_{name}'
    # A value that left the option list (snapshot changed) falls back to All
    if st.session_state.get(key, ALL) not in options:
        st.session_state[key] = ALL
    return st.selectbox(label, options, key=key)


def render_filter_bar(records: list, prefix: str, athlete_fields: bool = False) -> FilterSpec:
    """Filter widgets whose options are derived from the current snapshot"""
    search_col, *select_cols, score_col = st.columns([3, 2, 2, 2, 2, 2])

    with search_col:
        search = st.text_input('Search athlete', placeholder='Name, club, country…',
                               key=f'{prefix}_search')

    with select_cols[0]:
        position = _select(prefix, 'position', 'Position', unique_options(records, 'position'))
    with select_cols[1]:
        country = _select(prefix, 'country', 'Country', get_unique_countries(records))

    risk_level = movement_type = age_group = ALL
    if athlete_fields:
        with select_cols[2]:
            age_group = _select(prefix, 'age_group', 'Age Group', AGE_GROUPS)
    else:
        with select_cols[2]:
            risk_level = _select(prefix, 'risk_level', 'Risk Level', RISK_LEVELS)
        with select_cols[3]:
            movement_type = _select(prefix, 'movement_type', 'Movement Type',
                                    unique_options(records, 'movement_type'))

    with score_col:
        min_score = st.slider('Min Score', 0, 100, step=5, key=f'{prefix}_min_score')

    spec = FilterSpec(
        position=position,
        country=country,
        risk_level=risk_level,
        movement_type=movement_type,
        age_group=age_group,
        min_score=min_score,
        search=search,
    )

    if spec.is_dirty():
        st.button('✕ Reset', key=f'{prefix}_reset', on_click=_reset_filters, args=(prefix,))

    return spec


# ============================================================================
# PAGES
# ============================================================================

def render_feed_page(loader: DataLoader):
    render_header('Live Jump Feed', f'Most recent {config.FEED_LIMIT} jump/cut events', live=True)
    render_feed_body(loader)


@st.fragment(run_every=config.REFRESH_SECONDS)
def render_feed_body(loader: DataLoader):
    athletes = athletes_feed(loader)
    feed = jump_feed(loader)

    if feed.error:
        error_state(feed.error)

    entries = enrich_events(feed.records, index_athletes(athletes.records))
    spec = render_filter_bar(entries, 'feed')
    ranked = with_ranks(apply_filters(entries, spec))

    st.caption(f"{len(ranked)} of {len(entries)} events")

    if not ranked:
        if feed.loaded or feed.error:
            empty_state('No events match')
        else:
            st.info('Loading events…')
    else:
        rows = [{
            '#': rank_medal(rank),
            'Athlete': entry.name,
            'Score': entry.efficiency_score,
            'Tier': score_tier(entry.efficiency_score),
            'Risk': entry.risk_level or '—',
            'Movement': entry.movement_type or '—',
            'Valgus': valgus_label(entry.valgus_angle).label,
            'Position': entry.position,
            'Club': entry.club,
            'Country': entry.country,
            'When': time_ago(entry.timestamp),
            'Recorded': format_timestamp(entry.timestamp),
        } for rank, entry in ranked]

        st.dataframe(
            pd.DataFrame(rows),
            hide_index=True,
            use_container_width=True,
            column_config={
                'Score': st.column_config.ProgressColumn('Score', min_value=0, max_value=100,
                                                          format='%d'),
            },
        )

        athlete_ids = []
        for _, entry in ranked:
            if entry.athlete_id and entry.athlete_id not in athlete_ids:
                athlete_ids.append(entry.athlete_id)
        names = {entry.athlete_id: entry.name for _, entry in ranked}

        col1, col2 = st.columns([3, 1])
        with col1:
            selected = st.selectbox('Open athlete profile', athlete_ids,
                                    format_func=lambda a: names.get(a, placeholder_name(a)),
                                    key='feed_open_athlete')
        with col2:
            st.write('')
            if st.button('View profile →', key='feed_view_profile', disabled=selected is None):
                open_athlete(selected)

    render_debug_panel(feed)


def render_debug_panel(feed: SnapshotFeed):
    with st.expander(f"🔍 Debug ({len(feed.records)} entries)"):
        st.markdown(f"**Source → {config.EVENTS_COLLECTION}** "
                    f"({'Firestore' if config.use_firestore else 'local snapshot'})")
        st.write(f"Loading: {feed.loading}")
        st.write(f"Error: {feed.error or 'none'}")
        st.write(f"Entries found: {len(feed.records)}")
        if feed.records:
            st.markdown('**Latest entry raw data:**')
            st.json(feed.records[0].to_document())
        elif feed.loaded:
            st.warning(f"{config.EVENTS_COLLECTION} collection empty or Firestore index missing. "
                       f"Create index: {config.EVENTS_COLLECTION} → timestamp DESC")


def render_scouting_page(loader: DataLoader):
    render_header('Athlete Scouting', 'Every athlete, scored from their recorded events')

    athletes = athletes_feed(loader)
    events = all_events_feed(loader)

    for feed in (athletes, events):
        if feed.error:
            error_state(feed.error)

    ranked = rank_athletes(athletes.records, events.records)
    spec = render_filter_bar(ranked, 'scout', athlete_fields=True)
    filtered = with_ranks(apply_filters(ranked, spec))

    st.caption(f"{len(filtered)} of {len(ranked)} athletes")

    if not filtered:
        empty_state('No athletes found')
        return

    rows = [{
        '#': rank_medal(rank),
        'Athlete': athlete.display_name,
        'Score': resolve_score(athlete),
        'Tier': score_tier(resolve_score(athlete)),
        'Position': athlete.position or '—',
        'Age': athlete.age if athlete.age is not None else '—',
        'Age Group': get_age_group(athlete.age),
        'Club': athlete.club or '—',
        'Country': athlete.country or '—',
        'Events': athlete.total_jumps or 0,
        'Avg Valgus': format_metric(athlete.avg_valgus_angle, 1, '°'),
        'Last Active': time_ago(athlete.last_active),
    } for rank, athlete in filtered]

    st.dataframe(
        pd.DataFrame(rows),
        hide_index=True,
        use_container_width=True,
        column_config={
            'Score': st.column_config.ProgressColumn('Score', min_value=0, max_value=100,
                                                      format='%d'),
        },
    )

    by_id = {athlete.id: athlete for _, athlete in filtered}
    col1, col2 = st.columns([3, 1])
    with col1:
        selected = st.selectbox('Open athlete profile', list(by_id),
                                format_func=lambda a: by_id[a].display_name,
                                key='scout_open_athlete')
    with col2:
        st.write('')
        if st.button('View profile →', key='scout_view_profile'):
            open_athlete(selected)


def render_metric_cards(athlete):
    cols = st.columns(len(METRIC_CARDS))
    for col, (field, label, unit, icon, desc, good, warn) in zip(cols, METRIC_CARDS):
        value = getattr(athlete, field, None)
        with col:
            if value is None:
                metric_card(label, '—', sub=desc, icon=icon)
            else:
                decimals = 0 if unit == '' else 1
                metric_card(label, format_metric(value, decimals, unit), metric_status(value, good, warn),
                            sub=desc, icon=icon)


def render_event_history(events: list, athlete_id: str):
    section_header('Event History', '📋')

    page_key = f'history_page:{athlete_id}'
    page = st.session_state.get(page_key, 0)
    rows, total_pages = paginate(events, page, config.PAGE_SIZE)

    if not rows:
        st.caption('No events recorded yet')
        return

    table = pd.DataFrame([{
        'Recorded': format_timestamp(e.timestamp),
        'Movement': e.movement_type or '—',
        'Score': e.efficiency_score,
        'Risk': e.risk_level or '—',
        'Valgus': valgus_label(e.valgus_angle).label,
        'Vertical G': format_metric(e.peak_vertical_g, 2, 'G'),
        'Lateral G': format_metric(e.peak_lateral_g, 2, 'G'),
        'Rotational': format_metric(e.peak_rotational_vel, 2, ' rad/s'),
        'Tip': e.tip or '',
    } for e in rows])
    st.dataframe(table, hide_index=True, use_container_width=True)

    current = min(page, max(total_pages - 1, 0))
    prev_col, info_col, next_col = st.columns([1, 2, 1])
    with prev_col:
        if st.button('← Prev', key=f'{page_key}:prev', disabled=current == 0):
            st.session_state[page_key] = current - 1
            st.rerun()
    with info_col:
        st.caption(f"Page {current + 1} of {total_pages} · {len(events)} events")
    with next_col:
        if st.button('Next →', key=f'{page_key}:next', disabled=current >= total_pages - 1):
            st.session_state[page_key] = current + 1
            st.rerun()


def render_athlete_page(loader: DataLoader):
    render_header('Athlete Detail', 'Biomechanical profile and event history')
    athletes = athletes_feed(loader)
    by_id = index_athletes(athletes.records)

    athlete_id = st.session_state.get('athlete_id')
    options = list(by_id)
    if athlete_id and athlete_id not in options:
        options.insert(0, athlete_id)
    if not options:
        empty_state('No athletes yet', 'Seed the database or wait for the first upload.', '🏃')
        return

    athlete_id = st.selectbox(
        'Athlete', options,
        index=options.index(athlete_id) if athlete_id in options else 0,
        format_func=lambda a: by_id[a].display_name if a in by_id else placeholder_name(a, 8),
    )
    st.session_state['athlete_id'] = athlete_id
    render_athlete_body(loader, athlete_id)


@st.fragment(run_every=config.REFRESH_SECONDS)
def render_athlete_body(loader: DataLoader, athlete_id: str):
    by_id = index_athletes(athletes_feed(loader).records)
    events_feed = athlete_events_feed(loader, athlete_id)
    if events_feed.error:
        error_state(events_feed.error)

    events = events_feed.records
    athlete = reconcile_athlete(by_id.get(athlete_id), events, athlete_id)
    if athlete is None:
        empty_state('Athlete not found', f'No athlete with id {athlete_id}.', '🔍')
        return

    score = resolve_score(athlete)
    badge = score_badge(score)
    render_athlete_card(
        athlete.display_name,
        athlete.position,
        [
            f'🏟️ {athlete.club or "—"}',
            f'🌍 {athlete.country or "—"}',
            f'🎂 Age {athlete.age if athlete.age is not None else "—"}',
            f'🕐 Active {time_ago(athlete.last_active)}',
        ],
        score,
        score_class(score),
        badge.label,
        badge.status,
    )

    st.write('')
    render_metric_cards(athlete)

    section_header('Trends', '📈')
    trend_col, risk_col = st.columns([2, 1])
    with trend_col:
        fig = create_score_trend_chart(events)
        if fig is None:
            st.caption('Not enough data for a score trend')
        else:
            st.plotly_chart(fig, use_container_width=True, key='score_trend')
    with risk_col:
        fig = create_risk_donut(events)
        if fig is None:
            st.caption('No risk data')
        else:
            st.plotly_chart(fig, use_container_width=True, key='risk_donut')

    fig = create_valgus_trend_chart(events)
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True, key='valgus_trend')

    render_event_history(events, athlete_id)


@st.fragment(run_every=config.REFRESH_SECONDS)
def render_live_demo(loader: DataLoader):
    demo_id = config.DEMO_ATHLETE_ID
    athletes = athletes_feed(loader)
    events_feed = athlete_events_feed(loader, demo_id)
    latest_feed = latest_event_feed(loader, demo_id)

    for feed in (athletes, events_feed, latest_feed):
        if feed.error:
            error_state(feed.error)

    athlete = reconcile_athlete(index_athletes(athletes.records).get(demo_id), events_feed.records)
    if athlete is None:
        if athletes.loading:
            st.info('Loading demo athlete…')
        else:
            alert_box(f'<strong>Demo athlete not found</strong><br>'
                      f'Set DEMO_ATHLETE_ID to an athlete document id (currently <code>{demo_id}</code>).',
                      'warning')
        return

    score = resolve_score(athlete)
    badge = score_badge(score)
    st.markdown(f"""
    <div class="sc-card" style="text-align: center;">
        <h2 style="margin: 0; text-transform: uppercase;">{athlete.display_name}</h2>
        <p style="margin: 0.25rem 0 1rem 0;">
            {athlete.position or '—'} · {athlete.club or '—'} · {athlete.country or '—'}
        </p>
        <div style="font-size: 3rem;">{score_pill(score, score_class(score))}</div>
        <div style="margin-top: 0.5rem;">{status_badge(badge.label, badge.status)}</div>
        <div style="font-size: 0.8rem; opacity: 0.7;">Biomechanical Efficiency Score</div>
    </div>
    """, unsafe_allow_html=True)

    section_header('Latest Event', '⚡')
    jump = latest_event(latest_feed.records)
    if jump is None:
        st.caption('No events recorded yet')
    else:
        valgus = valgus_label(jump.valgus_angle)
        cols = st.columns(4)
        cols[0].markdown(f"**Movement**<br>{jump.movement_type or '—'}", unsafe_allow_html=True)
        cols[1].markdown(f"**Valgus Angle**<br>{valgus_html(valgus.label, valgus.status)}",
                         unsafe_allow_html=True)
        risk_status = risk_badge(jump.risk_level)
        cols[2].markdown(f"**Risk Level**<br>{status_badge(jump.risk_level or '—', risk_status)}",
                         unsafe_allow_html=True)
        cols[3].markdown(f"**Score**<br>{score_pill(jump.efficiency_score or 0, score_class(jump.efficiency_score))}",
                         unsafe_allow_html=True)
        if jump.tip:
            st.info(f'💬 "{jump.tip}"')
        st.caption(time_ago(jump.timestamp))

    section_header('Session Totals', '📊')
    cols = st.columns(4)
    with cols[0]:
        metric_card('Total Events', format_metric(athlete.total_jumps, 0))
    with cols[1]:
        valgus = valgus_label(athlete.avg_valgus_angle)
        status = {'good': 'excellent', 'warn': 'warning', 'danger': 'danger'}.get(valgus.status)
        metric_card('Avg Valgus', valgus.label, status)
    with cols[2]:
        metric_card('Peak Vertical', format_metric(athlete.avg_peak_vertical_g, 2, 'G'))
    with cols[3]:
        metric_card('Rotational Vel', format_metric(athlete.avg_rotational_vel, 2, ' rad/s'))


def render_demo_page(loader: DataLoader):
    render_header('Live Demo', 'Real-time data stream · Updates automatically', live=True)
    render_live_demo(loader)


# ============================================================================
# MAIN
# ============================================================================

def main():
    auth_session = None
    if auth_required():
        auth_session = current_session()
        if auth_session is None:
            render_login()
            return

    loader = get_loader(auth_session)

    st.sidebar.markdown("## ⚽ Scout Dashboard")
    if auth_session is not None:
        st.sidebar.caption(f"Signed in as {auth_session.display_name}")
    elif not config.use_firestore:
        st.sidebar.caption('Local snapshot mode')

    apply_pending_navigation()
    page = st.sidebar.radio('Navigate', PAGES, key='page')

    st.sidebar.markdown("---")
    source = f"Firestore · {config.FIREBASE_PROJECT_ID}" if config.use_firestore else config.DATA_DIR
    st.sidebar.caption(f"Source: {source}")
    st.sidebar.caption(f"Refresh: every {config.REFRESH_SECONDS}s")

    if auth_session is not None and st.sidebar.button('Sign Out'):
        logger.info(f"Signed out {auth_session.email}")
        sign_out()
        st.rerun()

    if page == 'Live Jump Feed':
        render_feed_page(loader)
    elif page == 'Athlete Scouting':
        render_scouting_page(loader)
    elif page == 'Athlete Detail':
        render_athlete_page(loader)
    else:
        render_demo_page(loader)


main()
