"""
Wilderness Death Map - Analytics Dashboard

Streamlit dashboard for visualizing synthetic Wilderness death data:
heatmap overlay on the Wilderness map plus time, wealth and hotspot charts.

Run with: streamlit run dashboard/dashboard.py
"""

import base64
import os
import sys
from typing import Optional

import httpx
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings  # noqa: E402
from app.core.hotspots import HOTSPOTS, PLANE_SIZE  # noqa: E402
from app.schemas.deaths import AggregateStatsResponse, DeathRecordResponse  # noqa: E402
from app.services.death_data import build_snapshot  # noqa: E402
from app.services.map_image import image_media_type  # noqa: E402
from app.services.stats_formatter import build_dashboard  # noqa: E402

settings = get_settings()

FALLBACK_MESSAGE = "Map image unavailable - showing death data on grid background"

# Page configuration
st.set_page_config(
    page_title="Wilderness Death Map",
    page_icon="💀",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stMetric {
        background-color: #1e1e1e;
        padding: 15px;
        border-radius: 10px;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner="Generating deaths...")
def load_local_data(count: int, seed: Optional[int]) -> tuple[pd.DataFrame, dict]:
    """
    Generate and aggregate deaths locally.

    Cached on (count, seed) so reruns and resizes reuse the same data,
    even when seed is None.
    """
    snapshot = build_snapshot(count, seed)
    df = pd.DataFrame(
        [DeathRecordResponse.from_record(r).model_dump() for r in snapshot.records]
    )
    stats = AggregateStatsResponse.from_stats(snapshot.stats).model_dump()
    return df, stats


@st.cache_data(ttl=300, show_spinner="Fetching deaths from API...")
def load_api_data(api_url: str) -> tuple[pd.DataFrame, dict]:
    """Fetch records and stats from a running Wilderness Death Map server."""
    with httpx.Client(base_url=api_url, timeout=10.0) as client:
        deaths = client.get("/api/v1/deaths")
        deaths.raise_for_status()
        stats = client.get("/api/v1/deaths/stats")
        stats.raise_for_status()

    df = pd.DataFrame(deaths.json()["items"])
    return df, AggregateStatsResponse.model_validate(stats.json()).model_dump()


@st.cache_data(show_spinner=False)
def load_map_image(url: str) -> Optional[str]:
    """Fetch the background map as a data URI, None if unavailable."""
    try:
        response = httpx.get(url, timeout=settings.map_image_timeout_seconds, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError:
        return None

    media_type = image_media_type(response)
    if media_type is None:
        return None

    encoded = base64.b64encode(response.content).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def create_heatmap(df: pd.DataFrame, image_uri: Optional[str]) -> go.Figure:
    """Death positions over the Wilderness map (or a grid fallback)."""
    fig = go.Figure()

    if not df.empty:
        fig.add_trace(
            go.Histogram2dContour(
                x=df["x"],
                y=df["y"],
                colorscale="Hot",
                reversescale=True,
                opacity=0.35,
                showscale=False,
                contours=dict(coloring="fill", showlines=False),
                name="Density",
                hoverinfo="skip",
            )
        )
        fig.add_trace(
            go.Scattergl(
                x=df["x"],
                y=df["y"],
                mode="markers",
                marker=dict(size=4, color="rgba(255, 0, 0, 0.5)"),
                name="Deaths",
                customdata=df[["hotspot", "wealth_lost"]],
                hovertemplate="%{customdata[0]}<br>%{customdata[1]:,} gp<extra></extra>",
            )
        )

    # Hotspot outlines
    for hotspot in HOTSPOTS:
        fig.add_shape(
            type="circle",
            x0=hotspot.x - hotspot.radius, x1=hotspot.x + hotspot.radius,
            y0=hotspot.y - hotspot.radius, y1=hotspot.y + hotspot.radius,
            line=dict(color="rgba(0, 255, 255, 0.5)", width=2),
        )

    if image_uri:
        fig.add_layout_image(
            dict(
                source=image_uri,
                xref="x", yref="y",
                x=0, y=0,
                sizex=PLANE_SIZE, sizey=PLANE_SIZE,
                sizing="stretch",
                layer="below",
            )
        )
    else:
        for i in range(0, int(PLANE_SIZE) + 1, 50):
            fig.add_shape(type="line", x0=i, x1=i, y0=0, y1=PLANE_SIZE,
                          line=dict(color="#333333", width=1), layer="below")
            fig.add_shape(type="line", x0=0, x1=PLANE_SIZE, y0=i, y1=i,
                          line=dict(color="#333333", width=1), layer="below")
        fig.add_annotation(
            x=10, y=30, xanchor="left", showarrow=False,
            text=FALLBACK_MESSAGE, font=dict(color="white", size=14),
        )

    fig.update_xaxes(range=[0, PLANE_SIZE], visible=False)
    # Image coordinates: y grows downward
    fig.update_yaxes(range=[PLANE_SIZE, 0], visible=False, scaleanchor="x")
    fig.update_layout(
        height=700,
        template="plotly_dark",
        plot_bgcolor="#1a1a1a",
        showlegend=False,
        margin=dict(l=10, r=10, t=10, b=10),
    )
    return fig


def create_bar_chart(bars: list, title: str, color: str) -> go.Figure:
    """Simple count bar chart from dashboard bar data."""
    fig = px.bar(
        x=[b.label for b in bars],
        y=[b.count for b in bars],
        labels={"x": "", "y": "Deaths"},
        title=title,
        template="plotly_dark",
    )
    fig.update_traces(marker_color=color)
    fig.update_layout(height=320, margin=dict(l=40, r=20, t=50, b=40))
    return fig


def create_wealth_chart(wealth_ranges: list) -> go.Figure:
    """Share of deaths per wealth lost range."""
    fig = go.Figure(
        go.Bar(
            x=[w.percentage for w in wealth_ranges],
            y=[w.label for w in wealth_ranges],
            orientation="h",
            text=[w.display for w in wealth_ranges],
            textposition="auto",
            marker_color="#4ade80",
        )
    )
    fig.update_layout(
        title="Wealth Lost Distribution",
        height=320,
        template="plotly_dark",
        xaxis=dict(title="% of deaths", range=[0, 100]),
        yaxis=dict(autorange="reversed"),
        margin=dict(l=80, r=20, t=50, b=40),
    )
    return fig


def main():
    """Main dashboard application."""
    st.title(f"💀 {settings.dashboard_title}")
    st.caption("Simulated player death patterns in the Wilderness")

    with st.sidebar:
        st.header("Data")

        data_source = st.selectbox(
            "Data Source",
            ["Local Generator", "Live API"],
            help="Generate data in this process or read it from a running server",
        )

        if data_source == "Live API":
            api_url = st.text_input("API URL", value=settings.api_base_url)
        else:
            count = st.number_input(
                "Number of deaths",
                min_value=0,
                max_value=50_000,
                value=settings.death_count,
                step=500,
            )
            fixed_seed = st.checkbox(
                "Fixed seed",
                value=settings.random_seed is not None,
                help="Use a fixed seed for reproducible data",
            )
            seed = None
            if fixed_seed:
                seed = int(st.number_input("Seed", min_value=0, value=settings.random_seed or 42))

    if data_source == "Live API":
        try:
            df, stats_data = load_api_data(api_url)
        except httpx.HTTPError as e:
            st.error(f"Could not reach API: {e}", icon="⚠️")
            st.stop()
    else:
        df, stats_data = load_local_data(int(count), seed)

    stats = AggregateStatsResponse.model_validate(stats_data).to_stats()
    view = build_dashboard(stats)

    # Stat cards
    for col, card in zip(st.columns(len(view.cards)), view.cards):
        with col:
            st.metric(label=f"{card.icon} {card.label}", value=card.value)

    # Map and top hotspots
    col_map, col_top = st.columns([2, 1])

    with col_map:
        st.header("Death Location Heatmap")
        image_uri = load_map_image(settings.map_image_url)
        if image_uri is None:
            st.warning(FALLBACK_MESSAGE, icon="🗺️")
        st.plotly_chart(create_heatmap(df, image_uri), use_container_width=True)

    with col_top:
        st.header("Top Death Hotspots")
        if view.top_hotspots:
            for hotspot in view.top_hotspots:
                st.markdown(f"**#{hotspot.rank}** {hotspot.label}: `{hotspot.display}`")
        else:
            st.info("No deaths recorded.")

    # Charts
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            create_bar_chart(view.hour_bars, "Deaths by Hour of Day", "#3b82f6"),
            use_container_width=True,
        )
    with col2:
        st.plotly_chart(create_wealth_chart(view.wealth_ranges), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            create_bar_chart(view.day_bars, "Deaths by Day of Week", "#a855f7"),
            use_container_width=True,
        )
    with col2:
        st.plotly_chart(
            create_bar_chart(view.month_bars, "Deaths by Month", "#f59e0b"),
            use_container_width=True,
        )

    st.header("Key Findings")
    for insight in view.insights:
        st.markdown(f"- {insight}")

    with st.expander("Raw Data"):
        st.dataframe(df.head(200), use_container_width=True)

    st.divider()
    st.caption("Wilderness Death Map | All data is simulated for demonstration purposes")


if __name__ == "__main__":
    main()
