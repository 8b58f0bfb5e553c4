"""Streamlit UI for the Marketing Analytics Dashboard."""

import logging

import plotly.graph_objects as go
import streamlit as st

from marketing_dashboard.analytics import DEFAULT_TIME_RANGE, TimeRange
from marketing_dashboard.models import DashboardViewModel
from marketing_dashboard.services import DashboardService

logging.basicConfig(level=logging.INFO)

# Page config
st.set_page_config(
    page_title="Marketing Analytics Dashboard",
    page_icon="📈",
    layout="wide",
)

# Color tokens -> palette
TOKEN_COLORS = {
    "positive": "#34d399",
    "negative": "#f87171",
    "neutral": "#9ca3af",
    "active": "#22d3ee",
    "muted": "#9ca3af",
}
ACTUAL_COLOR = "#06b6d4"
PREDICTED_COLOR = "#d946ef"

# Custom CSS
st.markdown(
    """
    <style>
    .kpi-card { background-color: #111827; padding: 1rem; border-radius: 0.75rem; color: #f3f4f6; }
    .kpi-title { font-size: 0.85rem; color: #9ca3af; }
    .kpi-value { font-size: 1.8rem; font-weight: 700; }
    .rec-card { background-color: #1f2937; border-left: 4px solid #d946ef; padding: 1rem; margin: 0.5rem 0; border-radius: 0.5rem; }
    .lift-pill { background-color: rgba(16,185,129,0.2); color: #34d399; padding: 0.2rem 0.6rem; border-radius: 999px; font-size: 0.8rem; }
    </style>
    """,
    unsafe_allow_html=True,
)


def render_kpi(kpi: dict) -> None:
    """Render a KPI tile with its classified delta."""
    trend = kpi["trend"]
    st.markdown(
        f"""
        <div class="kpi-card">
            <div class="kpi-title">{kpi['title']}</div>
            <div class="kpi-value">{kpi['value']}</div>
            <div style="color: {TOKEN_COLORS[trend['color']]}">
                {trend['glyph']} {kpi['change_text']}
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_recommendation(rec: dict) -> None:
    st.markdown(
        f"""
        <div class="rec-card">
            <strong>💡 {rec['insight']}</strong><br/>
            <em>Action:</em> {rec['action']}
            <span class="lift-pill" style="float: right">{rec['projected_lift']}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )


def create_trend_chart(view_model: DashboardViewModel) -> go.Figure:
    """Create actual vs predicted area chart with the forecast boundary marked."""
    frame = view_model.series.to_frame()
    change = view_model.series_change

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=frame["label"].to_list(),
        y=frame["actual"].to_list(),
        name=f"Actual Conversions ({change.label})",
        mode="lines",
        fill="tozeroy",
        line=dict(color=ACTUAL_COLOR, width=2),
    ))

    fig.add_trace(go.Scatter(
        x=frame["label"].to_list(),
        y=frame["predicted"].to_list(),
        name="Predicted (AI)",
        mode="lines",
        fill="tozeroy",
        line=dict(color=PREDICTED_COLOR, width=2, dash="dash"),
    ))

    if view_model.series.forecast_start_index is not None:
        fig.add_vline(
            x=view_model.series.forecast_start_index,
            line_dash="dot",
            line_color=TOKEN_COLORS[change.color.value],
        )

    fig.update_layout(
        title="Performance Trends",
        legend=dict(x=0, y=1.15, orientation="h"),
        height=400,
        plot_bgcolor="#111827",
        paper_bgcolor="#111827",
        font=dict(color="#f3f4f6"),
    )

    return fig


def create_segmentation_donut(view_model: DashboardViewModel) -> go.Figure:
    """Create audience segmentation donut with the total in the center."""
    slices = view_model.segmentation

    fig = go.Figure(data=[go.Pie(
        labels=[s.label for s in slices],
        values=[s.count for s in slices],
        hole=0.6,
        marker_colors=[s.color for s in slices],
        sort=False,
    )])

    fig.update_layout(
        title="Audience Segmentation",
        annotations=[dict(
            text=f"{view_model.total_users_text}<br>Total Users",
            showarrow=False,
            font=dict(size=18),
        )],
        height=400,
        paper_bgcolor="#111827",
        font=dict(color="#f3f4f6"),
    )

    return fig


@st.cache_resource
def get_service() -> DashboardService:
    return DashboardService()


# Sidebar: time range selection
with st.sidebar:
    st.title("📈 Marketing Analytics")
    codes = [r.code for r in TimeRange]
    selected_code = st.radio(
        "Time range",
        codes,
        index=codes.index(DEFAULT_TIME_RANGE.code),
        horizontal=True,
    )

time_range = TimeRange.from_code(selected_code)
view_model = get_service().build(time_range)
data = view_model.to_dict()

st.title("Marketing Analytics Dashboard")
st.caption(f"Generated {view_model.generated_at:%Y-%m-%d %H:%M} UTC")

# KPI tiles
for col, kpi in zip(st.columns(len(data["kpis"]) or 1), data["kpis"]):
    with col:
        render_kpi(kpi)

st.divider()

trend_col, segment_col = st.columns([2, 1])
with trend_col:
    st.plotly_chart(create_trend_chart(view_model), use_container_width=True)
with segment_col:
    st.plotly_chart(create_segmentation_donut(view_model), use_container_width=True)
    for s in data["segmentation"]["slices"]:
        st.markdown(f"{s['label']}: **{s['count']:,}** ({s['share_text']})")

st.subheader("AI Optimization Engine")
for rec in data["recommendations"]:
    render_recommendation(rec)

st.subheader("Active Campaigns")
st.dataframe(
    [
        {
            "Campaign Name": c["name"],
            "Platform": c["platform"],
            "Status": c["status"],
            "Spend ($)": c["spend_text"],
            "ROAS": c["roas_text"],
            "Trend": c["trend"]["label"],
        }
        for c in data["campaigns"]
    ],
    use_container_width=True,
    hide_index=True,
)

st.download_button(
    "Download view model (JSON)",
    data=view_model.to_json(),
    file_name=f"dashboard_{time_range.code}.json",
    mime="application/json",
)
