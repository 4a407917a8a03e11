# =============================================================================
# substock_core/ui/charts.py
# Plotly figures for the dashboard
# =============================================================================

from __future__ import annotations
import plotly.graph_objects as go

from substock_core.inventory import InventorySummary
from .theme import STATUS_COLORS, STATUS_LABELS, PRIMARY_COLOR, palette


def _layout(fig: go.Figure, title: str, dark_mode: bool) -> go.Figure:
    colors = palette(dark_mode)
    fig.update_layout(
        title=title,
        paper_bgcolor=colors["card"],
        plot_bgcolor=colors["card"],
        font=dict(color=colors["text"]),
        margin=dict(l=20, r=20, t=50, b=20),
        height=340,
    )
    return fig


def status_pie(summary: InventorySummary, dark_mode: bool = False) -> go.Figure:
    """Share of lots per stock status."""
    statuses = [s for s, n in summary.status_counts.items() if n > 0]
    fig = go.Figure(go.Pie(
        labels=[STATUS_LABELS[s] for s in statuses],
        values=[summary.status_counts[s] for s in statuses],
        marker=dict(colors=[STATUS_COLORS[s] for s in statuses]),
        hole=0.45,
    ))
    return _layout(fig, "Stock status", dark_mode)


def cabinet_value_bar(summary: InventorySummary, dark_mode: bool = False) -> go.Figure:
    """Stock value held in each cabinet."""
    cabinets = sorted(summary.value_by_cabinet)
    fig = go.Figure(go.Bar(
        x=cabinets,
        y=[summary.value_by_cabinet[c] for c in cabinets],
        marker_color=PRIMARY_COLOR,
    ))
    fig.update_yaxes(gridcolor=palette(dark_mode)["grid"])
    return _layout(fig, "Stock value by cabinet", dark_mode)
