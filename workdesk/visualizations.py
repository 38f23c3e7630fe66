from __future__ import annotations

import plotly.graph_objects as go

from workdesk.constants import STATUS_COLORS, STATUS_LABELS, STATUSES
from workdesk.metrics import BoardPerformance, status_percentages

TEXT_MAIN = "#0F172A"
TEXT_SOFT = "#475569"
GRID = "rgba(148,163,184,0.25)"
BORDER = "#CBD5E1"


def apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=True):
    fig.update_layout(
        title=title,
        title_font=dict(color=TEXT_MAIN, size=16),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=TEXT_MAIN),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=GRID,
            tickfont=dict(color=TEXT_SOFT),
            zeroline=False,
            showline=True,
            linecolor=BORDER,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=GRID,
            zeroline=False,
            tickfont=dict(color=TEXT_SOFT),
            showline=True,
            linecolor=BORDER,
        ),
    )
    return fig


def status_distribution_chart(performance: BoardPerformance):
    percentages = status_percentages(performance)
    counts = [performance.status_counts.get(status, 0) for status in STATUSES]
    labels = []
    for status in STATUSES:
        label = STATUS_LABELS[status]
        if status in performance.bottlenecks:
            label = f"{label} ⚠"
        labels.append(label)
    fig = go.Figure(
        go.Bar(
            x=labels,
            y=counts,
            marker_color=[STATUS_COLORS[status] for status in STATUSES],
            text=[f"{count} ({percentages[status]}%)" for status, count in zip(STATUSES, counts)],
            textposition="outside",
            hovertemplate="%{x}: %{y}<extra></extra>",
        )
    )
    fig.update_yaxes(rangemode="tozero", dtick=1)
    return apply_common_plot_style(fig, "Tasks by status")
