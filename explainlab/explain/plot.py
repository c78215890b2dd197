"""Plotly rendering of local explanations."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .lime_utils import ExplanationResult

__all__ = ["plot_explanations", "save_figure"]

SUPPORTS = "#1f77b4"
CONTRADICTS = "#d62728"


def plot_explanations(results: Sequence[ExplanationResult], title: str | None = None) -> go.Figure:
    """One horizontal bar panel per explained label.

    Bars are ordered by absolute weight; weights supporting the label and
    weights contradicting it get different colours.
    """
    if not results:
        raise ValueError("No explanations to plot")
    fig = make_subplots(
        rows=len(results),
        cols=1,
        subplot_titles=[
            f"Case {r.instance} | label: {r.label} | probability: {r.probability:.2f} | fit: {r.score:.2f}"
            for r in results
        ],
    )
    for i, r in enumerate(results, start=1):
        pairs = sorted(r.contributions, key=lambda fw: abs(fw[1]))
        features = [f for f, _ in pairs]
        weights = [w for _, w in pairs]
        fig.add_trace(
            go.Bar(
                x=weights,
                y=features,
                orientation="h",
                marker_color=[SUPPORTS if w >= 0 else CONTRADICTS for w in weights],
                name=r.label,
                showlegend=False,
            ),
            row=i,
            col=1,
        )
        fig.update_xaxes(title_text="Weight", row=i, col=1)
    fig.update_layout(
        title=title or "Local explanation",
        height=max(300, 250 * len(results)),
    )
    return fig


def save_figure(fig: go.Figure, out_path: str | Path) -> str:
    """Write ``fig`` as standalone HTML and return the path."""
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(fig.to_html(full_html=True, include_plotlyjs="cdn"), encoding="utf-8")
    return str(path)
