"""
Correlogram Plotting Utilities
Heatmap rendering of correlation pairs using Plotly
"""

import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from color_utils import bucket_colorscale, find_bucket_index, get_unified_color_schemes

logger = logging.getLogger(__name__)

PVALUE_FLOOR = 0.0001
DARK_CELL_THRESHOLD = 0.5


def format_pvalue(pval: float) -> str:
    """Format a p-value for cell overlay text"""
    if pd.isna(pval):
        return ''
    if pval < PVALUE_FLOOR:
        return f"p<{PVALUE_FLOOR:.4f}"
    return f"p={pval:.4f}"


def _axis_order(values: pd.Series, preferred: Optional[Sequence[str]]) -> List[str]:
    """Distinct values in preferred order, falling back to order of appearance"""
    present = list(dict.fromkeys(values.tolist()))
    if preferred is None:
        return present
    ordered = [v for v in dict.fromkeys(preferred) if v in set(present)]
    return ordered + [v for v in present if v not in set(ordered)]


def _empty_figure(title: str) -> go.Figure:
    color_scheme = get_unified_color_schemes()

    fig = go.Figure()
    fig.update_layout(
        title=title,
        plot_bgcolor=color_scheme['background'],
        paper_bgcolor=color_scheme['paper'],
        font=dict(color=color_scheme['text']),
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        annotations=[dict(
            text="No matching variable pairs",
            xref='paper',
            yref='paper',
            x=0.5,
            y=0.5,
            showarrow=False,
            font=dict(size=14)
        )],
        width=500,
        height=500
    )
    return fig


def create_correlogram_heatmap(
    cells: pd.DataFrame,
    buckets: pd.DataFrame,
    x_order: Optional[Sequence[str]] = None,
    y_order: Optional[Sequence[str]] = None,
    title: str = "Correlogram",
    show_corr: bool = True,
    significance_level: Optional[float] = None
) -> go.Figure:
    """
    Create a correlogram heatmap from long-format correlation cells

    Parameters
    ----------
    cells : pd.DataFrame
        Columns 'Var', 'WithVar', 'Corr', 'pValue' (one row per cell) and
        optionally 'bucket' from attach_colors(); each cell is filled with
        the color of that bucket
    buckets : pd.DataFrame
        Color scale from color_utils.build_color_scale()
    x_order : sequence of str, optional
        Order of the x-axis categories (Var)
    y_order : sequence of str, optional
        Order of the y-axis categories (WithVar)
    title : str
        Plot title
    show_corr : bool
        Print the correlation coefficient above the p-value
    significance_level : float, optional
        Append '*' to cells with p-value below this threshold

    Returns
    -------
    go.Figure
        Plotly figure object
    """
    if cells.empty:
        logger.info("No correlation cells to draw; rendering empty chart")
        return _empty_figure(title)

    cells = cells.drop_duplicates(subset=['Var', 'WithVar'])
    if 'bucket' not in cells.columns:
        cells = cells.assign(bucket=find_bucket_index(cells['Corr'], buckets))
    x_labels = _axis_order(cells['Var'], x_order)
    y_labels = _axis_order(cells['WithVar'], y_order)

    corr_grid = cells.pivot(index='WithVar', columns='Var', values='Corr')
    corr_grid = corr_grid.reindex(index=y_labels, columns=x_labels)
    pval_grid = cells.pivot(index='WithVar', columns='Var', values='pValue')
    pval_grid = pval_grid.reindex(index=y_labels, columns=x_labels)
    bucket_grid = cells.pivot(index='WithVar', columns='Var', values='bucket')
    bucket_grid = bucket_grid.reindex(index=y_labels, columns=x_labels).where(lambda grid: grid >= 0)

    color_scheme = get_unified_color_schemes()

    # Prepare annotations
    annotations = []

    for i, y_label in enumerate(y_labels):
        for j, x_label in enumerate(x_labels):
            corr_val = corr_grid.iloc[i, j]
            if pd.isna(corr_val):
                continue
            pval = pval_grid.iloc[i, j]

            text = format_pvalue(pval)
            if significance_level is not None and pval < significance_level:
                text += "*"
            if show_corr:
                text = f"{corr_val:.2f}<br>{text}"

            annotations.append(
                dict(
                    x=x_label,
                    y=y_label,
                    text=text,
                    showarrow=False,
                    font=dict(
                        size=10,
                        color=color_scheme['text'] if abs(corr_val) < DARK_CELL_THRESHOLD
                        else color_scheme['text_dark_cell']
                    )
                )
            )

    # Create heatmap
    # Cells are drawn by bucket index so each fill is exactly its bucket color:
    # index k sits in the middle of the k-th step of the colorscale.
    n_buckets = len(buckets)
    scale_lo = buckets['min'].iloc[0]
    scale_hi = buckets['max'].iloc[-1]
    tick_corr = [-1, -0.5, 0, 0.5, 1]
    tick_pos = [(r - scale_lo) / (scale_hi - scale_lo) * n_buckets - 0.5 for r in tick_corr]

    fig = go.Figure(data=go.Heatmap(
        z=bucket_grid.to_numpy(dtype=float),
        x=x_labels,
        y=y_labels,
        customdata=np.dstack([corr_grid.to_numpy(dtype=float), pval_grid.to_numpy(dtype=float)]),
        colorscale=bucket_colorscale(buckets),
        zmin=-0.5,
        zmax=n_buckets - 0.5,
        xgap=1,
        ygap=1,
        colorbar=dict(
            title="Correlation",
            tickvals=tick_pos,
            ticktext=[f"{r:g}" for r in tick_corr]
        ),
        hovertemplate=('%{x} vs %{y}<br>Correlation: %{customdata[0]:.3f}'
                       '<br>P-value: %{customdata[1]:.4g}<extra></extra>')
    ))

    fig.update_layout(
        title=title,
        annotations=annotations,
        plot_bgcolor=color_scheme['empty_cell'],
        paper_bgcolor=color_scheme['paper'],
        font=dict(color=color_scheme['text']),
        xaxis=dict(type='category', side='bottom', title="Var"),
        yaxis=dict(type='category', autorange='reversed', title="WithVar"),
        width=max(500, 80 * len(x_labels) + 200),
        height=max(500, 60 * len(y_labels) + 200)
    )

    return fig
