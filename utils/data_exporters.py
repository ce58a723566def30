"""
Data export functions for correlogram results
Handles figure output, CSV and Excel export of the correlation cells
"""

import logging
from io import BytesIO
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = {'.html', '.htm'}
IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.svg', '.pdf', '.webp'}


def export_figure(fig, path):
    """
    Write a figure to disk, format chosen by file extension

    Parameters:
    -----------
    fig : go.Figure
        Figure to write
    path : str or Path
        Destination; .html is written standalone, image formats need kaleido

    Returns:
    --------
    Path : The written file
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext in HTML_EXTENSIONS:
        fig.write_html(str(path), include_plotlyjs='cdn')
    elif ext in IMAGE_EXTENSIONS:
        fig.write_image(str(path))
    else:
        raise ValueError(f"Unsupported output format: '{ext}'")

    logger.info("Correlogram written to %s", path)
    return path


def create_cells_csv(cells):
    """
    CSV text of the correlation cell table

    Parameters:
    -----------
    cells : pd.DataFrame
        Table with Var, WithVar, Corr, pValue (and optionally color columns)

    Returns:
    --------
    str : CSV content
    """
    return cells.to_csv(index=False)


def create_excel_export(cells, buckets):
    """
    Excel workbook with correlations, color scale and metadata sheets

    Parameters:
    -----------
    cells : pd.DataFrame
        Correlation cell table
    buckets : pd.DataFrame
        Color scale table

    Returns:
    --------
    bytes : .xlsx content
    """
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        cells.to_excel(writer, sheet_name='Correlations', index=False)
        buckets.to_excel(writer, sheet_name='Color Scale', index=False)

        meta_df = pd.DataFrame({
            'Property': ['Analysis', 'Method', 'Pairs', 'Date'],
            'Value': [
                'Correlogram',
                'Pearson',
                len(cells),
                pd.Timestamp.now().strftime('%Y-%m-%d %H:%M:%S')
            ]
        })
        meta_df.to_excel(writer, sheet_name='Metadata', index=False)

    buffer.seek(0)
    return buffer.getvalue()
