"""
Data handling utility modules for correlograms
"""

from .data_loaders import (
    load_csv_txt,
    load_excel_data,
    load_dataset,
    dataset_extension
)

from .data_exporters import (
    export_figure,
    create_cells_csv,
    create_excel_export
)

__all__ = [
    # Loaders
    'load_csv_txt',
    'load_excel_data',
    'load_dataset',
    'dataset_extension',
    # Exporters
    'export_figure',
    'create_cells_csv',
    'create_excel_export'
]
