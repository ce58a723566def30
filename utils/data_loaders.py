"""
Data loaders for correlogram input datasets
Handles CSV/TXT/TSV and Excel files, uploaded files and in-memory DataFrames
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {'.csv': ',', '.txt': None, '.tsv': '\t'}
EXCEL_EXTENSIONS = {'.xlsx', '.xls'}
FALLBACK_ENCODINGS = ['latin-1', 'cp1252', 'utf-8', 'ascii']


def load_csv_txt(uploaded_file, separator=',', decimal='.', encoding='utf-8', has_header=True,
                 has_index=False, skip_rows=0, skip_cols=0, na_values='', quote_char='"'):
    """
    Load CSV/TXT files with robust encoding detection

    Parameters:
    -----------
    uploaded_file : str, Path or file-like object
        File path or uploaded file
    separator : str or None
        Column separator (comma, tab, etc.); None lets pandas sniff it
    decimal : str
        Decimal separator (. or ,)
    encoding : str
        File encoding tried first (utf-8, latin-1, etc.)
    has_header : bool
        Whether first row contains headers
    has_index : bool
        Whether first column contains row names
    skip_rows : int
        Number of rows to skip at start
    skip_cols : int
        Number of columns to skip at start
    na_values : str
        Comma-separated list of missing value indicators
    quote_char : str
        Quote character for delimited text, "None" to disable

    Returns:
    --------
    pd.DataFrame : Loaded data
    """
    encodings = [encoding] + [enc for enc in FALLBACK_ENCODINGS if enc != encoding]
    data = None
    na_list = [x.strip() for x in na_values.split(',') if x.strip()]
    quote_setting = None if quote_char == "None" else quote_char

    for enc in encodings:
        if hasattr(uploaded_file, 'seek'):
            uploaded_file.seek(0)
        try:
            data = pd.read_csv(uploaded_file,
                               sep=separator,
                               engine='python' if separator is None else 'c',
                               header=0 if has_header else None,
                               index_col=0 if has_index else None,
                               encoding=enc,
                               skiprows=skip_rows if skip_rows > 0 else None,
                               na_values=na_list,
                               decimal=decimal,
                               quotechar=quote_setting)
            logger.info("File loaded with encoding: %s", enc)
            break
        except (UnicodeDecodeError, pd.errors.ParserError):
            continue

    if data is None:
        raise ValueError("Unable to decode file with any encoding")

    if skip_cols > 0:
        data = data.iloc[:, skip_cols:]

    # If no index column, use 1-based indices
    if not has_index:
        data.index = range(1, len(data) + 1)
        data.index.name = None

    return data


def load_excel_data(uploaded_file, sheet_name=0, skip_rows=0, skip_cols=0, has_header=True,
                    has_index=False, na_values_excel=''):
    """
    Load Excel files with enhanced parameters

    Parameters:
    -----------
    uploaded_file : str, Path or file-like object
        Excel file path or uploaded file
    sheet_name : str or int
        Sheet name or number to load
    skip_rows : int
        Number of rows to skip at start
    skip_cols : int
        Number of columns to skip at start
    has_header : bool
        Whether first row contains headers
    has_index : bool
        Whether first column contains row names
    na_values_excel : str
        Comma-separated list of missing value indicators

    Returns:
    --------
    pd.DataFrame : Loaded Excel data
    """
    try:
        sheet_num = int(sheet_name)
    except ValueError:
        sheet_num = sheet_name

    na_list_excel = [x.strip() for x in na_values_excel.split(',') if x.strip()]

    data = pd.read_excel(uploaded_file,
                         sheet_name=sheet_num,
                         header=0 if has_header else None,
                         index_col=0 if has_index else None,
                         skiprows=skip_rows,
                         na_values=na_list_excel)

    # Handle skip_cols for Excel after loading
    if skip_cols > 0:
        data = data.iloc[:, skip_cols:]

    # If no index column, use 1-based indices
    if not has_index:
        data.index = range(1, len(data) + 1)
        data.index.name = None

    return data


def dataset_extension(dsn):
    """Lower-case file extension of a path or uploaded file, '' if unknown"""
    name = getattr(dsn, 'name', dsn)
    if not isinstance(name, (str, Path)):
        return ''
    return Path(name).suffix.lower()


def load_dataset(dsn, **kwargs):
    """
    Resolve a dataset reference to a DataFrame

    Parameters:
    -----------
    dsn : pd.DataFrame, str, Path or file-like object
        DataFrames are returned unchanged; paths and uploaded files are
        read according to their extension
    **kwargs :
        Passed to load_csv_txt or load_excel_data

    Returns:
    --------
    pd.DataFrame : Loaded data
    """
    if isinstance(dsn, pd.DataFrame):
        return dsn

    ext = dataset_extension(dsn)

    if ext in CSV_EXTENSIONS:
        kwargs.setdefault('separator', CSV_EXTENSIONS[ext])
        data = load_csv_txt(dsn, **kwargs)
    elif ext in EXCEL_EXTENSIONS:
        data = load_excel_data(dsn, **kwargs)
    else:
        raise ValueError(f"Unsupported dataset format: '{ext or dsn}'")

    logger.info("Loaded dataset: %d samples x %d variables", data.shape[0], data.shape[1])
    return data
