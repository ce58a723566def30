"""
Correlogram Statistics
Pairwise Pearson correlations reshaped into long-format pair tables
"""

import logging
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd
from scipy import stats

from color_utils import find_bucket_index

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ['Var', 'WithVar', 'Corr', 'pValue']
CELL_COLUMNS = RECORD_COLUMNS + ['bucket', 'color']

MIN_OBSERVATIONS = 3


def empty_records() -> pd.DataFrame:
    """Correlation table with no rows"""
    return pd.DataFrame({
        'Var': pd.Series(dtype=object),
        'WithVar': pd.Series(dtype=object),
        'Corr': pd.Series(dtype=float),
        'pValue': pd.Series(dtype=float)
    })


def select_numeric_columns(
    data: pd.DataFrame,
    columns: Optional[Iterable[str]] = None
) -> List[str]:
    """
    Numeric columns of data usable by the correlation engine

    Parameters
    ----------
    data : pd.DataFrame
        Input dataset
    columns : iterable of str, optional
        Restrict to these names. Unknown and non-numeric names are skipped
        with a warning.

    Returns
    -------
    list
        Column names in dataset order
    """
    numeric = data.select_dtypes(include=[np.number]).columns.tolist()
    if columns is None:
        return numeric

    requested = set(columns)
    unknown = sorted(requested - set(data.columns))
    non_numeric = sorted(requested & (set(data.columns) - set(numeric)))
    if unknown:
        logger.warning("Variables not found in dataset: %s", ", ".join(map(str, unknown)))
    if non_numeric:
        logger.warning("Skipping non-numeric variables: %s", ", ".join(map(str, non_numeric)))

    return [col for col in numeric if col in requested]


def _usable(series: pd.Series, min_observations: int) -> bool:
    values = series.dropna()
    return len(values) >= min_observations and values.nunique() > 1


def compute_pair_correlations(
    data: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    min_observations: int = MIN_OBSERVATIONS,
    include_self_pairs: bool = False
) -> pd.DataFrame:
    """
    Compute Pearson correlations for every unordered pair of numeric columns

    Only one direction is produced per pair: the column that comes first in
    the dataset is ``Var``.

    Parameters
    ----------
    data : pd.DataFrame
        Input dataset
    columns : iterable of str, optional
        Restrict the computation to these columns
    min_observations : int
        Minimum number of pairwise-complete rows for a pair to be reported
    include_self_pairs : bool
        Also report (A, A, 1.0, 0.0) for every usable column

    Returns
    -------
    pd.DataFrame
        Columns: ['Var', 'WithVar', 'Corr', 'pValue']
    """
    numeric_cols = select_numeric_columns(data, columns)

    if len(numeric_cols) < 2 and not (include_self_pairs and numeric_cols):
        logger.warning(
            "Need at least 2 numeric variables for correlation. Found: %d",
            len(numeric_cols)
        )
        return empty_records()

    results = []
    n_vars = len(numeric_cols)

    for i in range(n_vars):
        var1 = numeric_cols[i]

        if include_self_pairs and _usable(data[var1], min_observations):
            results.append({'Var': var1, 'WithVar': var1, 'Corr': 1.0, 'pValue': 0.0})

        for j in range(i + 1, n_vars):
            var2 = numeric_cols[j]

            # Clean data (remove NaN for this pair)
            pair_data = data[[var1, var2]].dropna()

            if len(pair_data) < min_observations:
                logger.warning(
                    "Skipping %s x %s: %d complete observations (need %d)",
                    var1, var2, len(pair_data), min_observations
                )
                continue

            if pair_data[var1].nunique() < 2 or pair_data[var2].nunique() < 2:
                logger.warning("Skipping %s x %s: constant input", var1, var2)
                continue

            corr, pval = stats.pearsonr(pair_data[var1], pair_data[var2])

            if not (np.isfinite(corr) and np.isfinite(pval)):
                logger.warning("Skipping %s x %s: correlation undefined", var1, var2)
                continue

            results.append({
                'Var': var1,
                'WithVar': var2,
                'Corr': float(corr),
                'pValue': float(pval)
            })

    if not results:
        return empty_records()

    return pd.DataFrame(results, columns=RECORD_COLUMNS)


def symmetrize_pairs(records: pd.DataFrame) -> pd.DataFrame:
    """
    Add the mirrored (WithVar, Var) row for every correlation record

    Self pairs are their own mirror and are kept once.

    Parameters
    ----------
    records : pd.DataFrame
        Correlation table with one direction per pair

    Returns
    -------
    pd.DataFrame
        Original rows followed by their mirrors
    """
    distinct = records[records['Var'] != records['WithVar']]
    mirrored = distinct.rename(columns={'Var': 'WithVar', 'WithVar': 'Var'})[RECORD_COLUMNS]

    if mirrored.empty:
        return records[RECORD_COLUMNS].reset_index(drop=True)

    return pd.concat([records[RECORD_COLUMNS], mirrored], ignore_index=True)


def filter_pairs(
    records: pd.DataFrame,
    x_vars: Iterable[str],
    y_vars: Iterable[str]
) -> pd.DataFrame:
    """
    Keep the records whose Var is in x_vars and WithVar is in y_vars

    Parameters
    ----------
    records : pd.DataFrame
        Symmetric correlation table
    x_vars : iterable of str
        Permitted x-axis variables
    y_vars : iterable of str
        Permitted y-axis variables

    Returns
    -------
    pd.DataFrame
        Matching rows in input order
    """
    mask = records['Var'].isin(list(x_vars)) & records['WithVar'].isin(list(y_vars))
    return records[mask].reset_index(drop=True)


def attach_colors(records: pd.DataFrame, buckets: pd.DataFrame) -> pd.DataFrame:
    """
    Join each correlation record to the color bucket containing its value

    Parameters
    ----------
    records : pd.DataFrame
        Correlation table
    buckets : pd.DataFrame
        Color scale from color_utils.build_color_scale()

    Returns
    -------
    pd.DataFrame
        Columns: ['Var', 'WithVar', 'Corr', 'pValue', 'bucket', 'color']
    """
    cells = records[RECORD_COLUMNS].copy()
    cells['bucket'] = find_bucket_index(cells['Corr'], buckets)

    missing = cells['bucket'] < 0
    if missing.any():
        logger.warning("Dropping %d record(s) outside the color scale", int(missing.sum()))
        cells = cells[~missing].copy()

    cells['color'] = buckets['color'].to_numpy()[cells['bucket'].to_numpy(dtype=int)]
    return cells.reset_index(drop=True)[CELL_COLUMNS]
