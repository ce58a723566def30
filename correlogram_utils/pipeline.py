"""
Correlogram Pipeline
Correlation computation, pair reshaping, color join and rendering in one call
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from color_utils import build_color_scale
from utils.data_exporters import export_figure
from utils.data_loaders import load_dataset

from .plotting import create_correlogram_heatmap
from .statistics import (
    MIN_OBSERVATIONS,
    attach_colors,
    compute_pair_correlations,
    filter_pairs,
    symmetrize_pairs
)

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    'title': 'Correlogram',
    'show_corr': True,
    'include_self_pairs': False,
    'min_observations': MIN_OBSERVATIONS,
    'significance_level': None
}

_LIST_SEPARATORS = re.compile(r'[\s,]+')


def parse_var_list(value: Union[str, Iterable[str], None]) -> List[str]:
    """
    Normalise a variable list

    Parameters
    ----------
    value : str, iterable or None
        Space- or comma-delimited names, or a sequence of column labels.
        Non-string labels (e.g. integer headers) are kept as given.

    Returns
    -------
    list
        Names in the given order without duplicates
    """
    if value is None:
        return []
    if isinstance(value, str):
        names = [name for name in _LIST_SEPARATORS.split(value) if name]
    else:
        names = [name.strip() if isinstance(name, str) else name for name in value]
        names = [name for name in names if name != '']
    return list(dict.fromkeys(names))


def make_config(dsn, vars, withvars, **options) -> Dict:
    """
    Build the configuration record for one correlogram run

    Parameters
    ----------
    dsn : pd.DataFrame, str, Path or file-like object
        Dataset reference
    vars : str or iterable of str
        x-axis variables
    withvars : str or iterable of str
        y-axis variables
    **options :
        Overrides for DEFAULT_OPTIONS

    Returns
    -------
    dict
        {'dsn', 'vars', 'withvars', plus every option}
    """
    unknown = sorted(set(options) - set(DEFAULT_OPTIONS))
    if unknown:
        raise TypeError(f"Unknown correlogram option(s): {', '.join(unknown)}")

    config = dict(DEFAULT_OPTIONS)
    config.update(options)
    config['dsn'] = dsn
    config['vars'] = parse_var_list(vars)
    config['withvars'] = parse_var_list(withvars)
    return config


def validate_variables(data: pd.DataFrame, names: Iterable[str]) -> Dict[str, List[str]]:
    """
    Report requested variables that cannot be correlated

    Parameters
    ----------
    data : pd.DataFrame
        Loaded dataset
    names : iterable of str
        Requested variable names

    Returns
    -------
    dict
        {'unknown': [...], 'non_numeric': [...]} in request order
    """
    numeric = set(data.select_dtypes(include=[np.number]).columns)
    unknown = [name for name in names if name not in data.columns]
    non_numeric = [name for name in names if name in data.columns and name not in numeric]

    if unknown:
        logger.warning("Unknown variable(s): %s", ", ".join(map(str, unknown)))
    if non_numeric:
        logger.warning("Non-numeric variable(s): %s", ", ".join(map(str, non_numeric)))

    return {'unknown': unknown, 'non_numeric': non_numeric}


def build_correlogram(dsn, vars, withvars, **options) -> Dict:
    """
    Run the full correlogram pipeline and return its intermediate tables

    Parameters
    ----------
    dsn : pd.DataFrame, str, Path or file-like object
        Dataset reference
    vars : str or iterable of str
        x-axis variables
    withvars : str or iterable of str
        y-axis variables
    **options :
        See DEFAULT_OPTIONS

    Returns
    -------
    dict
        'config', 'records' (symmetric pairs), 'cells' (filtered and
        colored), 'buckets', 'figure', 'unknown', 'non_numeric'
    """
    config = make_config(dsn, vars, withvars, **options)
    data = load_dataset(config['dsn'])

    if not config['vars'] or not config['withvars']:
        logger.warning("Empty variable list: vars=%s withvars=%s", config['vars'], config['withvars'])

    requested = list(dict.fromkeys(config['vars'] + config['withvars']))
    diagnostics = validate_variables(data, requested)
    usable = [name for name in requested
              if name not in diagnostics['unknown'] and name not in diagnostics['non_numeric']]

    buckets = build_color_scale()

    records = compute_pair_correlations(
        data,
        columns=usable,
        min_observations=config['min_observations'],
        include_self_pairs=config['include_self_pairs']
    )
    records = symmetrize_pairs(records)
    selected = filter_pairs(records, config['vars'], config['withvars'])
    cells = attach_colors(selected, buckets)

    logger.info("Correlogram: %d cell(s) for %d x %d variables",
                len(cells), len(config['vars']), len(config['withvars']))

    figure = create_correlogram_heatmap(
        cells,
        buckets,
        x_order=config['vars'],
        y_order=config['withvars'],
        title=config['title'],
        show_corr=config['show_corr'],
        significance_level=config['significance_level']
    )

    return {
        'config': config,
        'records': records,
        'cells': cells,
        'buckets': buckets,
        'figure': figure,
        'unknown': diagnostics['unknown'],
        'non_numeric': diagnostics['non_numeric']
    }


def correlogram(dsn, vars, withvars, output: Optional[str] = None, **options) -> None:
    """
    Render a correlogram of vars against withvars

    Parameters
    ----------
    dsn : pd.DataFrame, str, Path or file-like object
        Dataset reference
    vars : str or iterable of str
        x-axis variables
    withvars : str or iterable of str
        y-axis variables
    output : str or Path, optional
        File to write (.html or an image format); shown in the default
        plotly renderer when omitted
    **options :
        See DEFAULT_OPTIONS
    """
    result = build_correlogram(dsn, vars, withvars, **options)

    if output is None:
        result['figure'].show()
    else:
        export_figure(result['figure'], output)
