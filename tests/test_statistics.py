import logging

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from color_utils import build_color_scale
from correlogram_utils.statistics import (
    RECORD_COLUMNS,
    attach_colors,
    compute_pair_correlations,
    filter_pairs,
    symmetrize_pairs,
)


def test_engine_reports_each_unordered_pair_once(sample_data):
    records = compute_pair_correlations(sample_data)

    assert list(records.columns) == RECORD_COLUMNS
    pairs = list(zip(records['Var'], records['WithVar']))
    assert pairs == [('X', 'Y'), ('X', 'Z'), ('Y', 'Z')]


def test_engine_matches_scipy(sample_data):
    records = compute_pair_correlations(sample_data)
    row = records[(records['Var'] == 'X') & (records['WithVar'] == 'Y')].iloc[0]

    corr, pval = stats.pearsonr(sample_data['X'], sample_data['Y'])
    assert row['Corr'] == pytest.approx(corr)
    assert row['pValue'] == pytest.approx(pval)


def test_engine_skips_constant_and_non_numeric_columns(sample_data, caplog):
    with caplog.at_level(logging.WARNING):
        records = compute_pair_correlations(sample_data, columns=['X', 'label', 'const', 'Y'])

    pairs = list(zip(records['Var'], records['WithVar']))
    assert pairs == [('X', 'Y')]
    assert "non-numeric" in caplog.text
    assert "constant input" in caplog.text


def test_engine_needs_three_complete_observations(caplog):
    data = pd.DataFrame({
        'A': [1.0, 2.0, np.nan, np.nan, 5.0],
        'B': [2.0, 1.0, 4.0, 3.0, np.nan],
        'C': [1.0, 3.0, 2.0, 5.0, 4.0]
    })

    with caplog.at_level(logging.WARNING):
        records = compute_pair_correlations(data)

    pairs = list(zip(records['Var'], records['WithVar']))
    assert ('A', 'B') not in pairs
    assert ('A', 'C') in pairs
    assert ('B', 'C') in pairs
    assert "complete observations" in caplog.text


def test_engine_with_single_numeric_column_returns_empty():
    data = pd.DataFrame({'A': [1.0, 2.0, 3.0], 'name': ['a', 'b', 'c']})
    records = compute_pair_correlations(data)

    assert records.empty
    assert list(records.columns) == RECORD_COLUMNS


def test_engine_self_pairs_when_requested(sample_data):
    records = compute_pair_correlations(sample_data, columns=['X', 'Y'], include_self_pairs=True)
    self_pairs = records[records['Var'] == records['WithVar']]

    assert sorted(self_pairs['Var']) == ['X', 'Y']
    assert (self_pairs['Corr'] == 1.0).all()
    assert (self_pairs['pValue'] == 0.0).all()


def test_symmetrize_adds_mirror_of_every_record(sample_data):
    records = compute_pair_correlations(sample_data)
    symmetric = symmetrize_pairs(records)

    assert len(symmetric) == 2 * len(records)
    for _, rec in records.iterrows():
        mirror = symmetric[(symmetric['Var'] == rec['WithVar']) & (symmetric['WithVar'] == rec['Var'])]
        assert len(mirror) == 1
        assert mirror['Corr'].iloc[0] == rec['Corr']
        assert mirror['pValue'].iloc[0] == rec['pValue']


def test_symmetrize_keeps_self_pairs_once():
    records = pd.DataFrame(
        [('A', 'A', 1.0, 0.0), ('A', 'B', 0.5, 0.1)],
        columns=RECORD_COLUMNS
    )
    symmetric = symmetrize_pairs(records)

    assert len(symmetric) == 3
    assert len(symmetric[(symmetric['Var'] == 'A') & (symmetric['WithVar'] == 'A')]) == 1


def test_filter_keeps_exactly_requested_combinations(sample_data):
    symmetric = symmetrize_pairs(compute_pair_correlations(sample_data))
    x_vars, y_vars = ['X', 'Z'], ['Y']
    selected = filter_pairs(symmetric, x_vars, y_vars)

    expected = symmetric[symmetric['Var'].isin(x_vars) & symmetric['WithVar'].isin(y_vars)]
    assert len(selected) == len(expected)
    assert selected['Var'].isin(x_vars).all()
    assert selected['WithVar'].isin(y_vars).all()


def test_filter_one_x_against_two_y(sample_data):
    records = compute_pair_correlations(sample_data)
    symmetric = symmetrize_pairs(records)
    selected = filter_pairs(symmetric, ['X'], ['Y', 'Z'])

    assert list(zip(selected['Var'], selected['WithVar'])) == [('X', 'Y'), ('X', 'Z')]
    xy = records[(records['Var'] == 'X') & (records['WithVar'] == 'Y')].iloc[0]
    assert selected['Corr'].iloc[0] == xy['Corr']
    assert selected['pValue'].iloc[0] == xy['pValue']


def test_filter_self_pair_absent_by_default(sample_data):
    symmetric = symmetrize_pairs(compute_pair_correlations(sample_data))
    assert filter_pairs(symmetric, ['X'], ['X']).empty


def test_filter_self_pair_present_when_produced(sample_data):
    records = compute_pair_correlations(sample_data, include_self_pairs=True)
    selected = filter_pairs(symmetrize_pairs(records), ['X'], ['X'])

    assert len(selected) == 1
    assert selected['Corr'].iloc[0] == 1.0


def test_filter_unknown_variable_gives_no_rows(sample_data):
    symmetric = symmetrize_pairs(compute_pair_correlations(sample_data))
    assert filter_pairs(symmetric, ['Unknown'], ['Y']).empty
    assert filter_pairs(symmetric, [], ['Y']).empty


def test_attach_colors_uses_matching_bucket():
    buckets = build_color_scale()
    records = pd.DataFrame(
        [('A', 'B', 1.0, 0.0), ('B', 'C', -0.25, 0.3), ('C', 'D', 0.0, 1.0)],
        columns=RECORD_COLUMNS
    )
    cells = attach_colors(records, buckets)

    assert cells['bucket'].tolist() == [199, 75, 100]
    assert cells['color'].tolist() == buckets['color'].iloc[[199, 75, 100]].tolist()


def test_attach_colors_drops_values_outside_scale(caplog):
    buckets = build_color_scale()
    records = pd.DataFrame(
        [('A', 'B', 0.5, 0.01), ('A', 'C', np.nan, np.nan)],
        columns=RECORD_COLUMNS
    )

    with caplog.at_level(logging.WARNING):
        cells = attach_colors(records, buckets)

    assert len(cells) == 1
    assert cells['Var'].iloc[0] == 'A'
    assert "outside the color scale" in caplog.text
