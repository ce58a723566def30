"""
Correlogram Utilities
Pairwise correlation heatmaps with p-value overlays
"""

from .statistics import (
    compute_pair_correlations,
    symmetrize_pairs,
    filter_pairs,
    attach_colors
)

from .plotting import (
    create_correlogram_heatmap,
    format_pvalue
)

from .pipeline import (
    DEFAULT_OPTIONS,
    parse_var_list,
    make_config,
    validate_variables,
    build_correlogram,
    correlogram
)

__all__ = [
    'compute_pair_correlations',
    'symmetrize_pairs',
    'filter_pairs',
    'attach_colors',
    'create_correlogram_heatmap',
    'format_pvalue',
    'DEFAULT_OPTIONS',
    'parse_var_list',
    'make_config',
    'validate_variables',
    'build_correlogram',
    'correlogram'
]
