"""
Streamlit Session State Keys - Canonical Definitions
===================================================

This module defines the canonical session state keys used by the
correlogram page. Using constants ensures consistency and prevents bugs
from typos or key mismatches.

Usage:
    from session_state_keys import SESSION_CURRENT_DATA

    # Read data
    if SESSION_CURRENT_DATA in st.session_state:
        df = st.session_state[SESSION_CURRENT_DATA]

    # Write data
    st.session_state[SESSION_CURRENT_DATA] = new_df
"""

# ============================================================================
# DATA MANAGEMENT
# ============================================================================

SESSION_CURRENT_DATA = 'current_data'
"""
Main active dataset (pd.DataFrame)
Set when a file is uploaded on the correlogram page.
"""

SESSION_CURRENT_DATASET = 'current_dataset'
"""
Name of the current active dataset (str)
Used for display purposes and export file names.
"""

# ============================================================================
# CORRELOGRAM
# ============================================================================

SESSION_CORRELOGRAM_VARS = 'correlogram_vars'
"""
Selected x-axis variables (list[str])
"""

SESSION_CORRELOGRAM_WITHVARS = 'correlogram_withvars'
"""
Selected y-axis variables (list[str])
"""

SESSION_CORRELOGRAM_RESULTS = 'correlogram_results'
"""
Last pipeline result (dict)
Format: output of correlogram_utils.build_correlogram
"""


def get_data(session_state) -> 'pd.DataFrame | None':
    """
    Safely retrieve current data from session state.

    Parameters
    ----------
    session_state : st.session_state
        Streamlit session state object

    Returns
    -------
    df : pd.DataFrame or None
        Current dataset if available, None otherwise
    """
    return session_state.get(SESSION_CURRENT_DATA, None)


def set_data(session_state, df: 'pd.DataFrame', name: str = None):
    """
    Safely set current data in session state.

    Loading a new dataset invalidates the previous variable selection and
    results.

    Parameters
    ----------
    session_state : st.session_state
        Streamlit session state object
    df : pd.DataFrame
        Dataset to set as current
    name : str, optional
        Dataset name for display
    """
    session_state[SESSION_CURRENT_DATA] = df
    if name:
        session_state[SESSION_CURRENT_DATASET] = name
    clear_results(session_state)


def clear_results(session_state):
    """
    Clear correlogram selections and results from session state.

    Parameters
    ----------
    session_state : st.session_state
        Streamlit session state object
    """
    result_keys = [
        SESSION_CORRELOGRAM_VARS,
        SESSION_CORRELOGRAM_WITHVARS,
        SESSION_CORRELOGRAM_RESULTS,
    ]

    for key in result_keys:
        if key in session_state:
            del session_state[key]
