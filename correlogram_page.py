"""
Correlogram Page
Interactive correlogram of selected x variables against selected y variables
"""

import streamlit as st
import numpy as np

from correlogram_utils import build_correlogram
from session_state_keys import (
    SESSION_CORRELOGRAM_RESULTS,
    SESSION_CORRELOGRAM_VARS,
    SESSION_CORRELOGRAM_WITHVARS,
    SESSION_CURRENT_DATASET,
    get_data,
    set_data
)
from utils.data_exporters import create_cells_csv, create_excel_export
from utils.data_loaders import load_dataset


def _load_upload():
    """File uploader; stores the parsed dataset in session state"""
    uploaded_file = st.file_uploader(
        "Upload dataset:",
        type=['csv', 'txt', 'tsv', 'xlsx', 'xls'],
        help="Numeric columns are available for correlation"
    )

    if uploaded_file is None:
        return

    if uploaded_file.name == st.session_state.get(SESSION_CURRENT_DATASET):
        return

    try:
        data = load_dataset(uploaded_file)
        set_data(st.session_state, data, uploaded_file.name)
        st.success(f"✅ Loaded {data.shape[0]} samples × {data.shape[1]} variables")
    except Exception as e:
        st.error(f"❌ Error loading file: {str(e)}")


def show():
    """
    Main function to display the Correlogram page
    """
    st.title("📊 Correlogram")
    st.markdown("""
    Pearson correlations of the **X variables** against the **Y variables**,
    with p-values printed on each cell. Darker cells mean stronger correlation.
    """)

    # === DATASET SELECTION ===
    st.markdown("---")
    st.markdown("## 📁 Dataset Selection")

    _load_upload()

    data = get_data(st.session_state)
    if data is None:
        st.info("💡 Upload a dataset to start")
        return

    dataset_name = st.session_state.get(SESSION_CURRENT_DATASET, 'dataset')

    with st.expander("👁️ Preview Data"):
        st.dataframe(data.head(10), use_container_width=True)

    numeric_vars = data.select_dtypes(include=[np.number]).columns.tolist()

    if len(numeric_vars) < 2:
        st.error(f"❌ Need at least 2 numeric variables for a correlogram. Found: {len(numeric_vars)}")
        return

    # === VARIABLE SELECTION ===
    st.markdown("---")
    st.markdown("## 🎯 Variable Selection")

    col1, col2 = st.columns(2)
    with col1:
        x_vars = st.multiselect(
            "X variables (vars):",
            options=numeric_vars,
            default=numeric_vars,
            key=SESSION_CORRELOGRAM_VARS
        )
    with col2:
        y_vars = st.multiselect(
            "Y variables (withvars):",
            options=numeric_vars,
            default=numeric_vars,
            key=SESSION_CORRELOGRAM_WITHVARS
        )

    col1, col2, col3 = st.columns(3)
    with col1:
        show_corr = st.checkbox("Show correlation coefficient", value=True, key="correlogram_show_corr")
    with col2:
        include_self_pairs = st.checkbox(
            "Include self pairs",
            value=False,
            key="correlogram_self_pairs",
            help="Draw r = 1 on the cells where a variable meets itself"
        )
    with col3:
        mark_significant = st.checkbox("Mark significant (*)", value=False, key="correlogram_mark_sig")

    significance_level = None
    if mark_significant:
        significance_level = st.slider(
            "Significance level (α):",
            min_value=0.01,
            max_value=0.10,
            value=0.05,
            step=0.01,
            key="correlogram_sig_level"
        )

    if not x_vars or not y_vars:
        st.info("💡 Select at least one X and one Y variable")
        return

    # === CORRELOGRAM ===
    st.markdown("---")

    try:
        result = build_correlogram(
            data,
            x_vars,
            y_vars,
            title=f"Correlogram - {dataset_name}",
            show_corr=show_corr,
            include_self_pairs=include_self_pairs,
            significance_level=significance_level
        )
    except Exception as e:
        st.error(f"❌ Error: {str(e)}")
        return

    st.session_state[SESSION_CORRELOGRAM_RESULTS] = result
    cells = result['cells']

    if cells.empty:
        st.warning("⚠️ No correlations could be computed for the selected variables")

    st.plotly_chart(result['figure'], use_container_width=True)

    with st.expander("📋 Correlation table"):
        st.dataframe(
            cells[['Var', 'WithVar', 'Corr', 'pValue']].style.format({
                'Corr': '{:.3f}',
                'pValue': '{:.4f}'
            }),
            use_container_width=True
        )

    # === EXPORT ===
    st.markdown("---")
    st.markdown("## 💾 Export Results")

    base_name = str(dataset_name).rsplit('.', 1)[0]
    exp_col1, exp_col2, exp_col3 = st.columns(3)

    with exp_col1:
        st.download_button(
            "📥 Correlations (CSV)",
            data=create_cells_csv(cells),
            file_name=f"correlogram_{base_name}.csv",
            mime="text/csv",
            key="correlogram_csv"
        )

    with exp_col2:
        try:
            st.download_button(
                "📥 Correlations (Excel)",
                data=create_excel_export(cells, result['buckets']),
                file_name=f"correlogram_{base_name}.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                key="correlogram_xlsx"
            )
        except Exception as e:
            st.warning(f"⚠️ Excel export error: {e}")

    with exp_col3:
        st.download_button(
            "📥 Chart (HTML)",
            data=result['figure'].to_html(include_plotlyjs='cdn'),
            file_name=f"correlogram_{base_name}.html",
            mime="text/html",
            key="correlogram_html"
        )


if __name__ == "__main__":
    show()
