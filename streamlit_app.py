"""
Correlogram Interactive Demo
Main entry point for Streamlit deployment
"""

import streamlit as st

# Set page config FIRST - before any other Streamlit command
st.set_page_config(
    page_title="Correlogram",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

if __name__ == "__main__":
    # Import and run the page (without calling set_page_config again)
    from correlogram_page import show
    show()
