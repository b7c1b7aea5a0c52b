"""
Main Streamlit Application for the Job Application Tracker.

Run with ``streamlit run src/ui/app.py`` while the API server is running.
"""

import streamlit as st
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.ui.components.board import BoardTab
from src.ui.utils.session import init_session_state, end_session, refresh_session_data, run_async
from src.ui.utils.styling import apply_custom_css

# Configure Streamlit page
st.set_page_config(
    page_title="Job Application Tracker",
    page_icon="🗂",
    layout="wide",
    initial_sidebar_state="collapsed"
)

def main():
    """Main application entry point."""
    init_session_state()
    apply_custom_css()

    st.markdown("""
    <div class="app-header">
        <h1>🗂 Job Application Tracker</h1>
    </div>
    """, unsafe_allow_html=True)

    for warning in (st.session_state.get('config_issues') or {}).get("warnings", []):
        st.warning(warning)

    store = st.session_state.get('store')
    col1, col2, _ = st.columns([1, 1, 6])
    with col1:
        if st.button("🔄 Refresh") and store is not None:
            run_async(store.fetch_applications())
    with col2:
        if st.button("Sign out"):
            end_session()
            st.stop()

    if store is None:
        if st.button("Start session"):
            refresh_session_data()
            st.rerun()
        return

    BoardTab().render()

if __name__ == "__main__":
    main()
