"""
Custom CSS styling for the tracker board.
"""

import html

import streamlit as st

def apply_custom_css():
    """Apply custom CSS styling to the Streamlit application."""

    st.markdown("""
    <style>
    /* Hide Streamlit default elements */
    header[data-testid="stHeader"] {
        display: none !important;
    }

    .stDeployButton {
        display: none !important;
    }

    .main .block-container {
        padding-top: 1rem !important;
        padding-bottom: 2rem !important;
        max-width: 1400px;
    }

    .app-header {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        padding: 1.5rem;
        border-radius: 10px;
        margin-bottom: 1.5rem;
        text-align: center;
    }

    .app-header h1 {
        margin: 0;
        font-size: 2rem;
        font-weight: 700;
    }

    /* Board columns */
    .column-header {
        display: flex;
        align-items: center;
        gap: 0.5rem;
        font-weight: 600;
        color: #374151;
    }

    .column-count {
        border: 1px solid rgba(156, 163, 175, 0.5);
        border-radius: 4px;
        padding: 0 0.4rem;
        font-size: 0.75rem;
        color: #6b7280;
    }

    .application-card {
        background: white;
        border-radius: 8px;
        padding: 0.75rem 1rem;
        margin-bottom: 0.5rem;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
    }

    .application-card .role {
        color: #6b7280;
        font-size: 0.85rem;
    }

    .clash-badge {
        display: inline-block;
        background: #fee2e2;
        color: #b91c1c;
        border-radius: 9999px;
        padding: 0.1rem 0.6rem;
        font-size: 0.75rem;
    }

    .metric-card {
        background: white;
        padding: 1rem;
        border-radius: 8px;
        text-align: center;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
    }

    .metric-value {
        font-size: 1.6rem;
        font-weight: 700;
        color: #4c51bf;
    }

    .metric-label {
        color: #6c757d;
        font-size: 0.85rem;
    }
    </style>
    """, unsafe_allow_html=True)

def create_metric_card(value, label):
    """Create a styled metric card."""
    return f"""
    <div class="metric-card">
        <div class="metric-value">{html.escape(str(value))}</div>
        <div class="metric-label">{html.escape(label)}</div>
    </div>
    """

def create_column_header(label, count, loading=False):
    """Header of a board column with its application count."""
    count_text = "…" if loading else str(count)
    return f"""
    <div class="column-header">
        <span>{html.escape(label)}</span>
        <span class="column-count">{count_text}</span>
    </div>
    """

def create_application_card(company, role, interview_date=None):
    """Card summarising one application."""
    when = f"<div class='role'>Interview: {html.escape(interview_date)}</div>" if interview_date else ""
    return f"""
    <div class="application-card">
        <div><strong>{html.escape(company or 'Untitled')}</strong></div>
        <div class="role">{html.escape(role or '')}</div>
        {when}
    </div>
    """

def create_clash_badge(text):
    return f'<span class="clash-badge">⚠ {html.escape(text)}</span>'
