"""
Session state management for the Streamlit board.

Each browser session owns one ApplicationStore, created when the session
starts and closed when the user signs out or the session is reset.
"""

import asyncio
from typing import Any, Awaitable

import streamlit as st

from src.api import ApplicationsClient
from src.config import get_config, validate_config
from src.store import ApplicationStore, Notifier
from src.utils import setup_logging, get_ui_logger, RetryConfig, RetryPolicy

def run_async(coro: Awaitable[Any]) -> Any:
    """
    Run a store operation to completion from Streamlit's synchronous script.

    The script blocks until the remote call settles, so the board redraws
    after confirmation (or after the reconciling re-fetch) and the
    optimistic state is never rendered on its own.
    """
    return asyncio.run(coro)

def _build_store(config) -> ApplicationStore:
    client = ApplicationsClient(
        base_url=config.api.base_url,
        session_token=config.api.session_token,
        timeout_seconds=config.api.timeout_seconds,
    )
    retry_policy = RetryPolicy(RetryConfig.from_sync_config(config.sync))
    return ApplicationStore(client, notifier=Notifier(), retry_policy=retry_policy).open()

def init_session_state():
    """Initialize all session state variables."""

    # Initialize logging first
    if 'logger_initialized' not in st.session_state:
        setup_logging()
        st.session_state.logger_initialized = True
        st.session_state.logger = get_ui_logger()

    if 'config' not in st.session_state:
        try:
            st.session_state.config = get_config()
            st.session_state.config_issues = validate_config()
            st.session_state.config_status = "loaded"
        except Exception as e:
            st.session_state.config = None
            st.session_state.config_status = f"error: {str(e)}"

    if 'store' not in st.session_state and st.session_state.config is not None:
        store = _build_store(st.session_state.config)
        st.session_state.store = store
        st.session_state.logger.info("Application store created for session")
        run_async(store.fetch_applications())

    # UI state variables
    if 'interview_target' not in st.session_state:
        st.session_state.interview_target = None

def end_session():
    """Close the session's store and forget it."""
    store = st.session_state.pop('store', None)
    if store is not None:
        store.close()
        st.session_state.logger.info("Application store closed for session")

def refresh_session_data():
    """Replace the session's store with a fresh one."""
    end_session()
    init_session_state()
