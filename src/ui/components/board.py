"""
Board Tab Component for the Job Application Tracker.

Renders one column per status, the interview clash warning, the archive,
and the actions that drive the session's ApplicationStore.
"""

from datetime import date

import streamlit as st
import plotly.express as px

from src.export_manager import ApplicationExporter
from src.models import BOARD_STATUSES, STATUS_LABELS, JobApplication, JobStatus
from src.scheduling import (
    QUICK_SELECT_OPTIONS,
    DEFAULT_INTERVIEW_TIME,
    combine_date_and_time,
    find_clashes,
    quick_select_label,
    resolve_quick_option,
    selectable_window,
)
from src.errors import ValidationFailure
from src.ui.utils.session import run_async
from src.ui.utils.styling import (
    create_application_card,
    create_clash_badge,
    create_column_header,
    create_metric_card,
)

class BoardTab:
    """Kanban-style board over the session's applications."""

    def __init__(self):
        self.store = st.session_state.get('store')
        self.config = st.session_state.get('config')

    def render(self):
        if self.store is None:
            st.error("Application store is not available. Check the configuration.")
            return

        self._render_notices()
        self._render_metrics()
        self._render_new_application_form()

        columns = st.columns(len(BOARD_STATUSES))
        for column, status in zip(columns, BOARD_STATUSES):
            with column:
                self._render_column(status)

        self._render_interview_form()
        self._render_archive()
        self._render_chart()
        self._render_export()

    def _render_notices(self):
        for notice in self.store.notifier.drain():
            if notice.level == "success":
                st.success(notice.message)
            else:
                st.error(notice.message)

    def _render_metrics(self):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.markdown(create_metric_card(len(self.store.unarchived_applications), "Active"), unsafe_allow_html=True)
        with col2:
            interviews = len(self.store.applications_with_status(JobStatus.INTERVIEW))
            st.markdown(create_metric_card(interviews, "Interviews"), unsafe_allow_html=True)
        with col3:
            st.markdown(create_metric_card(self.store.archived_count, "Archived"), unsafe_allow_html=True)

    def _render_new_application_form(self):
        with st.expander("➕ New application"):
            with st.form("new_application", clear_on_submit=True):
                company = st.text_input("Company")
                role = st.text_input("Role")
                status = st.selectbox(
                    "Status", BOARD_STATUSES, format_func=lambda s: STATUS_LABELS[s],
                )
                if st.form_submit_button("Add"):
                    draft = JobApplication(company=company.strip(), role=role.strip(), status=status)
                    run_async(self.store.add_application(draft))
                    st.rerun()

    def _render_column(self, status: JobStatus):
        applications = self.store.applications_with_status(status)
        st.markdown(
            create_column_header(STATUS_LABELS[status], len(applications), self.store.loading),
            unsafe_allow_html=True,
        )

        if status == JobStatus.INTERVIEW:
            clashes = find_clashes(applications)
            if clashes:
                st.markdown(create_clash_badge("Some interviews are on the same day"), unsafe_allow_html=True)
                st.caption(", ".join(day.strftime("%a %d %b %Y") for day in clashes))

        for application in applications:
            self._render_card(application)

    def _render_card(self, application: JobApplication):
        when = application.interview_date.strftime("%d %b %Y %H:%M") if application.interview_date else None
        st.markdown(create_application_card(application.company, application.role, when), unsafe_allow_html=True)

        key = f"app_{application.id}"
        targets = [s for s in BOARD_STATUSES if s != application.status]
        target = st.selectbox(
            "Move to", targets, key=f"{key}_move",
            format_func=lambda s: STATUS_LABELS[s], label_visibility="collapsed",
        )
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            if st.button("Move", key=f"{key}_move_btn"):
                run_async(self.store.move_application(application.id, target))
                st.rerun()
        with col2:
            if st.button("📅", key=f"{key}_date", help="Set interview date"):
                st.session_state.interview_target = application.id
                st.rerun()
        with col3:
            if st.button("🗄", key=f"{key}_archive", help="Archive"):
                run_async(self.store.archive_application(application.id))
                st.rerun()
        with col4:
            if st.button("🗑", key=f"{key}_delete", help="Delete"):
                run_async(self.store.delete_application(application.id))
                st.rerun()

    def _render_interview_form(self):
        application_id = st.session_state.get('interview_target')
        if application_id is None:
            return

        application = self.store.get_application(application_id)
        if application is None:
            st.session_state.interview_target = None
            return

        st.markdown(f"#### Set Interview Date and Time: {application.company or 'application'}")
        first, last = selectable_window()
        quick = st.selectbox(
            "Quick Selection", ["", *QUICK_SELECT_OPTIONS],
            format_func=lambda option: quick_select_label(option) if option else "Select Date",
        )
        default_day = resolve_quick_option(quick) if quick else date.today()

        with st.form("interview_date"):
            day = st.date_input("Interview Date", value=default_day, min_value=first, max_value=last)
            time_of_day = st.text_input("Interview Time", value=DEFAULT_INTERVIEW_TIME)
            send_email = st.checkbox("Send reminder email a day before the interview.")
            submitted = st.form_submit_button("Submit")

        if submitted:
            try:
                interview_date = combine_date_and_time(day, time_of_day)
            except ValidationFailure as e:
                st.error(str(e))
                return
            run_async(self.store.set_interview_date(application.id, interview_date, send_email))
            st.session_state.interview_target = None
            st.rerun()

    def _render_archive(self):
        with st.expander(f"🗄 Archived applications ({self.store.archived_count})"):
            for application in self.store.archived_applications:
                col1, col2 = st.columns([4, 1])
                with col1:
                    previous = STATUS_LABELS[application.previous_status] if application.previous_status else "Bookmarked"
                    st.markdown(f"**{application.company}** {application.role} · was *{previous}*")
                with col2:
                    if st.button("Restore", key=f"restore_{application.id}"):
                        run_async(self.store.restore_application(application.id))
                        st.rerun()

    def _render_chart(self):
        counts = {STATUS_LABELS[s]: len(self.store.applications_with_status(s)) for s in BOARD_STATUSES}
        if not any(counts.values()):
            st.info("No applications yet. Add one to get started!")
            return
        fig = px.bar(
            x=list(counts.keys()),
            y=list(counts.values()),
            title="Applications by Status",
            labels={"x": "Status", "y": "Applications"},
        )
        fig.update_layout(height=300)
        st.plotly_chart(fig, use_container_width=True)

    def _render_export(self):
        export_dir = self.config.export_dir if self.config else "data/exports"
        exporter = ApplicationExporter(export_dir)
        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                "⬇ Export CSV",
                data=exporter.render(self.store.applications, "csv"),
                file_name="job_applications.csv",
                mime="text/csv",
            )
        with col2:
            st.download_button(
                "⬇ Export JSON",
                data=exporter.render(self.store.applications, "json"),
                file_name="job_applications.json",
                mime="application/json",
            )
