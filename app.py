#!/usr/bin/env python3
"""
Streamlit Web Interface for the Dynamic Test Runner.

Browse the discovered test catalog, try filters, and inspect results recorded
by a test runner.
"""

import streamlit as st
import sys
from pathlib import Path
from typing import List

import pandas as pd

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from core.application import TestRunApplication
from execution.result_sources import RecordedResultSource
from execution.results import TestResult
from handlers.error_handler import TestRunnerError
from utils.config_manager import ConfigurationError, get_config_manager
from utils.report_generator import ReportGenerator, format_seconds

st.set_page_config(
    page_title="Dynamic Test Runner",
    page_icon="🧪",
    layout="wide"
)


def initialize_session_state():
    """Initialize session state variables"""
    if 'catalog' not in st.session_state:
        st.session_state.catalog = {}
    if 'results' not in st.session_state:
        st.session_state.results = []


def catalog_frame(catalog) -> pd.DataFrame:
    """One row per discovered method."""
    rows = [
        {'suite': suite, 'method': method, 'position': position}
        for suite, methods in catalog.items()
        for position, method in enumerate(methods, start=1)
    ]
    return pd.DataFrame(rows, columns=['suite', 'method', 'position'])


def results_frame(results: List[TestResult]) -> pd.DataFrame:
    rows = [
        {
            'suite': result.suite,
            'method': result.method,
            'status': result.status.value,
            'assertions': result.assertions,
            'time': result.time,
            'message': result.failure_message or '',
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=['suite', 'method', 'status', 'assertions', 'time', 'message'])


def main():
    """Main application"""
    initialize_session_state()

    st.title("🧪 Dynamic Test Runner")
    st.caption("Running unit and feature tests")

    render_discovery()
    render_results()


def render_discovery():
    """Discovery settings and catalog table"""
    st.header("1️⃣ Discover Tests")

    col1, col2 = st.columns(2)

    with col1:
        root_directory = st.text_input("Test directory", value="tests/Feature")
        filter_text = st.text_input("Filter", value="", help="Case-sensitive text in a suite or method name")

    with col2:
        prefix = st.text_input("Namespace prefix", value="Tests.Feature")
        keyword = st.text_input("Declaration keyword", value="function")

    if st.button("🔍 Discover", type="primary", use_container_width=True):
        try:
            config = get_config_manager().load_config(overrides={
                'root_directory': root_directory,
                'namespace_prefix': prefix,
                'declaration_keyword': keyword,
            })
            app = TestRunApplication(config)
            st.session_state.catalog = app.discover(filter_text=filter_text)
            st.session_state.results = []
        except (ConfigurationError, TestRunnerError) as e:
            st.error(f"❌ {e}")
            return

    catalog = st.session_state.catalog
    if not catalog:
        st.info("👆 Discover tests to see the catalog")
        return

    st.success(f"✅ Found {len(catalog)} test suite(s)")
    st.dataframe(catalog_frame(catalog), use_container_width=True)


def render_results():
    """Recorded results upload and summary"""
    st.header("2️⃣ Results")

    if not st.session_state.catalog:
        st.info("👆 Discover tests first")
        return

    uploaded_file = st.file_uploader(
        "Results recorded by a test runner",
        type=['json', 'yaml', 'yml'],
        help="A list of {suite, method, assertions, time, status} records"
    )

    if uploaded_file is not None:
        try:
            source = RecordedResultSource.from_text(
                uploaded_file.getvalue().decode('utf-8'),
                Path(uploaded_file.name).suffix,
                uploaded_file.name
            )
        except (UnicodeDecodeError, TestRunnerError) as e:
            st.error(f"❌ {e}")
            return
        st.session_state.results = source.execute(st.session_state.catalog)

    results = st.session_state.results
    if not results:
        return

    summary = ReportGenerator().summarize(results)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Passed", summary['passed'])
    with col2:
        st.metric("Failed", summary['failed'])
    with col3:
        st.metric("Assertions", summary['assertions'])
    with col4:
        st.metric("Duration", f"{format_seconds(summary['time'])}s")

    frame = results_frame(results)
    st.dataframe(frame, use_container_width=True)

    failed = frame[frame['status'] == 'FAIL']
    if not failed.empty:
        st.subheader("❌ Failures")
        st.dataframe(failed, use_container_width=True)


if __name__ == "__main__":
    main()
