"""
Streamlit UI for the Supermarket Checkout Kata.

Features:
- Item entry with Calculate / Clear
- Example inputs as one-click buttons
- Pricing rules table
- Calculation history (per session)
- Receipt download
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from checkout_kata.engine import PricingEngine, build_receipt, receipt_filename
from checkout_kata.config.settings import get_settings, normalize_items
from checkout_kata.data.catalog_loader import catalog_to_frame


st.set_page_config(
    page_title="Supermarket Checkout Kata",
    layout="wide",
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine()


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


try:
    engine = get_engine()
    settings = get_settings_cached()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SESSION STATE
# ============================================================================
if 'items' not in st.session_state:
    st.session_state['items'] = ""
if 'result' not in st.session_state:
    st.session_state['result'] = None
if 'history' not in st.session_state:
    st.session_state['history'] = []


def record(items: str):
    """Price the items and append the calculation to the session history."""
    result = engine.calculate(items)
    st.session_state['result'] = result
    st.session_state['history'].append(result.to_history_entry())
    # Keep the most recent entries only
    del st.session_state['history'][:-settings.history_limit]


def on_items_change():
    st.session_state['items'] = normalize_items(st.session_state['items'], settings)
    st.session_state['result'] = None


def on_example(example: str):
    st.session_state['items'] = example
    record(example)


def on_clear():
    st.session_state['items'] = ""
    st.session_state['result'] = None


def on_clear_history():
    st.session_state['history'] = []


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Supermarket Checkout Kata")

col1, col2 = st.columns(2, gap="large")

with col1:
    with st.container(border=True):
        st.subheader("Checkout Calculator")
        st.caption("Enter items as letters (" + ", ".join(sorted(engine.catalog)) + ") in any order")

        st.text_input(
            "Items",
            key="items",
            placeholder="Enter items (e.g., AABCD)",
            on_change=on_items_change,
        )

        b1, b2 = st.columns(2)
        with b1:
            if st.button("Calculate Total", type="primary"):
                record(st.session_state['items'])
        with b2:
            st.button("Clear", on_click=on_clear)

        result = st.session_state['result']
        total = result.total if result else 0

        st.metric("Total Price", total)

        if result and result.items:
            st.download_button(
                "📥 Download Receipt",
                data=build_receipt(result, settings=settings),
                file_name=receipt_filename(),
                mime="text/plain",
            )
            for warning in result.warnings:
                st.warning(warning)

            with st.expander("🔍 Pricing Breakdown"):
                st.dataframe(pd.DataFrame([{
                    'Item': line.item,
                    'Qty': line.quantity,
                    'Bundles': line.bundles,
                    'Remainder': line.remainder,
                    'Line Total': line.contribution,
                } for line in result.lines]), use_container_width=True, hide_index=True)
                st.code(result.get_trace_text())

        st.divider()
        st.caption("Try examples:")
        example_cols = st.columns(len(settings.example_inputs))
        for i, example in enumerate(settings.example_inputs):
            with example_cols[i]:
                st.button(example or '""', key=f"example_{i}", on_click=on_example, args=(example,))

with col2:
    with st.container(border=True):
        st.subheader("Pricing Rules")
        st.caption("Current pricing and special offers")
        st.dataframe(catalog_to_frame(engine.catalog), use_container_width=True, hide_index=True)


# ============================================================================
# HISTORY
# ============================================================================
if st.session_state['history']:
    st.subheader("Calculation History")
    st.button("Clear History", on_click=on_clear_history)
    history_df = pd.DataFrame(st.session_state['history'])
    history_df['Input'] = history_df['Input'].replace('', '""')
    st.dataframe(history_df, use_container_width=True, hide_index=True)
