# client/components.py
import streamlit as st
import pandas as pd

def show_table(records, caption: str | None = None):
    """Render canonical records as a dataframe (without the raw payload)."""
    if caption:
        st.caption(caption)
    rows = [r.as_row() for r in records]
    if rows:
        st.dataframe(pd.DataFrame(rows), hide_index=True)
    else:
        st.info("No values found.")

def show_toast(toast):
    """Show the controller's last feedback message, if any."""
    if toast is None:
        return
    text = f"**{toast.title}**" + (f": {toast.message}" if toast.message else "")
    if "failed" in toast.title.lower() or "missing" in toast.title.lower():
        st.error(text)
    else:
        st.success(text)
