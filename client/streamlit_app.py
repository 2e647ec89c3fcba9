# client/streamlit_app.py
import asyncio
import streamlit as st

from app.setup_logging import setup_logging
from client import settings
from client.api import ValuesClient
from client.errors import SyncError

setup_logging()

st.set_page_config(page_title="HR Admin", layout="wide")
st.title("🧭 HR Admin")

st.markdown("""
Use the **sidebar Pages** to open:
- **📚 Values** — Browse, search, add, edit and delete organizational values.
""")

with st.sidebar:
    st.header("Settings")
    st.text_input("API Base URL (from env)", value=settings.API_BASE_URL, disabled=True)
    if st.button("Health check"):
        try:
            st.success(asyncio.run(ValuesClient().healthz()))
        except SyncError as e:
            st.error(f"Health check failed: {e}")

st.info("Tip: set `API_BASE_URL` (and `API_TOKEN` if the backend wants one) in `.env` before running `streamlit run client/streamlit_app.py`.")
