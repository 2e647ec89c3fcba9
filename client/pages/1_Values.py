# client/pages/1_Values.py
import asyncio
import streamlit as st

from app.setup_logging import setup_logging
from client.api import ValuesClient
from client.components import show_table, show_toast
from client.controller import Draft, DirectoryController

setup_logging()

st.title("📚 Values")

# ------------------------
# Session state
# ------------------------
if "values_ctrl" not in st.session_state:
    ctrl = DirectoryController(ValuesClient())
    asyncio.run(ctrl.reload())
    st.session_state.values_ctrl = ctrl

ctrl: DirectoryController = st.session_state.values_ctrl

c1, c2 = st.columns([4, 1])
with c1:
    query = st.text_input("Search", placeholder="value, evaluation criteria, or description", key="values_q")
with c2:
    if st.button("Reload", key="btn_values_reload"):
        asyncio.run(ctrl.reload())

if ctrl.error:
    st.error(ctrl.error)
show_toast(ctrl.toast)

show_table(ctrl.visible(query), caption=f"{len(ctrl.values)} values")

# ------------------------
# Add / edit form
# ------------------------
ids = [v.id for v in ctrl.values]
labels = {v.id: f"{v.title} ({v.id})" for v in ctrl.values}
editing_id = st.selectbox(
    "Edit existing value", [None] + ids,
    format_func=lambda i: "➕ New value" if i is None else labels.get(i, i),
    key="values_pick",
)
record = ctrl.find(editing_id) if editing_id is not None else None
draft = ctrl.open_draft(record)

with st.form("value_form", clear_on_submit=record is None):
    title = st.text_input("Value *", value=draft.title, placeholder="e.g., Own The Outcome")
    pillar = st.text_input("Evaluation Criteria *", value=draft.pillar, placeholder="e.g., Ownership")
    description = st.text_area("Description *", value=draft.description,
                               placeholder="Write a short definition of the value...")
    if st.form_submit_button("Save Changes" if record else "Add Value"):
        asyncio.run(ctrl.submit(Draft(title, pillar, description), editing_id=editing_id))
        st.rerun()

if record is not None:
    st.warning(f'Delete "{record.title}"?')
    if st.button("Delete", key="btn_value_delete"):
        asyncio.run(ctrl.delete(record))
        st.rerun()
