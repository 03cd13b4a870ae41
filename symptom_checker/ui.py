# Run from project root: streamlit run symptom_checker/ui.py
# UI talks to the relay (POST / for answers, GET / as a health check). Each browser session keeps its own transcript file.

import os
import sys
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st

from symptom_checker.client.relay_client import STATUS_LABELS, RelayClient
from symptom_checker.client.session import ChatSession
from symptom_checker.client.transcript import is_session_id, new_session_id, session_store
from symptom_checker.core.config import get_settings

settings = get_settings()

STATUS_ICONS = {"online": "🟢", "error": "🔴", "offline": "🔴", "checking": "🟡"}

st.set_page_config(page_title="AI Health Symptom Checker", page_icon="🩺")
st.title("AI Health Symptom Checker")
st.caption("Personalized health insights powered by web search and an LLM")

# Session id rides in the URL so a reload finds the same transcript file
sid = st.query_params.get("sid")
if not is_session_id(sid):
    sid = new_session_id()
    st.query_params["sid"] = sid

# One ChatSession per browser session; state lives on the object, not in globals
if "chat" not in st.session_state:
    chat = ChatSession(RelayClient(settings.relay_url), session_store(settings.transcript_path, sid))
    chat.initialize()
    st.session_state.chat = chat
chat: ChatSession = st.session_state.chat

if st.button("New chat", key="new_chat", disabled=chat.is_loading):
    chat.reset()
    st.rerun()

for msg in chat.messages:
    with st.chat_message(msg.role, avatar="🚨" if msg.error_flag else None):
        st.markdown(msg.content)

# Second phase of a submit: the user's message is already shown, now call the relay
if chat.pending is not None:
    with st.chat_message("assistant"):
        thinking_placeholder = st.empty()
        thinking_placeholder.caption("Analyzing symptoms...")
        chat.complete_submit()
        thinking_placeholder.empty()
    st.rerun()

# New message from user: append it, then rerun so it renders before the relay call
if prompt := st.chat_input("Describe your symptoms...", disabled=chat.is_loading):
    if chat.begin_submit(prompt) is not None:
        st.rerun()

# Rendered last so a pending relay call never waits behind a health check.
# Full reruns reuse the cached status; only the fragment timer refreshes it.
if settings.health_probe_enabled:

    @st.fragment(run_every=settings.health_probe_interval)
    def _status_badge() -> None:
        status = chat.check_health_if_due(max(settings.health_probe_interval - 1, 0))
        st.caption(f"{STATUS_ICONS.get(status, '⚪')} {STATUS_LABELS.get(status, 'Unknown')}")

    with st.sidebar:
        _status_badge()
