# Run from project root: streamlit run showcase/ui.py
# UI talks to backend API (GET /horoscope, /people CRUD, POST /research/stream for SSE).

import json
import os

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")

SIGNS = [
    "aries", "taurus", "gemini", "cancer", "leo", "virgo",
    "libra", "scorpio", "sagittarius", "capricorn", "aquarius", "pisces",
]

st.title("Agent Showcase")

# --- Horoscope ---

st.subheader("Daily horoscope")
sign = st.selectbox("Sign", SIGNS, key="horoscope_sign")
if st.button("Get horoscope", key="horoscope_btn"):
    try:
        r = requests.get(f"{API_BASE}/horoscope/{sign}", timeout=20)
        if r.ok:
            st.info(r.json().get("horoscope", ""))
        else:
            st.error(f"Lookup failed: {r.status_code} - {r.text[:200]}")
    except requests.RequestException:
        st.caption("Backend not reachable - start the API first.")

# --- People ---

with st.expander("People"):
    try:
        r = requests.get(f"{API_BASE}/people", timeout=10)
        people = (r.json().get("people") or []) if r.ok else []
    except requests.RequestException:
        people = []
        st.caption("Backend not reachable - start the API first.")
    for p in people:
        st.caption(f"  • {p.get('name')} ({p.get('sign')})")
    name = st.text_input("Name", key="person_name")
    person_sign = st.selectbox("Sign", SIGNS, key="person_sign")
    if st.button("Add person", key="add_person") and name.strip():
        try:
            r = requests.post(f"{API_BASE}/people", json={"name": name, "sign": person_sign}, timeout=10)
            if r.ok:
                st.success(f"Added {name}.")
                st.rerun()
            else:
                st.error(f"Failed to add: {r.status_code} - {r.text[:200]}")
        except requests.RequestException as e:
            st.error(f"Request failed: {e}")

st.divider()
st.subheader("Research")

# Show previous reports (local display only)
if "reports" not in st.session_state:
    st.session_state.reports = []
for item in st.session_state.reports:
    with st.chat_message("user"):
        st.markdown(item["topic"])
    with st.chat_message("assistant"):
        st.markdown(item["content"])

if st.session_state.get("pending_topic"):
    topic = st.session_state.pending_topic
    with st.chat_message("user"):
        st.markdown(topic)
    with st.chat_message("assistant"):
        progress = st.empty()
        report_placeholder = st.empty()
        content = ""
        try:
            r = requests.post(f"{API_BASE}/research/stream", json={"topic": topic}, stream=True, timeout=600)
            if not r.ok:
                content = f"Error: {r.status_code} - {r.text[:200]}"
                report_placeholder.error(content)
            else:
                current_event = None
                for line in r.iter_lines(decode_unicode=True):
                    if not line:
                        continue
                    if line.startswith("event:"):
                        current_event = line[6:].strip()
                    elif line.startswith("data:") and current_event:
                        try:
                            data = json.loads(line[5:].strip())
                        except json.JSONDecodeError:
                            data = {}
                        if current_event == "categorized":
                            progress.caption(f"Category: {data.get('category', '')}. Researching...")
                        elif current_event == "report":
                            progress.caption(f"Report from {data.get('model', '')} ready.")
                        elif current_event == "merged":
                            progress.caption(f"Merged reports (round {data.get('round', 0)}). Critiquing...")
                        elif current_event == "critique":
                            verdict = "accepted" if data.get("accepted") else "rejected"
                            progress.caption(f"Critic {verdict}: {data.get('reasoning', '')[:200]}")
                        elif current_event == "done":
                            report = data.get("report") or {}
                            links = "\n".join(
                                f"- [{l.get('url')}]({l.get('url')}) {l.get('summary', '')}"
                                for l in report.get("links") or []
                            )
                            content = report.get("text", "") + ("\n\n" + links if links else "")
                            progress.empty()
                            report_placeholder.markdown(content)
                        elif current_event == "error":
                            content = data.get("message", "Unknown error")
                            progress.empty()
                            report_placeholder.error(content)
        except Exception as e:
            content = f"Connection failed: {e}"
            report_placeholder.error(content)
        st.session_state.reports.append({"topic": topic, "content": content or "No report."})
    del st.session_state["pending_topic"]
    st.rerun()

if topic := st.chat_input("Ask a question or name a topic to research"):
    st.session_state.pending_topic = topic
    st.rerun()
