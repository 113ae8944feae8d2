"""
Streamlit-based web UI for the research tool.

Run with:
    streamlit run ui_app.py
"""

import requests
import streamlit as st

from research_tool.config import settings


API_BASE = settings.api_base_url


def run_research(topic: str, prompt: str) -> dict:
    resp = requests.post(
        f"{API_BASE}/tools/research/run",
        json={"topic": topic, "prompt": prompt},
        timeout=settings.http_timeout,
    )
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    st.set_page_config(page_title="Research Tool", layout="wide")

    st.title("Research Tool")
    st.write(
        "Send a topic and a question to the configured web-search model and "
        "read back the generated research."
    )

    with st.form("research_form"):
        topic = st.text_input("Topic", help="e.g., Quantum Computing")
        prompt = st.text_area("Question", help="e.g., What are the latest breakthroughs?")
        submitted = st.form_submit_button("Run Research")

    if not submitted:
        return

    if not topic or not prompt:
        st.warning("Both a topic and a question are required.")
        return

    with st.spinner(f"Researching {topic}..."):
        try:
            result = run_research(topic, prompt)
        except requests.RequestException as exc:
            st.error(f"Research request failed: {exc}")
            return

    if result["status"] == "error":
        st.error(f"{result['message']}: {result['error']}")
        return

    st.success(result["message"])
    st.markdown(result["research"])


if __name__ == "__main__":
    main()
