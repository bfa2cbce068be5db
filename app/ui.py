# Run from project root: streamlit run app/ui.py
# UI talks to backend API (POST / with {question, document_id}). Nothing is stored client-side beyond the page.

import os

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")

st.title("Document Q&A")

try:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    if not r.ok:
        st.caption("Backend health check failed.")
except requests.RequestException:
    st.caption("Backend not reachable. Start the API first.")

document_id = st.text_input("Document ID", key="document_id")
question = st.text_area("Question", key="question", height=100)

if st.button("Ask", key="ask_btn", disabled=not (question.strip() and document_id.strip())):
    with st.spinner("Thinking..."):
        try:
            r = requests.post(
                f"{API_BASE}/",
                json={"question": question.strip(), "document_id": document_id.strip()},
                timeout=90,
            )
        except requests.RequestException as e:
            st.error(f"Connection failed: {e}")
        else:
            data = r.json() if r.headers.get("content-type", "").startswith("application/json") else {}
            if not r.ok:
                st.error(f"Error {r.status_code}: {data.get('error') or r.text[:200]}")
            else:
                answer = data.get("answer") or {}
                st.markdown(answer.get("content", "") if isinstance(answer, dict) else str(answer))
                scores = data.get("similarity_scores") or []
                st.caption(f"Chunks used: {data.get('chunks_used', 0)}")
                if scores:
                    st.caption("Similarity: " + ", ".join(f"{s:.2f}" for s in scores))
