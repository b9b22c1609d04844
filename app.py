# app.py

import contextlib
import hashlib
import io

import streamlit as st

from data_loader import extract_text
from nlp.parser import parse_resume_text, set_debug
from services.errors import ExtractionError, FetchError, InputError, ParseError
from services.project_matcher import suggest_projects
from services.scholar_profile import fetch_scholar_profile

st.set_page_config(page_title="ResearchMate", page_icon="🧪", layout="wide")
st.title("ResearchMate")
st.caption("Upload a resume and/or point at a Google Scholar profile to get project ideas.")

col_inputs, col_logs = st.columns([2, 1], gap="large")

with col_inputs:
    uploaded = st.file_uploader("Upload your resume (PDF/DOCX/TXT)", type=["pdf", "docx", "txt"])
    scholar_url = st.text_input("Google Scholar profile URL (optional)")
    debug_enabled = st.checkbox("Enable parser debug logs", value=True)

resume = None
log_output = ""

if uploaded is not None:
    payload = uploaded.getvalue()
    try:
        text = extract_text(payload, filename=uploaded.name, content_type=uploaded.type or "")
    except (InputError, ExtractionError) as e:
        st.error(f"Parsing failed: {e}")
    else:
        resume_hash = hashlib.sha1(text.encode("utf-8")).hexdigest()
        if st.session_state.get("_resume_hash") != resume_hash:
            st.session_state["_resume_hash"] = resume_hash
            log_buffer = io.StringIO()
            with contextlib.redirect_stdout(log_buffer):
                try:
                    set_debug(debug_enabled)
                    st.session_state["resume"] = parse_resume_text(text)
                finally:
                    set_debug(False)
            st.session_state["last_parse_log"] = log_buffer.getvalue()
        resume = st.session_state.get("resume")
        log_output = st.session_state.get("last_parse_log", "")

        with col_inputs:
            with st.expander("Extracted Text"):
                st.text_area("Extracted Text", value=text, height=300, label_visibility="collapsed")
            st.subheader("Structured Resume Snapshot")
            st.json(resume.to_dict() if resume is not None else {})

scholar = None
if scholar_url.strip():
    cache = st.session_state.setdefault("scholar_cache", {})
    if scholar_url not in cache:
        try:
            with st.spinner("Fetching Scholar profile..."):
                cache[scholar_url] = fetch_scholar_profile(scholar_url)
        except (InputError, FetchError, ParseError) as e:
            st.error(f"Scholar profile failed: {e}")
    scholar = cache.get(scholar_url)
    if scholar is not None:
        with col_inputs:
            st.subheader("Scholar Profile")
            st.markdown(
                f"**{scholar.name}** ({scholar.affiliation})  \n"
                f"Citations: {scholar.total_citations} | h-index: {scholar.h_index} | i10-index: {scholar.i10_index}"
            )
            if scholar.research_interests:
                st.caption("Interests: " + ", ".join(scholar.research_interests))

with col_inputs:
    st.subheader("Suggested Projects")
    if resume is None and scholar is None:
        st.info("Add a resume or a Scholar profile to see suggestions.")
    else:
        for suggestion in suggest_projects(resume, scholar):
            st.markdown(
                f"**{suggestion.title}** - {suggestion.category} ({suggestion.difficulty}, {suggestion.estimated_time})  \n"
                f"Match: {suggestion.match_score}%  \n"
                f"Skills: {', '.join(suggestion.required_skills)}"
            )
            st.caption(suggestion.description)
            st.markdown("---")

with col_logs:
    log_tab, = st.tabs(["Logs"])
    with log_tab:
        if log_output.strip():
            st.code(log_output.rstrip())
        elif debug_enabled:
            st.info("No debug output was produced yet.")
        else:
            st.info("Enable parser debug logs to see step-by-step output here.")
