import streamlit as st
import asyncio
import base64
import logging
from services.agent_service import Agent
from services.scan_service import ScanService
from utils.config import Settings

settings = Settings.from_env()

# Setup logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Service modules configure logging on import, so apply LOG_LEVEL explicitly
logging.getLogger().setLevel(settings.log_level)
logger = logging.getLogger(__name__)

# ---------- SETUP ----------
st.set_page_config(page_title="PII Scanner Chat", page_icon="")


@st.cache_resource
def load_services():
    logger.info("Initializing services...")
    agent = Agent(settings=settings)
    scan_service = ScanService()
    logger.info("Services initialized successfully")
    return agent, scan_service


agent, scan_service = load_services()

# ---------- SESSION STATE ----------
if "messages" not in st.session_state:
    st.session_state.messages = []

# ---------- TITLE ----------
st.title("PII Scanner Chat")

# ---------- SIDEBAR ----------
with st.sidebar:
    st.header("Conversation")

    if st.button("New Conversation"):
        logger.info("Starting new conversation - clearing session state")
        st.session_state.messages = []
        st.rerun()

    st.divider()

    st.header("PII Scan")
    # Images are accepted here so the scanner can explain that it only reads PDFs
    uploaded_file = st.file_uploader(
        "Upload a document",
        type=["pdf", "png", "jpg", "jpeg"],
    )
    scan_clicked = st.button("Scan for PII", disabled=uploaded_file is None)

# ---------- DISPLAY CHAT ----------
for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

# ---------- PII SCAN ----------
if scan_clicked and uploaded_file is not None:
    file_type = uploaded_file.type or ""
    encoded = base64.b64encode(uploaded_file.getvalue()).decode("ascii")
    file_data = f"data:{file_type};base64,{encoded}"

    scan_request = f"Scan **{uploaded_file.name}** for PII"
    st.session_state.messages.append({"role": "user", "content": scan_request})
    with st.chat_message("user"):
        st.markdown(scan_request)

    with st.spinner(f"Scanning {uploaded_file.name}..."):
        report = asyncio.run(scan_service.handle_pii_scan(
            file_data=file_data,
            file_name=uploaded_file.name,
            file_type=file_type,
        ))

    st.session_state.messages.append({"role": "assistant", "content": report})
    with st.chat_message("assistant"):
        st.markdown(report)

# ---------- USER INPUT ----------
if user_input := st.chat_input("Ask something about PII scanning..."):
    history = list(st.session_state.messages)
    st.session_state.messages.append({"role": "user", "content": user_input})
    with st.chat_message("user"):
        st.markdown(user_input)

    with st.spinner("Agent is thinking..."):
        response = asyncio.run(agent.llm_response(
            user_query=user_input,
            conversation_history=history,
        ))

    st.session_state.messages.append({"role": "assistant", "content": response})
    with st.chat_message("assistant"):
        st.markdown(response)

    logger.info("Message exchange complete")
