#The face of the application
from __future__ import annotations
from dotenv import load_dotenv
load_dotenv()
import asyncio
import streamlit as st
from api_client import GenerationRequestError, InputError, request_diagram
from mermaid_render import RenderError, export_png, render_mermaid_to_svg
from mermaid_utils import normalize_mermaid
from render_scheduler import RenderScheduler
st.set_page_config(page_title="VisualMind AI", page_icon="🧠", layout="wide")
st.markdown(
    """
<style>
[data-testid="stAppViewContainer"], html, body {
    background-color: #000 !important;
    color: #fff !important;
}
[data-testid="stHeader"] {background: #000 !important;}
h1,h2,h3,h4,h5,h6,label,p,span,div {color: #fff !important;}
textarea, input[type="text"] {
    background: #111 !important;
    color: #00ffff !important;
    border: 1px solid #0ff3 !important;
    border-radius: 8px !important;
    font-family: monospace !important;
}
.stButton>button, .stDownloadButton>button {
    background-color: #0e7490 !important;
    color: white !important;
    border-radius: 10px !important;
    border: none !important;
    padding: 0.6rem 1rem !important;
    box-shadow: 0 0 12px rgba(0,255,255,0.3);
}
.diagram-container svg {max-width: 100%; height: auto;}
.block-container {padding-top: 3rem !important;}
</style>
""",
    unsafe_allow_html=True,
)
EXAMPLE_TOPIC = "Quantum Neural Processing Pipeline"
EXAMPLE_CODE = """graph TD;
    A["QUANTUM START"] --> B{"Neural Processing"}
    B -->|"Data Valid"| C["Execute"]
    B -->|"Error Detected"| D["Debug Protocol"]
    D --> B
    C --> E["AI Analysis"]
    E --> F{"Quality Gate"}
    F -->|"Approved"| G["Deploy"]
    F -->|"Failed"| H["Optimize"]
    H --> E
    G --> I["Monitor"]
    I --> J["Success"]

    style A fill:#0a0a0a,stroke:#00ffff,stroke-width:3px,color:#00ffff
    style J fill:#0a0a0a,stroke:#00ff00,stroke-width:3px,color:#00ff00
    style B fill:#0a0a0a,stroke:#ff00ff,stroke-width:3px,color:#ff00ff
    style F fill:#0a0a0a,stroke:#ffff00,stroke-width:3px,color:#ffff00
    style D fill:#0a0a0a,stroke:#ff0066,stroke-width:3px,color:#ff0066"""
DEFAULT_KEYS = {
    "topic": "",
    "raw": "",
    "mermaid_code": "",
    "error": "",
    "category": None,
    "png": None,
    "png_source": None,
}
for k, v in DEFAULT_KEYS.items():
    st.session_state.setdefault(k, v)
if "scheduler" not in st.session_state:
    st.session_state["scheduler"] = RenderScheduler(render_mermaid_to_svg)
scheduler: RenderScheduler = st.session_state["scheduler"]
async def _refresh_preview(code: str):
    scheduler.submit(code)
    return await scheduler.drain()
def generate():
    st.session_state["error"] = ""
    st.session_state["raw"] = ""
    st.session_state["mermaid_code"] = ""
    st.session_state["png"] = None
    try:
        with st.spinner("Generating diagram..."):
            data = request_diagram(st.session_state["topic"])
    except InputError as e:
        st.session_state["error"] = str(e)
        return
    except GenerationRequestError as e:
        st.session_state["error"] = str(e)
        st.session_state["raw"] = e.raw
        return
    st.session_state["raw"] = data.get("raw", "")
    st.session_state["mermaid_code"] = data.get("mermaid", "")
    st.session_state["category"] = data.get("category")
    if not data.get("mermaid"):
        st.session_state["error"] = "No diagram generated, check the raw response"
def load_example():
    st.session_state["topic"] = EXAMPLE_TOPIC
    st.session_state["mermaid_code"] = EXAMPLE_CODE
    st.session_state["png"] = None
    st.session_state["error"] = ""
def clear_all():
    for k, v in DEFAULT_KEYS.items():
        st.session_state[k] = v
    scheduler.clear()
st.title("VisualMind AI")
st.caption("Type a topic, get a flowchart. Edit the Mermaid source and the preview follows.")
st.markdown("---")
col_in, col_out = st.columns([2, 3])
with col_in:
    st.text_input("Topic", key="topic", placeholder="e.g. Cooking pasta, Launching a brand...")
    b1, b2, b3 = st.columns(3)
    b1.button("Generate", on_click=generate, type="primary")
    b2.button("Load Example", on_click=load_example)
    b3.button("Clear All", on_click=clear_all)
    if st.session_state["category"]:
        st.caption(f"Detected category: {st.session_state['category']}")
    st.text_area("Mermaid source", key="mermaid_code", height=360)
    if st.session_state["raw"]:
        with st.expander("Raw model response", expanded=False):
            st.code(st.session_state["raw"])
with col_out:
    st.subheader("Preview")
    code = st.session_state["mermaid_code"]
    if code != scheduler.source or (code and not scheduler.state.svg and not scheduler.state.error):
        asyncio.run(_refresh_preview(code))
    state = scheduler.state
    if st.session_state["error"]:
        st.error(st.session_state["error"])
    if state.error:
        st.error(f"Render error: {state.error}")
    if state.svg:
        st.markdown(f'<div class="diagram-container">{state.svg}</div>', unsafe_allow_html=True)
    elif not code:
        st.info("No diagram yet. Generate one or load the example.")
    # an exported image only belongs to the source and topic it was made from
    if st.session_state["png_source"] != (code, st.session_state["topic"]):
        st.session_state["png"] = None
    if code.strip():
        if st.button("Export PNG"):
            try:
                st.session_state["png"] = asyncio.run(
                    export_png(normalize_mermaid(code), st.session_state["topic"])
                )
                st.session_state["png_source"] = (code, st.session_state["topic"])
            except (RenderError, ValueError) as e:
                st.session_state["png"] = None
                st.error(f"PNG export failed: {e}")
        if st.session_state.get("png"):
            filename, png = st.session_state["png"]
            st.download_button("Download PNG", data=png, file_name=filename, mime="image/png")
