# Streamlit chat page for the RAG backend.
#   streamlit run rag_chat/ui/app.py

import streamlit as st

from rag_chat.ui.citations import CitationSegment, split_citations
from rag_chat.ui.session import ChatSession
from rag_chat.utils.citations import citation_detail

st.set_page_config(page_title="RAG Nutrition Chatbot", layout="wide")


def get_session() -> ChatSession:
    if "chat" not in st.session_state:
        st.session_state["chat"] = ChatSession()
    if "selected_citation" not in st.session_state:
        st.session_state["selected_citation"] = None
    return st.session_state["chat"]


def select_citation(seg: CitationSegment) -> None:
    # numbers with no matching source are inert
    if seg.resolved:
        st.session_state["selected_citation"] = seg.source


def close_citation() -> None:
    st.session_state["selected_citation"] = None


def render_citation_detail() -> None:
    source = st.session_state.get("selected_citation")
    if source is None:
        return
    detail = citation_detail(source)
    with st.container(border=True):
        st.markdown("**SOURCE CITATION**")
        st.caption(f"Page {detail['page']}")
        st.text(detail["content"])
        left, right = st.columns(2)
        left.caption(f"Similarity: {detail['similarity']}")
        right.caption(detail["source"])
        st.button("Close", key="close-citation", on_click=close_citation)


def render_assistant(message) -> None:
    # st.text keeps the answer verbatim; no markdown interpretation
    st.text(message.text)

    segments = split_citations(message.text, list(message.sources or []))
    citations = [s for s in segments if isinstance(s, CitationSegment)]
    if not citations:
        return

    cols = st.columns(min(len(citations), 8))
    for i, seg in enumerate(citations):
        cols[i % len(cols)].button(
            str(seg.number),
            key=f"{message.id}-cite-{i}",
            disabled=not seg.resolved,
            on_click=select_citation,
            args=(seg,),
        )


session = get_session()

if session.last_error:
    st.toast(session.last_error, icon="⚠️")
    session.last_error = None

st.title("RAG Nutritional Chatbot")
st.caption("Answers grounded in a human nutrition textbook, with numbered citations.")

if not session.messages:
    with st.container(border=True):
        st.subheader("Welcome to the RAG system")
        st.write("Ask questions about human nutrition")
        st.caption('Example: "What are the essential functions of water in the body?"')

for msg in session.messages:
    with st.chat_message("user" if msg.is_user else "assistant"):
        if msg.is_user:
            st.text(msg.text)
        else:
            render_assistant(msg)

render_citation_detail()

# one script thread per browser session, so submits are already serialized
prompt = st.chat_input("Ask a question...")
if prompt:
    with st.spinner("Processing query..."):
        session.submit(prompt)
    st.rerun()
