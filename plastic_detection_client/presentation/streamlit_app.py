"""Browser page for the detection client; launched with ``streamlit run``."""

from __future__ import annotations

import atexit
import html

import streamlit as st

from plastic_detection_client.application.detection_client import DetectionClient
from plastic_detection_client.container import ApplicationContainer
from plastic_detection_client.domain.image import DEFAULT_MIME_TYPE, SelectedImage
from plastic_detection_client.domain.state import ClientState, StatusMessage, Tone
from plastic_detection_client.presentation.view_models import (
    PENDING_LABEL,
    RECYCLABLE_NOTE,
    DetectionRowViewModel,
    ResultsViewModel,
    button_label,
)
from plastic_detection_client.shared.errors import SubmissionInProgressError


IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "bmp", "webp"]
CLIENT_KEY = "detection_client"
UPLOADER_KEY = "image_uploader"
SUBMIT_REQUESTED_KEY = "submit_requested"


@st.cache_resource
def _container() -> ApplicationContainer:
    container = ApplicationContainer()
    container.ensure_configured()
    atexit.register(container.close)
    return container


def _session_client(container: ApplicationContainer) -> DetectionClient:
    if CLIENT_KEY not in st.session_state:
        st.session_state[CLIENT_KEY] = container.detection_client()
    return st.session_state[CLIENT_KEY]


def _on_file_selected(client: DetectionClient) -> None:
    uploaded = st.session_state.get(UPLOADER_KEY)
    if uploaded is None:
        return
    client.select_image(
        SelectedImage(
            name=uploaded.name,
            content=uploaded.getvalue(),
            mime_type=uploaded.type or DEFAULT_MIME_TYPE,
        )
    )


def _request_submission() -> None:
    st.session_state[SUBMIT_REQUESTED_KEY] = True


def _render_status(slot, status: StatusMessage) -> None:
    if not status:
        slot.empty()
        return
    render = {
        Tone.INFO: slot.info,
        Tone.WARNING: slot.warning,
        Tone.SUCCESS: slot.success,
        Tone.ERROR: slot.error,
    }.get(status.tone, slot.write)
    render(status.text)


def _render_row(row: DetectionRowViewModel) -> None:
    note = f'<p style="color:#16a34a;font-weight:700;margin:0">{RECYCLABLE_NOTE}</p>' if row.recyclable else ""
    st.markdown(
        f"""
        <div style="border-left:4px solid {row.accent_color};padding:0.75rem 1rem;margin-bottom:0.5rem;
                    border-radius:6px;background:#f9fafb;color:#111827">
          <p style="font-weight:700;margin:0">{html.escape(row.label)}</p>
          <p style="margin:0">Confidence: <b>{row.confidence_text}</b></p>
          <p style="margin:0">BBox: <code>{html.escape(row.bbox_text)}</code></p>
          {note}
        </div>
        """,
        unsafe_allow_html=True,
    )


def _render_results(state: ClientState) -> None:
    results = ResultsViewModel.from_state(state)
    if not results.visible:
        return
    with st.container(border=True):
        st.subheader("Detection Results:")
        if results.stale:
            st.caption("The last request failed; these results are from the previous detection.")
        columns = st.columns(len(results.counts) + 1)
        for column, (name, count) in zip(columns, results.counts.items()):
            column.metric(f"{name} detected", count)
        columns[-1].metric("Total recyclable", results.total)
        for row in results.rows:
            _render_row(row)


def render_page(container: ApplicationContainer) -> None:
    settings = container.settings
    st.set_page_config(page_title=settings.page_title, page_icon="♻️", layout="centered")
    client = _session_client(container)

    st.title(settings.page_title)
    st.caption(f"Detection service: {settings.detect_url}")

    submitting = bool(st.session_state.get(SUBMIT_REQUESTED_KEY))
    state = client.state

    st.file_uploader(
        "Choose an image",
        type=IMAGE_TYPES,
        key=UPLOADER_KEY,
        on_change=_on_file_selected,
        args=(client,),
        disabled=submitting or state.loading,
    )
    if state.preview is not None:
        st.image(state.preview.reference, caption="Preview", width=256)

    st.button(
        PENDING_LABEL if submitting else button_label(state),
        on_click=_request_submission,
        disabled=submitting or state.loading,
        type="primary",
    )
    status_slot = st.empty()
    _render_status(status_slot, state.status)

    if submitting:
        unsubscribe = client.subscribe(lambda snapshot: _render_status(status_slot, snapshot.status))
        try:
            client.submit()
        except SubmissionInProgressError:
            status_slot.info("A detection is already running for this session.")
        else:
            st.rerun()
        finally:
            unsubscribe()
            st.session_state[SUBMIT_REQUESTED_KEY] = False

    _render_results(state)


def main() -> None:
    render_page(_container())


if __name__ == "__main__":
    main()
