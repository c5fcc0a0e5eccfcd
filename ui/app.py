from __future__ import annotations

import asyncio
import html
from typing import List

import streamlit as st

from config import settings
from gallery_app.ai_gateway import OpenAiGateway
from gallery_app.catalog import Catalog
from gallery_app.encoder import decode
from gallery_app.errors import EncodeError
from gallery_app.gallery import GalleryController, Outcome, OutcomeStatus
from gallery_app.logging import init_logging_once
from gallery_app.models import PhotoRecord, ViewTab
from gallery_app.seed import seed_photos
from gallery_app.state import GalleryState


# ---------- Page config ----------

st.set_page_config(
    page_title="Photos",
    page_icon="🖼️",
    layout="centered",
)


# ---------- Global Styles (simple CSS) ----------

st.markdown(
    """
    <style>
    .block-container {
        padding-top: 1.5rem;
        padding-bottom: 3rem;
        max-width: 960px;
    }

    /* Small tag/pill */
    .pg-pill {
        display: inline-flex;
        align-items: center;
        padding: 2px 10px;
        border-radius: 999px;
        font-size: 0.75rem;
        background: #f3f4f6;
        color: #4b5563;
        margin-right: 6px;
        margin-bottom: 4px;
    }
    .pg-pill.category {
        background: #e0e7ff;
        color: #4338ca;
        font-weight: 500;
    }

    .pg-album-card {
        background-color: #f3f4f6;
        border-radius: 16px;
        padding: 16px;
        height: 110px;
        display: flex;
        flex-direction: column;
        justify-content: flex-end;
        margin-bottom: 6px;
    }
    .pg-album-name { font-weight: 700; color: #1f2937; margin: 0; }
    .pg-album-count { font-size: 0.75rem; color: #6b7280; margin: 0; }
    </style>
    """,
    unsafe_allow_html=True,
)

TAB_LABELS = {ViewTab.GRID: "Gallery", ViewTab.ALBUMS: "Albums"}


# ---------- Session state ----------


def _get_state() -> GalleryState:
    if init_logging_once(settings.GALLERY_LOG_LEVEL, settings.GALLERY_LOG_DIR):
        settings.log_config_summary()
    if "gallery" not in st.session_state:
        photos = seed_photos() if settings.GALLERY_SEED_PHOTOS else []
        st.session_state["gallery"] = GalleryState(catalog=Catalog(photos))
        st.session_state["uploader_key"] = 0
    return st.session_state["gallery"]


def _get_controller(state: GalleryState) -> GalleryController:
    if "gateway" not in st.session_state:
        st.session_state["gateway"] = OpenAiGateway.from_settings()
    return GalleryController(state, st.session_state["gateway"])


def _queue_notice(outcome: Outcome) -> None:
    if outcome.notice:
        st.session_state["notice"] = (outcome.status, outcome.notice)


def _show_queued_notice() -> None:
    queued = st.session_state.pop("notice", None)
    if not queued:
        return
    status, message = queued
    if status is OutcomeStatus.FALLBACK:
        st.warning(message)
    else:
        st.error(message)


def _image_bytes(photo: PhotoRecord) -> bytes | str:
    try:
        raw, _ = decode(photo.image_data)
        return raw
    except EncodeError:
        # Not a data URI; st.image can still load plain URLs.
        return photo.image_data


# ---------- Callbacks ----------


def _on_search_change() -> None:
    _get_state().set_query(st.session_state["search_input"])


def _on_tab_change() -> None:
    label = st.session_state["tab_choice"]
    tab = next(t for t, name in TAB_LABELS.items() if name == label)
    _get_state().set_tab(tab)


def _on_open_album(category: str) -> None:
    _get_state().open_album(category)
    st.session_state["search_input"] = category
    st.session_state["tab_choice"] = TAB_LABELS[ViewTab.GRID]


def _on_select(photo_id: str | None) -> None:
    _get_state().select(photo_id)
    st.session_state.pop("confirm_delete", None)


# ---------- Sections ----------


def _render_header(state: GalleryState, controller: GalleryController) -> None:
    st.title("Photos")

    uploaded = st.file_uploader(
        "Add a photo",
        type=["png", "jpg", "jpeg", "webp", "gif"],
        accept_multiple_files=False,
        disabled=state.view.uploading,
        key=f"uploader_{st.session_state['uploader_key']}",
        help="The photo is analyzed by AI to fill in its title, description, tags and category.",
    )

    if uploaded is not None:
        with st.spinner("Analyzing photo..."):
            outcome = asyncio.run(controller.upload(uploaded, uploaded.type))
        _queue_notice(outcome)
        # A fresh key clears the uploader so the same file can be added again.
        st.session_state["uploader_key"] += 1
        st.rerun()

    # Widget keys are dropped while the detail view hides them; restore from state.
    st.session_state.setdefault("search_input", state.view.search_query)
    st.session_state.setdefault("tab_choice", TAB_LABELS[state.view.active_tab])

    st.text_input(
        "Search",
        key="search_input",
        placeholder="Search people, places, things...",
        on_change=_on_search_change,
        label_visibility="collapsed",
    )

    st.radio(
        "View",
        list(TAB_LABELS.values()),
        key="tab_choice",
        horizontal=True,
        on_change=_on_tab_change,
        label_visibility="collapsed",
    )


def _render_grid(photos: List[PhotoRecord]) -> None:
    if not photos:
        st.info("No photos match your search.")
        return

    cols = st.columns(3)
    for i, photo in enumerate(photos):
        with cols[i % 3]:
            st.image(_image_bytes(photo), width="stretch")
            label = f"✨ {photo.title}" if photo.ai_generated else photo.title
            st.button(
                label,
                key=f"open_{photo.id}",
                on_click=_on_select,
                args=(photo.id,),
                width="stretch",
            )


def _render_albums(state: GalleryState) -> None:
    st.subheader("Smart Categories")
    cols = st.columns(2)
    for i, (category, count) in enumerate(state.album_counts().items()):
        with cols[i % 2]:
            st.markdown(
                f"""
                <div class="pg-album-card">
                  <p class="pg-album-name">{category}</p>
                  <p class="pg-album-count">{count} photos</p>
                </div>
                """,
                unsafe_allow_html=True,
            )
            st.button(
                f"Open {category}",
                key=f"album_{category}",
                on_click=_on_open_album,
                args=(category,),
                width="stretch",
            )


def _render_detail(photo: PhotoRecord, state: GalleryState, controller: GalleryController) -> None:
    st.button("✕ Close", key="close_detail", on_click=_on_select, args=(None,))

    image_col, info_col = st.columns([3, 2], gap="large")

    with image_col:
        st.image(_image_bytes(photo), caption=photo.title, width="stretch")

    with info_col:
        st.subheader(photo.title)
        st.caption(photo.created_at.astimezone().strftime("%b %d, %Y"))

        pills = [f'<span class="pg-pill category">{html.escape(photo.category)}</span>']
        pills += [f'<span class="pg-pill">{html.escape(tag)}</span>' for tag in photo.tags]
        st.markdown("".join(pills), unsafe_allow_html=True)

        st.write(photo.description)
        if photo.ai_generated:
            st.caption("✨ Edited with AI")

        st.markdown("---")
        _render_magic_edit(photo, state, controller)

        st.markdown("---")
        _render_delete(photo, controller)


def _render_magic_edit(photo: PhotoRecord, state: GalleryState, controller: GalleryController) -> None:
    if not state.view.editing:
        st.button("✨ Magic Edit", key="open_editor", on_click=controller.open_editor, type="primary")
        return

    prompt = st.text_area(
        "Describe the edit",
        key=f"edit_prompt_{photo.id}",
        placeholder="e.g., Add a retro filter, make it snowy, remove the person in the background...",
    )

    c1, c2 = st.columns([1, 1])
    with c1:
        apply_clicked = st.button(
            "Apply",
            key="apply_edit",
            type="primary",
            disabled=state.view.edit_busy,
        )
    with c2:
        st.button("Cancel", key="cancel_edit", on_click=controller.cancel_edit)

    if apply_clicked:
        with st.spinner("Editing photo with AI..."):
            outcome = asyncio.run(controller.apply_edit(prompt))
        _queue_notice(outcome)
        if outcome.ok:
            st.session_state.pop(f"edit_prompt_{photo.id}", None)
        st.rerun()


def _render_delete(photo: PhotoRecord, controller: GalleryController) -> None:
    if st.session_state.get("confirm_delete") != photo.id:
        if st.button("🗑️ Delete photo", key="delete_photo"):
            st.session_state["confirm_delete"] = photo.id
            st.rerun()
        return

    st.warning("Are you sure you want to delete this photo?")
    c1, c2 = st.columns([1, 1])
    with c1:
        if st.button("Delete", key="confirm_delete_yes", type="primary"):
            controller.delete(photo.id)
            st.session_state.pop("confirm_delete", None)
            st.rerun()
    with c2:
        if st.button("Keep", key="confirm_delete_no"):
            st.session_state.pop("confirm_delete", None)
            st.rerun()


# ---------- Main ----------

state = _get_state()
controller = _get_controller(state)

_show_queued_notice()

selected = state.selected
if selected is not None:
    _render_detail(selected, state, controller)
else:
    _render_header(state, controller)
    if state.view.active_tab is ViewTab.ALBUMS:
        _render_albums(state)
    else:
        _render_grid(state.visible_photos())
