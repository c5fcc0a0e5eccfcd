"""Smoke tests for the Streamlit page."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest


APP_PATH = Path(__file__).resolve().parents[1] / "ui" / "app.py"


@pytest.fixture
def app():
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    return at


def test_grid_shows_seed_photos(app):
    assert not app.exception
    open_buttons = [b for b in app.button if b.key and b.key.startswith("open_")]
    assert [b.label for b in open_buttons] == ["Morning Mist", "Neon Nights"]


def test_apply_is_clickable_before_prompt_is_committed(app):
    open_buttons = [b for b in app.button if b.key and b.key.startswith("open_")]
    open_buttons[0].click().run()
    app.button(key="open_editor").click().run()

    # The text area only commits on blur, so Apply must not wait for it.
    assert app.button(key="apply_edit").disabled is False
