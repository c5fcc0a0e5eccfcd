"""Tests for the starter photos, settings helpers and log setup."""

from loguru import logger

from config import settings
from gallery_app.encoder import decode
from gallery_app import logging as gallery_logging
from gallery_app.logging import init_logging
from gallery_app.seed import seed_photos


def test_seed_photos():
    photos = seed_photos()

    assert [p.title for p in photos] == ["Morning Mist", "Neon Nights"]
    assert [p.category for p in photos] == ["Nature", "Architecture"]
    assert photos[0].tags == ("nature", "mountains", "fog")
    assert len({p.id for p in photos}) == 2
    for photo in photos:
        raw, mime = decode(photo.image_data)
        assert mime == "image/png"
        assert raw.startswith(b"\x89PNG")
        assert photo.ai_generated is False


def test_mask_hides_api_key():
    assert settings.mask(None) == "MISSING"
    assert settings.mask("") == "MISSING"
    assert settings.mask("short") == "***"
    assert settings.mask("sk-abcdefghijklmnop") == "sk-a...mnop"


def test_init_logging_writes_to_log_dir(tmp_path):
    log_dir = tmp_path / "logs"
    init_logging("debug", log_dir)
    logger.info("hello from the gallery")
    # Removing the sinks drains the queue and closes the file.
    logger.remove()

    files = list(log_dir.glob("gallery_*.log"))
    assert len(files) == 1
    assert "hello from the gallery" in files[0].read_text(encoding="utf-8")


def test_init_logging_once_configures_a_single_time(monkeypatch):
    calls = []
    monkeypatch.setattr(gallery_logging, "_configured", False)
    monkeypatch.setattr(gallery_logging, "init_logging", lambda *args: calls.append(args))

    assert gallery_logging.init_logging_once("INFO", None) is True
    assert gallery_logging.init_logging_once("DEBUG", "/tmp/other") is False

    assert calls == [("INFO", None)]
