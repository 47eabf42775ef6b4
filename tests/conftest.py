"""
Shared fixtures: sample images built with Pillow, a preview store under
tmp_path, and fake Gemini responses.
"""

import io
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

from reimaginer.config import Settings
from reimaginer.ingest import PreviewStore
from reimaginer.state import GeneratedImage

# =============================================================================
# Image Fixtures
# =============================================================================


def make_image_bytes(fmt: str = "PNG", color: str = "red", size: tuple = (8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "logo.png"
    path.write_bytes(make_image_bytes("PNG"))
    return path


@pytest.fixture
def jpeg_file(tmp_path: Path) -> Path:
    path = tmp_path / "font.jpg"
    path.write_bytes(make_image_bytes("JPEG", color="blue"))
    return path


@pytest.fixture
def gif_file(tmp_path: Path) -> Path:
    path = tmp_path / "anim.gif"
    path.write_bytes(make_image_bytes("GIF"))
    return path


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.png"
    path.write_text("definitely not an image")
    return path


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(image_model="test-image-model", max_upload_bytes=1024 * 1024)


@pytest.fixture
def store(tmp_path: Path):
    s = PreviewStore(str(tmp_path / "previews"))
    yield s
    s.close()


@pytest.fixture
def generated_image() -> GeneratedImage:
    return GeneratedImage(data=make_image_bytes("PNG", color="green"), mime_type="image/png")


# =============================================================================
# Gemini Response Fixtures
# =============================================================================


def fake_response(*parts) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def image_part(data, mime: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime))


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(text=text, inline_data=None)
