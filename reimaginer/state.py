from __future__ import annotations

import base64
import io
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImagePayload:
    mime_type: str
    data: str  # base64, no data-URL prefix

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass
class PreviewHandle:
    path: str
    released: bool = False


@dataclass
class UploadedImage:
    source: str
    preview: PreviewHandle
    payload: ImagePayload
    size: int = 0


@dataclass(frozen=True)
class GenerationRequest:
    main: ImagePayload
    font_reference: Optional[ImagePayload]
    prompt: str

    def __post_init__(self) -> None:
        if self.main is None or not self.main.data:
            raise ValueError("GenerationRequest requires a main image payload")


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes
    mime_type: str = "image/png"

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"

    def save(self, path: str | Path) -> Path:
        """Write the image as PNG, converting other formats with Pillow."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        if self.mime_type == "image/png":
            out.write_bytes(self.data)
            return out
        with Image.open(io.BytesIO(self.data)) as img:
            img.save(out, format="PNG")
        return out


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class GenerationState:
    """Tri-state output: at most one of loading / error / result is set."""

    phase: Phase = Phase.IDLE
    error: Optional[str] = None
    result: Optional[GeneratedImage] = field(default=None, repr=False)

    @classmethod
    def idle(cls) -> "GenerationState":
        return cls()

    @classmethod
    def loading(cls) -> "GenerationState":
        return cls(phase=Phase.LOADING)

    @classmethod
    def succeeded(cls, result: GeneratedImage) -> "GenerationState":
        return cls(phase=Phase.SUCCESS, result=result)

    @classmethod
    def failed(cls, message: str) -> "GenerationState":
        return cls(phase=Phase.FAILURE, error=message)

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING
