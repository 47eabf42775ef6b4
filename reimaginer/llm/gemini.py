from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

from ..config import Settings, get_api_key, load_settings
from ..errors import GenerationError
from ..state import GeneratedImage, ImagePayload

logger = logging.getLogger(__name__)


def generate_logo(
    main: Optional[ImagePayload],
    font_reference: Optional[ImagePayload],
    prompt: str,
    *,
    settings: Optional[Settings] = None,
) -> GeneratedImage:
    """Send the logo, optional typography reference and prompt to Gemini.

    One best-effort call: no retries, no caching. Every failure (missing key,
    transport/SDK error, response without an image) is raised as
    `GenerationError` with a message suitable for the user.
    """
    if main is None or not main.data:
        raise GenerationError("A current logo image is required.")
    settings = settings or load_settings()

    api_key = get_api_key()
    if not api_key:
        raise GenerationError("GEMINI_API_KEY is not set. Add it to your environment or .env file.")

    parts: List[Any] = [_image_part(main)]
    if font_reference is not None and font_reference.data:
        parts.append(_image_part(font_reference))
    parts.append({"text": prompt})

    kwargs: Dict[str, Any] = {}
    if settings.request_timeout:
        kwargs["request_options"] = {"timeout": settings.request_timeout}

    logger.info("requesting logo from %s (font reference: %s)", settings.image_model, font_reference is not None)
    try:
        model = _image_model(api_key, settings.image_model)
        resp = model.generate_content(parts, **kwargs)
    except Exception as e:
        logger.warning("generation call failed: %s", e)
        raise GenerationError(str(e) or "The image service request failed.") from e

    img_bytes, mime = _first_image_bytes(resp)
    if not img_bytes:
        text = _first_text(resp).strip()
        msg = "No image was generated by the model."
        if text:
            msg += f" Model said: {text[:300]}"
        raise GenerationError(msg)
    logger.info("received %s image (%d bytes)", mime, len(img_bytes))
    return GeneratedImage(data=img_bytes, mime_type=mime)


# ------------------------- Google GenAI plumbing -------------------------

def _image_model(api_key: str, model_name: str) -> Any:
    import google.generativeai as genai

    genai.configure(api_key=api_key)
    return genai.GenerativeModel(model_name=model_name)


def _image_part(payload: ImagePayload) -> Dict[str, Any]:
    # google-generativeai accepts dict with mime_type and data bytes for images
    return {"mime_type": payload.mime_type, "data": payload.raw_bytes()}


def _first_text(resp: Any) -> str:
    for c in getattr(resp, "candidates", None) or []:
        content = getattr(c, "content", None)
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "text", None):
                return part.text
    return ""


def _first_image_bytes(resp: Any) -> tuple[bytes | None, str]:
    # Walk resp.candidates[].content.parts[].inline_data for the first image
    for c in getattr(resp, "candidates", None) or []:
        content = getattr(c, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline else None
            if not data:
                continue
            mime = getattr(inline, "mime_type", None) or "image/png"
            if isinstance(data, bytes):
                return data, mime
            # some versions may base64-encode
            try:
                return base64.b64decode(data, validate=True), mime
            except (binascii.Error, ValueError):
                raise GenerationError("The model returned image data that could not be decoded.")
    return None, ""
