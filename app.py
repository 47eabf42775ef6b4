from __future__ import annotations

# Hosted entrypoint (e.g. Hugging Face Spaces): serves the module-level `demo`.
import logging
import os

from scripts.gradio_app import app as build_logo_app

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

demo = build_logo_app()
