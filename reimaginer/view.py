from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .session import LogoSession
from .state import Phase

EMPTY_TITLE = "Ready to create"
EMPTY_HINT = "Upload your files and click generate to see the magic."
LOADING_TEXT = "Designing concept..."
FAILURE_TITLE = "Generation Failed"
MISSING_LOGO_HINT = "Please upload the current logo to begin."


@dataclass(frozen=True)
class OutputView:
    kind: str  # "empty" | "loading" | "error" | "result"
    message: str = ""
    image_path: Optional[str] = None


def output_view(session: LogoSession) -> OutputView:
    state = session.state
    if state.phase is Phase.LOADING:
        return OutputView("loading", LOADING_TEXT)
    if state.phase is Phase.FAILURE:
        return OutputView("error", f"**{FAILURE_TITLE}**\n\n{state.error}")
    if state.phase is Phase.SUCCESS:
        path = session.result_file()
        return OutputView("result", "", str(path) if path else None)
    return OutputView("empty", f"**{EMPTY_TITLE}**\n\n{EMPTY_HINT}")


def submit_label(session: LogoSession) -> str:
    return "Reimagining..." if session.state.is_loading else "Generate New Logo"


def form_hint(session: LogoSession) -> str:
    # upload failures take precedence over the "upload first" hint
    if session.upload_error:
        return session.upload_error
    if session.main_logo is None:
        return MISSING_LOGO_HINT
    return ""
