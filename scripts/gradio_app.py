from __future__ import annotations

import logging
import os
from typing import Any, Optional, Tuple

import gradio as gr

from reimaginer.prompts import DESIGN_RULES
from reimaginer.session import LogoSession
from reimaginer.view import EMPTY_HINT, EMPTY_TITLE, MISSING_LOGO_HINT, form_hint, output_view, submit_label


def _session(session: Optional[LogoSession]) -> LogoSession:
    return session if session is not None else LogoSession()


def _close_session(session: Optional[LogoSession]) -> None:
    if session is not None:
        session.close()


def _preview(image) -> Optional[str]:
    return image.preview.path if image is not None else None


def _form(session: LogoSession) -> Tuple[Any, str, Any]:
    return (
        gr.update(value=submit_label(session), interactive=session.can_submit),
        form_hint(session),
        gr.update(visible=session.can_retry),
    )


def _output(session: LogoSession) -> Tuple[Any, ...]:
    view = output_view(session)
    is_result = view.kind == "result"
    return (
        gr.update(value=submit_label(session), interactive=session.can_submit),
        gr.update(value=view.message, visible=not is_result),
        gr.update(value=view.image_path, visible=is_result),
        gr.update(visible=view.kind == "error" and session.can_retry),
        gr.update(value=view.image_path, visible=is_result),
    )


def on_upload_main(path: Optional[str], session: Optional[LogoSession]):
    session = _session(session)
    if path:
        session.upload_main(path)
    return (session, _preview(session.main_logo), *_form(session))


def on_upload_font(path: Optional[str], session: Optional[LogoSession]):
    session = _session(session)
    if path:
        session.upload_font(path)
    return (session, _preview(session.font_reference), *_form(session))


def on_remove_main(session: Optional[LogoSession]):
    session = _session(session)
    session.remove_main()
    return (session, *_form(session))


def on_remove_font(session: Optional[LogoSession]):
    session = _session(session)
    session.remove_font()
    return (session, *_form(session))


def on_generate(session: Optional[LogoSession]):
    session = _session(session)
    request = session.begin()
    yield (session, *_output(session))
    if request is None:
        return
    session.finish(request)
    yield (session, *_output(session))


def on_retry(session: Optional[LogoSession]):
    session = _session(session)
    request = session.begin_retry()
    yield (session, *_output(session))
    if request is None:
        return
    session.finish(request)
    yield (session, *_output(session))


def app() -> gr.Blocks:
    with gr.Blocks(title="Ana Sharif | Logo Re-Imaginer") as demo:
        gr.Markdown("""
        # Ana Sharif: Logo Re-Imaginer
        ### Business Intelligence Brand Redesign
        Upload the current logo and a typography reference. The AI will strip the old dome design,
        vectorize the concept, and inject "Smart Business" symbolism while strictly adhering to your
        requested font style. Requires `GEMINI_API_KEY`; set `GEMINI_IMAGE_EDIT_MODEL` to change the model.
        """)
        session_state = gr.State(None, delete_callback=_close_session)

        with gr.Row():
            with gr.Column(scale=5):
                gr.Markdown("### Input Assets")
                main_img = gr.Image(
                    label="1. Current Logo (To Redesign) *  The logo with the dome to replace",
                    type="filepath",
                    sources=["upload"],
                    height=256,
                )
                font_img = gr.Image(
                    label="2. Typography Reference  Image containing the desired font style",
                    type="filepath",
                    sources=["upload"],
                    height=256,
                )
                gr.Markdown("PNG, JPG, WEBP (Max 5MB)")
                generate_btn = gr.Button("Generate New Logo", variant="primary", interactive=False)
                hint = gr.Markdown(MISSING_LOGO_HINT)
                gr.Markdown("#### Design Rules Applied:\n" + "\n".join(f"- ✓ {rule}" for rule in DESIGN_RULES))

            with gr.Column(scale=7):
                gr.Markdown("### Generated Result")
                output_md = gr.Markdown(f"**{EMPTY_TITLE}**\n\n{EMPTY_HINT}")
                result_img = gr.Image(label="Generated Logo", type="filepath", interactive=False, visible=False)
                retry_btn = gr.Button("Try Again", visible=False)
                download_btn = gr.DownloadButton("Download", visible=False)

        form_outputs = [generate_btn, hint, retry_btn]
        output_outputs = [session_state, generate_btn, output_md, result_img, retry_btn, download_btn]

        main_img.upload(on_upload_main, inputs=[main_img, session_state], outputs=[session_state, main_img, *form_outputs])
        main_img.clear(on_remove_main, inputs=[session_state], outputs=[session_state, *form_outputs])
        font_img.upload(on_upload_font, inputs=[font_img, session_state], outputs=[session_state, font_img, *form_outputs])
        font_img.clear(on_remove_font, inputs=[session_state], outputs=[session_state, *form_outputs])

        generate_btn.click(on_generate, inputs=[session_state], outputs=output_outputs)
        retry_btn.click(on_retry, inputs=[session_state], outputs=output_outputs)

    return demo


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")
    port = int(os.getenv("PORT", "7860"))
    app().launch(server_name="0.0.0.0", server_port=port)
