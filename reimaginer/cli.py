from __future__ import annotations

import argparse
import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from .config import DOWNLOAD_FILENAME
from .prompts import DEFAULT_BRAND_NAME
from .session import LogoSession
from .state import Phase


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Logo Re-Imaginer: redesign a logo with Gemini")
    parser.add_argument("--logo", type=str, required=True, help="Current logo image to redesign (PNG/JPG/WEBP)")
    parser.add_argument("--font-ref", type=str, default="", help="Typography reference image (optional)")
    parser.add_argument("--brand", type=str, default=DEFAULT_BRAND_NAME, help="Brand name written into the logo")
    parser.add_argument("--out", type=str, default=DOWNLOAD_FILENAME, help="Where to save the generated PNG")
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    session = LogoSession(brand_name=args.brand)
    try:
        if not session.upload_main(args.logo):
            raise SystemExit(session.upload_error)
        if args.font_ref and not session.upload_font(args.font_ref):
            raise SystemExit(session.upload_error)

        state = session.submit()
        if state.phase is not Phase.SUCCESS:
            raise SystemExit(f"Generation failed: {state.error}")

        result = session.result_file()
        if result is None:
            raise SystemExit("Generation finished without an image to save")
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(result, out)
    finally:
        session.close()

    print(f"Saved redesigned logo to: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
