"""
test_cli.py - headless generation entry point
"""

from unittest.mock import MagicMock, patch

import pytest

from reimaginer import cli, session as session_mod
from reimaginer.errors import GenerationError


@pytest.fixture
def client(generated_image):
    mock = MagicMock(return_value=generated_image)
    real = session_mod.LogoSession
    with patch.object(cli, "LogoSession", side_effect=lambda **kw: real(client=mock, **kw)):
        yield mock


class TestCli:
    def test_writes_result(self, client, png_file, tmp_path, generated_image):
        out = tmp_path / "out" / "logo.png"

        rc = cli.main(["--logo", str(png_file), "--out", str(out)])

        assert rc == 0
        assert out.read_bytes() == generated_image.data
        client.assert_called_once()

    def test_font_ref_and_brand(self, client, png_file, jpeg_file, tmp_path):
        cli.main(["--logo", str(png_file), "--font-ref", str(jpeg_file), "--brand", "Acme",
                  "--out", str(tmp_path / "o.png")])

        main, font, prompt = client.call_args.args
        assert font.mime_type == "image/jpeg"
        assert '"Acme"' in prompt

    def test_bad_logo_exits(self, client, text_file, tmp_path):
        with pytest.raises(SystemExit, match="Failed to process main logo image"):
            cli.main(["--logo", str(text_file), "--out", str(tmp_path / "o.png")])
        client.assert_not_called()

    def test_missing_result_file_exits(self, client, png_file, tmp_path):
        with patch.object(session_mod.LogoSession, "result_file", return_value=None):
            with pytest.raises(SystemExit, match="without an image to save"):
                cli.main(["--logo", str(png_file), "--out", str(tmp_path / "o.png")])
        assert not (tmp_path / "o.png").exists()

    def test_generation_failure_exits(self, client, png_file, tmp_path):
        client.side_effect = GenerationError("quota exceeded")

        with pytest.raises(SystemExit, match="Generation failed: quota exceeded"):
            cli.main(["--logo", str(png_file), "--out", str(tmp_path / "o.png")])
        assert not (tmp_path / "o.png").exists()
