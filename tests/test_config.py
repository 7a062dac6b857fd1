"""Tests for application settings."""

from pathlib import Path

from app.pdf2word.config import MAX_UPLOAD_BYTES, Settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        """Test defaults match the documented behavior."""
        for name in ("PORT", "VERCEL", "UPLOAD_DIR", "DOWNLOAD_DIR", "HISTORY_LIMIT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.vercel is False
        assert settings.upload_dir == Path("uploads")
        assert settings.download_dir == Path("downloads")
        assert settings.max_upload_bytes == MAX_UPLOAD_BYTES == 10 * 1024 * 1024
        assert settings.history_limit == 20
        assert settings.docx_font_name == "Arial"
        assert settings.docx_font_size == 12
        assert settings.conversion_timeout is None

    def test_environment_overrides(self, monkeypatch, tmp_path: Path):
        """Test values are read from environment variables."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("VERCEL", "1")
        monkeypatch.setenv("download_dir", str(tmp_path))
        settings = Settings(_env_file=None)
        assert settings.port == 8080
        assert settings.vercel is True
        assert settings.download_dir == tmp_path
