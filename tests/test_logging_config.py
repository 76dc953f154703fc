"""Tests for logging helpers."""

from lifeline.logging_config import get_logger, mask_location, sanitize_for_log, setup_logging


class TestMaskLocation:
    """Tests for mask_location."""

    def test_rounds_coordinates(self) -> None:
        assert mask_location({"lat": 12.971598, "lng": 77.594566}) == {"lat": 12.97, "lng": 77.59}

    def test_drops_address(self) -> None:
        masked = mask_location({"lat": 1.0, "lng": 2.0, "address": "221B Baker Street"})
        assert "address" not in masked

    def test_empty_location(self) -> None:
        assert mask_location(None) == {}
        assert mask_location({}) == {}


class TestSanitizeForLog:
    """Tests for sanitize_for_log."""

    def test_redacts_credentials(self) -> None:
        result = sanitize_for_log({"xi-api-key": "secret", "api_key": "secret2"})
        assert result == {"xi-api-key": "[REDACTED]", "api_key": "[REDACTED]"}

    def test_masks_location(self) -> None:
        result = sanitize_for_log({"userId": 42, "location": {"lat": 12.3456, "lng": 0.0}})
        assert result == {"userId": 42, "location": {"lat": 12.35, "lng": 0.0}}

    def test_summarizes_binary(self) -> None:
        assert sanitize_for_log({"chunkData": b"\x00" * 10}) == {"chunkData": "<10 bytes>"}

    def test_recurses_into_nested_dicts(self) -> None:
        result = sanitize_for_log({"outer": {"token": "abc", "ok": 1}})
        assert result == {"outer": {"token": "[REDACTED]", "ok": 1}}


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_sinks_created(self, tmp_path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=str(log_dir), enable_file=True)
        get_logger(__name__).info("hello")
        assert log_dir.exists()
        setup_logging(level="INFO", enable_file=False)

    def test_console_only(self, tmp_path) -> None:
        setup_logging(level="INFO", log_dir=str(tmp_path / "none"), enable_file=False)
        assert not (tmp_path / "none").exists()
