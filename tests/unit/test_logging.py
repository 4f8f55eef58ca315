from __future__ import annotations


def test_configure_structlog_warns_on_invalid_log_level(monkeypatch, capfd) -> None:
    from alertdefs.logging import configure_structlog

    monkeypatch.setenv("ALERTDEFS_LOG_LEVEL", "not-a-level")
    configure_structlog()

    captured = capfd.readouterr()
    assert "Invalid ALERTDEFS_LOG_LEVEL" in captured.err


def test_configure_structlog_accepts_known_level(monkeypatch, capfd) -> None:
    from alertdefs.logging import configure_structlog

    monkeypatch.setenv("ALERTDEFS_LOG_LEVEL", "debug")
    configure_structlog()

    assert "Invalid" not in capfd.readouterr().err


def test_configure_structlog_prefers_explicit_level(monkeypatch, capfd) -> None:
    from alertdefs.logging import configure_structlog

    monkeypatch.setenv("ALERTDEFS_LOG_LEVEL", "not-a-level")
    configure_structlog("info")

    assert "Invalid" not in capfd.readouterr().err


def test_redact_credentials_masks_token_fields() -> None:
    from alertdefs.logging import redact_credentials

    event = {"event": "request", "standAloneToken": "secret", "target_token": "t", "path": "/x"}

    redacted = redact_credentials(None, "info", event)

    assert redacted["standAloneToken"] == "***"
    assert redacted["target_token"] == "***"
    assert redacted["path"] == "/x"


def test_json_format_masks_token_in_output(monkeypatch, capfd) -> None:
    import json

    import structlog

    from alertdefs.logging import configure_structlog

    monkeypatch.setenv("ALERTDEFS_LOG_FORMAT", "json")
    try:
        configure_structlog("info")
        structlog.get_logger().info("login", token="secret")

        line = capfd.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "login"
        assert record["level"] == "info"
        assert record["token"] == "***"
    finally:
        monkeypatch.delenv("ALERTDEFS_LOG_FORMAT")
        configure_structlog()
