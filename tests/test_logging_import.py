"""
Test that registry_api.logging can be imported without circular import and loggers work.
"""

from __future__ import annotations


def test_logging_import():
    from registry_api.logging import get_error_logger, get_logger

    logger = get_logger("test")
    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")
    logger.info("test_message", key="value")

    errors = get_error_logger()
    errors.error("test_error", detail="smoke")


def test_error_channel_ignores_log_level(capsys):
    """Error channel writes survive a configuration that filters everything below CRITICAL."""
    import logging

    import structlog

    from registry_api.logging import get_error_logger

    previous = structlog.get_config()
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    try:
        get_error_logger().error("internal_server_error", message="storage down")
    finally:
        structlog.configure(**previous)
    assert "storage down" in capsys.readouterr().err
