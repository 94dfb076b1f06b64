"""
Structured logging for Registry API.

JSON logs with timestamp, level and event_type. Use get_logger() in every
module; the operational error channel uses get_error_logger().
"""

from registry_api.logging.logger import get_error_logger, get_logger

__all__ = ["get_error_logger", "get_logger"]
