"""
Structured logging for CountData.

JSON logs with timestamp, level, event_type, logger name and request context.
Use get_logger() in every module so output stays aggregation-friendly.
"""

from countdata.count_logging.logger import bind_request_context, clear_request_context, get_logger

__all__ = ["bind_request_context", "clear_request_context", "get_logger"]
