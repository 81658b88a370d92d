from .log import configure_logger, get_logger, trace_stage

__all__ = ["configure_logger", "get_logger", "trace_stage"]
