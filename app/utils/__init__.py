"""Utils package initialization."""
from app.utils.logger import get_logger, LayerLogger, set_trace_id, get_trace_id
from app.utils.formatting import format_decimal, to_decimal

__all__ = ["get_logger", "LayerLogger", "set_trace_id", "get_trace_id", "format_decimal", "to_decimal"]
