from .rate_limit import RateLimitMiddleware
from .request_logging import LoggingMiddleware

__all__ = ["RateLimitMiddleware", "LoggingMiddleware"]
