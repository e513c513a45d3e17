"""Settings and logging for the calexpr command surface."""

from calexpr.config.logging import configure_logging
from calexpr.config.settings import CalexprSettings

__all__ = ["CalexprSettings", "configure_logging"]
