"""Settings for the command surface: CLI flags, env vars and defaults.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``CALEXPR_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings


class CalexprSettings(BaseSettings):
    """Frozen settings resolved once per CLI invocation.

    Attributes:
        iteration_cap: Most moments printed for an iterator without an
            until clause.
        verbose: Enable DEBUG logging.
        log_json: Emit JSON log lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CALEXPR_",
    }

    iteration_cap: int = Field(default=100, ge=1)
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> CalexprSettings:
        """Build settings, letting only flags the user actually passed override."""
        return cls(**{k: v for k, v in cli_flags.items() if v is not None})
