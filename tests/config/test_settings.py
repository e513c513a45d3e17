"""Tests for CalexprSettings: defaults, env vars and CLI overrides."""

import pytest
from pydantic import ValidationError

from calexpr.config.settings import CalexprSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CALEXPR_ITERATION_CAP", "CALEXPR_VERBOSE", "CALEXPR_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


class TestCalexprSettings:
    def test_defaults(self) -> None:
        settings = CalexprSettings.from_cli()
        assert settings.iteration_cap == 100
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self) -> None:
        settings = CalexprSettings.from_cli()
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALEXPR_ITERATION_CAP", "12")
        assert CalexprSettings.from_cli().iteration_cap == 12

    def test_cli_flag_beats_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALEXPR_ITERATION_CAP", "12")
        assert CalexprSettings.from_cli(iteration_cap=3).iteration_cap == 3

    def test_unset_flags_do_not_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """None means the flag was not passed on the command line."""
        monkeypatch.setenv("CALEXPR_VERBOSE", "true")
        settings = CalexprSettings.from_cli(verbose=None, iteration_cap=None)
        assert settings.verbose is True
        assert settings.iteration_cap == 100

    def test_cap_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CalexprSettings.from_cli(iteration_cap=0)
