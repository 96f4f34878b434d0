"""Tests for finch.__main__ — command-line configuration of the demo server."""

import argparse

import pytest

from finch.__main__ import build_config, main
from finch.demo.app import TEMPLATES_DIR


def _args(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {"host": None, "port": None, "debug": False}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildConfig:
    def test_flags_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINCH_PORT", "9000")
        monkeypatch.setenv("FINCH_SECRET_KEY", "k")
        config = build_config(_args(port=7000, host="0.0.0.0", debug=True))
        assert config.port == 7000
        assert config.host == "0.0.0.0"
        assert config.debug is True
        assert config.secret_key == "k"
        assert config.template_dir == TEMPLATES_DIR

    def test_random_key_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FINCH_SECRET_KEY", raising=False)
        config = build_config(_args())
        assert len(config.secret_key) == 64

    def test_main_runs_demo(self, monkeypatch: pytest.MonkeyPatch) -> None:
        served = []
        monkeypatch.setenv("FINCH_SECRET_KEY", "k")
        monkeypatch.setattr(
            "finch.app.App.run", lambda self, host=None, port=None: served.append(self)
        )
        main(["--port", "8181"])
        assert len(served) == 1
        assert served[0].config.port == 8181
