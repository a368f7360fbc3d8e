"""Tests for simplevc.env — environment access with boolean coercion."""

import pytest

from simplevc.env import debug_enabled, env


class TestEnv:
    def test_unset_returns_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SIMPLEVC_TEST_KEY", raising=False)
        assert env("SIMPLEVC_TEST_KEY") is None
        assert env("SIMPLEVC_TEST_KEY", "fallback") == "fallback"

    @pytest.mark.parametrize("raw", ["true", "TRUE", "True", "1"])
    def test_truthy_strings(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("SIMPLEVC_TEST_KEY", raw)
        assert env("SIMPLEVC_TEST_KEY") is True

    @pytest.mark.parametrize("raw", ["false", "FALSE", "0"])
    def test_falsy_strings(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("SIMPLEVC_TEST_KEY", raw)
        assert env("SIMPLEVC_TEST_KEY", True) is False

    def test_null_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIMPLEVC_TEST_KEY", "null")
        assert env("SIMPLEVC_TEST_KEY", "fallback") is None

    def test_other_strings_are_raw(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIMPLEVC_TEST_KEY", "production")
        assert env("SIMPLEVC_TEST_KEY") == "production"

    def test_empty_string_is_raw(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIMPLEVC_TEST_KEY", "")
        assert env("SIMPLEVC_TEST_KEY", "fallback") == ""


class TestDebugEnabled:
    def test_off_by_default(self) -> None:
        assert debug_enabled() is False

    def test_on(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEBUG", "true")
        assert debug_enabled() is True

    def test_non_boolean_string_is_off(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEBUG", "yes")
        assert debug_enabled() is False
