from __future__ import annotations

import pytest

from xfetch import DEFAULT_BETA, DEFAULT_SETTINGS, XFetchConfigError, XFetchSettings


def test_default_settings():
    assert DEFAULT_SETTINGS.beta == DEFAULT_BETA == 1.0


def test_from_env_reads_beta(monkeypatch):
    monkeypatch.setenv("XFETCH_BETA", "2.5")
    assert XFetchSettings.from_env().beta == 2.5


def test_from_env_without_variable_uses_defaults(monkeypatch):
    monkeypatch.delenv("XFETCH_BETA", raising=False)
    assert XFetchSettings.from_env() == XFetchSettings()

    monkeypatch.setenv("XFETCH_BETA", "  ")
    assert XFetchSettings.from_env().beta == DEFAULT_BETA


@pytest.mark.parametrize("raw", ["abc", "0", "-1", "nan", "inf"])
def test_from_env_rejects_invalid_beta(monkeypatch, raw: str):
    monkeypatch.setenv("XFETCH_BETA", raw)
    with pytest.raises(XFetchConfigError):
        XFetchSettings.from_env()


def test_settings_validate_on_construction():
    with pytest.raises(XFetchConfigError):
        XFetchSettings(beta=0.0)
