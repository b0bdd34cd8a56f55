from __future__ import annotations

from types import SimpleNamespace

import pytest

from chat_relay.core.config_resolver import ConfigResolver, SettingsKey


def test_request_scope_wins_over_process_env() -> None:
    resolver = ConfigResolver(process_env={"DEEPSEEK_MODEL": "from-process"})
    value = resolver.resolve(SettingsKey.MODEL, {"DEEPSEEK_MODEL": "from-request"})
    assert value == "from-request"


@pytest.mark.parametrize("request_value", [None, "", "   ", "\n\t"])
def test_blank_or_absent_request_value_falls_through_to_process_env(
    request_value: str | None,
) -> None:
    scope = {} if request_value is None else {"DEEPSEEK_API_KEY": request_value}
    resolver = ConfigResolver(process_env={"DEEPSEEK_API_KEY": "sk-process"})
    assert resolver.resolve(SettingsKey.API_KEY, scope) == "sk-process"


def test_blank_everywhere_resolves_to_none() -> None:
    resolver = ConfigResolver(process_env={"DEEPSEEK_BASE_URL": "  "})
    assert resolver.resolve(SettingsKey.BASE_URL, {"DEEPSEEK_BASE_URL": ""}) is None
    assert resolver.resolve(SettingsKey.BASE_URL) is None


def test_request_scope_may_be_an_attribute_object() -> None:
    bindings = SimpleNamespace(DEEPSEEK_TIMEOUT_MS="1500")
    resolver = ConfigResolver(process_env={"DEEPSEEK_TIMEOUT_MS": "9000"})
    assert resolver.resolve(SettingsKey.TIMEOUT_MS, bindings) == "1500"
    # Attributes the bindings object lacks fall through.
    assert resolver.resolve(SettingsKey.MODEL, bindings) is None


def test_non_string_binding_is_ignored() -> None:
    resolver = ConfigResolver(process_env={"DEEPSEEK_TIMEOUT_MS": "9000"})
    assert resolver.resolve(SettingsKey.TIMEOUT_MS, {"DEEPSEEK_TIMEOUT_MS": 1500}) == "9000"


def test_defaults_to_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEEPSEEK_MODEL", "deepseek-reasoner")
    assert ConfigResolver().resolve(SettingsKey.MODEL) == "deepseek-reasoner"


def test_value_is_returned_untrimmed() -> None:
    resolver = ConfigResolver(process_env={})
    assert resolver.resolve(SettingsKey.MODEL, {"DEEPSEEK_MODEL": " m "}) == " m "
