"""Tests for Registry registration and dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from formatmux import (
  DecodeError,
  DecodeResult,
  Registry,
  UnknownFormatError,
  decode_json,
  decode_toml,
  decode_yaml,
)

VALID_TOML = 'title = "demo"\n[owner]\nname = "ada"\n'

DOCUMENTS = [
  ("json", decode_json, '{"a": 1, "b": [1, 2]}'),
  ("toml", decode_toml, VALID_TOML),
  ("tml", decode_toml, VALID_TOML),
  ("yaml", decode_yaml, "a: 1\nb:\n  - 1\n  - 2\n"),
  ("yml", decode_yaml, "a: 1\nb:\n  - 1\n  - 2\n"),
]


class TestBuiltins:
  """A fresh Registry carries the five built-in identifiers."""

  def test_builtin_identifiers(self) -> None:
    assert Registry().formats() == ["json", "tml", "toml", "yaml", "yml"]

  def test_contains(self) -> None:
    registry = Registry()
    assert "json" in registry
    assert "JSON" not in registry
    assert "json5" not in registry

  def test_registries_are_independent(self) -> None:
    """Registering on one registry does not leak into another."""
    first = Registry()
    second = Registry()
    first.register("json5", decode_json)

    assert "json5" in first
    assert "json5" not in second

  @pytest.mark.parametrize(("identifier", "adapter", "text"), DOCUMENTS)
  def test_dispatch_matches_adapter(
    self, identifier: str, adapter: Any, text: str
  ) -> None:
    """Dispatching equals calling the bound adapter directly."""
    if adapter is decode_yaml:
      pytest.importorskip("yaml")
    assert Registry().dispatch(identifier, text) == adapter(text)

  def test_dispatch_json(self) -> None:
    result = Registry().dispatch("json", '{"a":1,"b":[1,2]}')
    assert result == {"a": 1, "b": [1, 2]}

  def test_dispatch_yaml(self) -> None:
    pytest.importorskip("yaml")
    result = Registry().dispatch("yaml", "a: 1\nb:\n  - 1\n  - 2\n")
    assert result == {"a": 1, "b": [1, 2]}

  def test_dispatch_toml(self) -> None:
    result = Registry().dispatch("toml", "a = 1\n[b]\nc = 2\n")
    assert result == {"a": 1, "b": {"c": 2}}

  def test_toml_alias_equivalence(self) -> None:
    registry = Registry()
    assert registry.dispatch("tml", VALID_TOML) == registry.dispatch(
      "toml", VALID_TOML
    )

  def test_yaml_alias_equivalence(self) -> None:
    pytest.importorskip("yaml")
    registry = Registry()
    text = "name: demo\nitems: [1, 2]\n"
    assert registry.dispatch("yml", text) == registry.dispatch("yaml", text)


class TestDispatchFailures:
  """Unknown identifiers and decoder failures."""

  @pytest.mark.parametrize("text", ["", "{}", "a: 1", "not anything"])
  def test_unknown_format(self, text: str) -> None:
    with pytest.raises(UnknownFormatError) as exc_info:
      Registry().dispatch("nonexistent-id", text)

    assert exc_info.value.identifier == "nonexistent-id"

  def test_identifiers_are_case_sensitive(self) -> None:
    with pytest.raises(UnknownFormatError):
      Registry().dispatch("JSON", "{}")

  def test_unknown_format_is_key_error(self) -> None:
    """Callers catching KeyError still see unknown formats."""
    with pytest.raises(KeyError):
      Registry().dispatch("ini", "a=1")

  def test_malformed_json(self) -> None:
    with pytest.raises(DecodeError):
      Registry().dispatch("json", "not valid json{{{")

  def test_top_level_array(self) -> None:
    with pytest.raises(DecodeError):
      Registry().dispatch("json", "[1,2,3]")

  def test_decoder_errors_pass_through(self) -> None:
    """Exceptions from a decoder reach the caller unchanged."""
    registry = Registry()
    error = DecodeError("custom", "always fails")

    def failing(text: str) -> dict[str, Any]:
      raise error

    registry.register("custom", failing)

    with pytest.raises(DecodeError) as exc_info:
      registry.dispatch("custom", "anything")

    assert exc_info.value is error


class TestRegister:
  """Registering custom decoders."""

  def test_register_new_identifier(self) -> None:
    """The custom function is called once and its result returned as is."""
    registry = Registry()
    calls: list[str] = []
    sentinel: dict[str, Any] = {"decoded": True}

    def decode_json5(text: str) -> dict[str, Any]:
      calls.append(text)
      return sentinel

    registry.register("json5", decode_json5)
    result = registry.dispatch("json5", "{a: 1}")

    assert result is sentinel
    assert calls == ["{a: 1}"]

  def test_register_returns_function(self) -> None:
    registry = Registry()
    assert registry.register("js", decode_json) is decode_json

  def test_override_builtin(self) -> None:
    """Re-registering json replaces the built-in adapter outright."""
    registry = Registry()
    calls: list[str] = []

    def replacement(text: str) -> dict[str, Any]:
      calls.append(text)
      return {"replaced": text}

    registry.register("json", replacement)

    assert registry.dispatch("json", "[1,2,3]") == {"replaced": "[1,2,3]"}
    assert registry.dispatch("json", "{}") == {"replaced": "{}"}
    assert calls == ["[1,2,3]", "{}"]

  def test_override_leaves_aliases_alone(self) -> None:
    """Replacing toml does not touch tml."""
    registry = Registry()
    registry.register("toml", lambda text: {"replaced": True})

    assert registry.dispatch("toml", "a = 1") == {"replaced": True}
    assert registry.dispatch("tml", "a = 1") == {"a": 1}

  def test_empty_identifier(self) -> None:
    registry = Registry()
    registry.register("", decode_json)
    assert registry.dispatch("", '{"k": "v"}') == {"k": "v"}

  def test_handler_decorator(self) -> None:
    registry = Registry()

    @registry.handler("env")
    def decode_env(text: str) -> dict[str, Any]:
      pairs = (line.split("=", 1) for line in text.splitlines() if line)
      return {key: value for key, value in pairs}

    assert registry.dispatch("env", "A=1\nB=two\n") == {"A": "1", "B": "two"}
    assert decode_env("C=3") == {"C": "3"}


class TestTryDispatch:
  """Result-value form of dispatch."""

  def test_success(self) -> None:
    result = Registry().try_dispatch("json", '{"a": 1}')
    assert result == DecodeResult(data={"a": 1})
    assert result.ok
    assert result.error is None

  def test_decode_failure(self) -> None:
    result = Registry().try_dispatch("json", "[1,2,3]")
    assert not result.ok
    assert result.data is None
    assert isinstance(result.error, DecodeError)

  def test_unknown_format(self) -> None:
    result = Registry().try_dispatch("nonexistent-id", "")
    assert result.data is None
    assert isinstance(result.error, UnknownFormatError)

  def test_other_exceptions_propagate(self) -> None:
    """Only FormatError is turned into a result."""
    registry = Registry()

    def broken(text: str) -> dict[str, Any]:
      raise RuntimeError("bug in decoder")

    registry.register("broken", broken)

    with pytest.raises(RuntimeError, match="bug in decoder"):
      registry.try_dispatch("broken", "")

  @pytest.mark.parametrize(
    "kwargs",
    [{}, {"data": {"a": 1}, "error": DecodeError("json", "bad")}],
  )
  def test_result_needs_exactly_one_field(self, kwargs: dict[str, Any]) -> None:
    """A result with neither or both fields set cannot be built."""
    with pytest.raises(ValueError, match="exactly one"):
      DecodeResult(**kwargs)

  def test_empty_mapping_is_a_success(self) -> None:
    result = DecodeResult(data={})
    assert result.ok
