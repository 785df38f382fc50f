"""Decode adapters for JSON, TOML, and YAML text."""

from __future__ import annotations

from collections.abc import Hashable
import functools
import json
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from formatmux.errors import DecodeError

if TYPE_CHECKING:
  from formatmux.typedefs import Document

__all__ = ["decode_json", "decode_toml", "decode_yaml"]

_DOCUMENT_ADAPTER: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


def _ensure_mapping(format_name: str, value: object) -> Document:
  """Check that a decoded value is a mapping keyed by strings.

  Args:
    format_name: Name used in the error message.
    value: Whatever the parser returned.

  Returns:
    The value as a Document.

  Raises:
    DecodeError: If the top level is not a mapping or has non-string keys.
  """
  if not isinstance(value, dict):
    raise DecodeError(
      format_name,
      f"top-level value must be a mapping, got {type(value).__name__}",
    )
  try:
    return _DOCUMENT_ADAPTER.validate_python(value, strict=True)
  except ValidationError as e:
    raise DecodeError.from_validation(format_name, e) from e


def decode_json(text: str) -> Document:
  """Decode a JSON object.

  Args:
    text: JSON source.

  Returns:
    Decoded mapping.

  Raises:
    DecodeError: If the text is malformed or is not a JSON object.
  """
  try:
    value = json.loads(text)
  except json.JSONDecodeError as e:
    raise DecodeError("json", str(e), e) from e
  return _ensure_mapping("json", value)


def decode_toml(text: str) -> Document:
  """Decode a TOML document.

  Uses tomllib from Python 3.11+ stdlib.
  """
  try:
    return tomllib.loads(text)
  except tomllib.TOMLDecodeError as e:
    raise DecodeError("toml", str(e), e) from e


@functools.cache
def _yaml_loader() -> type[Any]:
  """Build a safe loader that keeps scalar mapping keys as their source text.

  PyYAML resolves keys like ``on``, ``yes`` and ``null`` to bool or None;
  front matter expects them as plain strings.

  Raises:
    ImportError: If PyYAML is not installed.
  """
  try:
    import yaml
  except ImportError as e:
    raise ImportError(
      "PyYAML is required for YAML support. Install with: pip install pyyaml"
    ) from e

  class StringKeyLoader(yaml.SafeLoader):
    def construct_mapping(
      self, node: yaml.MappingNode, deep: bool = False
    ) -> dict[Any, Any]:
      self.flatten_mapping(node)
      mapping: dict[Any, Any] = {}
      for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode):
          key = str(key_node.value)
        else:
          key = self.construct_object(key_node, deep=deep)
          if not isinstance(key, Hashable):
            raise yaml.constructor.ConstructorError(
              "while constructing a mapping",
              node.start_mark,
              "found unhashable key",
              key_node.start_mark,
            )
        mapping[key] = self.construct_object(value_node, deep=deep)
      return mapping

  return StringKeyLoader


def decode_yaml(text: str) -> Document:
  """Decode a single YAML document into a mapping.

  Requires optional PyYAML dependency. An empty document decodes to an
  empty mapping; a sequence or scalar at the top level is rejected. Scalar
  keys are kept as written, so ``on: push`` gives ``{"on": "push"}``.

  Args:
    text: YAML source.

  Returns:
    Decoded mapping.

  Raises:
    ImportError: If PyYAML is not installed.
    DecodeError: If the text is malformed, holds several documents, is not
      a mapping, or uses a collection as a key.
  """
  loader = _yaml_loader()
  import yaml

  try:
    value = yaml.load(text, Loader=loader)
  except yaml.YAMLError as e:
    raise DecodeError("yaml", str(e), e) from e
  if value is None:
    return {}
  return _ensure_mapping("yaml", value)
