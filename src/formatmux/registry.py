"""Registry mapping format identifiers to decode functions.

Example:
    from formatmux import Registry

    registry = Registry()
    registry.dispatch("yaml", "name: demo\\nvalue: 42\\n")
    # {'name': 'demo', 'value': 42}

A Registry is safe to read from several threads once registration is done.
It holds no lock, so callers must serialize ``register`` themselves if it can
race with other calls.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from formatmux.adapters import decode_json, decode_toml, decode_yaml
from formatmux.errors import FormatError, UnknownFormatError

if TYPE_CHECKING:
  from formatmux.typedefs import DecodeFunc, Document

__all__ = ["DecodeResult", "Registry"]


@dataclass(frozen=True, slots=True)
class DecodeResult:
  """Outcome of ``Registry.try_dispatch``: exactly one field is set."""

  data: Document | None = None
  error: FormatError | None = None

  def __post_init__(self) -> None:
    if (self.data is None) == (self.error is None):
      raise ValueError("DecodeResult needs exactly one of data or error")

  @property
  def ok(self) -> bool:
    return self.error is None


class Registry:
  """Maps format identifiers to decode functions.

  A new Registry already knows ``json``, ``toml``, ``tml``, ``yaml`` and
  ``yml``. Identifiers are matched exactly and case-sensitively.
  """

  def __init__(self) -> None:
    self._decoders: dict[str, DecodeFunc] = {}

    self.register("json", decode_json)
    self.register("toml", decode_toml)
    self.register("tml", decode_toml)
    self.register("yaml", decode_yaml)
    self.register("yml", decode_yaml)

  def __contains__(self, identifier: object) -> bool:
    return identifier in self._decoders

  def formats(self) -> list[str]:
    """Return the registered identifiers, sorted."""
    return sorted(self._decoders)

  def register(self, identifier: str, decode_fn: DecodeFunc) -> DecodeFunc:
    """Bind ``decode_fn`` to ``identifier``, replacing any existing binding.

    Returns:
      ``decode_fn`` unchanged.
    """
    self._decoders[identifier] = decode_fn
    return decode_fn

  def handler(self, identifier: str) -> Callable[[DecodeFunc], DecodeFunc]:
    """Decorator form of ``register``.

    Usage:
      ```python
      @registry.handler("json5")
      def decode_json5(text: str) -> dict[str, Any]:
          ...
      ```
    """

    def decorator(decode_fn: DecodeFunc) -> DecodeFunc:
      return self.register(identifier, decode_fn)

    return decorator

  def dispatch(self, identifier: str, text: str) -> Document:
    """Decode ``text`` with the decoder bound to ``identifier``.

    The decoder's return value and exceptions pass through unchanged.

    Args:
      identifier: Format identifier, e.g. ``"json"``.
      text: Raw text to decode.

    Returns:
      Decoded mapping.

    Raises:
      UnknownFormatError: If nothing is registered under ``identifier``.
      DecodeError: If the decoder rejects ``text``.
    """
    try:
      decode_fn = self._decoders[identifier]
    except KeyError:
      raise UnknownFormatError(identifier) from None
    return decode_fn(text)

  def try_dispatch(self, identifier: str, text: str) -> DecodeResult:
    """Like ``dispatch``, but report failure as a value instead of raising."""
    try:
      return DecodeResult(data=self.dispatch(identifier, text))
    except FormatError as e:
      return DecodeResult(error=e)

  def load(self, path: str | Path, identifier: str | None = None) -> Document:
    """Read a UTF-8 file and decode it.

    Args:
      path: File to read.
      identifier: Format identifier. Defaults to the file suffix without the
        leading dot, so ``settings.yml`` is decoded as ``yml``.

    Returns:
      Decoded mapping.

    Raises:
      UnknownFormatError: If the identifier (or suffix) is not registered.
      DecodeError: If the decoder rejects the file contents.
      OSError: If the file cannot be read.
      UnicodeDecodeError: If the file is not valid UTF-8.
    """
    path = Path(path)
    if identifier is None:
      identifier = path.suffix.removeprefix(".")
    if identifier not in self._decoders:
      raise UnknownFormatError(identifier)
    return self.dispatch(identifier, path.read_text(encoding="utf-8"))
