"""Exceptions raised by format decoding and dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, override

if TYPE_CHECKING:
  from pydantic import ValidationError

__all__ = [
  "DecodeError",
  "FormatError",
  "UnknownFormatError",
]


class FormatError(Exception):
  """Base class for all formatmux errors."""


class UnknownFormatError(FormatError, KeyError):
  """No decoder is registered under the requested identifier."""

  def __init__(self, identifier: str) -> None:
    self.identifier = identifier
    super().__init__(identifier)

  @override
  def __str__(self) -> str:
    return f"no decoder registered for format {self.identifier!r}"


class DecodeError(FormatError, ValueError):
  """Text could not be decoded into a mapping.

  Raised for syntax errors reported by the underlying parser and for
  documents whose top-level value is not a mapping with string keys. The
  parser's exception, when there is one, is kept as ``original`` and chained
  as ``__cause__``.

  Example:
    Instead of: "Input should be a valid dictionary"
    Shows: "Could not decode json: top-level value must be a mapping, got list"
  """

  def __init__(
    self,
    format_name: str,
    reason: str,
    original: BaseException | None = None,
  ) -> None:
    self.format_name = format_name
    self.reason = reason
    self.original = original
    super().__init__(f"Could not decode {format_name}: {reason}")

  @classmethod
  def from_validation(
    cls, format_name: str, original: ValidationError
  ) -> DecodeError:
    """Build a DecodeError from a pydantic shape-check failure."""
    lines: list[str] = []
    for err in original.errors():
      loc = ".".join(str(x) for x in err["loc"])
      msg = err["msg"]
      lines.append(f"{loc}: {msg}" if loc else msg)
    return cls(format_name, "; ".join(lines), original)
