"""Core type definitions for formatmux."""

from datetime import date, datetime, time
from typing import Protocol

__all__ = [
  "DecodeFunc",
  "DecodedValue",
  "Document",
]


# TOML and YAML both define native date/time scalars.
type DecodedValue = (
  str
  | int
  | float
  | bool
  | None
  | datetime
  | date
  | time
  | list[DecodedValue]
  | dict[str, DecodedValue]
)

type Document = dict[str, DecodedValue]


class DecodeFunc(Protocol):
  """Callable that turns raw text into a Document.

  Implementations must be pure and raise ``DecodeError`` on failure.
  """

  def __call__(self, text: str, /) -> Document: ...
