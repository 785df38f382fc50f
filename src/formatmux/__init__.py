"""formatmux - Decode JSON, TOML, and YAML text through one registry."""

__version__ = "0.1.0"

from formatmux.adapters import decode_json, decode_toml, decode_yaml
from formatmux.errors import DecodeError, FormatError, UnknownFormatError
from formatmux.registry import DecodeResult, Registry
from formatmux.typedefs import DecodedValue, DecodeFunc, Document

__all__ = [
  "DecodeError",
  "DecodeFunc",
  "DecodeResult",
  "DecodedValue",
  "Document",
  "FormatError",
  "Registry",
  "UnknownFormatError",
  "__version__",
  "decode_json",
  "decode_toml",
  "decode_yaml",
]
