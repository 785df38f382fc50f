#!/usr/bin/env python3
"""Decode a JSON, TOML, or YAML file and print it as JSON.

The format is taken from ``--format`` or, failing that, from the file
suffix. Reading from stdin requires ``--format``.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from formatmux.errors import FormatError
from formatmux.registry import Registry

logger = logging.getLogger(__name__)


def _read_input(path: str, identifier: str | None) -> tuple[str, str]:
  """Return the identifier to dispatch on and the raw text.

  Args:
    path: File path, or "-" for stdin.
    identifier: Explicit format identifier, if given.

  Returns:
    Tuple of (identifier, text).

  Raises:
    ValueError: If reading stdin without an explicit format.
  """
  if path == "-":
    if identifier is None:
      raise ValueError("--format is required when reading from stdin")
    logger.debug("Reading %s from stdin", identifier)
    return identifier, sys.stdin.read()

  file = Path(path)
  if identifier is None:
    identifier = file.suffix.removeprefix(".")
    logger.debug("Inferred format %r from %s", identifier, file)
  return identifier, file.read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
  """Decode the input and write it to stdout as JSON."""
  parser = argparse.ArgumentParser(
    description="Decode a JSON, TOML, or YAML document and print it as JSON",
  )
  parser.add_argument(
    "path",
    nargs="?",
    default="-",
    help="File to decode, or - for stdin (default: -)",
  )
  parser.add_argument(
    "--format",
    "-f",
    dest="identifier",
    help="Format identifier (default: the file suffix)",
  )
  parser.add_argument(
    "--indent",
    type=int,
    default=2,
    help="JSON indentation (default: 2)",
  )
  parser.add_argument(
    "--verbose",
    "-v",
    action="store_true",
    help="Enable verbose logging",
  )

  args = parser.parse_args(argv)
  verbose: bool = bool(args.verbose)

  # Configure logging
  log_level = logging.DEBUG if verbose else logging.INFO
  logging.basicConfig(level=log_level, format="%(message)s")

  registry = Registry()

  try:
    identifier, text = _read_input(args.path, args.identifier)
    data = registry.dispatch(identifier, text)
  except FormatError as e:
    logger.error("%s", e)
    if isinstance(e.__cause__, Exception):
      logger.debug("Caused by: %r", e.__cause__)
    return 1
  except OSError as e:
    logger.error("I/O error reading %s: %s", args.path, e)
    return 1
  except ValueError as e:
    logger.error("%s", e)
    return 1

  logger.debug("Decoded %d top-level key(s)", len(data))
  try:
    output = json.dumps(data, indent=args.indent, ensure_ascii=False, default=str)
  except (TypeError, ValueError) as e:
    logger.error("Cannot render %s as JSON: %s", args.path, e)
    return 1
  print(output)
  return 0


if __name__ == "__main__":
  sys.exit(main())
