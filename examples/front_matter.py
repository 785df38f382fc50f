"""Example: decoding document front matter with formatmux.

Static site generators put metadata at the top of a page, fenced by a marker
that names the format: ``---`` for YAML, ``+++`` for TOML, and ``;;;`` for
JSON. Splitting the block off is the caller's job; formatmux only decodes it.
"""

from __future__ import annotations

import json
from typing import Any

from formatmux import DecodeError, Registry, decode_json

FENCES = {"---": "yaml", "+++": "toml", ";;;": "json"}

PAGES = [
  """---
title: Hello
tags: [intro, yaml]
---
Body text.
""",
  """+++
title = "Release notes"
date = 2024-03-01
[author]
name = "Ada"
+++
Body text.
""",
  """;;;
{"title": "Raw JSON", "draft": true}
;;;
Body text.
""",
  """;;;
["not", "a", "mapping"]
;;;
Broken page.
""",
]


def split_front_matter(page: str) -> tuple[str, str, str]:
  """Return (identifier, front matter, body) for a fenced page."""
  fence, _, rest = page.partition("\n")
  identifier = FENCES[fence.strip()]
  front, _, body = rest.partition(f"{fence.strip()}\n")
  return identifier, front, body


def main() -> None:
  registry = Registry()

  # JSON front matter in this site is wrapped in braces only when needed.
  @registry.handler("json")
  def decode_loose_json(text: str) -> dict[str, Any]:
    stripped = text.strip()
    if not stripped.startswith(("{", "[")):
      stripped = "{" + stripped + "}"
    return decode_json(stripped)

  for page in PAGES:
    identifier, front, _ = split_front_matter(page)
    result = registry.try_dispatch(identifier, front)
    if result.ok:
      print(f"[{identifier}] {json.dumps(result.data, default=str)}")
    elif isinstance(result.error, DecodeError):
      print(f"[{identifier}] skipped: {result.error.reason}")


if __name__ == "__main__":
  main()
