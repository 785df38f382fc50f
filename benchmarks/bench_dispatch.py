"""Benchmark of dispatch overhead.

Measures:
- Direct adapter call vs. Registry.dispatch for each built-in format
- try_dispatch on failing input
"""

import time

from formatmux import Registry, decode_json, decode_toml, decode_yaml

JSON_TEXT = '{"name": "bench", "values": [1, 2, 3], "nested": {"ok": true}}'
TOML_TEXT = 'name = "bench"\nvalues = [1, 2, 3]\n[nested]\nok = true\n'
YAML_TEXT = "name: bench\nvalues: [1, 2, 3]\nnested:\n  ok: true\n"


def _time_us(fn, iterations):
  start = time.perf_counter()
  for _ in range(iterations):
    fn()
  elapsed = time.perf_counter() - start
  return elapsed / iterations * 1_000_000  # microseconds


def benchmark_formats():
  """Compare direct adapter calls with dispatch through a Registry."""
  registry = Registry()
  cases = [
    ("json", decode_json, JSON_TEXT, 50000),
    ("toml", decode_toml, TOML_TEXT, 20000),
    ("yaml", decode_yaml, YAML_TEXT, 2000),
  ]
  results = {}
  for identifier, adapter, text, iterations in cases:
    direct = _time_us(lambda: adapter(text), iterations)
    dispatched = _time_us(lambda: registry.dispatch(identifier, text), iterations)
    results[identifier] = {
      "direct_us": direct,
      "dispatch_us": dispatched,
      "overhead_us": dispatched - direct,
    }
  return results


def benchmark_failures():
  """Cost of a failing decode reported as a result value."""
  registry = Registry()
  iterations = 20000
  per_call = _time_us(lambda: registry.try_dispatch("json", "[1, 2, 3]"), iterations)
  return {"time_us": per_call, "iterations": iterations}


def main():
  print("=" * 60)
  print("formatmux dispatch benchmark")
  print("=" * 60)

  for identifier, result in benchmark_formats().items():
    print(
      f"{identifier:>5}: direct {result['direct_us']:8.2f} us"
      f"  dispatch {result['dispatch_us']:8.2f} us"
      f"  overhead {result['overhead_us']:6.2f} us"
    )

  failure = benchmark_failures()
  print(f"try_dispatch failure: {failure['time_us']:.2f} us")


if __name__ == "__main__":
  main()
