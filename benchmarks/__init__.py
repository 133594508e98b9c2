"""
Benchmark suite for jsonvfy validation performance.

Compares jsonvfy against full JSON parsers, which do strictly more work:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures validation speed and peak memory across document shapes.
"""
