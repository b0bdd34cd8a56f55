"""LLM integration layer.

This package is intentionally small:
- No prompt/reply logging.
- Upstream settings are resolved per request, not at import time.
- Upstream failures are values (see `results`), never exceptions.
"""
