"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging.
- Configurable via environment variables; the API key is never part of the source.
- Treated as a pure/stateless function by callers.
"""
