"""
devlog test suite.

Tests are organized by layer:
    tests/unit/         Unit tests (settings, store, formatting, facade)
    tests/integration/  Integration tests (CLI end to end)

Run all tests:
    pytest

Run with coverage:
    pytest --cov=devlog
"""
