"""
devlog.core — settings gate, logger facade, and shared infrastructure.

Modules:
    config      Settings gate (TOML + env vars)
    logger      DevLogger facade and line formatting
    exceptions  devlog-specific exception hierarchy
    constants   Severities, exit codes, filesystem layout
    store/      SQLite persistence for log rows
"""
