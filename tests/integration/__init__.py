"""Integration tests.

Purpose
- Exercise the SQLAlchemy adapters and bootstrap against real SQLite engines.

Guidelines
- Build engines with the shared fixtures so PRAGMAs and schema match production.
- Minimize mocking.
"""
