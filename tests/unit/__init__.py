"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real database; use the in-memory unit of work and fakes at boundaries.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
