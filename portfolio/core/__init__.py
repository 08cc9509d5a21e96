"""
Core utilities shared across the portfolio site.

This package hosts configuration (env vars, paths) and the loguru setup.
Routers and services depend on these primitives instead of reading the
environment themselves.
"""
