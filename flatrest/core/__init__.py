"""
Core utilities shared across the flatrest service.

This package hosts configuration (env vars, data directory, JSON formatting)
and cross-cutting pieces such as logging setup and the access-log middleware.
Routers and services depend on these primitives instead of reading the
environment themselves.
"""
