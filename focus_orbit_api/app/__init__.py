"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, logging, security, database,
errors), ``schemas`` (pydantic payloads), ``services`` (business logic
per store) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
