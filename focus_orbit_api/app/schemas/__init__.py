"""
Pydantic schema definitions for API payloads.

Each domain defines its own request and response models.  Schemas are
separated from the SQLite rows so the API representation (camelCase
JSON) is decoupled from persistence.
"""
