"""
Service layer abstraction.

Each service encapsulates the business logic of one per-user store
(profiles, settings, streaks, sessions, goals, roles) plus the
statistics computed over them.  API handlers call services and never
touch the database directly.
"""
