"""
CountData — key-protected HTTP API over a date-indexed counter table.

One table (date, tf_count, da_count) in PostgreSQL, exposed as CRUD routes
behind a shared API key. Modules: config, logging, database, API server.
"""

__version__ = "0.1.0"
