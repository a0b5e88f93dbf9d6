"""
API server package — HTTP/JSON interface over count_data_table.

Handles API key authentication and request logging, and delegates
to the database store for data.
"""
