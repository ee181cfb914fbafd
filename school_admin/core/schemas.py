"""Shared request constraints."""

# Ids are 32-bit integer keys; larger values cannot reach the database.
MAX_ID = 2**31 - 1
