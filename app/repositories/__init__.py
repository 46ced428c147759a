"""
Repository package for data access layers.

Functions here take an `AsyncSession` and only read or stage rows; committing
is left to the service that owns the transaction.
"""
