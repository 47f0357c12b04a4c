"""Data stores for persistence.

Stores handle:
- Key-value backends: Redis (production) and in-memory (tests, local runs)
- Post records and the newest-first ordering index

No validation or response shaping in stores - that belongs in services.
"""
