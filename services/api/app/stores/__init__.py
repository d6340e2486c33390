"""Data stores for persistence and caching.

Stores handle:
- Relational DB: sessions, school and student repositories, ORM operations
- Redis: cache-aside entries with TTL

Stores return `StoreResult` instead of raising on backend failures.
No cache policy in stores - that belongs in services.
"""
