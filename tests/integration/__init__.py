"""
Integration tests package.

Exercise the SQL adapters against SQLite (aiosqlite):
- Booking flows end to end through the use cases
- Unique earn key and savepoint handling on duplicate awards
- Compare-and-set on booking lock_version
- Deadlock detection and retry
"""
