"""
Service layer.

Each service wraps the store operations for one domain.  Public methods
are coroutines; the blocking SQLite work they do runs in FastAPI's
thread pool so that a slow query never holds up other requests.
"""
