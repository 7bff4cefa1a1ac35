"""
API package containing the HTTP routes.

``router.py`` aggregates the domain routers from ``endpoints`` and is
mounted under ``/api`` by ``create_app``.  Request dependencies (the
store, the services and the request payload) live in ``deps.py``.
"""
