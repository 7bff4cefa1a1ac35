"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Users and exercises are the only two domains; each has a
schema module, a service and a router defined in ``api/endpoints``.
"""

from .main import app  # noqa: F401
