"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The single ``commands`` domain exposes a router defined
in ``api/v1/endpoints``; persistence, mapping and validation live in
``services`` and the wire shapes in ``schemas``.  Versioning is
handled by grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
