"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from webtext.api import create_app

    uvicorn --factory webtext.api:create_app
"""

from webtext.api.app import create_app

__all__ = ["create_app"]
