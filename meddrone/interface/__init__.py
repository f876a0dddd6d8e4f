"""Mini README: HTTP interface package.

``web_app.create_application`` builds the FastAPI dispatch centre; ``schemas``
holds the request bodies it accepts.
"""

from .web_app import create_application

__all__ = ["create_application"]
