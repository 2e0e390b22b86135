"""Mini README: Interactive interfaces (HTTP API) for Simple Accounting.

Exports the FastAPI application factory that serves the transaction API.
The command line launcher in ``run_accounting.py`` builds on this module.
"""

from .web_app import create_application

__all__ = ["create_application"]
