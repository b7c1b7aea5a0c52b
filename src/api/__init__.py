"""
Remote application service: interface, HTTP client and HTTP API.
"""

from .base import RemoteApplicationService
from .client import ApplicationsClient
from .server import create_app, run_server

__all__ = [
    'RemoteApplicationService',
    'ApplicationsClient',
    'create_app',
    'run_server',
]
