"""Services module for snapctl.

This module contains the client for the CloudAPI endpoint that owns
instances and their snapshots.
"""

from .cloudapi import CloudApiClient

__all__ = [
    "CloudApiClient",
]
