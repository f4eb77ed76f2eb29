"""Backend clients for workout-tracker."""

from .api import ApiClient
from .base import AnonymousDataTransport

__all__ = ["AnonymousDataTransport", "ApiClient"]
