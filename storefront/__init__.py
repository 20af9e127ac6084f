"""Embedded storefront backend: seed datasets plus a durable local overlay behind a REST-shaped router."""

from .api.routing import UNHANDLED
from .backend import Backend, build_backend
from .schemas.envelope import ListEnvelope

__version__ = "0.1.0"

__all__ = ["UNHANDLED", "Backend", "build_backend", "ListEnvelope", "__version__"]
