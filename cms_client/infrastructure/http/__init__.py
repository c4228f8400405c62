"""HTTP infrastructure package."""

from .rest_gateway import RestGateway

__all__ = ["RestGateway"]
