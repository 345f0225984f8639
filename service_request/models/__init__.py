"""Database models."""

from .submission import ServiceRequest, ServiceRequestCreate, ServiceRequestRead

__all__ = [
    "ServiceRequest",
    "ServiceRequestCreate",
    "ServiceRequestRead",
]
