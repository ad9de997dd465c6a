"""
Service Provider Module

Records of the airlines, rail operators and bus companies that run transports.
"""

from .router import router
from .service import ServiceProviderService

__all__ = ["router", "ServiceProviderService"]
