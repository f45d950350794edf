"""Domain layer for Paykit.

Contains the value objects exchanged between callers and transports.
"""

from .value_objects import EndpointData, MethodId, PublicKey, SupportedPayments

__all__ = [
    "EndpointData",
    "MethodId",
    "PublicKey",
    "SupportedPayments",
]
