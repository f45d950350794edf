"""Application layer: the public Paykit operations."""

from .endpoints import (
    get_known_contacts,
    get_payment_endpoint,
    get_payment_list,
    map_transport_error,
    remove_payment_endpoint,
    set_payment_endpoint,
)

__all__ = [
    "get_payment_list",
    "get_payment_endpoint",
    "get_known_contacts",
    "set_payment_endpoint",
    "remove_payment_endpoint",
    "map_transport_error",
]
