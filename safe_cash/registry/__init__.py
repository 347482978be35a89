"""Store and employee registry."""

from safe_cash.registry.stores import (
    DEMO_EMPLOYEES,
    DEMO_STORES,
    StoreRegistry,
    UnknownStoreError,
)

__all__ = [
    "DEMO_EMPLOYEES",
    "DEMO_STORES",
    "StoreRegistry",
    "UnknownStoreError",
]
