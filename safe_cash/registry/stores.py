"""
Store and Employee Registry

A fixed list of stores and the employees who work at each one.
The registry never changes while the application runs.
"""

from typing import Iterable, Optional

from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import Employee, Store


DEMO_STORES = (
    Store(id="store-a", name="Greenpoint"),
    Store(id="store-b", name="Long Island City"),
)

DEMO_EMPLOYEES = (
    Employee(store_id="store-a", name="Ava Patel"),
    Employee(store_id="store-a", name="Marcus Lee"),
    Employee(store_id="store-b", name="Sofia Gomez"),
    Employee(store_id="store-b", name="Noah Johnson"),
)


class UnknownStoreError(SafeCashError):
    """A store id that is not in the registry."""

    def __init__(self, store_id: str):
        self.store_id = store_id
        super().__init__(f"Unknown store: {store_id}")


class StoreRegistry:
    """
    Lookup over the registered stores and their employees.

    Store order is significant: the first store is the default public
    selection.
    """

    def __init__(
        self,
        stores: Iterable[Store] = DEMO_STORES,
        employees: Iterable[Employee] = DEMO_EMPLOYEES,
    ):
        self._stores = tuple(stores)
        if not self._stores:
            raise ValueError("At least one store must be registered")

        self._by_id = {store.id: store for store in self._stores}
        if len(self._by_id) != len(self._stores):
            raise ValueError("Store ids must be unique")

        self._employees = tuple(employees)
        for employee in self._employees:
            if employee.store_id not in self._by_id:
                raise UnknownStoreError(employee.store_id)

    @property
    def stores(self) -> tuple[Store, ...]:
        return self._stores

    @property
    def first_store(self) -> Store:
        return self._stores[0]

    def has_store(self, store_id: Optional[str]) -> bool:
        return store_id in self._by_id

    def get_store(self, store_id: str) -> Store:
        """Return the store, raising UnknownStoreError if it is not registered."""
        try:
            return self._by_id[store_id]
        except KeyError:
            raise UnknownStoreError(store_id) from None

    def store_name(self, store_id: str) -> str:
        store = self._by_id.get(store_id)
        return store.name if store else "Store"

    def employees_for(self, store_id: str) -> list[Employee]:
        """Employees of one store, in registration order."""
        return [e for e in self._employees if e.store_id == store_id]

    def is_employee_of(self, store_id: str, employee_name: str) -> bool:
        return any(e.name == employee_name for e in self.employees_for(store_id))
