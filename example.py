"""Example usage of the objectdiff comparison engine."""

from dataclasses import dataclass
from typing import Optional

from objectdiff import Comparable, EngineConfig, ObjectComparer


@dataclass
class Customer(Comparable):
    id: str
    name: str
    email: str
    age: Optional[int] = None
    updated_at: str = ""


# Record from the legacy system
old_customer = Customer(
    id="C-001",
    name="Jane Doe",
    email="jane@example.com",
    age=41,
    updated_at="2025-02-02T10:30:00Z",
)

# Same record as returned by the new system (untyped payload)
new_customer = {
    "id": "C-001",
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "age": 41,
    "updated_at": "2025-02-02T11:00:00Z",
    "segment": "retail",
}

if __name__ == "__main__":
    comparer = ObjectComparer(EngineConfig(global_ignores=["updated_at"]))

    print("=" * 60)
    print("Single record")
    print("=" * 60)
    report = comparer.compare(old_customer, new_customer)
    print(f"Equal: {report.are_equal}")
    for diff in report.differences:
        print(f"  - {diff.property_name}: {diff.source_value!r} -> {diff.destination_value!r}")

    print()
    print("=" * 60)
    print("Record lists")
    print("=" * 60)
    old_batch = [old_customer, Customer("C-002", "John Roe", "john@example.com")]
    new_batch = [
        Customer("C-001", "Jane Doe", "jane@example.com", 41),
        Customer("C-002", "John Roe", "john@example.com", 37),
    ]
    print(comparer.compare_lists(old_batch, new_batch).to_json(indent=2))

    print()
    print("Method-style, ignoring email:")
    print(old_customer.compare_to(new_customer, ignore={"email", "segment", "updated_at"}).to_dict())
