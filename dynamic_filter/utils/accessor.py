from typing import Any, Mapping, Optional


def get_nested_value(record: Any, path: str) -> Optional[Any]:
    """Resolve a dotted path such as ``address.city`` against a record.

    Mappings are indexed by key, other objects by attribute. A missing
    intermediate node yields None instead of raising.
    """
    current = record
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def condition_path(condition) -> str:
    """Path used to read a condition's value from a record"""
    return condition.nested_path or condition.field
