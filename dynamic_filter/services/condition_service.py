from typing import Any, Optional, Union

from ..schemas.filter import (
    Condition,
    FieldType,
    FilterError,
    FilterGroup,
    LogicalOperator,
    Operator,
)
from .field_registry import FieldRegistry, field_registry


def default_value(field_type: FieldType, operator: Optional[Operator] = None) -> Any:
    """Starting value for a freshly picked field or operator"""
    if operator == Operator.BETWEEN:
        if field_type == FieldType.DATE:
            return {"from": "", "to": ""}
        return {"min": "", "max": ""}
    if field_type == FieldType.BOOLEAN:
        return True
    if field_type == FieldType.MULTI_SELECT:
        return []
    return ""


def _rebuild(condition: Condition, **changes) -> Condition:
    # Revalidate so raw payloads become NumberRange/DateRange again
    data = condition.model_dump(by_alias=True)
    data.update(changes)
    return Condition.model_validate(data)


def new_condition() -> Condition:
    """A blank condition, as added by "Add filter" before a field is chosen"""
    return Condition()


def condition_for_field(key: str, registry: FieldRegistry = None) -> Condition:
    return change_field(new_condition(), key, registry)


def change_field(condition: Condition, key: str, registry: FieldRegistry = None) -> Condition:
    """Point a condition at another field, resetting operator and value"""
    definition = (registry or field_registry).lookup(key)
    if definition is None:
        raise FilterError(f"Unknown field: {key}", error_code="unknown_field")
    return _rebuild(
        condition,
        field=definition.key,
        fieldType=definition.type,
        operator=definition.default_operator,
        value=default_value(definition.type, definition.default_operator),
        nestedPath=definition.nested_path,
    )


def change_operator(condition: Condition, operator: Union[Operator, str]) -> Condition:
    """Switch operator; the value resets because its shape may differ"""
    operator = Operator(operator)
    return _rebuild(
        condition,
        operator=operator,
        value=default_value(condition.field_type, operator),
    )


def change_value(condition: Condition, value: Any) -> Condition:
    return _rebuild(condition, value=value)


def add_condition(group: FilterGroup, condition: Condition = None) -> FilterGroup:
    condition = condition or new_condition()
    return group.model_copy(update={"conditions": [*group.conditions, condition]})


def update_condition(group: FilterGroup, condition: Condition) -> FilterGroup:
    """Replace the condition with the same id"""
    conditions = [condition if c.id == condition.id else c for c in group.conditions]
    return group.model_copy(update={"conditions": conditions})


def remove_condition(group: FilterGroup, condition_id: str) -> FilterGroup:
    conditions = [c for c in group.conditions if c.id != condition_id]
    return group.model_copy(update={"conditions": conditions})


def clear_conditions(group: FilterGroup) -> FilterGroup:
    return group.model_copy(update={"conditions": []})


def set_logical_operator(group: FilterGroup, logical_operator: Union[LogicalOperator, str]) -> FilterGroup:
    return group.model_copy(update={"logical_operator": LogicalOperator(logical_operator)})
