from typing import Any, Callable, Dict, Iterable, List, Optional

from ..schemas.filter import (
    Condition,
    ConditionError,
    DateRange,
    FieldType,
    FilterError,
    NumberRange,
    Operator,
)
from ..utils.coercion import is_blank, parse_bool, to_number, to_timestamp
from ..utils.logger import setup_logger
from ..config import settings
from .field_registry import FieldRegistry, field_registry

logger = setup_logger("validator_service", settings.logging.FILTER_LOG_FILE)

ValueCheck = Callable[[Operator, Any], Optional[ConditionError]]


class FilterValidator:
    """Structural checks a condition must pass before it may be evaluated.

    Checks run in a fixed order and the first failure wins:
    field existence, operator legality, then value shape for the
    (field type, operator) pair. Results are returned, never raised.
    """

    def __init__(self, registry: FieldRegistry = None):
        self.registry = registry or field_registry
        self.value_checks: Dict[FieldType, ValueCheck] = {
            FieldType.TEXT: self._check_text,
            FieldType.NUMBER: self._check_number,
            FieldType.AMOUNT: self._check_number,
            FieldType.DATE: self._check_date,
            FieldType.SINGLE_SELECT: self._check_single_select,
            FieldType.MULTI_SELECT: self._check_multi_select,
            FieldType.BOOLEAN: self._check_boolean,
        }
        missing = [t.value for t in FieldType if t not in self.value_checks]
        if missing:
            raise FilterError(f"No value check registered for field types: {missing}")

    def validate_condition(self, condition: Condition) -> Optional[ConditionError]:
        """Validate one condition; None means it may be evaluated"""
        if not condition.field:
            return ConditionError.field("Please select a field")

        definition = self.registry.lookup(condition.field)
        if definition is None:
            return ConditionError.field("Invalid field selected")

        if condition.operator is None:
            return ConditionError.operator("Please select an operator")

        if condition.operator not in definition.operators:
            return ConditionError.operator("Invalid operator for this field type")

        if condition.field_type != definition.type:
            return ConditionError.field(
                f"Field '{definition.key}' is of type {definition.type.value}, "
                f"not {condition.field_type.value}"
            )

        return self.validate_value(definition.type, condition.operator, condition.value)

    def validate_value(self, field_type: FieldType, operator: Operator, value: Any) -> Optional[ConditionError]:
        # Boolean "is" needs no presence check: the value itself is the answer
        if field_type == FieldType.MULTI_SELECT:
            if not isinstance(value, list) or not value:
                return ConditionError.value("Please select at least one value")
        elif field_type != FieldType.BOOLEAN and is_blank(value):
            return ConditionError.value("Value is required")

        return self.value_checks[field_type](operator, value)

    def validate_all_conditions(self, conditions: Iterable[Condition]) -> Dict[str, ConditionError]:
        """Map condition id to its error, for every invalid condition"""
        errors = {}
        for condition in conditions:
            error = self.validate_condition(condition)
            if error is not None:
                errors[condition.id] = error
        return errors

    def has_errors(self, conditions: Iterable[Condition]) -> bool:
        return any(self.validate_condition(c) is not None for c in conditions)

    def valid_conditions(self, conditions: Iterable[Condition]) -> List[Condition]:
        """Drop invalid conditions, keeping the order of the rest"""
        valid = []
        for condition in conditions:
            error = self.validate_condition(condition)
            if error is None:
                valid.append(condition)
            else:
                logger.debug(f"Ignoring condition {condition.id} on '{condition.field}': {error.message}")
        return valid

    def _check_text(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        if not isinstance(value, str):
            return ConditionError.value("Text value must be a string")
        return None

    def _check_number(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        if operator == Operator.BETWEEN:
            if not isinstance(value, NumberRange):
                return ConditionError.value("Range values are required")
            if is_blank(value.min):
                return ConditionError.value("Minimum value is required")
            if is_blank(value.max):
                return ConditionError.value("Maximum value is required")
            low, high = to_number(value.min), to_number(value.max)
            if low is None:
                return ConditionError.value("Minimum value must be a valid number")
            if high is None:
                return ConditionError.value("Maximum value must be a valid number")
            if low > high:
                return ConditionError.value("Minimum value cannot be greater than maximum value")
            return None

        if to_number(value) is None:
            return ConditionError.value("Value must be a valid number")
        return None

    def _check_date(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        if operator == Operator.BETWEEN:
            if not isinstance(value, DateRange):
                return ConditionError.value("Date range is required")
            if is_blank(value.from_):
                return ConditionError.value("Start date is required")
            if is_blank(value.to):
                return ConditionError.value("End date is required")
            start, end = to_timestamp(value.from_), to_timestamp(value.to)
            if start is None:
                return ConditionError.value("Start date is invalid")
            if end is None:
                return ConditionError.value("End date is invalid")
            if start > end:
                return ConditionError.value("Start date cannot be after end date")
            return None

        if not isinstance(value, str) or to_timestamp(value) is None:
            return ConditionError.value("Invalid date")
        return None

    def _check_single_select(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        # Membership in the field's options is left to the UI
        if isinstance(value, (list, NumberRange, DateRange)):
            return ConditionError.value("Please select an option")
        return None

    def _check_multi_select(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        if not isinstance(value, list) or not value:
            return ConditionError.value("Please select at least one option")
        return None

    def _check_boolean(self, operator: Operator, value: Any) -> Optional[ConditionError]:
        if value is None:
            return ConditionError.value("Please select a value")
        if parse_bool(value) is None:
            return ConditionError.value("Value must be true or false")
        return None


filter_validator = FilterValidator()


def validate(condition: Condition) -> Optional[ConditionError]:
    return filter_validator.validate_condition(condition)
