from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence
import re

from ..schemas.filter import (
    Condition,
    FieldType,
    FilterError,
    FilterGroup,
    LogicalOperator,
    Operator,
)
from ..utils.accessor import condition_path, get_nested_value
from ..utils.coercion import to_list, to_number, to_timestamp
from ..utils.logger import setup_logger
from ..config import settings

logger = setup_logger("filter_service", settings.logging.FILTER_LOG_FILE)

Record = Mapping[str, Any]
Handler = Callable[[Any, Operator, Any], bool]


class FilterService:
    """Evaluates validated conditions against records.

    Each field type has exactly one handler. Handlers never raise:
    values that cannot be coerced are treated as non-matches, except
    for the operators whose policy says absence satisfies them
    (IsNot and NotIn).
    """

    def __init__(self):
        self.type_handlers: Dict[FieldType, Handler] = {
            FieldType.TEXT: self._handle_text,
            FieldType.NUMBER: self._handle_numeric,
            FieldType.AMOUNT: self._handle_numeric,
            FieldType.DATE: self._handle_date,
            FieldType.SINGLE_SELECT: self._handle_single_select,
            FieldType.MULTI_SELECT: self._handle_multi_select,
            FieldType.BOOLEAN: self._handle_boolean,
        }
        missing = [t.value for t in FieldType if t not in self.type_handlers]
        if missing:
            raise FilterError(f"No evaluator registered for field types: {missing}")

    def _handle_text(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        """Case-insensitive text comparisons"""
        if value is None:
            return False

        raw_value = str(value)
        text = raw_value.lower()
        needle = str(filter_value).lower()

        if operator == Operator.EQUALS: return text == needle
        elif operator == Operator.CONTAINS: return needle in text
        elif operator == Operator.STARTS_WITH: return text.startswith(needle)
        elif operator == Operator.ENDS_WITH: return text.endswith(needle)
        elif operator == Operator.NOT_CONTAINS: return needle not in text
        elif operator == Operator.REGEX:
            try:
                pattern = re.compile(str(filter_value), re.IGNORECASE)
            except re.error as e:
                logger.debug(f"Invalid regex pattern {filter_value!r}: {str(e)}")
                return False
            return pattern.search(raw_value) is not None
        return False

    def _handle_numeric(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        """Numeric comparisons, shared by number and amount fields"""
        number = to_number(value)
        if number is None:
            return False

        if operator == Operator.BETWEEN:
            low, high = to_number(filter_value.min), to_number(filter_value.max)
            if low is None or high is None:
                return False
            return low <= number <= high

        target = to_number(filter_value)
        if target is None:
            return False

        if operator == Operator.EQUALS: return number == target
        elif operator == Operator.GREATER_THAN: return number > target
        elif operator == Operator.LESS_THAN: return number < target
        elif operator == Operator.GREATER_THAN_OR_EQUAL: return number >= target
        elif operator == Operator.LESS_THAN_OR_EQUAL: return number <= target
        return False

    def _handle_date(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        """Date comparisons; equals matches on calendar day, the rest on instants"""
        moment = to_timestamp(value)
        if moment is None:
            return False

        if operator == Operator.BETWEEN:
            start, end = to_timestamp(filter_value.from_), to_timestamp(filter_value.to)
            if start is None or end is None:
                return False
            return start <= moment <= end

        target = to_timestamp(filter_value)
        if target is None:
            return False

        if operator == Operator.EQUALS: return moment.date() == target.date()
        elif operator == Operator.BEFORE: return moment < target
        elif operator == Operator.AFTER: return moment > target
        return False

    def _handle_single_select(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        # A missing value is "not equal to anything"
        if value is None:
            return operator == Operator.IS_NOT

        same = str(value) == str(filter_value)
        if operator == Operator.IS: return same
        elif operator == Operator.IS_NOT: return not same
        return False

    def _handle_multi_select(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        values = to_list(value)
        wanted = to_list(filter_value)

        if operator == Operator.IN: return any(v in wanted for v in values)
        elif operator == Operator.NOT_IN: return not any(v in wanted for v in values)
        elif operator == Operator.CONTAINS_ALL: return all(w in values for w in wanted)
        return False

    def _handle_boolean(self, value: Any, operator: Operator, filter_value: Any) -> bool:
        return bool(value) == (str(filter_value).lower() == "true")

    def matches(self, record: Record, condition: Condition) -> bool:
        """Evaluate one valid condition against one record"""
        value = get_nested_value(record, condition_path(condition))
        handler = self.type_handlers[condition.field_type]
        try:
            return handler(value, condition.operator, condition.value)
        except (TypeError, ValueError, AttributeError) as e:
            # Only reachable for conditions that skipped validation
            logger.debug(f"Could not evaluate condition {condition.id} on '{condition.field}': {str(e)}")
            return False

    def apply_filters(
        self,
        records: Iterable[Record],
        conditions: Sequence[Condition],
        logical_operator: LogicalOperator = LogicalOperator.AND,
    ) -> List[Record]:
        """Keep the records that satisfy the conditions, in input order.

        Conditions are assumed valid; excluding invalid ones is the
        caller's decision.
        """
        records = list(records)
        if not conditions:
            return records

        combine = all if LogicalOperator(logical_operator) == LogicalOperator.AND else any
        filtered = [
            record for record in records
            if combine(self.matches(record, condition) for condition in conditions)
        ]
        logger.info(
            f"Applied {len(conditions)} conditions ({LogicalOperator(logical_operator).value}): "
            f"{len(filtered)} of {len(records)} records matched"
        )
        return filtered

    def apply_group(self, records: Iterable[Record], group: FilterGroup) -> List[Record]:
        return self.apply_filters(records, group.conditions, group.logical_operator)


filter_service = FilterService()


def matches(record: Record, condition: Condition) -> bool:
    return filter_service.matches(record, condition)


def apply(
    records: Iterable[Record],
    conditions: Sequence[Condition],
    logical_operator: LogicalOperator = LogicalOperator.AND,
) -> List[Record]:
    return filter_service.apply_filters(records, conditions, logical_operator)
