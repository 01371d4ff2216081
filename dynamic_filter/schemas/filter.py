from pydantic import BaseModel, Field, model_validator
from typing import List, Dict, Union, Optional
from uuid import uuid4
from enum import Enum


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    AMOUNT = "amount"
    DATE = "date"
    SINGLE_SELECT = "singleSelect"
    MULTI_SELECT = "multiSelect"
    BOOLEAN = "boolean"


class Operator(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    NOT_CONTAINS = "notContains"
    REGEX = "regex"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    BETWEEN = "between"
    BEFORE = "before"
    AFTER = "after"
    IS = "is"
    IS_NOT = "isNot"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS_ALL = "containsAll"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


_NUMERIC_OPERATORS = (
    Operator.EQUALS,
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
    Operator.GREATER_THAN_OR_EQUAL,
    Operator.LESS_THAN_OR_EQUAL,
    Operator.BETWEEN,
)

# Operators each field type can ever accept; a FieldDefinition narrows this further
LEGAL_OPERATORS: Dict[FieldType, tuple] = {
    FieldType.TEXT: (
        Operator.EQUALS,
        Operator.CONTAINS,
        Operator.STARTS_WITH,
        Operator.ENDS_WITH,
        Operator.NOT_CONTAINS,
        Operator.REGEX,
    ),
    FieldType.NUMBER: _NUMERIC_OPERATORS,
    FieldType.AMOUNT: _NUMERIC_OPERATORS,
    FieldType.DATE: (Operator.EQUALS, Operator.BEFORE, Operator.AFTER, Operator.BETWEEN),
    FieldType.SINGLE_SELECT: (Operator.IS, Operator.IS_NOT),
    FieldType.MULTI_SELECT: (Operator.IN, Operator.NOT_IN, Operator.CONTAINS_ALL),
    FieldType.BOOLEAN: (Operator.IS,),
}

SELECT_TYPES = (FieldType.SINGLE_SELECT, FieldType.MULTI_SELECT)

Scalar = Union[bool, int, float, str]


class SelectOption(BaseModel):
    label: str
    value: Scalar

    model_config = {"frozen": True}


class FieldDefinition(BaseModel):
    """A filterable field: its type, the operators offered (first one is the UI default) and choices."""

    key: str = Field(min_length=1)
    label: str
    type: FieldType
    operators: List[Operator] = Field(min_length=1)
    options: Optional[List[SelectOption]] = None
    nested_path: Optional[str] = Field(default=None, alias="nestedPath")

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def check_operators_and_options(self) -> "FieldDefinition":
        if len(set(self.operators)) != len(self.operators):
            raise ValueError(f"Duplicate operators for field '{self.key}'")

        illegal = [op.value for op in self.operators if op not in LEGAL_OPERATORS[self.type]]
        if illegal:
            raise ValueError(
                f"Operators {illegal} are not valid for {self.type.value} field '{self.key}'"
            )

        if self.type in SELECT_TYPES and not self.options:
            raise ValueError(f"Options not provided for {self.type.value} field '{self.key}'")
        if self.type not in SELECT_TYPES and self.options is not None:
            raise ValueError(f"Options are only allowed on select fields, not '{self.key}'")
        return self

    @property
    def access_path(self) -> str:
        return self.nested_path or self.key

    @property
    def default_operator(self) -> Operator:
        return self.operators[0]


class NumberRange(BaseModel):
    """Inclusive numeric bounds for Between; bounds stay raw until validated."""

    min: Optional[Scalar] = None
    max: Optional[Scalar] = None

    model_config = {"frozen": True, "extra": "forbid"}


class DateRange(BaseModel):
    """Inclusive date bounds for Between on date fields."""

    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}


ConditionValue = Optional[Union[NumberRange, DateRange, List[Scalar], Scalar]]


class Condition(BaseModel):
    """One filter rule. Immutable: edits produce a new Condition via model_copy."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    field: str = ""
    field_type: FieldType = Field(default=FieldType.TEXT, alias="fieldType")
    operator: Optional[Operator] = Operator.EQUALS
    value: ConditionValue = ""
    nested_path: Optional[str] = Field(default=None, alias="nestedPath")

    model_config = {"frozen": True, "populate_by_name": True}


class FilterGroup(BaseModel):
    conditions: List[Condition] = Field(default_factory=list)
    logical_operator: LogicalOperator = Field(default=LogicalOperator.AND, alias="logicalOperator")

    model_config = {"frozen": True, "populate_by_name": True}


class ErrorKind(str, Enum):
    FIELD = "field"
    OPERATOR = "operator"
    VALUE = "value"


class ConditionError(BaseModel):
    """Validation verdict for a condition. Returned as data, never raised."""

    kind: ErrorKind
    message: str

    model_config = {"frozen": True}

    @classmethod
    def field(cls, message: str) -> "ConditionError":
        return cls(kind=ErrorKind.FIELD, message=message)

    @classmethod
    def operator(cls, message: str) -> "ConditionError":
        return cls(kind=ErrorKind.OPERATOR, message=message)

    @classmethod
    def value(cls, message: str) -> "ConditionError":
        return cls(kind=ErrorKind.VALUE, message=message)


class FilterError(Exception):
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)
