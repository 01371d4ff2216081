import pytest

from dynamic_filter.schemas.filter import Condition, ErrorKind, FieldType, Operator
from dynamic_filter.services.validator_service import FilterValidator, validate


def test_blank_field_is_a_field_error():
    error = validate(Condition())
    assert error.kind == ErrorKind.FIELD
    assert error.message == "Please select a field"


@pytest.mark.parametrize("operator", [Operator.EQUALS, Operator.BETWEEN, Operator.IN, None])
def test_unknown_field_wins_over_other_errors(operator):
    condition = Condition(field="shoeSize", field_type=FieldType.NUMBER, operator=operator, value="")
    assert validate(condition).kind == ErrorKind.FIELD


def test_declared_type_must_match_definition():
    condition = Condition(field="salary", field_type=FieldType.TEXT, operator=Operator.EQUALS, value="1")
    assert validate(condition).kind == ErrorKind.FIELD


def test_illegal_operator_reported_before_type_mismatch():
    condition = Condition(field="salary", field_type=FieldType.NUMBER, operator=Operator.REGEX, value="x")
    error = validate(condition)
    assert error.kind == ErrorKind.OPERATOR
    assert error.message == "Invalid operator for this field type"


def test_missing_operator(make_condition):
    assert validate(make_condition("name", None, "x")).kind == ErrorKind.OPERATOR


@pytest.mark.parametrize("field,operator", [
    ("name", Operator.BETWEEN),
    ("salary", Operator.CONTAINS),
    ("salary", Operator.GREATER_THAN_OR_EQUAL),  # legal for amounts, not offered by this field
    ("isActive", Operator.IS_NOT),
    ("skills", Operator.IS),
])
def test_operator_not_offered_by_field(make_condition, field, operator):
    error = validate(make_condition(field, operator, "x"))
    assert error.kind == ErrorKind.OPERATOR
    assert error.message == "Invalid operator for this field type"


@pytest.mark.parametrize("field,operator,value,message", [
    ("name", Operator.CONTAINS, "", "Value is required"),
    ("name", Operator.EQUALS, 42, "Text value must be a string"),
    ("projects", Operator.EQUALS, None, "Value is required"),
    ("projects", Operator.EQUALS, "abc", "Value must be a valid number"),
    ("projects", Operator.EQUALS, "inf", "Value must be a valid number"),
    ("projects", Operator.BETWEEN, 5, "Range values are required"),
    ("salary", Operator.BETWEEN, {"min": "", "max": 10}, "Minimum value is required"),
    ("salary", Operator.BETWEEN, {"min": 10}, "Maximum value is required"),
    ("salary", Operator.BETWEEN, {"min": "ten", "max": 10}, "Minimum value must be a valid number"),
    ("salary", Operator.BETWEEN, {"min": 1, "max": "x"}, "Maximum value must be a valid number"),
    ("salary", Operator.BETWEEN, {"min": 200, "max": 100}, "Minimum value cannot be greater than maximum value"),
    ("joinDate", Operator.BEFORE, "not a date", "Invalid date"),
    ("joinDate", Operator.EQUALS, "2024-13-45", "Invalid date"),
    ("joinDate", Operator.BETWEEN, "2024-01-01", "Date range is required"),
    ("joinDate", Operator.BETWEEN, {"from": "", "to": "2024-01-01"}, "Start date is required"),
    ("joinDate", Operator.BETWEEN, {"from": "2024-01-01", "to": ""}, "End date is required"),
    ("joinDate", Operator.BETWEEN, {"from": "garbage", "to": "2024-01-01"}, "Start date is invalid"),
    ("joinDate", Operator.BETWEEN, {"from": "2024-01-01", "to": "garbage"}, "End date is invalid"),
    ("joinDate", Operator.BETWEEN, {"from": "2024-02-01", "to": "2024-01-01"}, "Start date cannot be after end date"),
    ("department", Operator.IS, "", "Value is required"),
    ("department", Operator.IS, ["Sales"], "Please select an option"),
    ("skills", Operator.IN, [], "Please select at least one value"),
    ("skills", Operator.CONTAINS_ALL, "React", "Please select at least one value"),
    ("isActive", Operator.IS, None, "Please select a value"),
    ("isActive", Operator.IS, "maybe", "Value must be true or false"),
])
def test_value_shape_errors(make_condition, field, operator, value, message):
    error = validate(make_condition(field, operator, value))
    assert error is not None
    assert error.kind == ErrorKind.VALUE
    assert error.message == message


@pytest.mark.parametrize("field,operator,value", [
    ("name", Operator.REGEX, "^j"),
    ("name", Operator.REGEX, "("),
    ("name", Operator.CONTAINS, " "),
    ("projects", Operator.EQUALS, 0),
    ("projects", Operator.GREATER_THAN, "3"),
    ("performanceRating", Operator.LESS_THAN_OR_EQUAL, 4.5),
    ("salary", Operator.BETWEEN, {"min": 50000, "max": 100000}),
    ("salary", Operator.BETWEEN, {"min": "100", "max": "100"}),
    ("joinDate", Operator.AFTER, "2020-01-01"),
    ("joinDate", Operator.EQUALS, "2021-11-20T14:30:00Z"),
    ("joinDate", Operator.BETWEEN, {"from": "2020-01-01", "to": "2020-01-01"}),
    ("department", Operator.IS_NOT, "Engineering"),
    ("skills", Operator.NOT_IN, ["React", "Go"]),
    ("isActive", Operator.IS, True),
    ("isActive", Operator.IS, False),
    ("isActive", Operator.IS, "false"),
])
def test_valid_conditions(make_condition, field, operator, value):
    assert validate(make_condition(field, operator, value)) is None


def test_validate_all_conditions_maps_ids_to_errors(make_condition):
    good = make_condition("name", Operator.CONTAINS, "john", id="good")
    bad = make_condition("name", Operator.CONTAINS, "", id="bad")
    unknown = Condition(id="unknown", field="nope")

    validator = FilterValidator()
    errors = validator.validate_all_conditions([good, bad, unknown])

    assert set(errors) == {"bad", "unknown"}
    assert errors["bad"].kind == ErrorKind.VALUE
    assert errors["unknown"].kind == ErrorKind.FIELD
    assert validator.has_errors([good, bad])
    assert not validator.has_errors([good])


def test_valid_conditions_keeps_order(make_condition):
    first = make_condition("name", Operator.CONTAINS, "a")
    broken = make_condition("projects", Operator.EQUALS, "many")
    last = make_condition("isActive", Operator.IS, True)

    assert FilterValidator().valid_conditions([first, broken, last]) == [first, last]


def test_every_field_type_has_a_value_check():
    assert set(FilterValidator().value_checks) == set(FieldType)
