from typing import Dict, Iterable, Iterator, List, Optional

from ..schemas.filter import FieldDefinition, FieldType, FilterError, Operator, SelectOption
from ..utils.logger import setup_logger
from ..config import settings

logger = setup_logger("field_registry", settings.logging.FILTER_LOG_FILE)


def _options(*values: str) -> List[SelectOption]:
    return [SelectOption(label=value, value=value) for value in values]


_NUMBER_OPERATORS = [
    Operator.EQUALS,
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
    Operator.GREATER_THAN_OR_EQUAL,
    Operator.LESS_THAN_OR_EQUAL,
    Operator.BETWEEN,
]
_DATE_OPERATORS = [Operator.EQUALS, Operator.BEFORE, Operator.AFTER, Operator.BETWEEN]

FIELD_DEFINITIONS: List[FieldDefinition] = [
    FieldDefinition(
        key="name",
        label="Name",
        type=FieldType.TEXT,
        operators=[
            Operator.EQUALS,
            Operator.CONTAINS,
            Operator.STARTS_WITH,
            Operator.ENDS_WITH,
            Operator.NOT_CONTAINS,
            Operator.REGEX,
        ],
    ),
    FieldDefinition(
        key="email",
        label="Email",
        type=FieldType.TEXT,
        operators=[Operator.EQUALS, Operator.CONTAINS, Operator.ENDS_WITH, Operator.REGEX],
    ),
    FieldDefinition(
        key="department",
        label="Department",
        type=FieldType.SINGLE_SELECT,
        operators=[Operator.IS, Operator.IS_NOT],
        options=_options(
            "Engineering", "Product", "Sales", "Marketing", "Design",
            "Finance", "HR", "Operations", "Legal",
        ),
    ),
    FieldDefinition(
        key="role",
        label="Role",
        type=FieldType.TEXT,
        operators=[Operator.EQUALS, Operator.CONTAINS],
    ),
    FieldDefinition(
        key="salary",
        label="Salary",
        type=FieldType.AMOUNT,
        operators=[Operator.EQUALS, Operator.BETWEEN, Operator.GREATER_THAN, Operator.LESS_THAN],
    ),
    FieldDefinition(
        key="joinDate",
        label="Join Date",
        type=FieldType.DATE,
        operators=_DATE_OPERATORS,
    ),
    FieldDefinition(
        key="isActive",
        label="Active Status",
        type=FieldType.BOOLEAN,
        operators=[Operator.IS],
    ),
    FieldDefinition(
        key="skills",
        label="Skills",
        type=FieldType.MULTI_SELECT,
        operators=[Operator.IN, Operator.NOT_IN, Operator.CONTAINS_ALL],
        options=_options(
            "React", "TypeScript", "Node.js", "Python", "GraphQL",
            "PostgreSQL", "AWS", "Docker", "Kubernetes", "Vue.js",
            "Angular", "Java", "Go", "Scala", "Machine Learning",
        ),
    ),
    FieldDefinition(
        key="address.city",
        label="City",
        type=FieldType.TEXT,
        operators=[Operator.EQUALS, Operator.CONTAINS],
        nested_path="address.city",
    ),
    FieldDefinition(
        key="address.state",
        label="State",
        type=FieldType.SINGLE_SELECT,
        operators=[Operator.IS, Operator.IS_NOT],
        options=_options(
            "CA", "NY", "TX", "WA", "MA", "OR", "CO",
            "FL", "IL", "GA", "AZ", "DC", "NV", "NC",
        ),
        nested_path="address.state",
    ),
    FieldDefinition(
        key="projects",
        label="Number of Projects",
        type=FieldType.NUMBER,
        operators=_NUMBER_OPERATORS,
    ),
    FieldDefinition(
        key="lastReview",
        label="Last Review Date",
        type=FieldType.DATE,
        operators=_DATE_OPERATORS,
    ),
    FieldDefinition(
        key="performanceRating",
        label="Performance Rating",
        type=FieldType.NUMBER,
        operators=_NUMBER_OPERATORS,
    ),
]


class FieldRegistry:
    """Read-only catalog of filterable fields, keyed by FieldDefinition.key"""

    def __init__(self, definitions: Iterable[FieldDefinition]):
        self._definitions: Dict[str, FieldDefinition] = {}
        for definition in definitions:
            if definition.key in self._definitions:
                raise FilterError(
                    f"Duplicate field key in registry: {definition.key}",
                    error_code="duplicate_field",
                )
            self._definitions[definition.key] = definition
        logger.debug(f"Field registry loaded with {len(self._definitions)} fields")

    def lookup(self, key: str) -> Optional[FieldDefinition]:
        return self._definitions.get(key)

    def list_fields(self) -> List[FieldDefinition]:
        return list(self._definitions.values())

    def keys(self) -> List[str]:
        return list(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


field_registry = FieldRegistry(FIELD_DEFINITIONS)


def lookup(key: str) -> Optional[FieldDefinition]:
    return field_registry.lookup(key)


def list_fields() -> List[FieldDefinition]:
    return field_registry.list_fields()
