from pydantic import BaseModel, Field
from typing import List, Dict, Any
from enum import Enum

from .filter import ConditionError, FilterGroup


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


class ApplyFiltersRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filters: FilterGroup = Field(default_factory=FilterGroup)


class ValidationResponse(BaseModel):
    valid: bool
    errors: Dict[str, ConditionError]


class ApplyFiltersResponse(BaseModel):
    total_records: int
    matched_records: int
    applied_conditions: List[str]
    ignored_conditions: List[str]
    errors: Dict[str, ConditionError]
    data: List[Dict[str, Any]]
