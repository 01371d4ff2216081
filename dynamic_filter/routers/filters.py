from fastapi import APIRouter, HTTPException, Query, Body, Response
from typing import List

from ..schemas.filter import FieldDefinition, FilterError, FilterGroup
from ..schemas.requests import (
    ApplyFiltersRequest,
    ApplyFiltersResponse,
    ExportFormat,
    ValidationResponse,
)
from ..services.field_registry import field_registry
from ..services.validator_service import filter_validator
from ..services.filter_service import filter_service
from ..services.export_service import export_service
from ..config import settings

router = APIRouter()


def _check_condition_count(group: FilterGroup) -> None:
    if len(group.conditions) > settings.filter.MAX_CONDITIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Too many conditions: {len(group.conditions)} (max {settings.filter.MAX_CONDITIONS})"
        )


def _run_filters(request: ApplyFiltersRequest) -> ApplyFiltersResponse:
    # Invalid conditions are reported back and left out; the rest still apply
    group = request.filters
    _check_condition_count(group)

    errors = filter_validator.validate_all_conditions(group.conditions)
    valid = [c for c in group.conditions if c.id not in errors]
    data = filter_service.apply_filters(request.records, valid, group.logical_operator)

    return ApplyFiltersResponse(
        total_records=len(request.records),
        matched_records=len(data),
        applied_conditions=[c.id for c in valid],
        ignored_conditions=list(errors),
        errors=errors,
        data=data,
    )


@router.get("/fields", response_model=List[FieldDefinition])
async def list_fields() -> List[FieldDefinition]:
    """Filterable fields in display order"""
    return field_registry.list_fields()


@router.get("/fields/{key}", response_model=FieldDefinition)
async def get_field(key: str) -> FieldDefinition:
    definition = field_registry.lookup(key)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Unknown field: {key}")
    return definition


@router.post("/filters/validate", response_model=ValidationResponse)
async def validate_filters(group: FilterGroup = Body(...)) -> ValidationResponse:
    _check_condition_count(group)
    errors = filter_validator.validate_all_conditions(group.conditions)
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/filters/apply", response_model=ApplyFiltersResponse)
async def apply_filters(request: ApplyFiltersRequest = Body(...)) -> ApplyFiltersResponse:
    return _run_filters(request)


@router.post("/filters/export")
async def export_filters(
    request: ApplyFiltersRequest = Body(...),
    format: ExportFormat = Query(ExportFormat.JSON, description="Export file format")
) -> Response:
    result = _run_filters(request)
    try:
        if format == ExportFormat.CSV:
            content = export_service.to_csv(result.data)
            media_type = "text/csv; charset=utf-8"
        else:
            content = export_service.to_json(result.data, request.filters)
            media_type = "application/json"
    except FilterError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Error exporting records: {e.message}"
        )

    filename = export_service.export_filename(format.value)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
