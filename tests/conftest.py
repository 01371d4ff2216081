import pytest
from fastapi.testclient import TestClient
from dynamic_filter.main import app
from dynamic_filter.schemas.filter import Condition
from dynamic_filter.services.field_registry import lookup
import logging

@pytest.fixture(autouse=True)
def setup_logging():
    # Configure logging for tests
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def make_condition():
    """Build a condition for a registered field, copying type and nested path"""
    def _make(field, operator, value, **kwargs):
        definition = lookup(field)
        return Condition(
            field=field,
            field_type=definition.type,
            operator=operator,
            value=value,
            nested_path=definition.nested_path,
            **kwargs
        )
    return _make

@pytest.fixture
def employees():
    return [
        {
            "id": 1,
            "name": "Alice Johnson",
            "email": "alice@example.com",
            "department": "Engineering",
            "role": "Staff Engineer",
            "salary": 120000,
            "joinDate": "2020-03-15",
            "isActive": True,
            "skills": ["React", "TypeScript", "AWS"],
            "address": {"city": "NYC", "state": "NY", "country": "USA"},
            "projects": 5,
            "lastReview": "2024-01-10",
            "performanceRating": 4.5,
        },
        {
            "id": 2,
            "name": "John Smith",
            "email": "john.smith@corp.io",
            "department": "Sales",
            "role": "Account Executive",
            "salary": 50000,
            "joinDate": "2019-07-01",
            "isActive": False,
            "skills": ["Python"],
            "address": {"city": "San Francisco", "state": "CA", "country": "USA"},
            "projects": 2,
            "lastReview": "2023-12-01",
            "performanceRating": 3.8,
        },
        {
            "id": 3,
            "name": "Maria Garcia",
            "email": "maria@example.com",
            "department": "Engineering",
            "role": "Frontend Engineer",
            "salary": 85000,
            "joinDate": "2021-11-20T14:30:00Z",
            "isActive": True,
            "skills": ["React"],
            "address": {"city": "Austin", "state": "TX", "country": "USA"},
            "projects": 3,
            "lastReview": "2024-02-15",
            "performanceRating": 4.1,
        },
        {
            "id": 4,
            "name": "Bob Lee",
            "email": "bob@example.com",
            "department": "Marketing",
            "role": "Marketing Lead",
            "salary": 100000,
            "joinDate": "2018-01-05",
            "isActive": True,
            "skills": [],
            "projects": 7,
            "lastReview": "2023-06-30",
            "performanceRating": 3.2,
        },
        {
            "id": 5,
            "name": "Priya Patel",
            "email": "priya@corp.io",
            "department": "Engineering",
            "role": "Data Scientist",
            "salary": 95000,
            "joinDate": "2022-06-30",
            "isActive": True,
            "skills": ["Python", "Machine Learning", "AWS"],
            "address": {"city": "Seattle", "state": "WA", "country": "USA"},
            "projects": 4,
            "lastReview": "2024-03-01",
            "performanceRating": 4.9,
        },
    ]
