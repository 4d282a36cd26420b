"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from src.api.task_api_client import TaskAPIClient
from src.models.response import APIResult
from src.services.token_store import TokenStore


@pytest.fixture
def sample_tasks():
    """Tasks as returned by GET /api/tasks"""
    return [
        {
            "id": 1,
            "title": "Write report",
            "description": "Quarterly numbers",
            "category": "Work",
            "status": "Completed",
            "dueDate": "2024-05-09",
            "dueTime": "17:00:00",
        },
        {
            "id": 2,
            "title": "Buy groceries",
            "description": "Milk, eggs",
            "category": "Personal",
            "status": "Pending",
            "dueDate": "2024-05-11",
            "dueTime": [9, 5],
        },
    ]


@pytest.fixture
def created_task():
    """Task as returned by POST /api/tasks"""
    return {
        "id": 3,
        "title": "Call plumber",
        "description": "",
        "category": "Home",
        "status": "In Progress",
        "dueDate": None,
        "dueTime": None,
    }


@pytest.fixture
def token_store(tmp_path):
    """Token store with temporary file"""
    return TokenStore(store_file=str(tmp_path / "auth.json"))


@pytest.fixture
def mock_api_client(sample_tasks, created_task):
    """Mock task API client"""
    client = MagicMock(spec=TaskAPIClient)
    client.base_url = "http://testserver"
    client.token = "dGVzdDp0ZXN0"
    client.is_authenticated = True
    client.get_all_tasks = AsyncMock(return_value=APIResult.ok(sample_tasks))
    client.create_task = AsyncMock(return_value=APIResult.ok(created_task))
    client.login = AsyncMock(return_value=APIResult.ok({"firstName": "Ada", "lastName": "Lovelace"}, token="dGVzdDp0ZXN0"))
    client.register = AsyncMock(return_value=APIResult.ok({"id": 7}))
    client.close = AsyncMock()
    return client
