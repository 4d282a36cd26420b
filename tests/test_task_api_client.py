"""
Tests for the task API client - requests go through httpx.MockTransport
"""

import base64
from datetime import date
import json
import pytest
import httpx
from src.api.task_api_client import TaskAPIClient, encode_basic_token, normalize_due_time_for_api
from src.models.task import Credentials, TaskCreate
from src.utils.error_handler import APIError

BASE_URL = "http://backend.test"
TOKEN = base64.b64encode(b"ada@example.com:secret").decode()


class RecordingHandler:
    """Collects requests and answers with a fixed response"""

    def __init__(self, status_code=200, json_body=None, text=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.json_body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


def make_client(handler, token_store):
    return TaskAPIClient(
        base_url=BASE_URL,
        token_store=token_store,
        transport=httpx.MockTransport(handler),
    )


def test_encode_basic_token():
    """Test token is base64 of mail:password"""
    assert encode_basic_token("ada@example.com", "secret") == TOKEN


def test_normalize_due_time_for_api():
    """Test HH:MM gets seconds, everything else passes through"""
    assert normalize_due_time_for_api("09:00") == "09:00:00"
    assert normalize_due_time_for_api("09:00:00") == "09:00:00"
    assert normalize_due_time_for_api(None) is None
    assert normalize_due_time_for_api("") is None
    assert normalize_due_time_for_api([9, 0]) == [9, 0]


@pytest.mark.asyncio
async def test_login_persists_and_attaches_token(token_store):
    """Test login stores the token and sends it on later requests"""
    handler = RecordingHandler(json_body={"firstName": "Ada"})
    client = make_client(handler, token_store)

    result = await client.login({"mail": "ada@example.com", "password": "secret"})

    assert result.success is True
    assert result.data == {"firstName": "Ada"}
    assert result.token == TOKEN
    assert token_store.get() == TOKEN
    assert client.is_authenticated

    login_request = handler.requests[0]
    assert login_request.method == "POST"
    assert login_request.url.path == "/api/auth/login"
    assert handler.last_json == {"mail": "ada@example.com", "password": "secret"}
    assert "authorization" not in login_request.headers

    await client.get_all_tasks()
    assert handler.requests[-1].headers["Authorization"] == f"Basic {TOKEN}"
    await client.close()


@pytest.mark.asyncio
async def test_login_accepts_credentials_model(token_store):
    """Test pydantic credentials are sent as JSON"""
    handler = RecordingHandler(json_body={})
    client = make_client(handler, token_store)

    result = await client.login(Credentials(mail="ada@example.com", password="secret"))

    assert result.token == TOKEN
    assert handler.last_json == {"mail": "ada@example.com", "password": "secret"}
    await client.close()


@pytest.mark.asyncio
async def test_login_failure_uses_server_message(token_store):
    """Test server reason is preferred over the fallback"""
    handler = RecordingHandler(status_code=401, json_body={"message": "Bad credentials"})
    client = make_client(handler, token_store)

    result = await client.login({"mail": "ada@example.com", "password": "wrong"})

    assert result.success is False
    assert result.error == "Bad credentials"
    assert token_store.get() is None
    assert "Authorization" not in client.default_headers
    await client.close()


@pytest.mark.asyncio
async def test_login_failure_fallback_message(token_store):
    """Test fallback message when the server gives no reason"""
    handler = RecordingHandler(status_code=500, text="Internal Server Error")
    client = make_client(handler, token_store)

    result = await client.login({"mail": "ada@example.com", "password": "secret"})

    assert result.success is False
    assert result.error == "Login failed. Invalid credentials."
    await client.close()


@pytest.mark.asyncio
async def test_persisted_token_attached_on_startup(token_store):
    """Test a stored token survives a restart"""
    token_store.set(TOKEN)
    handler = RecordingHandler(json_body=[])
    client = make_client(handler, token_store)

    assert client.is_authenticated
    await client.get_all_tasks()

    assert handler.requests[0].headers["Authorization"] == f"Basic {TOKEN}"
    await client.close()


@pytest.mark.asyncio
async def test_logout_clears_header_and_store(token_store):
    """Test logout removes both the header and the stored token"""
    token_store.set(TOKEN)
    handler = RecordingHandler(json_body=[])
    client = make_client(handler, token_store)

    client.logout()
    await client.get_all_tasks()

    assert not client.is_authenticated
    assert token_store.get() is None
    assert "authorization" not in handler.requests[0].headers
    await client.close()


@pytest.mark.asyncio
async def test_register_success_and_failure(token_store):
    """Test register results and that it never logs in"""
    handler = RecordingHandler(status_code=201, json_body={"id": 7})
    client = make_client(handler, token_store)

    result = await client.register({"firstName": "Ada", "mail": "ada@example.com", "password": "secret"})

    assert result.success is True
    assert result.data == {"id": 7}
    assert handler.requests[0].url.path == "/api/auth/register"
    assert token_store.get() is None

    handler.status_code = 409
    handler.json_body = {"message": "Mail already in use"}
    result = await client.register({"mail": "ada@example.com", "password": "secret"})

    assert result.success is False
    assert result.error == "Mail already in use"
    await client.close()


@pytest.mark.asyncio
async def test_register_fallback_message(token_store):
    handler = RecordingHandler(status_code=400, json_body={"detail": "nope"})
    client = make_client(handler, token_store)

    result = await client.register({"mail": "ada@example.com", "password": "secret"})

    assert result.error == "Registration failed"
    await client.close()


@pytest.mark.asyncio
async def test_get_all_tasks(token_store, sample_tasks):
    """Test task list is returned as decoded JSON"""
    handler = RecordingHandler(json_body=sample_tasks)
    client = make_client(handler, token_store)

    result = await client.get_all_tasks()

    assert result.success is True
    assert result.data == sample_tasks
    assert handler.requests[0].method == "GET"
    assert str(handler.requests[0].url) == f"{BASE_URL}/api/tasks"
    await client.close()


@pytest.mark.asyncio
async def test_get_all_tasks_empty_body(token_store):
    """Test an empty body yields no data"""
    handler = RecordingHandler(status_code=204)
    client = make_client(handler, token_store)

    result = await client.get_all_tasks()

    assert result.success is True
    assert result.data is None
    await client.close()


@pytest.mark.asyncio
async def test_get_all_tasks_transport_error(token_store):
    """Test network failures become the fallback message"""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler, token_store)

    result = await client.get_all_tasks()

    assert result.success is False
    assert result.error == "Failed to fetch tasks"
    await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "due_time, expected",
    [
        ("09:00", "09:00:00"),
        (None, None),
        ("09:00:00", "09:00:00"),
    ],
)
async def test_create_task_due_time_payload(token_store, created_task, due_time, expected):
    """Test dueTime expansion in the create payload"""
    handler = RecordingHandler(status_code=201, json_body=created_task)
    client = make_client(handler, token_store)

    result = await client.create_task({"title": "Call plumber", "dueDate": "2024-05-11", "dueTime": due_time})

    assert result.success is True
    assert result.data == created_task
    body = handler.last_json
    assert "dueTime" in body
    assert body["dueTime"] == expected
    assert body["title"] == "Call plumber"
    await client.close()


@pytest.mark.asyncio
async def test_create_task_from_model(token_store, created_task):
    """Test TaskCreate is sent with backend field names"""
    handler = RecordingHandler(status_code=201, json_body=created_task)
    client = make_client(handler, token_store)

    await client.create_task(TaskCreate(title="Call plumber", category="Home", dueTime="18:45"))

    assert handler.last_json == {
        "title": "Call plumber",
        "description": None,
        "category": "Home",
        "status": "Pending",
        "dueDate": None,
        "dueTime": "18:45:00",
    }
    await client.close()


@pytest.mark.asyncio
async def test_create_task_failure(token_store):
    handler = RecordingHandler(status_code=400, json_body={"message": "Title must not be empty"})
    client = make_client(handler, token_store)

    result = await client.create_task({"title": ""})

    assert result.success is False
    assert result.error == "Title must not be empty"
    await client.close()


@pytest.mark.asyncio
async def test_error_status_raises_api_error(token_store):
    """Test the base request turns error statuses into APIError"""
    handler = RecordingHandler(status_code=404, json_body={"message": "No such task"})
    client = make_client(handler, token_store)

    with pytest.raises(APIError) as exc_info:
        await client.get("/api/tasks/99")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "No such task"
    await client.close()


@pytest.mark.asyncio
async def test_create_task_serializes_dates(token_store, created_task):
    """Test date objects in a plain dict payload are sent as ISO text"""
    handler = RecordingHandler(status_code=201, json_body=created_task)
    client = make_client(handler, token_store)

    result = await client.create_task({"title": "Call plumber", "dueDate": date(2024, 5, 10), "dueTime": "09:00"})

    assert result.success is True
    assert handler.last_json["dueDate"] == "2024-05-10"
    assert handler.last_json["dueTime"] == "09:00:00"
    await client.close()


@pytest.mark.asyncio
async def test_create_task_rejects_non_object_payload(token_store):
    handler = RecordingHandler(json_body={})
    client = make_client(handler, token_store)

    result = await client.create_task(["not", "a", "task"])

    assert result.success is False
    assert result.error == "Failed to create task"
    assert handler.requests == []
    await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation, args, fallback",
    [
        ("register", ({"mail": "ada@example.com", "password": "secret"},), "Registration failed"),
        ("login", ({"mail": "ada@example.com", "password": "secret"},), "Login failed. Invalid credentials."),
        ("get_all_tasks", (), "Failed to fetch tasks"),
        ("create_task", ({"title": "Call plumber"},), "Failed to create task"),
    ],
)
async def test_unexpected_errors_stay_inside_client(token_store, operation, args, fallback):
    """Test every operation returns a failed result instead of raising"""
    def handler(request):
        raise RuntimeError("transport exploded")

    client = make_client(handler, token_store)

    result = await getattr(client, operation)(*args)

    assert result.success is False
    assert result.error == fallback
    assert token_store.get() is None
    await client.close()


@pytest.mark.asyncio
async def test_invalid_base_url_does_not_raise(token_store):
    client = TaskAPIClient(base_url="not a url", token_store=token_store)

    result = await client.get_all_tasks()

    assert result.success is False
    assert result.error == "Failed to fetch tasks"
    await client.close()
