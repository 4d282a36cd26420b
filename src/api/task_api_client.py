"""
Task API client
"""

import base64
from typing import Optional, Dict, Any, Union
from pydantic import BaseModel
from pydantic_core import to_jsonable_python
import httpx
from src.api.base_client import BaseAPIClient
from src.config.settings import settings
from src.config.constants import (
    AUTH_SCHEME,
    REGISTER_ENDPOINT,
    LOGIN_ENDPOINT,
    TASKS_ENDPOINT,
    REGISTER_FAILED_MESSAGE,
    LOGIN_FAILED_MESSAGE,
    FETCH_TASKS_FAILED_MESSAGE,
    CREATE_TASK_FAILED_MESSAGE,
)
from src.models.response import APIResult
from src.services.token_store import TokenStore
from src.utils.error_handler import APIError, ValidationError, extract_error_message
from src.utils.logger import logger

Payload = Union[Dict[str, Any], BaseModel]


def encode_basic_token(mail: str, password: str) -> str:
    """
    Build a Basic auth token from mail and password

    Args:
        mail: User mail
        password: User password

    Returns:
        base64("mail:password")
    """
    raw_token = f"{mail}:{password}"
    return base64.b64encode(raw_token.encode("utf-8")).decode("ascii")


def normalize_due_time_for_api(due_time: Any) -> Any:
    """
    Expand a bare "HH:MM" due time to "HH:MM:SS"

    Other shapes go out unchanged; an absent time is sent as None.
    """
    if not due_time:
        return None
    if isinstance(due_time, str) and len(due_time) == 5:
        return f"{due_time}:00"
    return due_time


def _to_payload(data: Payload) -> Dict[str, Any]:
    """JSON-safe request body with backend field names (dates become ISO text)"""
    payload = to_jsonable_python(data, by_alias=True)
    if not isinstance(payload, dict):
        raise ValidationError(f"Expected an object payload, got {type(data).__name__}")
    return payload


class TaskAPIClient(BaseAPIClient):
    """Client for the task management backend"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize task API client

        A token persisted by a previous session is attached right away.

        Args:
            base_url: Backend base URL (defaults to settings)
            token_store: Durable token storage (defaults to settings path)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Custom httpx transport (used by tests)
        """
        super().__init__(
            base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self.token_store = token_store if token_store is not None else TokenStore()
        self.token: Optional[str] = None
        self.logger = logger
        self.load_persisted_token()

    # Token lifecycle

    def _apply_auth_header(self, token: Optional[str]):
        self.token = token or None
        if token:
            self.set_header("Authorization", f"{AUTH_SCHEME} {token}")
        else:
            self.remove_header("Authorization")

    def load_persisted_token(self) -> bool:
        """
        Reattach a previously persisted token

        Returns:
            True if a token was found
        """
        stored_token = self.token_store.get()
        if stored_token:
            self._apply_auth_header(stored_token)
            self.logger.info("Restored persisted auth token")
            return True
        return False

    def store_auth_token(self, token: Optional[str]):
        """Persist token and attach it to requests (clears both when empty)"""
        if token:
            self.token_store.set(token)
        else:
            self.token_store.clear()
        self._apply_auth_header(token)

    def clear_auth_token(self):
        """Forget the current token"""
        self.store_auth_token(None)

    def logout(self):
        """Log out: drop the Authorization header and the persisted token"""
        self.clear_auth_token()
        self.logger.info("Logged out")

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    # Auth

    async def register(self, user_data: Payload) -> APIResult:
        """
        Register a new user

        Args:
            user_data: User fields

        Returns:
            APIResult with backend response data
        """
        try:
            data = await self.post(REGISTER_ENDPOINT, json_data=_to_payload(user_data))
            self.logger.info("User registered")
            return APIResult.ok(data)
        except (APIError, httpx.HTTPError) as e:
            self.logger.warning(f"Registration failed: {e}")
            return APIResult.fail(extract_error_message(e, REGISTER_FAILED_MESSAGE))
        except Exception as e:
            self.logger.error(f"Registration failed unexpectedly: {e}", exc_info=True)
            return APIResult.fail(REGISTER_FAILED_MESSAGE)

    async def login(self, credentials: Payload) -> APIResult:
        """
        Log in and persist the derived Basic token

        Args:
            credentials: At least mail and password

        Returns:
            APIResult with backend response data and the token
        """
        try:
            payload = _to_payload(credentials)
            data = await self.post(LOGIN_ENDPOINT, json_data=payload)
            token = encode_basic_token(payload.get("mail", ""), payload.get("password", ""))
        except (APIError, httpx.HTTPError) as e:
            self.logger.warning(f"Login failed: {e}")
            return APIResult.fail(extract_error_message(e, LOGIN_FAILED_MESSAGE))
        except Exception as e:
            self.logger.error(f"Login failed unexpectedly: {e}", exc_info=True)
            return APIResult.fail(LOGIN_FAILED_MESSAGE)

        self.store_auth_token(token)
        self.logger.info("Logged in")
        return APIResult.ok(data, token=token)

    # Tasks

    async def get_all_tasks(self) -> APIResult:
        """
        Get all tasks of the current user

        Returns:
            APIResult with a list of task dicts
        """
        try:
            data = await self.get(TASKS_ENDPOINT)
            self.logger.debug(f"Fetched {len(data) if isinstance(data, list) else 0} tasks")
            return APIResult.ok(data)
        except (APIError, httpx.HTTPError) as e:
            self.logger.warning(f"Fetching tasks failed: {e}")
            return APIResult.fail(extract_error_message(e, FETCH_TASKS_FAILED_MESSAGE))
        except Exception as e:
            self.logger.error(f"Fetching tasks failed unexpectedly: {e}", exc_info=True)
            return APIResult.fail(FETCH_TASKS_FAILED_MESSAGE)

    async def create_task(self, task_data: Payload) -> APIResult:
        """
        Create a task

        Args:
            task_data: Task fields (camelCase keys)

        Returns:
            APIResult with the created task
        """
        try:
            payload = _to_payload(task_data)
            payload["dueTime"] = normalize_due_time_for_api(payload.get("dueTime"))
            data = await self.post(TASKS_ENDPOINT, json_data=payload)
            self.logger.info(f"Task created: {payload.get('title')}")
            return APIResult.ok(data)
        except (APIError, httpx.HTTPError) as e:
            self.logger.warning(f"Creating task failed: {e}")
            return APIResult.fail(extract_error_message(e, CREATE_TASK_FAILED_MESSAGE))
        except Exception as e:
            self.logger.error(f"Creating task failed unexpectedly: {e}", exc_info=True)
            return APIResult.fail(CREATE_TASK_FAILED_MESSAGE)
