"""
Dashboard view state service
"""

from datetime import datetime
from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, ValidationError
from src.api.task_api_client import TaskAPIClient
from src.config.constants import (
    STATUS_CSS_CLASSES,
    FETCH_TASKS_FAILED_MESSAGE,
    CREATE_TASK_FAILED_MESSAGE,
)
from src.models.response import CreateResult
from src.models.task import Task, TaskStatus
from src.models.view_state import (
    ViewState,
    Loading,
    Loaded,
    Failed,
    DashboardStats,
    TaskCard,
)
from src.utils.date_utils import is_due_soon, format_date, format_time
from src.utils.logger import logger


def status_css_class(status: Optional[str]) -> str:
    """CSS class for a status badge ("" for unknown statuses)"""
    return STATUS_CSS_CLASSES.get(status or "", "")


def compute_stats(tasks: List[Task]) -> DashboardStats:
    """
    Count tasks per status

    Args:
        tasks: Current task list

    Returns:
        DashboardStats
    """
    return DashboardStats(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.has_status(TaskStatus.COMPLETED)),
        in_progress=sum(1 for t in tasks if t.has_status(TaskStatus.IN_PROGRESS)),
        pending=sum(1 for t in tasks if t.has_status(TaskStatus.PENDING)),
    )


class Dashboard:
    """Service holding the dashboard view state"""

    def __init__(self, api_client: TaskAPIClient):
        """
        Initialize dashboard

        Args:
            api_client: Task API client
        """
        self.client = api_client
        self.state: ViewState = Loading()
        self._loaded_once = False
        self.logger = logger

    @property
    def tasks(self) -> List[Task]:
        return list(self.state.tasks)

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def error(self) -> str:
        return self.state.error

    @property
    def stats(self) -> DashboardStats:
        """Counts recomputed from the current list on every access"""
        return compute_stats(self.state.tasks)

    async def load(self):
        """Initial fetch; later calls are ignored, use fetch_tasks to refresh"""
        if self._loaded_once:
            return
        self._loaded_once = True
        await self.fetch_tasks()

    async def fetch_tasks(self):
        """Fetch tasks and replace the current list"""
        self.state = Loading(tasks=self.state.tasks, error=self.state.error)

        try:
            result = await self.client.get_all_tasks()
            if result.success:
                tasks = [Task.model_validate(item) for item in (result.data or [])]
                self.state = Loaded(tasks=tasks)
                self.logger.info(f"Dashboard loaded {len(tasks)} tasks")
            else:
                self.state = Failed(reason=result.error or FETCH_TASKS_FAILED_MESSAGE)
                self.logger.warning(f"Dashboard fetch failed: {self.state.reason}")
        except (ValidationError, TypeError) as e:
            self.logger.error(f"Unexpected task list payload: {e}")
            self.state = Failed(reason=FETCH_TASKS_FAILED_MESSAGE)
        finally:
            # loading never outlives the call, even if the client raised
            if isinstance(self.state, Loading):
                self.state = Failed(reason=FETCH_TASKS_FAILED_MESSAGE)

    def _with_tasks(self, tasks: List[Task], error: str) -> ViewState:
        if isinstance(self.state, Loading):
            return Loading(tasks=tasks, error=error)
        if isinstance(self.state, Failed) and error:
            return Failed(reason=error, tasks=tasks)
        return Loaded(tasks=tasks, error=error)

    async def create_task(self, task_data: Union[Dict[str, Any], BaseModel]) -> CreateResult:
        """
        Create a task and append the backend's copy to the list

        Args:
            task_data: Task fields from the creation form

        Returns:
            CreateResult for the form
        """
        result = await self.client.create_task(task_data)

        if result.success:
            try:
                created = Task.model_validate(result.data)
            except ValidationError as e:
                self.logger.error(f"Unexpected created task payload: {e}")
                error = CREATE_TASK_FAILED_MESSAGE
            else:
                self.state = self._with_tasks(self.state.tasks + [created], "")
                return CreateResult(success=True)
        else:
            error = result.error or CREATE_TASK_FAILED_MESSAGE

        self.state = self._with_tasks(self.state.tasks, error)
        return CreateResult(success=False, error=error)

    def task_cards(self, now: Optional[datetime] = None) -> List[TaskCard]:
        """
        Presentation data for every task in list order

        Args:
            now: Current local datetime (defaults to now)
        """
        return [
            TaskCard(
                task=task,
                due_soon=is_due_soon(task.due_date, task.due_time, now=now),
                due_date_label=format_date(task.due_date),
                due_time_label=format_time(task.due_time),
                status_class=status_css_class(task.status),
            )
            for task in self.state.tasks
        ]
