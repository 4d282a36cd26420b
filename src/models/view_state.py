"""
Dashboard view state models
"""

from typing import List, Union, Literal
from pydantic import BaseModel, Field
from src.models.task import Task


class Loading(BaseModel):
    """A fetch is outstanding; tasks holds the list from before it started"""
    kind: Literal["loading"] = "loading"
    tasks: List[Task] = Field(default_factory=list)
    error: str = ""


class Loaded(BaseModel):
    """Last fetch succeeded; error holds the latest failed create, if any"""
    kind: Literal["loaded"] = "loaded"
    tasks: List[Task] = Field(default_factory=list)
    error: str = ""


class Failed(BaseModel):
    """Last fetch failed; the stale list is dropped"""
    kind: Literal["failed"] = "failed"
    reason: str
    tasks: List[Task] = Field(default_factory=list)

    @property
    def error(self) -> str:
        return self.reason


ViewState = Union[Loading, Loaded, Failed]


class DashboardStats(BaseModel):
    """Summary counts shown above the task list"""
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0


class TaskCard(BaseModel):
    """Presentation data for one task"""
    task: Task
    due_soon: bool = False
    due_date_label: str = "—"
    due_time_label: str
    status_class: str = ""
