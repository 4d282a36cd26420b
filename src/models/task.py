"""
Task model
"""

from enum import Enum
from typing import Optional, List, Union, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator
from src.config.constants import STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED


class TaskStatus(str, Enum):
    """Task status as reported by the backend"""
    PENDING = STATUS_PENDING
    IN_PROGRESS = STATUS_IN_PROGRESS
    COMPLETED = STATUS_COMPLETED


# dueTime arrives as "HH:MM", "HH:MM:SS" or an [hour, minute(, second)] list
DueTime = Union[str, List[int], None]


class Task(BaseModel):
    """Task model"""
    
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    
    id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None  # unknown statuses are kept as plain text
    # backend shapes vary (ISO text, Jackson arrays); read by date_utils
    due_date: Optional[Any] = Field(None, alias="dueDate")
    due_time: Optional[Any] = Field(None, alias="dueTime")
    
    def has_status(self, status: TaskStatus) -> bool:
        """Check task status against a known status"""
        return self.status == status.value


class TaskCreate(BaseModel):
    """Task creation model, filled by the creation form"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    status: str = TaskStatus.PENDING.value
    due_date: Optional[str] = Field(None, alias="dueDate")
    due_time: DueTime = Field(None, alias="dueTime")
    
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value
    
    @field_validator("description", "category", "due_date", "due_time", mode="before")
    @classmethod
    def empty_to_none(cls, value: Any) -> Any:
        # HTML forms submit untouched fields as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value
    

class Credentials(BaseModel):
    """Login credentials"""
    mail: str
    password: str


class UserRegistration(BaseModel):
    """User registration model"""
    
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    mail: str
    password: str
