"""
Application constants
"""

# Task API endpoints
REGISTER_ENDPOINT = "/api/auth/register"
LOGIN_ENDPOINT = "/api/auth/login"
TASKS_ENDPOINT = "/api/tasks"

# Auth token persistence
AUTH_TOKEN_KEY = "authToken"
AUTH_SCHEME = "Basic"

# Fallback error messages (used when the server gives no reason)
REGISTER_FAILED_MESSAGE = "Registration failed"
LOGIN_FAILED_MESSAGE = "Login failed. Invalid credentials."
FETCH_TASKS_FAILED_MESSAGE = "Failed to fetch tasks"
CREATE_TASK_FAILED_MESSAGE = "Failed to create task"

# Task statuses as sent by the backend
STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"

# Status badge CSS classes
STATUS_CSS_CLASSES = {
    STATUS_COMPLETED: "status-completed",
    STATUS_IN_PROGRESS: "status-progress",
    STATUS_PENDING: "status-pending",
}

# Due-soon classification
DUE_SOON_WINDOW_DAYS = 2
DEFAULT_DUE_TIME = "23:59"  # end of day when a task has a date but no time
TIME_DISPLAY_LENGTH = 5  # "HH:MM"
TIME_PLACEHOLDER = "—"

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
