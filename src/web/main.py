"""
Web interface for the task dashboard
"""

from typing import Optional, Dict, Any
from pathlib import Path
from fastapi import FastAPI, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from src.api.task_api_client import TaskAPIClient
from src.services.dashboard import Dashboard
from src.models.response import APIResult
from src.models.task import Credentials, TaskCreate, TaskStatus, UserRegistration
from src.utils.logger import logger
from src.utils.error_handler import format_error_message
from src.config.settings import settings

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


class DashboardApp:
    """Holds the API client, the signed-in user and the dashboard state"""

    def __init__(self, api_client: Optional[TaskAPIClient] = None):
        self.api_client = api_client or TaskAPIClient()
        self.dashboard = Dashboard(self.api_client)
        self.user: Optional[Dict[str, Any]] = None
        self.logger = logger

    @property
    def is_authenticated(self) -> bool:
        return bool(self.api_client.is_authenticated)

    async def initialize(self):
        """Load tasks once if a persisted session exists"""
        if self.is_authenticated:
            await self.dashboard.load()

    async def login(self, credentials: Credentials) -> APIResult:
        result = await self.api_client.login(credentials)
        if result.success:
            self.user = result.data if isinstance(result.data, dict) else None
            self.dashboard = Dashboard(self.api_client)
            await self.dashboard.load()
        return result

    def logout(self):
        self.api_client.logout()
        self.user = None
        self.dashboard = Dashboard(self.api_client)

    async def close(self):
        await self.api_client.close()


def _form_errors(error: ValidationError) -> str:
    return "; ".join(err["msg"].removeprefix("Value error, ") for err in error.errors())


def create_app(dashboard_app: Optional[DashboardApp] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        dashboard_app: Application state (a new one is built by default)
    """
    state = dashboard_app or DashboardApp()
    app = FastAPI(title="Task Dashboard")
    app.state.dashboard_app = state

    def render_dashboard(
        request: Request,
        form_error: str = "",
        form_values: Optional[Dict[str, Any]] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        dashboard = state.dashboard
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "user": state.user,
                "stats": dashboard.stats,
                "cards": dashboard.task_cards(),
                "loading": dashboard.loading,
                "error": dashboard.error,
                "statuses": [s.value for s in TaskStatus],
                "form_error": form_error,
                "form": form_values or {},
            },
            status_code=status_code,
        )

    def render_login(request: Request, error: str = "", message: str = "", status_code: int = 200) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": error, "message": message},
            status_code=status_code,
        )

    @app.on_event("startup")
    async def startup():
        """Initialize on startup"""
        logger.info(f"[Startup] Task API at {state.api_client.base_url}")
        await state.initialize()

    @app.on_event("shutdown")
    async def shutdown():
        await state.close()

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Dashboard page"""
        if not state.is_authenticated:
            return RedirectResponse("/login", status_code=303)
        return render_dashboard(request)

    @app.post("/tasks", response_class=HTMLResponse)
    async def create_task_form(
        request: Request,
        title: str = Form(""),
        description: str = Form(""),
        category: str = Form(""),
        status: str = Form(TaskStatus.PENDING.value),
        due_date: str = Form("", alias="dueDate"),
        due_time: str = Form("", alias="dueTime"),
    ):
        """Task creation form submit"""
        form_values = {
            "title": title,
            "description": description,
            "category": category,
            "status": status,
            "dueDate": due_date,
            "dueTime": due_time,
        }
        try:
            task_data = TaskCreate.model_validate(form_values)
        except ValidationError as e:
            return render_dashboard(request, form_error=_form_errors(e), form_values=form_values, status_code=400)

        result = await state.dashboard.create_task(task_data)
        if not result.success:
            # keep the form filled so the user can retry
            return render_dashboard(request, form_values=form_values, status_code=502)
        return RedirectResponse("/", status_code=303)

    @app.post("/refresh")
    async def refresh():
        """Explicit re-fetch"""
        await state.dashboard.fetch_tasks()
        return RedirectResponse("/", status_code=303)

    @app.get("/login", response_class=HTMLResponse)
    async def login_page(request: Request):
        return render_login(request)

    @app.post("/login", response_class=HTMLResponse)
    async def login(request: Request, mail: str = Form(...), password: str = Form(...)):
        result = await state.login(Credentials(mail=mail, password=password))
        if not result.success:
            return render_login(request, error=result.error, status_code=401)
        return RedirectResponse("/", status_code=303)

    @app.post("/register", response_class=HTMLResponse)
    async def register(
        request: Request,
        first_name: str = Form("", alias="firstName"),
        last_name: str = Form("", alias="lastName"),
        mail: str = Form(...),
        password: str = Form(...),
    ):
        user = UserRegistration(
            first_name=first_name or None,
            last_name=last_name or None,
            mail=mail,
            password=password,
        )
        result = await state.api_client.register(user)
        if not result.success:
            return render_login(request, error=result.error, status_code=400)
        return render_login(request, message="Registration successful. Please log in.")

    @app.post("/logout")
    async def logout():
        state.logout()
        return RedirectResponse("/login", status_code=303)

    @app.get("/api/dashboard")
    async def dashboard_json():
        """Dashboard state as JSON"""
        dashboard = state.dashboard
        return {
            "state": dashboard.state.kind,
            "error": dashboard.error,
            "stats": dashboard.stats.model_dump(),
            "tasks": [
                {
                    **card.task.model_dump(by_alias=True),
                    "dueSoon": card.due_soon,
                    "dueDateLabel": card.due_date_label,
                    "dueTimeLabel": card.due_time_label,
                    "statusClass": card.status_class,
                }
                for card in dashboard.task_cards()
            ],
        }

    @app.post("/api/tasks")
    async def create_task_json(task: TaskCreate):
        """Create task from JSON"""
        try:
            result = await state.dashboard.create_task(task)
        except Exception as e:
            return {"success": False, "error": format_error_message(e)}
        return result.model_dump(exclude_none=True)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.WEB_HOST, port=settings.WEB_PORT)
