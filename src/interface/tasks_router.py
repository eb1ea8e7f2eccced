"""HTTP interface for task CRUD under /api/tasks."""

import logging

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.core.config import settings
from src.core.errors import AuthError, InputValidationError, TaskflowError, error_response_for
from src.domain.create_models import TaskCreate
from src.domain.update_models import TaskUpdate
from src.domain.user import AuthenticatedUser
from src.modules.tasks.query import TaskQuery
from src.modules.tasks.service import TaskService
from src.services.auth_service import AuthProvider


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

NO_STORE_CACHE_CONTROL = "private, no-cache, no-store, must-revalidate"


def get_task_service(request: Request) -> TaskService:
    """Service instance created during application startup."""
    return request.app.state.task_service


def get_auth_provider(request: Request) -> AuthProvider:
    """Auth provider created during application startup."""
    return request.app.state.auth_provider


def extract_token(request: Request) -> str | None:
    """Read the credential from the auth cookie or an ``Authorization: Bearer`` header."""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token

    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def require_user(
    request: Request,
    auth: AuthProvider = Depends(get_auth_provider),
) -> AuthenticatedUser:
    """Authenticate the caller or fail with 401."""
    token = extract_token(request)
    if not token:
        logger.warning("auth_missing_token", extra={"path": request.url.path})
        raise AuthError
    return auth.verify_token(token)


@router.get("")
async def list_tasks(
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """List the caller's tasks with filtering, sorting and pagination."""
    try:
        params = TaskQuery.model_validate(dict(request.query_params))
    except ValidationError as err:
        raise InputValidationError from err

    page = await service.list(user.user_id, params)

    response = JSONResponse(
        content={
            "success": True,
            "data": [task.to_response() for task in page.tasks],
            "pagination": page.pagination(),
        }
    )
    response.headers["Cache-Control"] = NO_STORE_CACHE_CONTROL
    return response


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    user: AuthenticatedUser = Depends(require_user),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Create a task for the caller."""
    task = await service.create(user.user_id, data)
    return JSONResponse(
        content={"success": True, "data": task.to_response()},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    user: AuthenticatedUser = Depends(require_user),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Fetch one of the caller's tasks."""
    task = await service.get_by_id(user.user_id, task_id)
    return JSONResponse(content={"success": True, "data": task.to_response()})


@router.api_route("/{task_id}", methods=["PUT", "PATCH"])
async def update_task(
    task_id: str,
    data: TaskUpdate,
    user: AuthenticatedUser = Depends(require_user),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Partially update one of the caller's tasks. PUT and PATCH behave the same."""
    task = await service.update(user.user_id, task_id, data)
    return JSONResponse(content={"success": True, "data": task.to_response()})


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    user: AuthenticatedUser = Depends(require_user),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Delete one of the caller's tasks."""
    await service.delete(user.user_id, task_id)
    return JSONResponse(content={"success": True, "message": "Task deleted successfully"})


def _error_body(message: str) -> dict:
    return {"success": False, "error": message}


async def handle_taskflow_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate a taskflow error into its HTTP response."""
    error = error_response_for(exc)
    log_level = logging.ERROR if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logging.INFO
    logger.log(
        log_level,
        "request_failed",
        extra={"path": request.url.path, "code": error.code, "status_code": error.status_code},
    )
    return JSONResponse(content=_error_body(error.message), status_code=error.status_code)


async def handle_request_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Malformed or missing input never reaches the service."""
    logger.info("request_validation_failed", extra={"path": request.url.path, "error": str(exc)})
    error = error_response_for(InputValidationError())
    return JSONResponse(content=_error_body(error.message), status_code=error.status_code)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything unclassified."""
    logger.error("request_unexpected_error", extra={"path": request.url.path, "error": str(exc)})
    error = error_response_for(exc)
    return JSONResponse(content=_error_body(error.message), status_code=error.status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error-to-response mapping on ``app``."""
    app.add_exception_handler(TaskflowError, handle_taskflow_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
