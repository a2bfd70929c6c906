# gateway.py - HTTP surface of the mirror service
import logging

from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import constants
from config_loader import default_config
from errors import (
    LockFailureError,
    SessionAlreadyActiveError,
    SessionNotActiveError,
    TaskDeserializationError,
    TaskExecutionError,
)
from session_manager import SessionManager
from task_executor import execute_task
from tasks import parse_task
from user_registry import UserRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request schemas =====
class CreateUser(BaseModel):
    username: str = Field(min_length=1)


# ===== Routes =====
@router.get("/")
def root():
    return "Hello, World!"


@router.get("/healthz", include_in_schema=False)
def healthz():
    return {"status": "ok"}


# Handlers are sync so that blocking file I/O runs in the worker threadpool
@router.post("/task")
def run_task(request: Request, payload: dict = Body(...)):
    task = parse_task(payload)
    logger.debug(f"Executing {task.task_type} task for {task.url}")
    result = execute_task(task, request.app.state.config)
    return result.model_dump()


@router.post("/save/init")
def start_session(request: Request):
    session = request.app.state.sessions.start()
    return session.to_dict()


@router.post("/save/end")
def end_session(request: Request):
    session = request.app.state.sessions.end()
    return session.to_dict()


@router.get("/save")
def current_session(request: Request):
    session = request.app.state.sessions.current()
    return session.to_dict()


@router.post("/users", status_code=201)
def create_user(request: Request, payload: CreateUser):
    user = request.app.state.users.add(payload.username)
    return user.to_dict()


@router.get("/users")
def get_users(request: Request):
    return [user.to_dict() for user in request.app.state.users.list()]


# ===== Error mapping =====
def _task_execution_error(request: Request, exc: TaskExecutionError):
    logger.error(f"Task failed ({exc.kind}) for {exc.url}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc), "kind": exc.kind})


def _task_deserialization_error(request: Request, exc: TaskDeserializationError):
    logger.warning(f"Rejected task payload: {exc.reason}")
    return JSONResponse(status_code=422, content={"error": str(exc), "reason": exc.reason})


def _already_active(request: Request, exc: SessionAlreadyActiveError):
    return JSONResponse(status_code=406, content={"error": str(exc)})


def _not_active(request: Request, exc: SessionNotActiveError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


def _lock_failure(request: Request, exc: LockFailureError):
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(config=None):
    """Builds the application; shared state lives on `app.state` for the app's lifetime."""
    config = config if config is not None else default_config()
    lock_timeout = config.get('lock_timeout_seconds', constants.DEFAULT_LOCK_TIMEOUT)

    app = FastAPI(title="Site Mirror Service", version="0.1.0")
    app.state.config = config
    app.state.sessions = SessionManager(lock_timeout=lock_timeout)
    app.state.users = UserRegistry(lock_timeout=lock_timeout)

    app.add_exception_handler(TaskExecutionError, _task_execution_error)
    app.add_exception_handler(TaskDeserializationError, _task_deserialization_error)
    app.add_exception_handler(SessionAlreadyActiveError, _already_active)
    app.add_exception_handler(SessionNotActiveError, _not_active)
    app.add_exception_handler(LockFailureError, _lock_failure)

    app.include_router(router)
    logger.info(f"Gateway ready, mirroring under {config.get('mirror_root')}")
    return app
