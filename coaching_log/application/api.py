"""FastAPI application entry point."""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .controller import CoachingLogController
from ..domain.entities import (
    CoachingLogError,
    PayloadTooLargeError,
    ReferenceCategory,
    StorageError,
    ValidationError,
)
from ..domain.services import StateStore
from ..infrastructure.json_file_state_repository import JsonFileStateRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def get_controller(request: Request) -> CoachingLogController:
    """Controller owned by the running application."""
    return request.app.state.controller


def require_admin(
    controller: CoachingLogController = Depends(get_controller),
    x_user_email: Optional[str] = Header(None),
) -> None:
    """Gate API access on the email asserted by the sign-in provider."""
    controller.check_access(x_user_email)


def resolve_category(category: str) -> ReferenceCategory:
    return ReferenceCategory.parse(category)


async def read_json_body(request: Request) -> dict:
    """Decode the request body as a JSON object; an empty body is ``{}``.

    Reading stops as soon as the body passes ``max_body_bytes``, so an
    oversized upload is never buffered in full.
    """
    limit = request.app.state.settings.max_body_bytes
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError("Request body too large.")

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError("Request body too large.")
        chunks.append(chunk)
    body = b"".join(chunks)

    if not body.strip():
        return {}

    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError("Request body must be valid JSON.") from None

    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


health_router = APIRouter()
router = APIRouter(prefix="/api", dependencies=[Depends(require_admin)])


@health_router.get("/health")
def health_check(controller: CoachingLogController = Depends(get_controller)):
    """Health check endpoint."""
    return controller.get_health_status()


@router.get("/state")
def get_state(controller: CoachingLogController = Depends(get_controller)):
    """Return the full coaching log document."""
    return controller.get_state()


@router.get("/sessions")
def list_sessions(
    coach: Optional[str] = Query(None, description="Exact coach name"),
    coachee: Optional[str] = Query(None, description="Exact coachee name"),
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status"),
    date: Optional[str] = Query(None, description="Session date, YYYY-MM-DD"),
    controller: CoachingLogController = Depends(get_controller),
):
    """List sessions, newest first, optionally filtered."""
    return controller.list_sessions(
        coach=coach, coachee=coachee, status=status_filter, date=date
    )


@router.get("/sessions/today")
def list_todays_sessions(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of sessions"),
    controller: CoachingLogController = Depends(get_controller),
):
    """List the sessions dated today (UTC), newest first."""
    return controller.get_sessions_for_day(limit=limit)


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
def create_session(
    payload: dict = Depends(read_json_body),
    controller: CoachingLogController = Depends(get_controller),
):
    """Record a new coaching session.

    Returns:
        The created session with its generated id and createdAt.
    """
    return controller.create_session(payload)


@router.post("/reference/{category}", status_code=status.HTTP_201_CREATED)
def add_reference_value(
    reference_category: ReferenceCategory = Depends(resolve_category),
    payload: dict = Depends(read_json_body),
    controller: CoachingLogController = Depends(get_controller),
):
    """Append a value to a reference category and return the updated list."""
    return controller.add_reference_value(reference_category, payload.get("value"))


@router.delete("/reference/{category}")
def remove_reference_value(
    reference_category: ReferenceCategory = Depends(resolve_category),
    value: str = Query("", description="Exact value to remove"),
    controller: CoachingLogController = Depends(get_controller),
):
    """Remove an unused value from a reference category."""
    return controller.remove_reference_value(reference_category, value)


@router.get("/export")
def export_state(controller: CoachingLogController = Depends(get_controller)):
    """Download the full document as a dated JSON attachment."""
    filename, document = controller.export_state()
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def handle_coaching_log_error(request: Request, exc: CoachingLogError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": "Unable to save changes. Please try again."},
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unsupported method on a known path is reported like an unknown path
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Endpoint not found."},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Invalid request."})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected API error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error."},
    )


async def disable_api_caching(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/api/"):
        response.headers.setdefault("Cache-Control", "no-store")
    return response


def create_app(
    app_settings: Optional[Settings] = None,
    state_store: Optional[StateStore] = None,
) -> FastAPI:
    """
    Build the FastAPI application around one state store.

    Args:
        app_settings: Settings to use; defaults to the environment settings
        state_store: Store to serve; defaults to a JSON file store at
            ``app_settings.state_file``

    Returns:
        The configured application
    """
    app_settings = app_settings or settings
    if state_store is None:
        state_store = StateStore(JsonFileStateRepository(app_settings.state_file))

    application = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.middleware("http")(disable_api_caching)

    application.add_exception_handler(CoachingLogError, handle_coaching_log_error)
    application.add_exception_handler(StarletteHTTPException, handle_http_error)
    application.add_exception_handler(RequestValidationError, handle_request_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)

    # Initialize controller with injected dependencies
    application.state.settings = app_settings
    application.state.controller = CoachingLogController(
        state_store=state_store,
        admin_emails=app_settings.admin_emails,
    )

    application.include_router(health_router)
    application.include_router(router)

    logger.info(f"{app_settings.app_name} {app_settings.app_version} configured")
    return application


# Create FastAPI app instance
app = create_app()
