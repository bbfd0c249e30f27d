from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import setup_logging
from .routers import submenus as submenus_router
from .settings import get_settings

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "submenus",
        "description": "Dynamic admin sidebar submenus listing posts, terms and users by role.",
    },
]

_settings = get_settings()
logger = setup_logging(_settings.log_level)

app = FastAPI(
    title="Admin Submenus Backend",
    description="Builds admin sidebar submenus with bounded content lists and 'See more' links.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

allow_all = (list(_settings.cors_allow_origins) == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else list(_settings.cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that are not JSON serializable
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health and the configured submenu limit.
    """
    return {"message": "Healthy", "default_limit": _settings.default_limit}


app.include_router(submenus_router.router)
logger.info("Admin submenus backend started (default limit %d)", _settings.default_limit)
