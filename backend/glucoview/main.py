import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from glucoview import __version__
from glucoview.api import api_router
from glucoview.core.logging import configure_logging
from glucoview.core.settings import get_settings

configure_logging()
settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Glucoview", version=__version__)


def _collect_cors_origins() -> list[str]:
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    collected: list[str] = []
    for origin in (*default_origins, *settings.security.cors_origins):
        if origin and origin not in collected:
            collected.append(origin)

    return collected


app.add_middleware(
    CORSMiddleware,
    allow_origins=_collect_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Rejected inputs may be NaN/Infinity, which JSON cannot carry back
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Glucoview backend running"}


def run() -> None:
    import uvicorn

    logger.info("Starting server on %s:%s", settings.server.host, settings.server.port)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)
