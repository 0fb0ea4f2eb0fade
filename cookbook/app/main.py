# cookbook/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from cookbook import __version__
from cookbook.app.config import settings
from cookbook.app.domain.errors import RecipeError
from cookbook.app.routers.auth import router as auth_router
from cookbook.app.routers.recipes import router as recipes_router

# Plain stdout logging (dev and containers)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Cookbook API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipes_router)
app.include_router(auth_router)


@app.exception_handler(RecipeError)
async def recipe_error_handler(request: Request, exc: RecipeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Server is running. Try /health or /recipes"


@app.get("/health")
def health():
    return {"ok": True}
