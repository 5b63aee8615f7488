import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from recipe_markdown import config
from .routers import recipes

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

app = FastAPI(title="Recipe Markdown API", version="0.1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_error(request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = "URL is required"
    elif any("url" in err.get("loc", ()) for err in errors):
        message = "Invalid URL format"
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=422, content={"error": message})


@app.get("/healthz")
def healthz():
    return {"ok": True}

# mount all /api routes
app.include_router(recipes.router)
