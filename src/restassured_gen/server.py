"""HTTP service: accepts request descriptions from the web form and returns generated tests."""

import logging
from datetime import datetime, timezone

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from restassured_gen import __version__
from restassured_gen.config import Settings, get_settings
from restassured_gen.errors import InvalidRequestError
from restassured_gen.generator.template import generate
from restassured_gen.request.validation import validate_request
from restassured_gen.runner.executor import Executor, JavaExecutor, check_java

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, executor: Executor | None = None) -> FastAPI:
    settings = settings or get_settings()
    if executor is None:
        executor = JavaExecutor(settings).execute

    app = FastAPI(
        title="RestAssured API Test Generator",
        description="Generate RestAssured + TestNG test classes from HTTP request descriptions",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"success": False, "error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Request body must be a JSON object"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={"success": False, "error": "Endpoint not found", "requestedPath": request.url.path},
            )
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Something went wrong!", "details": str(exc)},
        )

    @app.get("/")
    def root():
        return {
            "message": "RestAssured API Test Generator Backend is running!",
            "status": "active",
            "endpoints": {
                "generate": "POST /api/generate-test",
                "execute": "POST /api/execute-test",
                "javaStatus": "GET /api/java-status",
            },
        }

    @app.post("/api/generate-test")
    def generate_test(payload: dict = Body(...)):
        desc = validate_request(payload)
        logger.info("Generating test for %s %s", desc.method.value, desc.endpoint)
        unit = generate(desc)
        logger.debug("Generated %s:\n%s", unit.file_name, unit.source_text)
        return {
            "success": True,
            "message": "Test class generated successfully",
            "data": {
                "javaCode": unit.source_text,
                "className": unit.class_name,
                "fileName": unit.file_name,
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.post("/api/execute-test")
    def execute_test(payload: dict = Body(...)):
        desc = validate_request(payload)
        unit = generate(desc)
        logger.info("Executing %s for %s %s", unit.class_name, desc.method.value, desc.endpoint)
        result = executor(unit.class_name, unit.source_text)
        return {
            "success": result.success,
            "data": {
                "javaCode": unit.source_text,
                "className": unit.class_name,
                "fileName": unit.file_name,
                "result": result.model_dump(mode="json"),
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/java-status")
    def java_status():
        return check_java(settings.java_bin).model_dump()

    return app
