"""FastAPI server exposing the create, get and check quiz endpoints."""

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uvicorn

from .config import config
from .errors import (
    ConfigurationError,
    GenerationError,
    NotFoundError,
    ValidationError,
)
from .service import QuizService

logger = logging.getLogger(__name__)


class CreateQuizPayload(BaseModel):
    # Loosely typed so the service can answer with its own 400 messages
    features: Any = None
    objectType: Optional[Any] = None
    source: Optional[Any] = None


class CheckQuizPayload(BaseModel):
    quizId: Any = None
    answers: Any = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _get_quiz_service_dependency(service: QuizService):
    def dependency() -> QuizService:
        return service

    return dependency


def create_api_app(service: Optional[QuizService] = None) -> FastAPI:
    """Build the API around an explicitly owned quiz service."""
    service = service or QuizService()
    quiz_service_dep = _get_quiz_service_dependency(service)

    app = FastAPI(title="claimcheck")
    app.state.quiz_service = service

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        if request.url.path.endswith("create-quiz"):
            return _error(400, "features array is required")
        return _error(400, "invalid request body")

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, "quiz not found")

    @app.exception_handler(ConfigurationError)
    async def handle_configuration(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error(f"Quiz generation is not configured: {exc}")
        return _error(500, str(exc))

    @app.exception_handler(GenerationError)
    async def handle_generation(request: Request, exc: GenerationError) -> JSONResponse:
        logger.error(f"Quiz generation failed: {exc}")
        return _error(502, str(exc))

    @app.post("/api/create-quiz")
    async def create_quiz(
        payload: CreateQuizPayload,
        manager: QuizService = Depends(quiz_service_dep),
    ) -> dict[str, object]:
        record = await manager.create_quiz(
            payload.features,
            object_type=payload.objectType,
            source=payload.source,
        )
        return {
            "quizId": record.quiz_id,
            "questions": [q.to_dict() for q in record.questions],
        }

    @app.get("/api/get-quiz")
    async def get_quiz(
        quizId: Optional[str] = None,
        manager: QuizService = Depends(quiz_service_dep),
    ) -> dict[str, object]:
        return manager.get_quiz(quizId).to_dict()

    @app.post("/api/check-quiz")
    async def check_quiz(
        payload: CheckQuizPayload,
        manager: QuizService = Depends(quiz_service_dep),
    ) -> dict[str, object]:
        return manager.check_quiz(payload.quizId, payload.answers).to_dict()

    return app


def start_api_server(
    service: Optional[QuizService] = None,
    host: str = config.server.host,
    port: int = config.server.port,
) -> None:
    """Run the API with uvicorn until interrupted."""
    app = create_api_app(service)
    logger.info(f"Serving claimcheck on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
