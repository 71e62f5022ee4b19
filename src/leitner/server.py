import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from leitner.application.config import AppConfig, resolve_config
from leitner.application.practice_service import PracticeService
from leitner.consts import VERSION
from leitner.domain.constants import API_PREFIX
from leitner.domain.errors import CardNotFoundError, DuplicateCardError
from leitner.domain.models import AnswerDifficulty, Flashcard

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("leitner.server")

start_time = time.time()


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class UpdateRequest(BaseModel):
    cardFront: str
    cardBack: str
    difficulty: AnswerDifficulty

    @field_validator("difficulty", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any) -> Any:
        # bool is an int subclass; true would otherwise coerce to Easy
        if isinstance(v, bool):
            raise ValueError("difficulty must be an integer grade")
        return v


class AddCardRequest(BaseModel):
    # Empty defaults so a missing side is reported like a blank one.
    front: str = ""
    back: str = ""
    hint: str | None = None
    tags: list[str] | None = None


def get_service(request: Request) -> PracticeService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service


router = APIRouter(prefix=API_PREFIX)


@router.get("/practice")
def get_practice_cards(service: PracticeService = Depends(get_service)):
    """Cards due on the current day."""
    try:
        session = service.get_practice_session()
        return {"cards": [card.to_dict() for card in session.cards], "day": session.day}
    except Exception as e:
        logger.error(f"Error getting practice cards: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching practice cards") from e


@router.post("/update")
def update_card(req: UpdateRequest, service: PracticeService = Depends(get_service)):
    """Move a card after an answer and record it in the history."""
    try:
        service.record_answer(req.cardFront, req.cardBack, req.difficulty)
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found") from None
    except Exception as e:
        logger.error(f"Error updating card: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error updating card") from e
    return {"message": "Card updated successfully"}


@router.get("/hint")
def get_hint(
    card_front: str | None = Query(None, alias="cardFront"),
    card_back: str | None = Query(None, alias="cardBack"),
    service: PracticeService = Depends(get_service),
):
    if card_front is None or card_back is None:
        raise HTTPException(
            status_code=400, detail="Missing cardFront or cardBack query parameter"
        )
    try:
        return {"hint": service.get_hint(card_front, card_back)}
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found") from None
    except Exception as e:
        logger.error(f"Error getting hint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error getting hint") from e


@router.get("/progress")
def get_progress(service: PracticeService = Depends(get_service)):
    try:
        return service.get_progress().to_dict()
    except Exception as e:
        logger.error(f"Error computing progress: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error computing progress") from e


@router.post("/day/next")
def next_day(service: PracticeService = Depends(get_service)):
    """Advance the simulated day."""
    day = service.advance_day()
    return {"message": f"Advanced to day {day}", "currentDay": day}


@router.post("/cards", status_code=201)
def add_card(req: AddCardRequest, service: PracticeService = Depends(get_service)):
    """Add a new card to bucket 0."""
    if not req.front or not req.back:
        raise HTTPException(status_code=400, detail="Front and back are required")

    card = Flashcard(front=req.front, back=req.back, hint=req.hint, tags=tuple(req.tags or ()))
    try:
        service.add_card(card)
    except DuplicateCardError:
        raise HTTPException(status_code=409, detail="Card already exists") from None
    except Exception as e:
        logger.error(f"Error adding card: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error adding card") from e

    return {"message": "Card added successfully", "card": card.to_dict()}


@router.get("/cards")
def list_cards(service: PracticeService = Depends(get_service)):
    return {
        "cards": [
            {**card.to_dict(), "bucket": bucket} for bucket, card in service.list_cards()
        ]
    }


@router.get("/history")
def get_history(service: PracticeService = Depends(get_service)):
    return {"history": [record.to_dict() for record in service.get_history()]}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any("difficulty" in err.get("loc", ()) for err in errors):
        message = "Invalid difficulty level"
    else:
        fields = ", ".join(str(err.get("loc", ("?",))[-1]) for err in errors)
        message = f"Invalid request: {fields}"
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content={"message": message})


def create_app(
    service: PracticeService | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        service: Practice service to serve. If omitted, one is built from
            ``config`` at startup (loading the configured deck file).
        config: Resolved configuration; resolved from env/TOML if omitted.
    """
    config = config or resolve_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logging.getLogger("leitner").setLevel(config.log_level)
        logger.info(f"Leitner Server v{VERSION} starting up...")
        if getattr(app.state, "service", None) is None:
            from leitner.application.factory import get_practice_service

            app.state.service = get_practice_service(config)
        logger.info(f"Current Day: {app.state.service.repository.get_current_day()}")
        yield
        # Shutdown
        logger.info("Leitner Server shutting down...")

    app = FastAPI(
        title="Leitner Server",
        description="Leitner-system flashcard scheduler.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """
        Simple health check to verify server is reachable.
        """
        return HealthResponse(
            status="ok", version=VERSION, uptime_seconds=time.time() - start_time
        )

    app.include_router(router)
    return app

