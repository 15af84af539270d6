"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder

from nibble.api.models import (
    FoodRequest,
    ProfileRequest,
    ProfileUpdateRequest,
    TextAnalysisRequest,
)
from nibble.app_logging import configure_logging
from nibble.containers import AppContainer
from nibble.domain.foods import DailyLog
from nibble.services.daily_log import new_food_item, sum_foods
from nibble.services.errors import (
    AnalysisError,
    FoodNotFoundError,
    ProfileNotFoundError,
)

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the stored profile."""
        profile = _container(request).profile_service.get_profile()
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return jsonable_encoder(profile)

    @app.put("/profile")
    async def put_profile(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Create or replace the profile and derive its targets."""
        profile = _container(request).profile_service.create_profile(
            **payload.model_dump()
        )
        return jsonable_encoder(profile)

    @app.patch("/profile")
    async def patch_profile(
        payload: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Edit profile fields, recomputing targets when needed."""
        changes = payload.model_dump(exclude_none=True)
        try:
            profile = _container(request).profile_service.update_profile(**changes)
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return jsonable_encoder(profile)

    @app.get("/logs")
    async def list_logs(request: Request) -> dict[str, object]:
        """Return every daily log, newest first."""
        logs = _container(request).daily_log_service.list_logs()
        return {"logs": [_format_log(log) for log in logs]}

    @app.get("/logs/{log_date}")
    async def get_log(log_date: date, request: Request) -> dict[str, object]:
        """Return a day's log with its totals."""
        log = _container(request).daily_log_service.get_log(log_date.isoformat())
        return _format_log(log)

    @app.post("/logs/{log_date}/foods", status_code=status.HTTP_201_CREATED)
    async def add_food(
        log_date: date, payload: FoodRequest, request: Request
    ) -> dict[str, object]:
        """Log a food on a day."""
        food = new_food_item(**payload.model_dump())
        log = _container(request).daily_log_service.add_food(
            log_date.isoformat(), food
        )
        return _format_log(log)

    @app.put("/logs/{log_date}/foods/{food_id}")
    async def replace_food(
        log_date: date, food_id: str, payload: FoodRequest, request: Request
    ) -> dict[str, object]:
        """Replace a logged food with an edited version."""
        food = new_food_item(**payload.model_dump(), food_id=food_id)
        try:
            log = _container(request).daily_log_service.replace_food(
                log_date.isoformat(), food
            )
        except FoodNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return _format_log(log)

    @app.delete("/logs/{log_date}/foods/{food_id}")
    async def remove_food(
        log_date: date, food_id: str, request: Request
    ) -> dict[str, object]:
        """Remove a logged food."""
        log = _container(request).daily_log_service.remove_food(
            log_date.isoformat(), food_id
        )
        return _format_log(log)

    @app.get("/dashboard")
    async def dashboard(request: Request) -> dict[str, object]:
        """Return today's progress and suggestions."""
        try:
            view = _container(request).suggestion_service.get_dashboard()
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return jsonable_encoder(view)

    @app.get("/foods/search")
    async def search_foods(
        request: Request, q: str = "", limit: int = 10
    ) -> dict[str, object]:
        """Search the food database."""
        results = _container(request).food_database_service.search(q, limit)
        return {"results": jsonable_encoder(results)}

    @app.get("/foods/popular")
    async def popular_foods(request: Request, count: int = 10) -> dict[str, object]:
        """Return popular foods from the database."""
        foods = _container(request).food_database_service.get_popular(count)
        return {"foods": jsonable_encoder(foods)}

    @app.get("/barcode/{barcode}")
    async def lookup_barcode(barcode: str, request: Request) -> dict[str, object]:
        """Return a loggable food for a product barcode."""
        food = await _container(request).barcode_service.lookup(barcode)
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No product found for barcode {barcode}",
            )
        return jsonable_encoder(food)

    @app.post("/analyze/text")
    async def analyze_text(
        payload: TextAnalysisRequest, request: Request
    ) -> dict[str, object]:
        """Estimate nutrition from a meal description."""
        try:
            analysis = await _container(request).analysis_service.analyze_text(
                payload.description
            )
        except AnalysisError as exc:
            logger.info("Text analysis failed: %s", exc)
            raise HTTPException(
                status_code=_UNPROCESSABLE, detail=str(exc)
            ) from exc
        return analysis.model_dump()

    @app.post("/analyze/image")
    async def analyze_image(request: Request) -> dict[str, object]:
        """Estimate nutrition from a meal photo sent as the raw request body."""
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image body"
            )
        try:
            analysis = await _container(request).analysis_service.analyze_image(
                image_bytes
            )
        except AnalysisError as exc:
            logger.info("Image analysis failed: %s", exc)
            raise HTTPException(
                status_code=_UNPROCESSABLE, detail=str(exc)
            ) from exc
        return analysis.model_dump()

    return app


def _format_log(log: DailyLog) -> dict[str, object]:
    return {
        "date": log.date,
        "foods": jsonable_encoder(log.foods),
        "totals": jsonable_encoder(sum_foods(log.foods)),
    }
