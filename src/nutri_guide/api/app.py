"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Query, Request, status

from nutri_guide.api.models import (
    ChatRequest,
    FoodLogRequest,
    ProfileRequest,
    WeightRequest,
)
from nutri_guide.app_logging import configure_logging
from nutri_guide.containers import AppContainer
from nutri_guide.domain.analysis import BMIResult
from nutri_guide.domain.profile import UserProfile
from nutri_guide.domain.progress import DailyProgress, MealType
from nutri_guide.services.analyzer import analyze_profile
from nutri_guide.services.coaching import quick_suggestions
from nutri_guide.services.progress import (
    current_date,
    percent_of_goal,
    progress_tip,
)

MAX_HISTORY_DAYS = 31


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the stored profile with its analysis."""
        profile = _require_profile(request)
        return {"profile": profile, "analysis": analyze_profile(profile)}

    @app.put("/profile")
    async def save_profile(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Create or replace the profile."""
        state_container: AppContainer = request.app.state.container
        profile = payload.to_profile()
        state_container.profile_service.save_profile(profile)
        logger.info("Profile saved: goal=%s", profile.goal)
        return {"profile": profile, "analysis": analyze_profile(profile)}

    @app.delete("/profile")
    async def reset_profile(request: Request) -> dict[str, str]:
        """Delete the profile and every tracked record."""
        state_container: AppContainer = request.app.state.container
        state_container.profile_service.reset()
        return {"status": "ok"}

    @app.get("/analysis")
    async def get_analysis(request: Request) -> BMIResult:
        """Return BMI, category, calorie goal and macros."""
        return analyze_profile(_require_profile(request))

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return the dashboard for today."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        analysis = analyze_profile(profile)
        day = _today(request)
        plan = state_container.meal_plan_service.get_plan_for_day(
            day, profile, analysis.daily_calorie_goal
        )
        consumed = state_container.progress_service.get_consumed(day)
        return {
            "date": day,
            "analysis": analysis,
            "meal_plan": plan,
            "calories_consumed": consumed,
            "percent": percent_of_goal(consumed, analysis.daily_calorie_goal),
            "tip": progress_tip(consumed, analysis.daily_calorie_goal, profile.goal),
            "motivation": state_container.progress_service.get_motivation(profile),
        }

    @app.get("/meal-plan/today")
    async def meal_plan_today(request: Request) -> dict[str, object]:
        """Return today's meal plan, stable for the whole day."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        day = _today(request)
        plan = state_container.meal_plan_service.get_plan_for_day(
            day, profile, analyze_profile(profile).daily_calorie_goal
        )
        return {"date": day, "meal_plan": plan}

    @app.post("/food-logs")
    async def add_food_log(
        payload: FoodLogRequest, request: Request
    ) -> DailyProgress:
        """Append a food entry to today's record."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        timezone = ZoneInfo(state_container.settings.timezone)
        logged_at = payload.logged_at or datetime.now(tz=timezone)
        return state_container.progress_service.log_food(
            profile,
            _today(request),
            name=payload.name,
            calories=payload.calories,
            meal_type=payload.meal_type,
            logged_at=logged_at,
        )

    @app.get("/food-logs/{day}")
    async def food_logs_for_day(day: date, request: Request) -> DailyProgress:
        """Return a date's food logs; an empty view when nothing was logged."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        progress = state_container.progress_service.get_daily_progress(day)
        if progress is not None:
            return progress
        return DailyProgress(
            date=day,
            calories_consumed=0.0,
            calories_goal=analyze_profile(profile).daily_calorie_goal,
            food_logs=[],
        )

    @app.get("/history")
    async def history(
        request: Request, days: int = Query(default=7, ge=1, le=MAX_HISTORY_DAYS)
    ) -> dict[str, object]:
        """Return daily summaries for a rolling window ending today."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        return {
            "days": state_container.progress_service.get_recent_days(
                profile, _today(request), days
            )
        }

    @app.post("/weight")
    async def record_weight(
        payload: WeightRequest, request: Request
    ) -> dict[str, object]:
        """Record a weight sample and update the profile."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        try:
            updated = state_container.progress_service.record_weight(
                profile, payload.weight, _today(request)
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        view = state_container.progress_service.get_progress_view(
            updated, _today(request)
        )
        return {
            "profile": updated,
            "analysis": analyze_profile(updated),
            "trend": view.trend,
        }

    @app.get("/progress")
    async def progress(request: Request) -> dict[str, object]:
        """Return percent of goal, tip, weight trend and recent weights."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        view = state_container.progress_service.get_progress_view(
            profile, _today(request)
        )
        return {
            "bmi": analyze_profile(profile).bmi,
            "percent": view.percent,
            "tip": view.tip,
            "trend": view.trend,
            "recent_weights": view.recent_weights,
        }

    @app.post("/coach/chat")
    async def coach_chat(payload: ChatRequest, request: Request) -> dict[str, str]:
        """Return a coaching reply to a free-text message."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile()
        analysis = analyze_profile(profile) if profile else None
        try:
            reply = await state_container.coaching_service.chat(
                payload.message,
                profile,
                analysis,
                [turn.to_turn() for turn in payload.history],
            )
        except Exception as exc:
            logger.exception("Coach chat failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to get response from AI. Please try again.",
            ) from exc
        return {"reply": reply}

    @app.get("/coach/motivation")
    async def coach_motivation(request: Request) -> dict[str, str]:
        """Return a generated motivation message for today."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        consumed = state_container.progress_service.get_consumed(_today(request))
        message = await state_container.coaching_service.motivation(
            profile, analyze_profile(profile), consumed
        )
        return {"message": message}

    @app.get("/coach/progress-analysis")
    async def coach_progress_analysis(request: Request) -> dict[str, str]:
        """Return generated commentary on the weight history."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        analysis = await state_container.coaching_service.analyze_progress(
            profile,
            analyze_profile(profile),
            state_container.progress_service.get_weight_history(),
        )
        return {"analysis": analysis}

    @app.get("/coach/meal-suggestions/{meal_type}")
    async def coach_meal_suggestions(
        meal_type: MealType, request: Request
    ) -> dict[str, list[str]]:
        """Return three generated meal ideas."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        suggestions = await state_container.coaching_service.meal_suggestions(
            profile, analyze_profile(profile), meal_type
        )
        return {"suggestions": suggestions}

    @app.get("/coach/alternatives")
    async def coach_alternatives(
        request: Request, food: str = Query(min_length=1, max_length=200)
    ) -> dict[str, list[str]]:
        """Return healthier alternatives to a food."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(request)
        alternatives = await state_container.coaching_service.food_alternatives(
            food.strip(), profile
        )
        return {"alternatives": alternatives}

    @app.get("/coach/quick-suggestions")
    async def coach_quick_suggestions(request: Request) -> dict[str, list[str]]:
        """Return canned conversation starters."""
        state_container: AppContainer = request.app.state.container
        return {
            "suggestions": quick_suggestions(
                state_container.profile_service.get_profile()
            )
        }

    @app.post("/food-photo")
    async def food_photo(request: Request) -> dict[str, object]:
        """Estimate a dish and its calories from raw image bytes."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Image body is empty"
            )
        try:
            estimate = await state_container.food_photo_service.estimate(image_bytes)
        except Exception as exc:
            logger.exception("Food photo estimate failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to analyze food image",
            ) from exc
        return estimate.model_dump()

    return app


def _require_profile(request: Request) -> UserProfile:
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile()
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return profile


def _today(request: Request) -> date:
    container: AppContainer = request.app.state.container
    return current_date(container.settings.timezone)
