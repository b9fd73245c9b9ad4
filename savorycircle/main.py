import asyncio
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from savorycircle.config import settings
from savorycircle.modules.auth import routes as auth_routes
from savorycircle.modules.profiles import routes as profiles_routes
from savorycircle.modules.foods import routes as foods_routes
from savorycircle.modules.meal_plans import routes as meal_plans_routes
from savorycircle.modules.wheel import routes as wheel_routes
from savorycircle.modules.friends import routes as friends_routes
from savorycircle.modules.posts import routes as posts_routes
from savorycircle.modules.levels import routes as levels_routes
from savorycircle.modules.recipes import routes as recipes_routes
from savorycircle.modules.suggestions import routes as suggestions_routes
from savorycircle.modules.setup import routes as setup_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"

for module_routes in (
    auth_routes, profiles_routes, foods_routes, meal_plans_routes, wheel_routes,
    friends_routes, posts_routes, levels_routes, recipes_routes, suggestions_routes,
    setup_routes,
):
    app.include_router(module_routes.router, prefix=API_PREFIX)

_background_tasks = []


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")

    if settings.daily_recipe_scheduler_enabled:
        from savorycircle.modules.recipes.scheduler import daily_recipe_scheduler_loop
        _background_tasks.append(asyncio.create_task(daily_recipe_scheduler_loop()))
        logger.info(
            "Daily recipe scheduler started - refreshing every %s seconds",
            settings.daily_recipe_interval_seconds
        )


@app.on_event("shutdown")
async def shutdown_event():
    for task in _background_tasks:
        task.cancel()
    _background_tasks.clear()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to savorycircle-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    return {"status": "ready"}
