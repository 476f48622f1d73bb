import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config.database import Base, engine
from src.config.settings import settings
from src.modules.bookmarks.router import router as bookmarks_router
from src.modules.comments.router import router as comments_router
from src.modules.history.router import router as history_router
from src.modules.market.router import router as market_router
from src.modules.news.router import router as news_router
from src.modules.news.service import news_service
from src.modules.weather.router import router as weather_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    import src.modules.persistence.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables synced")
    logger.info(
        "News providers configured: %s",
        ", ".join(p.value for p in news_service.providers) or "none (fallback data only)",
    )
    yield
    await news_service.drain()
    await engine.dispose()


app = FastAPI(title="Newszoid API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"ok": False, "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# API routes
app.include_router(news_router, prefix="/api/news", tags=["news"])
app.include_router(weather_router, prefix="/api/weather", tags=["weather"])
app.include_router(market_router, prefix="/api/market", tags=["market"])
app.include_router(bookmarks_router, prefix="/api/bookmarks", tags=["bookmarks"])
app.include_router(comments_router, prefix="/api/comments", tags=["comments"])
app.include_router(history_router, prefix="/api/history", tags=["history"])


@app.get("/health")
async def health():
    return {
        "ok": True,
        "status": "ok",
        "providers": [p.value for p in news_service.providers],
        "aiEnabled": news_service.ai_enabled,
    }
