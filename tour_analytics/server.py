"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .analytics import AnalyticsService
from .api import api_router
from .client import TravelApiClient
from .config import Settings, get_settings

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """构建应用；分析服务在 lifespan 中创建并挂在 app.state 上"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        service = AnalyticsService(TravelApiClient(settings))
        app.state.analytics_service = service
        if settings.real_time_updates:
            service.start_real_time_updates(settings.refresh_interval)
        logger.info(f"Analytics service ready for {settings.api_base_url}")
        try:
            yield
        finally:
            await service.aclose()

    app = FastAPI(title="Tour Analytics API", lifespan=lifespan)

    # Allow local frontend development by enabling CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Tour Analytics API is running"}

    return app


app = create_app()
