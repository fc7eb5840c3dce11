import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url

from hisaabu.admin.router import router as admin_companies_router
from hisaabu.auth.router import router as auth_router
from hisaabu.auth.tokens import TokenService
from hisaabu.company.router import router as company_router
from hisaabu.core.config import Settings, get_settings
from hisaabu.core.handlers import register_exception_handlers
from hisaabu.customers.router import router as customers_router
from hisaabu.db.init_db import init_db
from hisaabu.db.session import build_engine, build_session_factory
from hisaabu.platform_admin.router import router as admin_auth_router
from hisaabu.products.router import router as products_router
from hisaabu.system.router import router as system_router
from hisaabu.system.security_headers import SecurityHeadersMiddleware

logger = logging.getLogger(__name__)


def _log_config(settings: Settings) -> None:
    db_url = make_url(settings.DATABASE_URL)
    logger.info(
        "Config sanity: env=%s db_host=%s cors_origins=%s access_exp_min=%s refresh_exp_days=%s",
        settings.ENV,
        db_url.host or "local",
        len(settings.CORS_ORIGINS),
        settings.JWT_ACCESS_EXP_MINUTES,
        settings.JWT_REFRESH_EXP_DAYS,
    )


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    token_service: TokenService | None = None,
) -> FastAPI:
    """Build the API with its store client and token service attached to ``app.state``.

    Tests pass their own engine and a token service with a fixed clock;
    ``uvicorn hisaabu.main:create_app --factory`` uses the environment.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    engine = engine or build_engine(settings)
    token_service = token_service or TokenService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log_config(settings)
        if settings.AUTO_CREATE_TABLES:
            init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Hisaabu Backend",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = token_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # --- Routers ---
    app.include_router(system_router)
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admin_auth_router, prefix="/api/admin/auth", tags=["admin-auth"])
    app.include_router(admin_companies_router, prefix="/api/admin/companies", tags=["admin"])
    app.include_router(company_router, prefix="/api/company", tags=["company"])
    app.include_router(customers_router, prefix="/api/customers", tags=["customers"])
    app.include_router(products_router, prefix="/api/products", tags=["products"])

    return app
