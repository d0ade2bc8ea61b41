# server/main.py

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from api import auth, health, profile
from config import Settings, get_settings
from core.accounts import AccountService
from core.errors import AuthServiceError, MissingFields, ServerError
from core.store import SQLUserStore, UserStore
from core.tokens import ACCESS_TOKEN_TTL
from database import create_engine, create_session_factory, init_db


logger = logging.getLogger(__name__)


def _error_response(exc: AuthServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(settings: Settings | None = None, store: UserStore | None = None) -> FastAPI:
    """
    Builds the service. `uvicorn main:app` serves `create_app()` with settings
    from the environment. Without an injected store, a SQL store is created from
    `settings.database_url` and its tables are created at startup.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    engine = None
    if store is None:
        engine = create_engine(settings.database_url, echo=settings.db_echo)
        store = SQLUserStore(create_session_factory(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            await init_db(engine)
        logger.info("Auth service started in %s mode", settings.app_env)
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("Auth service stopped")

    app = FastAPI(title="Auth Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.account_service = AccountService(store, settings.jwt_secret, ACCESS_TOKEN_TTL)

    @app.exception_handler(AuthServiceError)
    async def auth_error_handler(request: Request, exc: AuthServiceError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(MissingFields())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(ServerError())

    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(health.router)

    return app


@lru_cache
def _default_app() -> FastAPI:
    return create_app()


def __getattr__(name: str):
    # `uvicorn main:app` builds the app on first access; importing main alone needs no JWT_SECRET
    if name == "app":
        return _default_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
