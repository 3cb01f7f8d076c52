# backend/staffgraph/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from strawberry.fastapi import GraphQLRouter

from staffgraph.api.deps_auth import get_context
from staffgraph.api.schema import build_schema
from staffgraph.core.config import Settings, get_settings
from staffgraph.core.database import Base, make_engine, make_session_factory
from staffgraph.core.security import TokenService

# Register models on Base.metadata
import staffgraph.models.user  # noqa: F401
import staffgraph.models.employee  # noqa: F401

log = logging.getLogger("staffgraph")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    engine = make_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Creating tables (users, employees)...")
        Base.metadata.create_all(bind=engine)
        log.info("%s ready at /graphql", settings.APP_NAME)
        yield
        log.info("Shutting down %s...", settings.APP_NAME)
        engine.dispose()

    app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.tokens = TokenService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    graphql_app = GraphQLRouter(
        build_schema(introspection=settings.GRAPHQL_INTROSPECTION),
        context_getter=get_context,
        graphql_ide="graphiql" if settings.GRAPHQL_INTROSPECTION else None,
    )
    app.include_router(graphql_app, prefix="/graphql")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root():
        return "Employee Management System API"

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


configure_logging(get_settings().LOG_LEVEL)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("staffgraph.main:app", host=settings.HOST, port=settings.PORT)
