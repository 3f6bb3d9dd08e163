from typing import Optional

from fastapi import FastAPI
from contextlib import asynccontextmanager

from .container import Container
from .routes import sessions, health


def create_app(container: Optional[Container] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = container or Container()
        app.state.container.open()
        try:
            yield
        finally:
            app.state.container.close()

    app = FastAPI(
        title="XDB API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(sessions.router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
