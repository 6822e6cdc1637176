from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from redirector.core.config import settings
from redirector.core.db import bind_engine
from redirector.core.log import configure_logging
from redirector.services.bootstrap import bootstrap_or_exit


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    engine = await bootstrap_or_exit(settings)
    bind_engine(engine)
    app.state.engine = engine
    yield
    engine.dispose()


app = FastAPI(title="Redirector API", lifespan=lifespan)

from redirector.routers import redirects  # noqa: E402


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Hello, world!"


@app.get("/health")
def health():
    return {"status": "ok"}


# {REDIRECT_PREFIX}/{name}, keep it last
app.include_router(redirects.router)
