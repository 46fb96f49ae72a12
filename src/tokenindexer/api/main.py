import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from tokenindexer.api.activities import router as activities_router
from tokenindexer.api.errors import router as errors_router
from tokenindexer.container import Container
from tokenindexer.db.session import create_tables

logger = logging.getLogger("tokenindexer.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    engine = container.engine()
    await create_tables(engine)
    yield
    await engine.dispose()


app = FastAPI(title="Token Activity Indexer", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(activities_router)
app.include_router(errors_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
