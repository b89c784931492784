import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from inkwell.db.dynamodb import get_store
from inkwell.responses import register_exception_handlers
from inkwell.routers import admin, posts, site
from inkwell.security import get_api_key
from inkwell.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Inkwell API", description="Blog posts and site settings")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail at boot, not on the first request, when the store is misconfigured
    get_store()
    logger.info("Post store connected")

    yield
    logger.info("Inkwell API shutting down")


app.router.lifespan_context = lifespan
register_exception_handlers(app)

app.include_router(posts.router)
app.include_router(site.router)
app.include_router(admin.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Inkwell API is running"}
