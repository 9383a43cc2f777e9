import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from inkwell.db.base import init_db
from inkwell.routers import posts, subscriptions
from inkwell.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="inkwell API", description="Markdown blog posts and newsletter")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Serving posts from {settings.posts_path.resolve()}")
    yield


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(subscriptions.router)


@app.get("/")
async def root():
    return {"message": "inkwell API is running"}
