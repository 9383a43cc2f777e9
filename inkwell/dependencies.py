from fastapi import Depends

from inkwell.db.base import get_db
from inkwell.repos.posts_repo import FilePostsRepo
from inkwell.services.code_highlighter import CodeHighlighter
from inkwell.services.document_renderer import DocumentRenderer
from inkwell.services.posts_service import PostsService
from inkwell.services.subscription_service import SubscriptionService
from inkwell.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilePostsRepo(current_settings.posts_path)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(repo=repo, derive_read_time=current_settings.DERIVE_READ_TIME)


def get_document_renderer(current_settings: Settings = Depends(get_settings)):
    return DocumentRenderer(
        math_enabled=current_settings.MATH_ENABLED,
        highlighter=CodeHighlighter(current_settings.HIGHLIGHT_STYLE),
    )


def get_subscription_service(db=Depends(get_db)):
    return SubscriptionService(db)
