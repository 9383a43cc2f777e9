import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from inkwell import dependencies as deps
from inkwell.errors import PostNotFound
from inkwell.schemas.blog import (
    DETAIL_FIELDS,
    SUMMARY_FIELDS,
    IndexPage,
    Post,
    PostPage,
)
from inkwell.services.document_renderer import DocumentRenderer
from inkwell.services.posts_service import PostsService
from inkwell.services.seo_service import absolute_url, build_seo
from inkwell.settings import Settings
from inkwell.utils import format_date

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[Post])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get the index listing, newest first."""
    try:
        return service.get_all_posts(SUMMARY_FIELDS)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/index", response_model=IndexPage)
def index_page(
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Get the home page: the index listing plus the site-wide metadata."""
    try:
        posts = service.get_all_posts(SUMMARY_FIELDS)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error building index page: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    seo = build_seo(
        title=current_settings.SITE_TITLE,
        description=current_settings.SITE_DESCRIPTION,
        url=current_settings.SITE_URL,
    )
    return IndexPage(posts=posts, seo=seo)


@router.get("/posts/{slug}", response_model=PostPage)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    renderer: DocumentRenderer = Depends(deps.get_document_renderer),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Get a single post with its rendered document and page metadata."""
    try:
        post = service.get_post_by_slug(slug, DETAIL_FIELDS)
    except PostNotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

    return PostPage(
        post=post,
        document=renderer.render(post.content or ""),
        seo=_post_seo(post, current_settings),
        displayDate=format_date(post.date) if post.date else None,
    )


@router.get("/styles/highlight.css")
def highlight_stylesheet(
    renderer: DocumentRenderer = Depends(deps.get_document_renderer),
):
    return Response(content=renderer.highlighter.stylesheet(), media_type="text/css")


def _post_seo(post: Post, current_settings: Settings):
    og_image = post.ogImage
    if isinstance(og_image, dict):
        og_image = og_image.get("url")
    image_url = absolute_url(current_settings.SITE_URL, og_image or post.coverImage)

    extra_meta = [("og:type", "article")]
    if post.date:
        extra_meta.append(("article:published_time", post.date))

    return build_seo(
        title=post.title,
        description=post.excerpt,
        og_image_url=image_url,
        url=f"{current_settings.SITE_URL.rstrip('/')}/{post.slug}",
        extra_meta=extra_meta,
    )
