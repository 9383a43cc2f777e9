import logging
from typing import Iterable, List

from inkwell.repos.posts_repo import POST_SUFFIX
from inkwell.schemas.blog import POST_FIELDS, Post
from inkwell.services.front_matter import split_front_matter, to_text
from inkwell.utils import calculate_reading_time

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, derive_read_time: bool = False):
        self.repo = repo
        self.derive_read_time = derive_read_time

    def get_post_slugs(self) -> List[str]:
        return self.repo.list_filenames()

    def get_post_by_slug(self, slug: str, fields: Iterable[str] = ()) -> Post:
        fields = _check_fields(fields)
        real_slug = normalize_slug(slug)
        metadata, content = split_front_matter(self.repo.read_post(real_slug))

        items = {}
        for field in fields:
            if field == "slug":
                items["slug"] = real_slug
            elif field == "content":
                items["content"] = content
            elif metadata.get(field) is not None:
                items[field] = _metadata_value(field, metadata[field])
            elif field == "readTime" and self.derive_read_time:
                items["readTime"] = calculate_reading_time(content)

        return Post(**items)

    def get_all_posts(self, fields: Iterable[str] = ()) -> List[Post]:
        fields = _check_fields(fields)
        posts = [self.get_post_by_slug(slug, fields) for slug in self.get_post_slugs()]
        # ISO-8601 strings sort chronologically; undated posts go last
        posts.sort(key=lambda post: post.date or "", reverse=True)
        logger.debug(f"Loaded {len(posts)} posts")
        return posts


def normalize_slug(slug: str) -> str:
    return slug.removesuffix(POST_SUFFIX)


def _check_fields(fields: Iterable[str]) -> List[str]:
    fields = list(fields)
    unknown = [field for field in fields if field not in POST_FIELDS]
    if unknown:
        raise ValueError(f"Unknown post fields: {', '.join(unknown)}")
    return fields


def _metadata_value(field: str, value):
    if field == "ogImage" and isinstance(value, dict):
        return {key: to_text(item) for key, item in value.items()}
    return to_text(value)
