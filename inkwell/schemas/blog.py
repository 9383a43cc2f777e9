from typing import Dict, List, Optional, Union

from pydantic import BaseModel, model_serializer

from inkwell.schemas.document import Document
from inkwell.schemas.seo import SeoMeta

POST_FIELDS = frozenset(
    {
        "slug",
        "title",
        "date",
        "content",
        "excerpt",
        "coverImage",
        "ogImage",
        "readTime",
        "nextSlug",
        "nextTitle",
        "previousSlug",
        "previousTitle",
    }
)

SUMMARY_FIELDS = ["title", "date", "slug", "coverImage", "excerpt", "readTime"]

DETAIL_FIELDS = [
    "title",
    "date",
    "slug",
    "content",
    "ogImage",
    "coverImage",
    "excerpt",
    "readTime",
    "nextSlug",
    "nextTitle",
    "previousSlug",
    "previousTitle",
]


class Post(BaseModel):
    """
    A projected blog post. Only the requested fields are ever set, and
    serialization drops every field that was not set.
    """

    slug: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = None
    excerpt: Optional[str] = None
    coverImage: Optional[str] = None
    ogImage: Optional[Union[str, Dict[str, str]]] = None
    readTime: Optional[str] = None
    nextSlug: Optional[str] = None
    nextTitle: Optional[str] = None
    previousSlug: Optional[str] = None
    previousTitle: Optional[str] = None
    content: Optional[str] = None

    @model_serializer(mode="wrap")
    def _only_set_fields(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if key in self.model_fields_set}


class PostPage(BaseModel):
    post: Post
    document: Document
    seo: SeoMeta
    displayDate: Optional[str] = None


class IndexPage(BaseModel):
    posts: List[Post]
    seo: SeoMeta
