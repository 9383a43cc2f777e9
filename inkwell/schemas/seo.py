from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class MetaTag(BaseModel):
    attribute: Literal["name", "property"]
    key: str
    content: str


class SeoMeta(BaseModel):
    title: Optional[str] = None
    meta: List[MetaTag] = Field(default_factory=list)
