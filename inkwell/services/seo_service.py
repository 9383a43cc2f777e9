from typing import Iterable, Optional, Tuple

from inkwell.schemas.seo import MetaTag, SeoMeta


def build_seo(
    title: Optional[str] = None,
    description: Optional[str] = None,
    og_image_url: Optional[str] = None,
    url: Optional[str] = None,
    extra_meta: Iterable[Tuple[str, str]] = (),
) -> SeoMeta:
    """
    Build the head metadata for a page. Inputs that are missing or empty
    emit no tags.
    """
    meta = []
    if title:
        meta.append(MetaTag(attribute="property", key="og:title", content=title))
        meta.append(MetaTag(attribute="name", key="twitter:title", content=title))
    if description:
        meta.append(MetaTag(attribute="name", key="description", content=description))
        meta.append(
            MetaTag(attribute="property", key="og:description", content=description)
        )
        meta.append(
            MetaTag(attribute="name", key="twitter:description", content=description)
        )
    if og_image_url:
        meta.append(MetaTag(attribute="property", key="og:image", content=og_image_url))
        meta.append(
            MetaTag(attribute="property", key="twitter:image", content=og_image_url)
        )
    if url:
        meta.append(MetaTag(attribute="property", key="og:url", content=url))
    for key, content in extra_meta:
        meta.append(MetaTag(attribute="property", key=key, content=content))

    return SeoMeta(title=title or None, meta=meta)


def absolute_url(site_url: str, path: Optional[str]) -> Optional[str]:
    """Resolve a site-relative path such as ``/covers/a.png`` against the site url."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return f"{site_url.rstrip('/')}/{path.lstrip('/')}"
