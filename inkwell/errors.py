class InkwellError(Exception):
    """Base class for errors raised by the post store."""


class PostNotFound(InkwellError):
    def __init__(self, slug: str):
        super().__init__(f"No post found for slug {slug!r}")
        self.slug = slug


class StoreUnavailable(InkwellError):
    """The posts directory could not be listed or a post file could not be read."""


class FrontMatterError(InkwellError):
    """A post's metadata block is not valid YAML."""
