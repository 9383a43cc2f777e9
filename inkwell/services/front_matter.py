"""
Split a post file into its metadata block and markdown body.

A post opens with a YAML key/value block fenced by ``---`` lines::

    ---
    title: Hello
    date: 2023-01-01
    ---
    Body text.

Text without a leading ``---`` block has no metadata and is all body.
"""

import datetime
from typing import Any, Dict, Tuple

import frontmatter
import yaml

from inkwell.errors import FrontMatterError


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    try:
        parsed = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid front-matter: {e}") from e
    return dict(parsed.metadata or {}), parsed.content


def to_text(value):
    """Normalize a front-matter scalar to the string form used in post records."""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return str(value)
