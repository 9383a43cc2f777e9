"""Write every post and its rendered document to a JSON file for a static build."""

import argparse
import json
import logging
from pathlib import Path

from inkwell.repos.posts_repo import FilePostsRepo
from inkwell.schemas.blog import DETAIL_FIELDS
from inkwell.services.code_highlighter import CodeHighlighter
from inkwell.services.document_renderer import DocumentRenderer
from inkwell.services.posts_service import PostsService
from inkwell.settings import settings

logger = logging.getLogger(__name__)


def export_posts(posts_dir: Path, output: Path) -> int:
    service = PostsService(
        FilePostsRepo(posts_dir), derive_read_time=settings.DERIVE_READ_TIME
    )
    renderer = DocumentRenderer(
        math_enabled=settings.MATH_ENABLED,
        highlighter=CodeHighlighter(settings.HIGHLIGHT_STYLE),
    )

    entries = []
    for post in service.get_all_posts(DETAIL_FIELDS):
        entries.append(
            {
                "post": post.model_dump(),
                "document": renderer.render(post.content or "").model_dump(),
            }
        )

    output.write_text(json.dumps(entries, indent=2, ensure_ascii=False), encoding="utf-8")
    return len(entries)


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--posts-dir", type=Path, default=settings.posts_path)
    parser.add_argument("--output", type=Path, default=Path("posts.json"))
    args = parser.parse_args()

    try:
        count = export_posts(args.posts_dir, args.output)
        logger.info(f"Exported {count} posts to {args.output}")
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        raise SystemExit(1)
