import textwrap

import pytest

from inkwell.errors import PostNotFound


class FakeRepo:
    """
    In-memory stand-in for FilePostsRepo, keyed by filename.
    """

    def __init__(self, files: dict[str, str]):
        self.files = {
            name: textwrap.dedent(text).lstrip() for name, text in files.items()
        }
        self.reads = []

    def list_filenames(self):
        return sorted(self.files)

    def read_post(self, slug: str) -> str:
        self.reads.append(slug)
        name = f"{slug}.md"
        if name not in self.files:
            raise PostNotFound(slug)
        return self.files[name]


class FakeResult:
    def __init__(self, value):
        self.value = value

    def scalar_one_or_none(self):
        return self.value


class FakeSession:
    """
    Lightweight SQLAlchemy Session stand-in for SubscriptionService tests.
    """

    def __init__(self, execute_value=None, fail_on_commit=False):
        self.execute_value = execute_value
        self.fail_on_commit = fail_on_commit
        self.executed_stmt = None
        self.committed = False

    def execute(self, stmt):
        self.executed_stmt = stmt
        return FakeResult(self.execute_value)

    def commit(self):
        if self.fail_on_commit:
            raise RuntimeError("database is down")
        self.committed = True


class FakeSubscriptionService:
    """
    Minimal subscription service stand-in for router tests.
    """

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.emails = []

    def subscribe(self, email: str) -> bool:
        if self.error:
            raise self.error
        created = email not in self.emails
        if created:
            self.emails.append(email)
        return created


def write_post(directory, name: str, text: str):
    path = directory / name
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    directory = tmp_path / "posts"
    directory.mkdir()
    write_post(
        directory,
        "2023-01-01.md",
        """
        ---
        title: New Year
        date: 2023-01-01
        excerpt: First post of the year
        coverImage: /covers/new-year.png
        ---
        Hello **world**.
        """,
    )
    write_post(
        directory,
        "2023-06-01.md",
        """
        ---
        title: Midsummer
        date: 2023-06-01
        readTime: 4 min
        previousSlug: 2023-01-01
        previousTitle: New Year
        ---
        It is June.
        """,
    )
    return directory
