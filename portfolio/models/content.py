"""Portfolio content models: projects, blog posts, and the cached snapshot."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Content(BaseModel):
    """Immutable content record tolerant of omitted or null upstream fields."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        """Upstream sends null for empty fields; fall back to field defaults."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Project(_Content):
    """A showcased project."""

    hero: str = ""
    title: str = ""
    excerpt: str = ""
    tags: list[str] = []
    open_source: bool = False
    git_repo: str = ""
    live_url: str = ""
    case_study: str = ""
    created_at: str = ""
    updated_at: str = ""


class Post(_Content):
    """A blog post as listed by the posts API."""

    locale: str = ""
    slug: str = ""
    title: str = ""
    featured: bool = False
    excerpt: str = ""
    hero_image: str = ""
    category: str = ""
    author: str = ""
    read_time: str = ""
    created_at: str = ""
    updated_at: str = ""
    full_url: str = ""


class ContentFeed(_Content):
    """Posts API response: recent and featured posts in response order."""

    recent: list[Post] = []
    featured: list[Post] = []


class ContentSnapshot(_Content):
    """Everything the pages render, cached and compared as one unit."""

    projects: list[Project] = []
    posts: ContentFeed = Field(default_factory=ContentFeed)

    def same_content(self, other: "ContentSnapshot") -> bool:
        """Return True if every field at every depth is equal.

        List order is significant. This comparison is the only staleness
        signal: there is no timestamp or ETag check.
        """
        if not isinstance(other, ContentSnapshot):
            return False
        return self.model_dump() == other.model_dump()

    @property
    def is_empty(self) -> bool:
        return not self.projects and not self.posts.recent and not self.posts.featured
