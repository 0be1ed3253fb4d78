"""Language statistics models."""

from pydantic import BaseModel, Field


class LanguageStat(BaseModel):
    """Aggregated file count and line changes for one language."""

    name: str
    count: int = Field(default=0, ge=0)
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)

    @property
    def changes(self) -> int:
        return self.additions + self.deletions

    def add_file(self, additions: int, deletions: int) -> None:
        """Fold one changed file into the totals."""
        self.count += 1
        self.additions += additions
        self.deletions += deletions


class LanguageReport(BaseModel):
    """Outcome of one aggregation run."""

    username: str
    days: int
    events: int = 0
    commits: int = 0
    files: int = 0
    languages: list[LanguageStat] = Field(default_factory=list)
    content: str = ""
    published: dict[str, bool] = Field(default_factory=dict)
