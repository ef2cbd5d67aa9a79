"""Per-file outcomes of a batch upload."""

from dataclasses import dataclass, field
from typing import Optional

from contextpack.models.document import Document


@dataclass(frozen=True)
class FileOutcome:
    """Result of ingesting one file: a document or an error message."""

    file_name: str
    document: Optional[Document] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Outcomes of a batch upload, in input order."""

    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed_files(self) -> list[dict[str, str]]:
        return [
            {"name": outcome.file_name, "error": outcome.error or ""}
            for outcome in self.outcomes
            if not outcome.ok
        ]

    @property
    def documents(self) -> list[Document]:
        return [o.document for o in self.outcomes if o.document is not None]

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)
