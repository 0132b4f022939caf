"""Data models for the scaffolding pipeline."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceText:
    """A source file read by the Read stage, handed to the Generate stage."""
    path: str
    content: str


@dataclass(frozen=True)
class PipelineFailure:
    """An item that failed in one stage (only collected when fail_fast is off)."""
    stage: str
    item: str
    error: str

    def to_dict(self) -> dict:
        return {"stage": self.stage, "item": self.item, "error": self.error}


@dataclass
class PipelineReport:
    """Outcome of one pipeline run."""
    read: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    failures: list[PipelineFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "summary": {
                "read": len(self.read),
                "written": len(self.written),
                "failed": len(self.failures),
            },
            "written": self.written,
            "failures": [f.to_dict() for f in self.failures],
        }
