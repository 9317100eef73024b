from dataclasses import dataclass, field


@dataclass
class SweepFailure:
    record_id: str
    error: str


@dataclass
class SweepReport:
    """Result of a periodic sweep. Failures are per record and never abort the run."""

    succeeded: int = 0
    failures: list[SweepFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def record_failure(self, record_id: object, error: Exception) -> None:
        self.failures.append(SweepFailure(record_id=str(record_id), error=str(error)))
