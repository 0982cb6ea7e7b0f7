"""Process invocation result model."""

from pydantic import BaseModel, Field


class ProcessResult(BaseModel):
    """Outcome of running an external command.

    ``returncode`` is ``None`` when the executable could not be started at all,
    which keeps the three possible outcomes (not found, failed, succeeded)
    distinguishable without exceptions.
    """

    args: list[str] = Field(default_factory=list)
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def not_found(self) -> bool:
        return self.returncode is None

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)
