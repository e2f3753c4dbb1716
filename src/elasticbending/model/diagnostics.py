"""
Diagnostic Messages
===================
Leveled messages reported back to the caller of a solve.

Levels:
    ERROR   - the solve aborted, no geometry is produced.
    WARNING - the solve continued but a caveat applies.
    REMARK  - informational (e.g. accuracy near the solver limit).

Every recorded message is also forwarded to the module logger.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from typing import Dict, Iterator, List

logger = logging.getLogger(__name__)


class MessageLevel(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    REMARK = "remark"


_LOG_LEVELS: Dict[MessageLevel, int] = {
    MessageLevel.ERROR: logging.ERROR,
    MessageLevel.WARNING: logging.WARNING,
    MessageLevel.REMARK: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    level: MessageLevel
    message: str

    def __str__(self) -> str:
        return f"[{self.level.value.upper()}] {self.message}"


@dataclass
class DiagnosticLog:
    """Ordered collection of the messages of one solve."""
    messages: List[Diagnostic] = field(default_factory=list)

    def add(self, level: MessageLevel, message: str) -> None:
        self.messages.append(Diagnostic(level=level, message=message))
        logger.log(_LOG_LEVELS[level], message)

    def error(self, message: str) -> None:
        self.add(MessageLevel.ERROR, message)

    def warning(self, message: str) -> None:
        self.add(MessageLevel.WARNING, message)

    def remark(self, message: str) -> None:
        self.add(MessageLevel.REMARK, message)

    def of_level(self, level: MessageLevel) -> List[Diagnostic]:
        return [d for d in self.messages if d.level == level]

    @property
    def errors(self) -> List[Diagnostic]:
        return self.of_level(MessageLevel.ERROR)

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.of_level(MessageLevel.WARNING)

    @property
    def remarks(self) -> List[Diagnostic]:
        return self.of_level(MessageLevel.REMARK)

    @property
    def has_errors(self) -> bool:
        return any(d.level == MessageLevel.ERROR for d in self.messages)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def to_list(self) -> List[Dict[str, str]]:
        return [{"level": d.level.value, "message": d.message} for d in self.messages]
