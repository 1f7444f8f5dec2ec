"""
Structured diagnostics for skipped files and candidates.

The extraction engine does not print; it records one Diagnostic per file
or candidate it had to skip, and the caller decides how to report them.
"""

from enum import Enum
from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict


class DiagnosticKind(Enum):
    """Kinds of recoverable problems met during a run"""
    PARSE_FAILURE = "parse_failure"                       # whole file skipped
    NODE_PROCESSING_FAILURE = "node_processing_failure"   # one candidate skipped
    READ_FAILURE = "read_failure"                         # file could not be read
    WRITE_FAILURE = "write_failure"                       # output could not be written


class Diagnostic(BaseModel):
    """One skipped file or candidate"""
    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    file_path: str = ""
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    node_type: Optional[str] = None

    @property
    def location(self) -> str:
        if self.line is None:
            return self.file_path
        if self.column is None:
            return f"{self.file_path}:{self.line}"
        return f"{self.file_path}:{self.line}:{self.column}"


class DiagnosticLog:
    """Ordered collection of diagnostics, owned by the caller of the engine"""

    def __init__(self):
        self._entries: List[Diagnostic] = []

    def record(
        self,
        kind: DiagnosticKind,
        message: str,
        file_path: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        node_type: Optional[str] = None
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            kind=kind,
            file_path=file_path,
            message=message,
            line=line,
            column=column,
            node_type=node_type
        )
        self._entries.append(diagnostic)
        return diagnostic

    def extend(self, other: 'DiagnosticLog') -> None:
        self._entries.extend(other)

    def by_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [entry for entry in self._entries if entry.kind == kind]

    def for_file(self, file_path: str) -> List[Diagnostic]:
        return [entry for entry in self._entries if entry.file_path == file_path]

    @property
    def failed_files(self) -> List[str]:
        """Files that contributed no component, in the order they failed"""
        skipped = {DiagnosticKind.PARSE_FAILURE, DiagnosticKind.READ_FAILURE}
        return list(dict.fromkeys(
            entry.file_path for entry in self._entries if entry.kind in skipped
        ))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
