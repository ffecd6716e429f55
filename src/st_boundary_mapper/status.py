"""Mapping status returned by every boundary builder."""

from dataclasses import dataclass
from enum import Enum


class StatusCode(Enum):
    """境界生成の結果コード."""

    OK = "ok"
    SKIP = "skip"  # 境界不要 (エラーではない)
    ERROR = "error"


@dataclass(frozen=True)
class Status:
    """Result of a mapping operation."""

    code: StatusCode = StatusCode.OK
    message: str = ""

    @classmethod
    def ok(cls) -> "Status":
        return cls(StatusCode.OK)

    @classmethod
    def skip(cls, message: str = "") -> "Status":
        return cls(StatusCode.SKIP, message)

    @classmethod
    def error(cls, message: str = "") -> "Status":
        return cls(StatusCode.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.code == StatusCode.OK

    @property
    def is_skip(self) -> bool:
        return self.code == StatusCode.SKIP

    @property
    def is_error(self) -> bool:
        return self.code == StatusCode.ERROR
