from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ClassificationKind(str, Enum):
    RECIPE = "recipe"
    URL_LIST = "url_list"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassificationResult:
    kind: ClassificationKind
    recipe: Optional[dict[str, Any]] = None
    urls: tuple[str, ...] = ()

    @classmethod
    def unknown(cls) -> "ClassificationResult":
        return cls(kind=ClassificationKind.UNKNOWN)


@dataclass
class BatchSummary:
    total_urls: int = 0
    success_count: int = 0
    error_count: int = 0
    failed_urls: list[str] = field(default_factory=list)

    def record_success(self) -> None:
        self.total_urls += 1
        self.success_count += 1

    def record_failure(self, url: str) -> None:
        self.total_urls += 1
        self.error_count += 1
        self.failed_urls.append(url)

    @property
    def message(self) -> str:
        return (
            f"処理が完了しました。{self.total_urls}件中、"
            f"{self.success_count}件のレシピを追加しました。"
        )


@dataclass(frozen=True)
class FileImportOutcome:
    kind: ClassificationKind
    recipe: Optional[dict[str, Any]] = None
    summary: Optional[BatchSummary] = None
