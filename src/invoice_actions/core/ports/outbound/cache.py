from __future__ import annotations

from typing import Callable, Protocol, TypeVar

T = TypeVar("T")


class PathRevalidator(Protocol):
    def revalidate_path(self, path: str) -> None: ...


class PathCache(PathRevalidator, Protocol):
    def get_or_render(self, path: str, render: Callable[[], T]) -> T: ...
