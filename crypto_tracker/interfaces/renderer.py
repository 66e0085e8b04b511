"""Renderer protocol — the view layer driven by the core."""
from typing import Protocol

from ..models import LoadingState, Notification
from ..views import AssetCard


class Renderer(Protocol):
    """Abstract interface for anything that displays dashboard state."""

    def render_list(self, cards: list[AssetCard]) -> None: ...

    def render_comparison(self, cards: list[AssetCard]) -> None: ...

    def show_notification(self, notification: Notification) -> None: ...

    def show_loading(self, state: LoadingState) -> None: ...

    def apply_theme(self, dark_mode: bool) -> None: ...
