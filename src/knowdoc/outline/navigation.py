"""Navigation from outline entries to rendered sections.

The controller never owns data. It asks a view for the element carrying an identifier,
scrolls it just below the fixed header band and highlights it for a short time. A missing
target is a silent no-op.

The highlight clear is a scheduled task tied to the active identifier: navigating again
before it fires cancels it, clears the previous element right away and schedules a new
clear for the new target.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from knowdoc.config import Settings
from knowdoc.logging import get_logger

logger = get_logger(__name__)


class ViewElement(Protocol):
    """A rendered, addressable section."""

    @property
    def top(self) -> float:
        """Absolute offset of the element's top edge in the scrollable view."""

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...


class DocumentView(Protocol):
    """The rendered document as seen by navigation."""

    def find_element(self, identifier: str) -> ViewElement | None: ...

    def scroll_to(self, top: float, *, smooth: bool) -> None: ...


class Cancellable(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Deferred callbacks. ``asyncio.AbstractEventLoop`` satisfies this protocol."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Cancellable: ...


class NavigationController:
    """Scroll to and briefly highlight outline targets."""

    def __init__(
        self,
        view: DocumentView,
        scheduler: Scheduler,
        *,
        header_offset: float = 64,
        highlight_ms: int = 1000,
        highlight_class: str = "heading-highlight",
        smooth: bool = True,
    ) -> None:
        self._view = view
        self._scheduler = scheduler
        self._header_offset = header_offset
        self._highlight_s = highlight_ms / 1000.0
        self._highlight_class = highlight_class
        self._smooth = smooth

        self._active_identifier: str | None = None
        self._active_element: ViewElement | None = None
        self._pending_clear: Cancellable | None = None

    @classmethod
    def from_settings(
        cls, view: DocumentView, scheduler: Scheduler, settings: Settings
    ) -> "NavigationController":
        """Build a controller from the `KNOWDOC_NAV_*` settings."""

        return cls(
            view,
            scheduler,
            header_offset=settings.nav_header_offset_px,
            highlight_ms=settings.nav_highlight_ms,
            highlight_class=settings.nav_highlight_class,
            smooth=settings.nav_smooth_scroll,
        )

    @property
    def active_identifier(self) -> str | None:
        """Identifier currently highlighted, if any."""

        return self._active_identifier

    def navigate_to(self, identifier: str) -> bool:
        """Scroll to ``identifier`` and highlight it.

        Returns:
            ``True`` if the target was found, ``False`` for the no-op case.
        """

        element = self._view.find_element(identifier)
        if element is None:
            logger.debug("Navigation target %r not in view", identifier)
            return False

        self._cancel_pending()

        self._view.scroll_to(element.top - self._header_offset, smooth=self._smooth)
        element.add_class(self._highlight_class)
        self._active_identifier = identifier
        self._active_element = element
        self._pending_clear = self._scheduler.call_later(self._highlight_s, self._clear)
        return True

    def reset(self) -> None:
        """Cancel any pending clear and remove the current highlight now."""

        self._cancel_pending()

    def _cancel_pending(self) -> None:
        if self._pending_clear is not None:
            self._pending_clear.cancel()
        self._clear()

    def _clear(self) -> None:
        if self._active_element is not None:
            self._active_element.remove_class(self._highlight_class)
        self._active_identifier = None
        self._active_element = None
        self._pending_clear = None


@dataclass
class StaticElement:
    """In-memory ``ViewElement``."""

    top: float
    classes: set[str] = field(default_factory=set)

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)


@dataclass
class StaticDocumentView:
    """In-memory ``DocumentView`` for headless use.

    ``scroll_top`` tracks the last requested position; ``scroll_log`` keeps every request.
    """

    elements: dict[str, StaticElement] = field(default_factory=dict)
    scroll_top: float = 0.0
    scroll_log: list[tuple[float, bool]] = field(default_factory=list)

    @classmethod
    def from_identifiers(cls, identifiers: list[str], *, spacing: float = 100.0) -> "StaticDocumentView":
        """Lay identifiers out top to bottom, ``spacing`` apart."""

        return cls(elements={ident: StaticElement(top=i * spacing) for i, ident in enumerate(identifiers)})

    def find_element(self, identifier: str) -> StaticElement | None:
        return self.elements.get(identifier)

    def scroll_to(self, top: float, *, smooth: bool) -> None:
        self.scroll_top = max(top, 0.0)
        self.scroll_log.append((self.scroll_top, smooth))
