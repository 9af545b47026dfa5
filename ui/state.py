import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ui.aggregator import DEFAULT_MODE, ModeLike, ViewMode, parse_mode

log = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading analytics..."
EMPTY_MESSAGE = "No data available"


class ViewPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class AnalyticsViewState:
    """
    Immutable snapshot of the analytics view.

    Loading -> Ready is the only phase transition; Ready is terminal.
    A Ready state without payload is rendered as the empty view.
    """
    phase: ViewPhase = ViewPhase.LOADING
    payload: Optional[Mapping[str, Any]] = None
    mode: ViewMode = DEFAULT_MODE

    @property
    def is_loading(self) -> bool:
        return self.phase is ViewPhase.LOADING

    @property
    def is_empty(self) -> bool:
        if self.phase is not ViewPhase.READY:
            return False
        # false, 0 and "" bodies count as no payload; {} and [] do not
        p = self.payload
        return p is None or (not p and not isinstance(p, (Mapping, list)))

    @property
    def status_message(self) -> Optional[str]:
        if self.is_loading:
            return LOADING_MESSAGE
        if self.is_empty:
            return EMPTY_MESSAGE
        return None

    def resolved(self, payload: Optional[Mapping[str, Any]]) -> "AnalyticsViewState":
        if not self.is_loading:
            return self
        return replace(self, phase=ViewPhase.READY, payload=payload)

    def failed(self) -> "AnalyticsViewState":
        # same rendering as an empty successful fetch
        return self.resolved(None)

    def with_mode(self, mode: ModeLike) -> "AnalyticsViewState":
        return replace(self, mode=parse_mode(mode))


class AnalyticsView:
    """
    Owns the state of one mounted view. Results that arrive after
    `unmount()` are dropped.
    """

    def __init__(self, mode: ModeLike = DEFAULT_MODE):
        self.state = AnalyticsViewState(mode=parse_mode(mode))
        self.mounted = True

    def settle(self, payload: Optional[Mapping[str, Any]] = None, error: Optional[BaseException] = None) -> AnalyticsViewState:
        if not self.mounted:
            log.debug("analytics result arrived after teardown; discarded")
            return self.state
        if error is not None:
            log.error("analytics fetch failed: %s", error)
            self.state = self.state.failed()
        else:
            self.state = self.state.resolved(payload)
        return self.state

    def load(self, fetch: Callable[[], Optional[Mapping[str, Any]]]) -> AnalyticsViewState:
        if not self.state.is_loading:
            return self.state
        try:
            payload = fetch()
        except Exception as e:
            return self.settle(error=e)
        return self.settle(payload)

    def select(self, mode: ModeLike) -> AnalyticsViewState:
        if self.mounted:
            self.state = self.state.with_mode(mode)
        return self.state

    def unmount(self) -> None:
        self.mounted = False
