from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pandas as pd

from catalog.data import DATA_PATH, TitleRecord, load_dashboard_data
from catalog.errors import DashboardStateError
from catalog.filters import (
    Control,
    DashboardSettings,
    FilterControls,
    FilterState,
    apply_filters,
    build_filter_controls,
    normalize_filters,
    update_filter_state,
)
from catalog.widgets import Payload, render_all

logger = logging.getLogger(__name__)

RenderHandler = Callable[[str, Payload], None]
Loader = Callable[[Path], Dict[str, object]]


class DashboardStatus(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class ControlChange:
    control: Control
    value: object


class Dashboard:
    """Load once, then recompute and redraw every widget on each control change.

    Render handlers registered with :meth:`on_render` receive ``(region, payload)``
    for all five regions on every render cycle, synchronously and in widget order.
    """

    def __init__(
        self,
        path: Path | str = DATA_PATH,
        *,
        settings: DashboardSettings = DashboardSettings(),
        loader: Loader = load_dashboard_data,
    ) -> None:
        self.path = Path(path)
        self.settings = settings
        self._loader = loader
        self._handlers: List[RenderHandler] = []
        self.status = DashboardStatus.UNINITIALIZED
        self.titles: pd.DataFrame = pd.DataFrame()
        self.records: List[TitleRecord] = []
        self.controls: Optional[FilterControls] = None
        self.state: Optional[FilterState] = None
        self.filtered: pd.DataFrame = pd.DataFrame()
        self.last_render: Dict[str, Payload] = {}

    def on_render(self, handler: RenderHandler) -> RenderHandler:
        self._handlers.append(handler)
        return handler

    def start(self) -> Dict[str, Payload]:
        if self.status is DashboardStatus.READY:
            return self.last_render
        try:
            data_ctx = self._loader(self.path)
            titles: pd.DataFrame = data_ctx["titles"]  # type: ignore[assignment]
            controls = build_filter_controls(titles)
        except Exception:
            logger.exception("dashboard start failed for %s", self.path)
            raise

        self.titles = titles
        self.records = list(data_ctx.get("records") or [])  # type: ignore[arg-type]
        self.controls = controls
        self.state = controls.default_state
        self.status = DashboardStatus.READY
        return self._refresh()

    def dispatch(self, event: ControlChange) -> Dict[str, Payload]:
        if self.status is not DashboardStatus.READY or self.state is None or self.controls is None:
            raise DashboardStateError("dashboard is not ready; call start() first")
        changed = update_filter_state(self.state, event.control, event.value)
        self.state = normalize_filters(asdict(changed), self.controls)
        return self._refresh()

    def _refresh(self) -> Dict[str, Payload]:
        if self.state is None:
            raise DashboardStateError("no filter state; call start() first")
        self.filtered = apply_filters(self.titles, self.state)
        logger.debug("filter %s matched %d of %d titles", self.state, len(self.filtered), len(self.titles))
        rendered = render_all(self.filtered, self.settings)
        for region, payload in rendered.items():
            for handler in self._handlers:
                handler(region, payload)
        self.last_render = rendered
        return rendered

    def export_csv(self) -> bytes:
        return self.filtered.to_csv(index=False).encode("utf-8")
