"""RenderPort for the web layer: keeps the last pushed view and pending alerts."""

from collections import deque
from typing import List, Optional

from shower_tracker.domain.models import WidgetView


class WebPresenter:
    def __init__(self, max_alerts: int = 20):
        self.view: Optional[WidgetView] = None
        self._alerts = deque(maxlen=max_alerts)

    def render(self, view: WidgetView) -> None:
        self.view = view

    def alert(self, message: str) -> None:
        self._alerts.append(message)

    def drain_alerts(self) -> List[str]:
        alerts = list(self._alerts)
        self._alerts.clear()
        return alerts
