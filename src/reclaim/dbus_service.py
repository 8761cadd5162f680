"""D-Bus service for GUI communication.

D-Bus methods use PascalCase per D-Bus convention, and type signatures
like "as" and "s" are D-Bus protocol types, not Python syntax.
"""

from __future__ import annotations

import asyncio
import json
import logging

from dbus_next.aio import MessageBus
from dbus_next.service import ServiceInterface, method, signal
from dbus_next import BusType

from reclaim.core.engine import CleanPhase, ReclaimEngine
from reclaim.core.ledger import HistoryLedger
from reclaim.core.sources import LocalFileSource, ReclaimError
from reclaim.settings import ReclaimConfig
from reclaim.storage import JsonHistoryStore

log = logging.getLogger(__name__)

_BUS_NAME = "io.github.reclaim"
_OBJECT_PATH = "/io/github/reclaim"
_INTERFACE = "io.github.reclaim.Manager"


def _error(exc: Exception) -> str:
    return json.dumps({"error": "Operation unavailable", "detail": str(exc)})


# noinspection PyPep8Naming
class ReclaimDBusService(ServiceInterface):
    """D-Bus service interface for Reclaim."""

    def __init__(self, config: ReclaimConfig) -> None:
        super().__init__(_INTERFACE)
        self._engine = ReclaimEngine(
            LocalFileSource(config.root),
            HistoryLedger(JsonHistoryStore(config.history_path)),
            allow_delete=config.allow_delete,
        )

    @method()
    def GetSnapshot(self) -> "s":  # type: ignore[override]
        """Scan the root, returning the snapshot and history as JSON."""
        try:
            data = self._engine.get_snapshot().to_dict()
        except ReclaimError as exc:
            log.warning("Scan failed: %s", exc)
            return _error(exc)
        data.update(self._engine.get_history())
        return json.dumps(data)

    @method()
    def Clean(self, category_ids: "as") -> "s":  # type: ignore[override]
        """Clean the given categories, returning the clean report as JSON."""

        def progress(phase: CleanPhase) -> None:
            self.PhaseChanged(phase.value)

        try:
            report = self._engine.clean(list(category_ids), on_progress=progress)
        except ReclaimError as exc:
            log.warning("Clean failed: %s", exc)
            return _error(exc)
        return json.dumps(report.to_dict())

    @method()
    def GetHistory(self) -> "s":  # type: ignore[override]
        """Get the recent clean history."""
        return json.dumps(self._engine.get_history())

    @signal()
    def PhaseChanged(self, phase: str) -> "s":  # type: ignore[override]
        return phase


async def run_service(config: ReclaimConfig) -> None:
    """Start the D-Bus service."""
    bus = await MessageBus(bus_type=BusType.SESSION).connect()
    service = ReclaimDBusService(config)
    bus.export(_OBJECT_PATH, service)
    await bus.request_name(_BUS_NAME)
    log.info("D-Bus service started on %s for %s", _BUS_NAME, config.root)
    await bus.wait_for_disconnect()


def start_service(config: ReclaimConfig) -> None:
    """Entry point to start the D-Bus service."""
    asyncio.run(run_service(config))
