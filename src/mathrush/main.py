"""Math Rush — application entry point (NiceGUI composition root).

Wires together: Config → logging → storage → EventBus → GameController → UI.
NiceGUI owns the event loop; ``app.on_startup`` / ``app.on_shutdown``
handle lifecycle.
"""

from __future__ import annotations

import logging

from nicegui import app, ui

from mathrush.config.config_manager import load_config
from mathrush.core.event_bus import EventBus
from mathrush.core.game_controller import GameController
from mathrush.core.score_store import ScoreStore
from mathrush.log_config.logger import setup_logging
from mathrush.storage.factory import create_storage
from mathrush.ui.layout import GameLayout

_log = logging.getLogger(__name__)


def main() -> None:
    """Load config, wire the game together and hand control to NiceGUI."""

    # 1. Configuration first, so logging honours its level and directory
    config = load_config()
    setup_logging(config.system.log_level, config.system.log_dir)
    _log.info("Starting Math Rush")

    # 2. Storage + leaderboard
    store = ScoreStore(create_storage(config))

    # 3. Event bus and the single state owner
    bus = EventBus(queue_size=config.system.event_bus_queue_size)
    controller = GameController(bus, store, settings=config.game)

    # 4. UI
    layout = GameLayout(event_bus=bus, config=config)
    layout.setup_page()

    # 5. Lifecycle hooks.  The bus and controller need NiceGUI's running loop.
    async def on_startup() -> None:
        await bus.start()
        await controller.start()
        _log.info("Math Rush running on http://localhost:%d", config.system.webui_port)

    async def on_shutdown() -> None:
        await controller.stop()
        await bus.stop()
        _log.info("Math Rush stopped")

    app.on_startup(on_startup)
    app.on_shutdown(on_shutdown)

    # 6. Launch NiceGUI (blocks forever)
    ui.run(
        port=config.system.webui_port,
        title="Math Rush",
        reload=False,
        show=False,
    )


if __name__ == "__main__":
    main()
