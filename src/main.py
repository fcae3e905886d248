import logging
import signal
import sys
from queue import Queue
from typing import Any, Optional

from app_config import AppConfigurationError, load_app_config, resolve_config_path
from drops import DropAnimator, DropConfig, DropConfigurationError
from runtime import LoggingWindowManager, RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig
from session import SessionConfig, SessionConfigurationError, SessionController


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("rest_reminder")


def setup_signal_handlers(engine: RuntimeEngine, logger: logging.Logger) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("%s received, stopping.", signal.Signals(signum).name)
        engine.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main() -> int:
    """Run the rest reminder until interrupted."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    try:
        session_config = SessionConfig.from_settings(app_config.session)
        drop_config = DropConfig.from_settings(app_config.drops)
    except (SessionConfigurationError, DropConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    animator = DropAnimator(
        drop_config,
        viewport_size=(
            app_config.drops.viewport_width,
            app_config.drops.viewport_height,
        ),
        logger=logging.getLogger("drops"),
    )
    controller = SessionController(
        session_config,
        animator=animator,
        logger=logging.getLogger("session"),
    )
    command_queue: Queue[dict[str, Any]] = Queue()

    # Optional UI server for the overlay page + websocket updates
    ui_server: Optional[UIServer] = None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")
        ui_server_config = None

    if ui_server_config and ui_server_config.enabled:
        try:
            ui_server = UIServer(
                config=ui_server_config,
                logger=logging.getLogger("ui_server"),
                command_handler=command_queue.put,
            )
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except Exception as error:
            logger.error("UI server startup failed: %s", error)
            logger.warning("Continuing without UI server.")
            ui_server = None

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            settings=app_config.runtime,
            controller=controller,
            animator=animator,
            window_manager=LoggingWindowManager(logger=logging.getLogger("window")),
            command_queue=command_queue,
            ui_server=ui_server,
        )
    )
    setup_signal_handlers(engine, logger)
    logger.info(
        "Ready: work=%s min, rest=%s min",
        app_config.session.work_minutes,
        app_config.session.rest_minutes,
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
