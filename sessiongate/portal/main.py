"""SessionGate portal - main application entry point."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import flet as ft
from dotenv import load_dotenv

from sessiongate.portal.state import PortalState
from sessiongate.portal.ui.layouts.shell import build_shell
from sessiongate.shared.core import events
from sessiongate.shared.core.configuration import ConfigManager, LoggingConfig, SystemConfig
from sessiongate.shared.core.diagnostics import EventBusDiagnostics
from sessiongate.shared.core.event_bus import EventBus
from sessiongate.shared.domain.identity.protocols import IdentityClient
from sessiongate.shared.domain.session import SessionMount
from sessiongate.shared.infrastructure.identity import MsalIdentityClient

PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(config: LoggingConfig, root: Path = PROJECT_ROOT) -> Path:
    """Configure the root logger.

    File handler: everything at the configured level, rotated.
    Console handler: warnings and errors only.

    Returns:
        Path of the log file
    """
    logs_dir = Path(config.log_dir)
    if not logs_dir.is_absolute():
        logs_dir = root / logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "sessiongate.log"

    file_log_level = _LOG_LEVELS.get(config.level.upper(), logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_LOG_LEVELS.get(config.console_level.upper(), logging.WARNING))
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("msal").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("flet_controls").setLevel(logging.WARNING)
    logging.getLogger("flet_transport").setLevel(logging.WARNING)
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)

    logger.info(f"Logging configured: file={log_file_path}, console={config.console_level}+")
    return log_file_path


def create_app(
    config: SystemConfig,
    client: Optional[IdentityClient] = None,
    event_bus: Optional[EventBus] = None,
):
    """Build the Flet target for one process.

    The identity client and event bus are created once here and shared by
    every page session; each page gets its own SessionMount.
    """
    identity_client = client or MsalIdentityClient(config.identity)
    event_bus = event_bus or EventBus()
    diagnostics = EventBusDiagnostics(event_bus)

    async def main(page: ft.Page) -> None:
        logger.info("Mounting session view")
        mount = SessionMount(identity_client, diagnostics=diagnostics, bus=event_bus)
        portal_state = PortalState(mount, event_bus)
        await portal_state.initialize()

        async def _teardown(e=None) -> None:
            mount.unmount()
            await portal_state.dispose()
            logger.info("Session view unmounted")

        page.on_disconnect = _teardown
        page.on_close = _teardown

        page.views.clear()
        page.views.append(build_shell(page, portal_state, title=config.ui.title))
        page.update()

        if not mount.mount():
            await event_bus.publish(
                events.TOPIC_STATUS_TEXT,
                events.create_status_text_event("Sign-in status unavailable"),
            )

    return main


def run(config_dir: Optional[Path] = None) -> None:
    """Load configuration, configure logging and start Flet."""
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env")
    config = ConfigManager(config_dir or PROJECT_ROOT / "config").get_config()
    configure_logging(config.logging)

    target = create_app(config)
    if config.ui.flet_web_mode:
        renderer_env = config.ui.flet_web_renderer.lower()
        renderer = ft.WebRenderer.AUTO if renderer_env == "auto" else ft.WebRenderer.CANVAS_KIT
        view_mode = ft.AppView.WEB_BROWSER if os.getenv("FLET_FORCE_WEB_BROWSER") == "true" else ft.AppView.FLET_APP_WEB
        logger.info(f"Starting Flet app in WEB mode on port {config.ui.flet_port}")
        ft.run(
            target,
            view=view_mode,
            port=config.ui.flet_port,
            host="127.0.0.1",
            web_renderer=renderer,
        )
    else:
        logger.info("Starting Flet app in DESKTOP mode")
        ft.run(target, view=ft.AppView.FLET_APP)


if __name__ == "__main__":
    run()
