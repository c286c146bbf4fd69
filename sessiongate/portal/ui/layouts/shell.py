from __future__ import annotations

import datetime
import logging

import flet as ft

from sessiongate.portal.state import PortalState
from sessiongate.portal.ui.renderer import render_loading, render_signed_in, render_signed_out
from sessiongate.portal.ui.theme import (
    BG_CARD,
    BG_PAGE,
    INDIGO_PRIMARY,
    PURPLE_LIGHT,
    RED_LIGHT,
    TEXT_BODY,
    TEXT_MUTED,
    get_log_color,
)

logger = logging.getLogger(__name__)


def apply_shell_theme(page: ft.Page, title: str) -> None:
    """Dark baseline theme."""
    page.title = title
    page.theme = ft.Theme(color_scheme_seed=INDIGO_PRIMARY, use_material3=True)
    page.theme_mode = ft.ThemeMode.DARK
    page.bgcolor = BG_PAGE
    page.padding = 0


def build_shell(page: ft.Page, state: PortalState, title: str = "SessionGate") -> ft.View:
    mount = state.mount

    async def _login(e=None) -> None:
        await mount.trigger_login()

    async def _logout(e=None) -> None:
        await mount.trigger_logout()

    def _session_content() -> ft.Control:
        if state.is_loading.value:
            return render_loading()
        if state.is_authenticated.value:
            return render_signed_in(state.username.value, _logout)
        return render_signed_out(_login)

    session_container = ft.Container(content=_session_content())
    status_text = ft.Text(state.status_text.value, color=TEXT_BODY, size=13)
    error_text = ft.Text("", color=RED_LIGHT, size=12, visible=False)
    log_column = ft.Column(spacing=2, scroll=ft.ScrollMode.AUTO, height=120)

    def _safe_update() -> None:
        try:
            page.update()
        except RuntimeError:
            # Session already destroyed
            logger.debug("page.update() after session close")

    def _sync_session() -> None:
        session_container.content = _session_content()
        _safe_update()

    def _sync_status() -> None:
        status_text.value = state.status_text.value
        _safe_update()

    def _sync_error() -> None:
        error_text.value = state.last_error.value
        error_text.visible = bool(state.last_error.value)
        _safe_update()

    def _sync_logs() -> None:
        rows = []
        for entry in list(state.logs.value)[-20:]:
            level = str(entry.get("level", "info"))
            ts = entry.get("ts")
            time_str = datetime.datetime.fromtimestamp(ts).strftime("%H:%M:%S") if ts else ""
            rows.append(
                ft.Row(
                    [
                        ft.Text(level.upper(), size=11, color=get_log_color(level), width=60),
                        ft.Text(time_str, size=11, color=TEXT_MUTED, width=70),
                        ft.Text(str(entry.get("message", "")), size=12, color=get_log_color(level), expand=True),
                    ],
                    spacing=8,
                )
            )
        log_column.controls = rows
        _safe_update()

    apply_shell_theme(page, title)

    # --- Listener Bindings ---
    state.is_loading.listen(_sync_session)
    state.is_authenticated.listen(_sync_session)
    state.username.listen(_sync_session)
    state.status_text.listen(_sync_status)
    state.last_error.listen(_sync_error)
    state.logs.listen(_sync_logs)

    card = ft.Container(
        width=560,
        padding=32,
        bgcolor=BG_CARD,
        border_radius=12,
        content=ft.Column(
            [
                ft.Text(title, size=36, weight=ft.FontWeight.W_700, color=PURPLE_LIGHT),
                ft.Text("Sign in with your Microsoft Entra ID account.", color=TEXT_MUTED),
                session_container,
                status_text,
                error_text,
                ft.Divider(height=1, color=TEXT_MUTED),
                log_column,
            ],
            spacing=20,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
    )

    return ft.View(
        route="/",
        bgcolor=BG_PAGE,
        vertical_alignment=ft.MainAxisAlignment.CENTER,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        controls=[card],
    )
