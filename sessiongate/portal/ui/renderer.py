"""Session renderer: builds the control tree for a session verdict.

`render_session` is a pure function of (state, loading); it holds no
references to the mount or the identity client.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, assert_never

import flet as ft

from sessiongate.portal.ui.theme import (
    BG_CARD,
    GREEN_LIGHT,
    INDIGO_LIGHT,
    INDIGO_PRIMARY,
    RED_LIGHT,
    RED_PRIMARY,
    TEXT_BODY,
    TEXT_BRIGHT,
    TEXT_MUTED,
)
from sessiongate.shared.domain.session import (
    Authenticated,
    Initializing,
    SessionState,
    Unauthenticated,
)

ClickHandler = Callable[[Any], Any]


def render_loading() -> ft.Control:
    return ft.Container(
        bgcolor=BG_CARD,
        border_radius=8,
        padding=16,
        content=ft.Row(
            [
                ft.ProgressRing(width=20, height=20, stroke_width=2, color=INDIGO_LIGHT),
                ft.Text("Loading...", color=TEXT_MUTED),
            ],
            spacing=8,
            tight=True,
        ),
    )


def _action_button(label: str, color: str, on_click: Optional[ClickHandler]) -> ft.Control:
    return ft.FilledButton(
        label,
        on_click=on_click,
        width=360,
        height=48,
        style=ft.ButtonStyle(bgcolor=color, color=TEXT_BRIGHT),
    )


def render_signed_in(username: str, on_logout: Optional[ClickHandler]) -> ft.Control:
    return ft.Column(
        [
            ft.Text("You are logged in!", color=GREEN_LIGHT, weight=ft.FontWeight.W_500),
            ft.Row(
                [
                    ft.Text("Welcome,", color=TEXT_BODY),
                    ft.Text(username, color=INDIGO_LIGHT, weight=ft.FontWeight.W_600, selectable=True),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
                wrap=True,
                tight=True,
            ),
            _action_button("Log out", RED_PRIMARY, on_logout),
        ],
        spacing=16,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
    )


def render_signed_out(on_login: Optional[ClickHandler]) -> ft.Control:
    return ft.Column(
        [
            ft.Text("You are not logged in.", color=RED_LIGHT, weight=ft.FontWeight.W_500),
            _action_button("Log in with Microsoft", INDIGO_PRIMARY, on_login),
        ],
        spacing=16,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
    )


def render_session(
    state: SessionState,
    loading: bool,
    on_login: Optional[ClickHandler] = None,
    on_logout: Optional[ClickHandler] = None,
) -> ft.Control:
    """Build the view for a session verdict."""
    if loading or isinstance(state, Initializing):
        return render_loading()
    if isinstance(state, Authenticated):
        return render_signed_in(state.username, on_logout)
    if isinstance(state, Unauthenticated):
        return render_signed_out(on_login)
    assert_never(state)
