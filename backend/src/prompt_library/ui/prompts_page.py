"""NiceGUI card grid for browsing and editing prompts."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from fastapi import FastAPI
from nicegui import ui

from ..actions import PromptActions, build_prompt_actions
from ..core.config import settings
from ..grid.controller import PromptGridController
from ..schemas.prompts import PromptItem


log = logging.getLogger("promptlib.ui.prompts_page")

EMPTY_MESSAGE = "No prompts found. Get started by creating one!"
NO_MATCH_MESSAGE = "No prompts match your search."


class ClipboardWriteError(RuntimeError):
    pass


async def write_browser_clipboard(text: str) -> None:
    """Write ``text`` with the browser clipboard API of the current client."""
    script = f"navigator.clipboard.writeText({json.dumps(text)}).then(() => true, () => false)"
    accepted = await ui.run_javascript(script, timeout=3.0)
    if accepted is not True:
        raise ClipboardWriteError("The browser rejected the clipboard write")


def notify(message: str, kind: str) -> None:
    ui.notify(message, type=kind)


class ListView:
    """Card grid of the visible prompts, or the empty state."""

    def __init__(self, controller: PromptGridController):
        self.controller = controller
        self._rendered: tuple[Any, ...] | None = None
        self.container = ui.column().classes("w-full")

    def render(self) -> None:
        controller = self.controller
        visible = tuple(controller.visible_prompts)
        key = (visible, controller.is_empty)
        if key == self._rendered:
            return
        self._rendered = key

        self.container.clear()
        with self.container:
            if controller.is_empty:
                with ui.column().classes("w-full items-center py-12 gap-4"):
                    ui.button("Create First Prompt", icon="add", on_click=controller.open_create).mark(
                        "create-first-prompt"
                    )
                    ui.label(EMPTY_MESSAGE).classes("text-gray-600")
                return
            if not visible:
                ui.label(NO_MATCH_MESSAGE).classes("w-full text-center text-gray-600 py-12")
                return
            with ui.grid().classes("w-full grid-cols-1 md:grid-cols-2 lg:grid-cols-3 gap-6"):
                for prompt in visible:
                    self._card(prompt)

    def _card(self, prompt: PromptItem) -> None:
        controller = self.controller
        with ui.card().classes("h-full flex flex-col"):
            with ui.row().classes("w-full justify-between items-start no-wrap gap-2"):
                with ui.column().classes("flex-1 min-w-0 gap-1"):
                    ui.label(prompt.name).classes("text-lg font-semibold truncate w-full").tooltip(prompt.name)
                    ui.label(prompt.description).classes("text-xs text-gray-500 line-clamp-2")
                with ui.row().classes("gap-1 no-wrap"):
                    ui.button(icon="edit", on_click=lambda p=prompt: controller.begin_edit(p)).props(
                        "flat round dense"
                    ).tooltip("Edit").mark(f"edit-{prompt.id}")
                    ui.button(icon="delete", on_click=lambda p=prompt: controller.request_delete(p.id)).props(
                        "flat round dense"
                    ).tooltip("Delete").mark(f"delete-{prompt.id}")
                    ui.button(
                        icon="content_copy",
                        on_click=lambda p=prompt: controller.copy_to_clipboard(p.content),
                    ).props("flat round dense").tooltip("Copy").mark(f"copy-{prompt.id}")
            ui.label(prompt.content).classes(
                "w-full mt-2 bg-gray-100 rounded p-3 overflow-auto max-h-40 "
                "text-sm whitespace-pre-wrap break-words font-mono"
            )


class EditorDialog:
    """Create/edit form bound to the controller's draft."""

    def __init__(self, controller: PromptGridController):
        self.controller = controller
        self._mode: Any = None
        with ui.dialog() as self.dialog, ui.card().classes("w-[425px] max-w-full"):
            self.title = ui.label().classes("text-lg font-semibold")
            self.name_input = ui.input(
                "Name", on_change=lambda e: controller.update_name(e.value or "")
            ).classes("w-full").mark("prompt-name")
            self.description_input = ui.input(
                "Description", on_change=lambda e: controller.update_description(e.value or "")
            ).classes("w-full").mark("prompt-description")
            self.content_input = ui.textarea(
                "Content", on_change=lambda e: controller.update_content(e.value or "")
            ).classes("w-full").props('input-style="min-height: 100px"').mark("prompt-content")
            self.error_label = ui.label().classes("text-sm text-red-500")
            self.submit_button = ui.button(on_click=controller.submit).classes("w-full").mark("prompt-submit")
        self.dialog.on("hide", self._on_hide)

    def _on_hide(self) -> None:
        if self.controller.is_editor_open:
            self.controller.close_dialog()

    def render(self) -> None:
        controller = self.controller
        mode = controller.dialog if controller.is_editor_open else None
        if mode != self._mode:
            self._mode = mode
            if mode is None:
                self.dialog.close()
            else:
                draft = controller.draft
                self.name_input.value = draft.name
                self.description_input.value = draft.description
                self.content_input.value = draft.content
                self.dialog.open()
        self.title.text = controller.editor_title
        self.error_label.text = controller.error or ""
        self.error_label.set_visibility(bool(controller.error))
        self.submit_button.text = controller.submit_label
        self.submit_button.set_enabled(controller.can_submit)


class DeleteConfirmDialog:
    """Confirmation gate in front of the destructive delete call."""

    def __init__(self, controller: PromptGridController):
        self.controller = controller
        with ui.dialog().props("persistent") as self.dialog, ui.card().classes("w-[425px] max-w-full"):
            ui.label("Delete Prompt").classes("text-lg font-semibold")
            self.message = ui.label().classes("text-sm")
            self.error_label = ui.label().classes("text-sm text-red-500")
            with ui.row().classes("w-full justify-end gap-2"):
                self.cancel_button = (
                    ui.button("Cancel", on_click=controller.cancel_delete).props("flat").mark("cancel-delete")
                )
                self.delete_button = (
                    ui.button(on_click=controller.confirm_delete).props("color=negative").mark("confirm-delete")
                )

    def render(self) -> None:
        controller = self.controller
        if not controller.is_confirm_open:
            self.dialog.close()
            return
        pending = controller.pending_delete
        name = pending.name if pending is not None else "this prompt"
        self.message.text = f'Are you sure you want to delete "{name}"? This action cannot be undone.'
        self.error_label.text = controller.delete_error or ""
        self.error_label.set_visibility(bool(controller.delete_error))
        self.delete_button.text = controller.delete_label
        self.delete_button.set_enabled(not controller.deleting)
        self.cancel_button.set_enabled(not controller.deleting)
        self.dialog.open()


class PromptGridView:
    def __init__(self, controller: PromptGridController):
        self.controller = controller

    def build(self) -> None:
        controller = self.controller
        with ui.row().classes("w-full justify-between items-center mb-6"):
            ui.label("My Prompts").classes("text-3xl font-bold")
            with ui.row().classes("items-center gap-2"):
                ui.input(
                    placeholder="Search prompts...",
                    on_change=lambda e: controller.set_search(e.value),
                ).props("clearable outlined dense").classes("w-72").mark("prompt-search")
                ui.button("Create Prompt", icon="add", on_click=controller.open_create).mark("create-prompt")
        self.list_view = ListView(controller)
        self.editor = EditorDialog(controller)
        self.confirm = DeleteConfirmDialog(controller)
        controller.subscribe(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        self.list_view.render()
        self.editor.render()
        self.confirm.render()


def register_prompt_pages(actions: PromptActions) -> None:
    async def prompts_page() -> None:
        controller = PromptGridController(actions, clipboard=write_browser_clipboard, notify=notify)
        await controller.load()
        with ui.column().classes("w-full max-w-screen-xl mx-auto px-4 py-8"):
            PromptGridView(controller).build()

    ui.page("/", title=settings.ui_title)(prompts_page)
    ui.page("/prompts", title=settings.ui_title)(prompts_page)


def mount_prompt_grid(app: FastAPI, actions_factory: Callable[[], PromptActions] | None = None) -> None:
    """Serve the prompt grid from ``app`` under ``UI_MOUNT_PATH``."""
    actions = (actions_factory or build_prompt_actions)()
    register_prompt_pages(actions)

    aclose = getattr(actions, "aclose", None)
    if aclose is not None:
        app.add_event_handler("shutdown", aclose)

    ui.run_with(app, title=settings.ui_title, mount_path=settings.ui_mount_path)
    log.info("Prompt grid mounted at %s (backend=%s)", settings.ui_mount_path, settings.prompts_backend)
