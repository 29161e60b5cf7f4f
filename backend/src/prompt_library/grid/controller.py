from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable

from ..actions.prompt_actions import PromptActions
from ..schemas.prompts import PromptItem
from ..search import filter_prompts
from .state import CLOSED, Closed, ConfirmingDelete, Creating, DialogState, Draft, Editing


log = logging.getLogger("promptlib.grid.controller")

Listener = Callable[[], None]
Notifier = Callable[[str, str], None]
ClipboardWriter = Callable[[str], Awaitable[None]]

SAVE_ERROR_FALLBACK = "Failed to save prompt"
DELETE_ERROR_FALLBACK = "Failed to delete prompt"
LOAD_ERROR_FALLBACK = "Failed to load prompts"


class DialogStateError(RuntimeError):
    """An operation was invoked from a dialog state that does not allow it."""


def _message(exc: BaseException, fallback: str) -> str:
    text = str(exc).strip()
    return text or fallback


def _ignore_notification(message: str, kind: str) -> None:
    return None


class PromptGridController:
    """Client-side state of the prompt card grid.

    The collection only changes after the server confirms a create, update or
    delete. Failures of those calls are turned into display messages on two
    separate channels (``error`` for the editor, ``delete_error`` for the
    confirmation gate) and never raised to the caller.
    """

    def __init__(
        self,
        actions: PromptActions,
        initial_prompts: Iterable[PromptItem] = (),
        *,
        clipboard: ClipboardWriter | None = None,
        notify: Notifier | None = None,
    ):
        self.actions = actions
        self._prompts: list[PromptItem] = list(initial_prompts)
        self._dialog: DialogState = CLOSED
        self._draft = Draft()
        self._session = 0
        self._clipboard = clipboard
        self._notify = notify or _ignore_notification
        self._listeners: list[Listener] = []
        self.submitting = False
        self.error: str | None = None
        self.deleting = False
        self.delete_error: str | None = None
        self.search = ""

    # -------- Read-only state --------
    @property
    def prompts(self) -> list[PromptItem]:
        return list(self._prompts)

    @property
    def dialog(self) -> DialogState:
        return self._dialog

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def editing_id(self) -> int | None:
        return self._dialog.prompt_id if isinstance(self._dialog, Editing) else None

    @property
    def deleting_id(self) -> int | None:
        return self._dialog.prompt_id if isinstance(self._dialog, ConfirmingDelete) else None

    @property
    def is_editor_open(self) -> bool:
        return isinstance(self._dialog, (Creating, Editing))

    @property
    def is_confirm_open(self) -> bool:
        return isinstance(self._dialog, ConfirmingDelete)

    @property
    def pending_delete(self) -> PromptItem | None:
        target = self.deleting_id
        if target is None:
            return None
        return next((item for item in self._prompts if item.id == target), None)

    @property
    def visible_prompts(self) -> list[PromptItem]:
        return filter_prompts(self._prompts, self.search)

    @property
    def is_empty(self) -> bool:
        return not self._prompts

    @property
    def editor_title(self) -> str:
        return "Edit Prompt" if self.editing_id is not None else "Create New Prompt"

    @property
    def submit_label(self) -> str:
        editing = self.editing_id is not None
        if self.submitting:
            return "Updating..." if editing else "Creating..."
        return "Update Prompt" if editing else "Create Prompt"

    @property
    def delete_label(self) -> str:
        return "Deleting..." if self.deleting else "Delete"

    @property
    def can_submit(self) -> bool:
        return not self.submitting and self._draft.is_complete

    # -------- Listeners --------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # -------- Loading --------
    async def load(self) -> bool:
        """Replace the collection with the server listing."""
        try:
            prompts = await self.actions.list_prompts()
        except Exception as exc:
            log.warning("Loading prompts failed: %s", exc)
            self._notify(_message(exc, LOAD_ERROR_FALLBACK), "negative")
            return False
        self._prompts = list(prompts)
        self._changed()
        return True

    # -------- Editor dialog --------
    def open_create(self) -> None:
        self._session += 1
        self._dialog = Creating()
        self._draft = Draft()
        self.error = None
        self._changed()

    def begin_edit(self, prompt: PromptItem) -> None:
        self._session += 1
        self._dialog = Editing(prompt.id)
        self._draft = Draft.from_prompt(prompt)
        self.error = None
        self._changed()

    def close_dialog(self) -> None:
        """Discard the draft and leave create/edit mode. Safe to call twice."""
        if self.is_editor_open:
            self._session += 1
            self._dialog = CLOSED
        self._draft = Draft()
        self.error = None
        self._changed()

    def update_name(self, value: str) -> None:
        self._draft = self._draft.with_name(value)
        self._changed()

    def update_description(self, value: str) -> None:
        self._draft = self._draft.with_description(value)
        self._changed()

    def update_content(self, value: str) -> None:
        self._draft = self._draft.with_content(value)
        self._changed()

    async def submit(self) -> PromptItem | None:
        if isinstance(self._dialog, Editing):
            return await self.update(self._dialog.prompt_id, self._draft)
        if isinstance(self._dialog, Creating):
            return await self.create(self._draft)
        raise DialogStateError("submit() requires an open editor dialog")

    async def create(self, draft: Draft) -> PromptItem | None:
        if not isinstance(self._dialog, (Closed, Creating)):
            raise DialogStateError(f"create() called from {self._dialog!r}")
        if self.submitting:
            log.debug("Ignoring create while another save is in flight")
            return None

        session = self._begin_save()
        try:
            created = await self.actions.create_prompt(
                name=draft.name,
                description=draft.description,
                content=draft.content,
            )
        except Exception as exc:
            log.warning("Prompt creation failed: %s", exc)
            self._save_failed(session, exc)
            return None

        self._prompts = [created, *self._prompts]
        self._save_succeeded(session)
        return created

    async def update(self, prompt_id: int, draft: Draft) -> PromptItem | None:
        if self.editing_id != prompt_id:
            raise DialogStateError(
                f"update({prompt_id}) called while the editor targets {self.editing_id}"
            )
        if self.submitting:
            log.debug("Ignoring update while another save is in flight")
            return None

        session = self._begin_save()
        try:
            updated = await self.actions.update_prompt(
                prompt_id,
                name=draft.name,
                description=draft.description,
                content=draft.content,
            )
        except Exception as exc:
            log.warning("Prompt %s update failed: %s", prompt_id, exc)
            self._save_failed(session, exc)
            return None

        self._prompts = [updated if item.id == prompt_id else item for item in self._prompts]
        self._save_succeeded(session)
        return updated

    def _begin_save(self) -> int:
        self.submitting = True
        self.error = None
        self._changed()
        return self._session

    def _save_failed(self, session: int, exc: BaseException) -> None:
        self.submitting = False
        # The error belongs to the editor that submitted; a reopened editor starts clean.
        if session == self._session:
            self.error = _message(exc, SAVE_ERROR_FALLBACK)
        self._changed()

    def _save_succeeded(self, session: int) -> None:
        self.submitting = False
        if session == self._session:
            self._draft = Draft()
            if self.is_editor_open:
                self._dialog = CLOSED
        self._changed()

    # -------- Delete confirmation --------
    def request_delete(self, prompt_id: int) -> None:
        if self.deleting:
            log.debug("Ignoring delete request while another delete is in flight")
            return
        self._session += 1
        self._dialog = ConfirmingDelete(prompt_id)
        self._draft = Draft()
        self.delete_error = None
        self._changed()

    def cancel_delete(self) -> None:
        if self.deleting:
            return
        if self.is_confirm_open:
            self._dialog = CLOSED
        self.delete_error = None
        self._changed()

    async def confirm_delete(self) -> bool:
        target = self.deleting_id
        if target is None:
            raise DialogStateError("confirm_delete() requires a pending delete")
        return await self.delete(target)

    async def delete(self, prompt_id: int) -> bool:
        if self.deleting_id != prompt_id:
            raise DialogStateError(f"delete({prompt_id}) called without confirmation")
        if self.deleting:
            log.debug("Ignoring delete of %s while another delete is in flight", prompt_id)
            return False

        self.deleting = True
        self.delete_error = None
        self._changed()
        try:
            await self.actions.delete_prompt(prompt_id)
        except Exception as exc:
            log.warning("Prompt %s delete failed: %s", prompt_id, exc)
            self.deleting = False
            self.delete_error = _message(exc, DELETE_ERROR_FALLBACK)
            self._changed()
            return False

        self.deleting = False
        self._prompts = [item for item in self._prompts if item.id != prompt_id]
        self._dialog = CLOSED
        self._changed()
        return True

    # -------- Search & clipboard --------
    def set_search(self, query: str | None) -> None:
        self.search = query or ""
        self._changed()

    async def copy_to_clipboard(self, content: str) -> bool:
        """Copy ``content`` and report the outcome as a transient notification."""
        if self._clipboard is None:
            self._notify("Clipboard is not available", "negative")
            return False
        try:
            await self._clipboard(content)
        except Exception as exc:
            log.warning("Clipboard write failed: %s", exc)
            self._notify("Failed to copy prompt", "negative")
            return False
        self._notify("Prompt copied to clipboard", "positive")
        return True
