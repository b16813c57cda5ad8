"""
Workspace: the single, explicitly constructed owner of the state engine.

Everything that must exist exactly once per process is built here and passed
by reference to whoever needs it: the snapshot store, the temporal log, the
description cache, the priority registry, the key dispatcher and the history
panel. There are no module-level singletons; call :meth:`Workspace.open` once
at start-up (the CLI does) and keep the returned object.

Start-up sequence
-----------------
1. Load the saved board through :class:`BoardStorage` (a failed load is
   logged and replaced by an empty board).
2. Seed the store with it. History starts empty; it is never persisted.
3. Subscribe the storage so every change of the current value is saved.
4. Attach the description cache, the history panel and the base routers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from planboard.actions import BoardActions
from planboard.core.contracts.board import BoardSnapshot, snapshots_equal
from planboard.core.settings import Settings, get_logger, load_settings
from planboard.core.state.storage import BoardStorage
from planboard.core.state.store import SnapshotStore
from planboard.core.state.temporal import TemporalLog
from planboard.history.cache import DescriptionCache
from planboard.history.panel import ConfirmFn, HistoryPanel
from planboard.keyboard.events import KeyDispatcher, KeyEvent
from planboard.keyboard.priority import PriorityRegistry
from planboard.keyboard.routers import HistoryRouter, ShortcutRouter, UndoRedoRouter

_log = get_logger("planboard.workspace")


def _deny(_: str) -> bool:
    return False


@dataclass
class Workspace:
    """Wired-up state engine for one running application."""

    store: SnapshotStore[BoardSnapshot]
    log: TemporalLog[BoardSnapshot]
    cache: DescriptionCache
    registry: PriorityRegistry
    dispatcher: KeyDispatcher
    panel: HistoryPanel
    actions: BoardActions
    storage: BoardStorage | None = None
    routers: list[ShortcutRouter] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        initial: BoardSnapshot | None = None,
        *,
        limit: int | None = None,
        storage: BoardStorage | None = None,
        confirm: ConfirmFn = _deny,
        on_feedback: Callable[[str], None] | None = None,
    ) -> Workspace:
        """
        Build a workspace around ``initial`` without touching the disk.

        Parameters
        ----------
        initial:
            Seed snapshot; an empty board when omitted.
        limit:
            History depth; ``load_settings().history_limit`` when omitted.
        storage:
            If given, every change of the current value is saved through it.
        confirm:
            Confirmation prompt used before clearing history from the keyboard.
            Defaults to refusing.
        on_feedback:
            Receives ``"Undo"`` / ``"Redo"`` after keyboard steps.
        """
        depth = limit if limit is not None else load_settings().history_limit
        seed = initial if initial is not None else BoardSnapshot()
        store = SnapshotStore(seed, schema=BoardSnapshot)
        log = TemporalLog(store, limit=depth, equality=snapshots_equal)
        cache = DescriptionCache()
        cache.attach(log)
        registry = PriorityRegistry()
        panel = HistoryPanel(log, cache, registry)

        ws = cls(
            store=store,
            log=log,
            cache=cache,
            registry=registry,
            dispatcher=KeyDispatcher(),
            panel=panel,
            actions=BoardActions(log),
            storage=storage,
        )
        if storage is not None:
            store.subscribe(lambda new, _old: storage.save(new))

        ws.attach(UndoRedoRouter(registry, log=log, on_feedback=on_feedback))
        ws.attach(HistoryRouter(registry, panel=panel, confirm=confirm))
        return ws

    @classmethod
    def open(
        cls,
        settings: Settings | None = None,
        *,
        confirm: ConfirmFn = _deny,
        on_feedback: Callable[[str], None] | None = None,
    ) -> Workspace:
        """Load the saved board from ``settings.storage_path`` and wire everything."""
        cfg = settings or load_settings()
        storage = BoardStorage(cfg.storage_path)
        loaded = storage.load()
        if loaded.is_err():
            _log.warning("starting with an empty board: %s", loaded.unwrap_err())
        return cls.create(
            loaded.get_or(BoardSnapshot()),
            limit=cfg.history_limit,
            storage=storage,
            confirm=confirm,
            on_feedback=on_feedback,
        )

    def attach(self, router: ShortcutRouter) -> ShortcutRouter:
        """Attach ``router`` to the shared dispatcher and keep a reference."""
        router.attach(self.dispatcher)
        self.routers.append(router)
        return router

    def press(self, key: str, **modifiers: bool) -> KeyEvent:
        """Dispatch a synthetic keydown; handy for terminals and tests."""
        return self.dispatcher.dispatch(KeyEvent(key, **modifiers))


__all__ = ["Workspace"]
