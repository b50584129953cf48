"""
World flag storage for one game mode context.

This module handles caching, thread-safe access, JSON persistence and
optional file watching of the per-world flag overrides.
"""

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler


# Set up logger
logger = logging.getLogger(__name__)

FlagObserver = Callable[[str, Optional[bool], Optional[bool]], None]
FlagChange = Tuple[str, Optional[bool], Optional[bool]]


class SettingsFileHandler(FileSystemEventHandler):
    """File system event handler for a world flag settings file."""

    def __init__(self, store: 'WorldFlagStore'):
        self.store = store

    def _should_handle_event(self, file_path: str) -> bool:
        """Check if we should handle this file event."""
        target_path = str(self.store.settings_path.absolute())
        event_path = str(Path(file_path).absolute())
        return event_path == target_path

    def on_modified(self, event):
        """Handle file modification events."""
        if not event.is_directory and self._should_handle_event(event.src_path):
            logger.debug(f"World flags file modified: {event.src_path}")
            self.store._reload_from_disk()

    def on_created(self, event):
        """Handle file creation events."""
        if not event.is_directory and self._should_handle_event(event.src_path):
            logger.debug(f"World flags file created: {event.src_path}")
            self.store._reload_from_disk()

    def on_moved(self, event):
        """Handle file move events (atomic writes by editors)."""
        if not event.is_directory and self._should_handle_event(event.dest_path):
            logger.debug(f"World flags file moved (atomic write): {event.dest_path}")
            self.store._reload_from_disk()


class StoreLock:
    """
    Re-entrant store lock that delivers queued change notifications.

    Changes made while the lock is held are queued and handed to observers
    once the outermost holder releases it, so observer callbacks never run
    under the store lock.
    """

    def __init__(self, store: 'WorldFlagStore'):
        self._store = store
        self._rlock = threading.RLock()
        self._depth = 0

    def acquire(self) -> None:
        self._rlock.acquire()
        self._depth += 1

    def release(self) -> None:
        self._depth -= 1
        pending: List[FlagChange] = []
        if self._depth == 0:
            pending = self._store._take_pending_changes()
        self._rlock.release()
        for change in pending:
            self._store._notify_observers(*change)

    def __enter__(self) -> 'StoreLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()


class WorldFlagStore:
    """
    Mapping of flag id to boolean for one world context.

    All access goes through one re-entrant lock. Callers that need a
    read-then-write sequence to be atomic hold ``store.lock`` around it.
    Stores of different contexts never share a lock, and observers are
    called after the lock is released.
    """

    def __init__(self, context_name: str, settings_path: Optional[Path] = None,
                 debounce_seconds: float = 0.2):
        self.context_name = context_name
        self.settings_path = Path(settings_path) if settings_path is not None else None
        self.debounce_seconds = debounce_seconds
        self._flags: Dict[str, bool] = {}
        self._lock = StoreLock(self)
        self._observers: List[FlagObserver] = []
        self._pending_changes: List[FlagChange] = []
        self._last_reload = 0.0
        self._last_written: Optional[Dict[str, bool]] = None

        # File watching
        self.observer = None
        self._reload_timer: Optional[threading.Timer] = None

        if self.settings_path is not None and self.settings_path.exists():
            self._reload_from_disk(force=True)

    @property
    def lock(self) -> StoreLock:
        """Lock serializing every access to this store."""
        return self._lock

    def __contains__(self, flag_id: str) -> bool:
        with self._lock:
            return flag_id in self._flags

    def __len__(self) -> int:
        with self._lock:
            return len(self._flags)

    def get(self, flag_id: str) -> Optional[bool]:
        """Get a flag override, or None when the world has no record for it."""
        with self._lock:
            return self._flags.get(flag_id)

    def put(self, flag_id: str, value: bool) -> None:
        """Set a flag override and notify observers if it changed."""
        with self._lock:
            old_value = self._flags.get(flag_id)
            self._flags[flag_id] = value
            if old_value != value:
                self._pending_changes.append((flag_id, old_value, value))

    def remove(self, flag_id: str) -> bool:
        """Remove a flag override. Returns False if there was none."""
        with self._lock:
            if flag_id not in self._flags:
                return False
            old_value = self._flags.pop(flag_id)
            self._pending_changes.append((flag_id, old_value, None))
            return True

    def snapshot(self) -> Dict[str, bool]:
        """Get a copy of all overrides."""
        with self._lock:
            return self._flags.copy()

    def add_observer(self, callback: FlagObserver) -> None:
        """Add observer called with (flag_id, old_value, new_value) on every change."""
        with self._lock:
            self._observers.append(callback)

    def remove_observer(self, callback: FlagObserver) -> None:
        with self._lock:
            try:
                self._observers.remove(callback)
            except ValueError:
                pass  # Callback not found

    def _take_pending_changes(self) -> List[FlagChange]:
        """Hand over queued changes (called by the lock holder)."""
        pending, self._pending_changes = self._pending_changes, []
        return pending

    def _notify_observers(self, flag_id: str, old_value: Optional[bool], new_value: Optional[bool]):
        """Notify observers of one change (called without the lock held)."""
        with self._lock:
            observers = list(self._observers)
        for callback in observers:
            try:
                callback(flag_id, old_value, new_value)
            except Exception as e:
                logger.error(f"Error in observer callback for {flag_id}: {e}")

    def save(self) -> bool:
        """
        Persist the overrides to the settings file.

        Returns:
            False if the store has no settings file, True once written

        Raises:
            RuntimeError: If the file could not be written
        """
        if self.settings_path is None:
            return False
        with self._lock:
            document = {
                "_metadata": {
                    "description": "World flag settings for a game mode",
                    "format_version": "1.0",
                    "context": self.context_name,
                    "last_updated": time.strftime("%Y-%m-%d %H:%M:%S")
                },
                "world_flags": dict(sorted(self._flags.items()))
            }
            self._write_atomic(document)
            self._last_written = self._flags.copy()
        return True

    def _write_atomic(self, document: Dict[str, Any]):
        """Write the settings document to file atomically."""
        temp_path = self.settings_path.with_suffix('.tmp')
        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)

            temp_path.replace(self.settings_path)
        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise RuntimeError(f"Failed to write world flags to {self.settings_path}: {e}")

    def reload(self) -> None:
        """Manually reload overrides from the settings file."""
        self._reload_from_disk(force=True)

    def _reload_from_disk(self, force: bool = False):
        """Reload overrides from file with debouncing."""
        if self.settings_path is None:
            return

        current_time = time.time()
        elapsed = current_time - self._last_reload
        if not force and elapsed < self.debounce_seconds:
            logger.debug(f"World flags reload debounced ({elapsed:.2f}s since last reload)")
            self._schedule_trailing_reload(self.debounce_seconds - elapsed)
            return

        with self._lock:
            try:
                if not self.settings_path.exists():
                    return

                with open(self.settings_path, 'r', encoding='utf-8') as f:
                    document = json.load(f)

                loaded: Dict[str, bool] = {}
                for flag_id, value in document.get("world_flags", {}).items():
                    if isinstance(value, bool):
                        loaded[flag_id] = value
                    else:
                        logger.warning(f"Ignoring non-boolean value {value!r} for flag '{flag_id}' in {self.settings_path}")

                # Our own writes echo back through the watcher
                if not force and loaded == self._last_written:
                    return

                self._last_reload = current_time
                old_flags = self._flags
                self._flags = loaded
                self._last_written = loaded.copy()
                for flag_id in set(old_flags) | set(loaded):
                    if old_flags.get(flag_id) != loaded.get(flag_id):
                        self._pending_changes.append((flag_id, old_flags.get(flag_id), loaded.get(flag_id)))

                logger.info(f"World flags for '{self.context_name}' reloaded, {len(loaded)} flags in store")

            except Exception as e:
                logger.error(f"Error reloading world flags from {self.settings_path}: {e}")

    def _schedule_trailing_reload(self, delay: float) -> None:
        """Reload once more when the debounce window closes."""
        with self._lock:
            if self._reload_timer is not None:
                return
            self._reload_timer = threading.Timer(delay + 0.01, self._run_trailing_reload)
            self._reload_timer.daemon = True
            self._reload_timer.start()

    def _run_trailing_reload(self) -> None:
        with self._lock:
            self._reload_timer = None
        self._reload_from_disk()

    def start_watching(self) -> bool:
        """
        Watch the settings file and reload it when edited externally.

        Returns:
            True if a watcher is running
        """
        if self.settings_path is None:
            return False
        if self.observer is not None:
            return True
        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            self.observer = Observer()
            self.observer.schedule(SettingsFileHandler(self), str(self.settings_path.parent), recursive=False)
            self.observer.start()
            logger.debug(f"File watcher started for {self.settings_path}")
            return True
        except Exception as e:
            logger.warning(f"Could not set up file watcher for {self.settings_path}: {e}")
            self.observer = None
            return False

    def stop_watching(self) -> None:
        """Clean shutdown of the file watcher."""
        if self.observer:
            self.observer.stop()
            self.observer.join()
            self.observer = None
        with self._lock:
            timer, self._reload_timer = self._reload_timer, None
        if timer is not None:
            timer.cancel()
