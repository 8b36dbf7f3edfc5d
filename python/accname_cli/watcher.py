# SPDX-License-Identifier: AGPL-3.0-only
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from accname.config import CONFIG_FILENAME

WATCHED_SUFFIXES = (".html", ".htm", ".xhtml")


class CheckEventHandler(FileSystemEventHandler):
    def __init__(self, check, *, target=None, delay=0.5, clock=time.time):
        self.check = check
        self.target = Path(target).resolve() if target is not None else None
        self.delay = delay
        self.clock = clock
        self.last_check = 0.0

    def wants(self, src_path):
        path = Path(src_path)
        # Ignore hidden files and editor swap files
        if any(part.startswith(".") for part in path.parts[-2:]):
            return False
        if self.target is not None and self.target.is_file():
            return path.resolve() == self.target or path.name == CONFIG_FILENAME
        return path.suffix.lower() in WATCHED_SUFFIXES or path.name == CONFIG_FILENAME

    def on_modified(self, event):
        if event.is_directory or not self.wants(event.src_path):
            return

        # Debounce
        now = self.clock()
        if now - self.last_check < self.delay:
            return

        print(f"[watch] Change detected in {event.src_path}...")
        try:
            self.check()
        except Exception as e:
            print(f"[error] Check failed: {e}")

        self.last_check = now

    on_created = on_modified


def watch(path, check, *, delay=0.5):
    """Run ``check`` now and again whenever a watched file under ``path`` changes."""
    path = Path(path)
    folder = path if path.is_dir() else path.parent

    print(f"[watch] Watching {folder} for changes...")

    try:
        check()
    except Exception as e:
        print(f"[error] Initial check failed: {e}")

    event_handler = CheckEventHandler(check, target=path, delay=delay)
    observer = Observer()
    observer.schedule(event_handler, str(folder), recursive=path.is_dir())
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
