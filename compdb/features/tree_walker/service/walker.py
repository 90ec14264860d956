import asyncio
import logging
from pathlib import Path
from typing import Optional, Set

from compdb.core.channel import PathChannel
from compdb.core.config.settings import settings

from ..domain.interfaces import IDirectoryLister
from ..domain.models import SearchRoot, WalkSummary
from ..data.directory_lister import ScandirLister

logger = logging.getLogger(__name__)

class TreeWalker:
    """
    Concurrent recursive search for compile_commands.json files.

    Every directory is searched by its own task. A task holds one open
    sender on the channel for its whole lifetime, and opens one for each
    child before spawning it, so the channel closes exactly when the
    last traversal task has finished.
    """

    def __init__(self, channel: PathChannel, lister: Optional[IDirectoryLister] = None,
                 target_name: str = settings.TARGET_FILE_NAME):
        self.channel = channel
        self.lister = lister or ScandirLister()
        self.target_name = target_name
        self.summary = WalkSummary()
        self._pending: Set[asyncio.Task] = set()

    def start(self, root: SearchRoot) -> asyncio.Task:
        logger.info(f"Starting search under: {root.path}")
        return self.spawn(root.path)

    def spawn(self, directory: Path) -> asyncio.Task:
        """
        Schedules a traversal unit for `directory`. Must be called from a running loop.
        """
        self.channel.open_sender()
        try:
            task = asyncio.create_task(self._search(directory))
        except BaseException:
            self.channel.close_sender()
            raise
        self._pending.add(task)
        return task

    async def _search(self, directory: Path) -> None:
        try:
            entries = await self.lister.list_entries(directory)
            self.summary.directories_visited += 1

            for entry in entries:
                if entry.is_directory:
                    logger.debug(f"Descending into: {entry.path}")
                    self.spawn(entry.path)
                elif entry.name == self.target_name:
                    logger.debug(f"Found: {entry.path}")
                    self.summary.files_found += 1
                    await self.channel.send(entry.path)
        finally:
            self.channel.close_sender()

    async def wait(self) -> WalkSummary:
        """
        Waits until every spawned unit (transitively) has terminated.
        Re-raises the first traversal failure.
        """
        while self._pending:
            done, _ = await asyncio.wait(set(self._pending), return_when=asyncio.FIRST_EXCEPTION)
            for task in done:
                self._pending.discard(task)
                if not task.cancelled() and task.exception() is not None:
                    raise task.exception()

        logger.info(
            f"Search complete. Visited {self.summary.directories_visited} directories, "
            f"found {self.summary.files_found} files."
        )
        return self.summary

    async def shutdown(self) -> None:
        """
        Cancels every unit still running. Used when the run is aborting.
        """
        while self._pending:
            tasks = list(self._pending)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self._pending.difference_update(tasks)
