import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from compdb.core.channel import PathChannel
from compdb.core.config.settings import settings
from compdb.features.tree_walker.domain.models import SearchRoot
from compdb.features.tree_walker.service.walker import TreeWalker
from compdb.features.merge_aggregator.domain.models import MergeSummary
from compdb.features.merge_aggregator.data.output_stream import OutputStream
from compdb.features.merge_aggregator.service.aggregator import MergeAggregator

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


async def merge_compile_commands(roots: Optional[Iterable[PathLike]] = None,
                                 output_path: Optional[PathLike] = None,
                                 queue_capacity: Optional[int] = None) -> MergeSummary:
    """
    Finds every compile_commands.json under `roots` (default: cwd) and
    writes their combined array to `output_path` (default: ./compile_commands.json).

    Walker and aggregator run concurrently. The first failure from
    either side cancels the rest of the run and is re-raised.
    """
    search_roots = [SearchRoot(Path(r)) for r in (roots or [])] or [SearchRoot(Path.cwd())]
    output = Path(output_path) if output_path is not None else Path(settings.OUTPUT_FILE_NAME)

    channel = PathChannel(queue_capacity)
    walker = TreeWalker(channel)
    aggregator = MergeAggregator(channel, OutputStream(output))

    # All roots hold a sender before the consumer can observe closure
    for root in search_roots:
        walker.start(root)

    walk_task = asyncio.create_task(walker.wait())
    merge_task = asyncio.create_task(aggregator.run())

    try:
        done, _ = await asyncio.wait({walk_task, merge_task}, return_when=asyncio.FIRST_EXCEPTION)
        for task in done:
            if task.exception() is not None:
                raise task.exception()
        await walk_task
        return await merge_task
    except BaseException:
        walk_task.cancel()
        merge_task.cancel()
        await walker.shutdown()
        await asyncio.gather(walk_task, merge_task, return_exceptions=True)
        raise


def run(roots: Optional[Iterable[PathLike]] = None, output_path: Optional[PathLike] = None) -> MergeSummary:
    """
    Synchronous entry point.
    """
    return asyncio.run(merge_compile_commands(roots, output_path))
