import logging
from typing import Optional

from compdb.core.channel import PathChannel

from ..domain.interfaces import IFragmentReader, IOutputSink
from ..domain.models import MergeSummary
from ..data.fragment_reader import LocalFragmentReader

logger = logging.getLogger(__name__)

class MergeAggregator:
    """
    Single consumer of discovered paths.
    Splices each fragment's interior into the output in arrival order.
    """

    def __init__(self, channel: PathChannel, sink: IOutputSink, reader: Optional[IFragmentReader] = None):
        self.channel = channel
        self.sink = sink
        self.reader = reader or LocalFragmentReader()

    async def run(self) -> MergeSummary:
        """
        Consumes the channel until every sender is closed, then closes the array.
        I/O errors are not caught; the output is left as far as it got.
        """
        summary = MergeSummary(output_path=self.sink.path)

        try:
            self.sink.open()

            async for path in self.channel:
                summary.fragments_found += 1

                # The output file itself sits under the default root
                if self.sink.is_output(path):
                    logger.debug(f"Skipping output file: {path}")
                    summary.fragments_skipped += 1
                    continue

                interior = await self.reader.read_interior(path)
                if interior.is_empty:
                    logger.debug(f"Empty fragment: {path}")
                    summary.fragments_empty += 1
                    continue

                summary.bytes_written += self.sink.write_fragment(interior.content)
                summary.fragments_merged += 1
                logger.info(f"Merged {path} ({len(interior.content)} bytes)")

            self.sink.finish()
        finally:
            self.channel.close_receiver()
            self.sink.close()

        logger.info(f"Merge complete. Merged: {summary.fragments_merged}/{summary.fragments_found} fragments")
        return summary
