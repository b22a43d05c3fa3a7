"""Worker for the activity planner workflows.

Registers both pipeline workflows and the four step activities on the
activity planner task queue. Run it alongside a Temporal dev server.
"""

import asyncio
import logging

from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.worker import Worker

from src.workflows.activity_planner.activities import ACTIVITIES
from src.workflows.activity_planner.config import ADDRESS, LOG_LEVEL, TASK_QUEUE
from src.workflows.activity_planner.workflow import WORKFLOWS


interrupt_event = asyncio.Event()


async def main() -> None:
    """Connect to Temporal and serve the activity planner task queue."""
    logging.basicConfig(level=LOG_LEVEL)
    client = await Client.connect(ADDRESS, data_converter=pydantic_data_converter)

    async with Worker(
        client,
        task_queue=TASK_QUEUE,
        workflows=WORKFLOWS,
        activities=ACTIVITIES,
    ):
        # Keep the worker alive until interrupted (Ctrl+C during demos)
        await interrupt_event.wait()


if __name__ == "__main__":
    asyncio.run(main())
