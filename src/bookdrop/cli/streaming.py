# ABOUTME: Drives a Resource stream to completion from synchronous Click commands.
# ABOUTME: Shows a Rich spinner while the stream reports Loading.

import asyncio
from collections.abc import AsyncIterator

from rich.console import Console

from bookdrop.core.resource import Error, Loading, Resource, Success, is_terminal


async def _consume(stream: AsyncIterator[Resource], console: Console, label: str) -> Resource:
    terminal: Resource = Error("Operation produced no result")
    with console.status(label) as status:
        async for result in stream:
            if is_terminal(result):
                terminal = result
            elif isinstance(result, Loading) and not result.is_loading:
                status.stop()
    return terminal


def run_stream(stream: AsyncIterator[Resource], console: Console, label: str) -> Success | Error:
    """Run the stream on a fresh event loop and return its terminal state."""
    return asyncio.run(_consume(stream, console, label))
