"""
File response that deletes the render job's files once streaming ends.
"""

import logging
from typing import Callable

from starlette.responses import FileResponse
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)


class CleanupFileResponse(FileResponse):
    """
    FileResponse that runs ``on_complete`` after the body has been sent.

    Cleanup runs in a ``finally`` block so it also happens when streaming
    fails or the client disconnects mid-download.
    """

    def __init__(self, path, *, on_complete: Callable[[], None], **kwargs):
        super().__init__(path, **kwargs)
        self._on_complete = on_complete

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except Exception as e:
            # Headers are already sent; the client just sees a truncated body
            logger.error(f"Unable to stream render {self.path}: {e}")
            raise
        finally:
            self._on_complete()
