"""
Thread-safe preview state for the PDF Page Numbering Tool
Makes sure only the most recently requested preview reaches the screen
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import config


class PreviewStatus(Enum):
    """Preview lifecycle states"""
    EMPTY = "empty"
    RENDERING = "rendering"
    READY = "ready"
    ERROR = "error"


@dataclass
class PreviewRequest:
    """What a render was asked to show"""
    token: int
    page_index: int
    zoom: int
    settings: tuple = field(default_factory=tuple)


def clamp_page(page_index: int, total_pages: int) -> int:
    """Keep a requested page inside 1..total_pages"""
    if total_pages < 1:
        return 1
    return max(1, min(int(page_index), total_pages))


def zoom_in(zoom: int) -> int:
    return min(zoom + config.ZOOM_STEP, config.MAX_ZOOM)


def zoom_out(zoom: int) -> int:
    return max(zoom - config.ZOOM_STEP, config.MIN_ZOOM)


class PreviewState:
    """
    Latest-request-wins bookkeeping for preview renders

    Every request gets a token. A finished render is only shown if its token
    is still the latest one; older results are discarded. A failed render
    keeps the last good frame on screen.
    """

    def __init__(self, log_callback: Optional[Callable] = None):
        self._log_callback = log_callback

        self._state_lock = threading.RLock()
        self._latest_token = 0
        self._latest_request: Optional[PreviewRequest] = None
        self._frame = None
        self._status = PreviewStatus.EMPTY
        self._last_error: Optional[str] = None

    def log(self, message: str):
        """Thread-safe logging"""
        if self._log_callback:
            self._log_callback(message)

    def begin(self, page_index: int, zoom: int, settings: tuple = ()) -> PreviewRequest:
        """Register a new render request, superseding any in flight"""
        with self._state_lock:
            self._latest_token += 1
            self._latest_request = PreviewRequest(self._latest_token, page_index, zoom, settings)
            self._status = PreviewStatus.RENDERING
            return self._latest_request

    def is_current(self, token: int) -> bool:
        with self._state_lock:
            return token == self._latest_token

    def commit(self, token: int, frame) -> bool:
        """
        Publish a finished frame

        Returns:
            bool: False when the frame was stale and has been discarded
        """
        with self._state_lock:
            if token != self._latest_token:
                self.log(f"Discarding stale preview (request {token}, latest {self._latest_token})")
                return False
            self._frame = frame
            self._status = PreviewStatus.READY
            self._last_error = None
            return True

    def fail(self, token: int, error: Exception) -> bool:
        """
        Record a failed render; the previous frame stays on display

        Returns:
            bool: False when the failed request had already been superseded
        """
        with self._state_lock:
            if token != self._latest_token:
                return False
            self._last_error = str(error)
            self._status = PreviewStatus.ERROR
            self.log(f"Preview render failed: {error}")
            return True

    @property
    def frame(self):
        with self._state_lock:
            return self._frame

    @property
    def status(self) -> PreviewStatus:
        with self._state_lock:
            return self._status

    @property
    def last_error(self) -> Optional[str]:
        with self._state_lock:
            return self._last_error

    @property
    def latest_request(self) -> Optional[PreviewRequest]:
        with self._state_lock:
            return self._latest_request

    def reset(self):
        """Forget everything, e.g. when a new file is loaded"""
        with self._state_lock:
            self._latest_token += 1
            self._latest_request = None
            self._frame = None
            self._status = PreviewStatus.EMPTY
            self._last_error = None
