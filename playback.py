"""
Handoff of finished WAV containers to an asynchronous playback subsystem.

The playback side loads files in the background and reports completion
through a callback. PlaybackHandoff turns that callback into a Future, so the
producer waits for the load to finish instead of polling, and only then
deletes the file it created.
"""

import abc
import logging
import threading
import warnings
from concurrent import futures
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from binaural import CleanupWarning, LoadFailure

logger = logging.getLogger(__name__)

# Load status reported by a SoundPool, 0 means success
LOAD_SUCCESS = 0


class SoundPool(abc.ABC):
    """
    Asynchronous audio playback capability.

    Implementations call the listener registered with set_on_load_complete
    once per load, from any thread, with the sound id and a status code.
    """

    @abc.abstractmethod
    def load(self, path: str) -> int:
        """Start loading a file; returns the sound id."""

    @abc.abstractmethod
    def play(self, sound_id: int, loop: bool) -> int:
        """Play a loaded sound; returns the stream id."""

    @abc.abstractmethod
    def stop(self, stream_id: int):
        """Stop a playing stream."""

    @abc.abstractmethod
    def unload(self, sound_id: int):
        """Release a loaded sound."""

    @abc.abstractmethod
    def set_on_load_complete(self, listener: Callable[[int, int], None]):
        """Register the listener called as listener(sound_id, status)."""


class PlaybackHandoff:
    """
    Loads container files into a SoundPool and plays them.

    Only one sound is kept active: starting a new one stops and unloads the
    previous one.
    """

    def __init__(self, pool: SoundPool):
        self.pool = pool
        self._lock = threading.Lock()
        self._pending: Dict[int, Future] = {}
        self._abandoned: Dict[int, Path] = {}
        self._sound_id = None
        self._stream_id = None
        pool.set_on_load_complete(self._on_load_complete)

    @property
    def stream_id(self) -> Optional[int]:
        return self._stream_id

    def start(self, path: Union[str, Path], loop: bool = True, timeout: float = None) -> int:
        """
        Load ``path``, wait for the load to complete, delete the file and play it.

        Args:
            path: WAV file written by ClipService.write
            loop: Whether the sound repeats until stopped
            timeout: Seconds to wait for the load (None waits indefinitely)

        Returns:
            int: Stream id of the playing sound

        Raises:
            LoadFailure: if loading fails or does not finish within ``timeout``
        """
        path = Path(path)
        logger.info("Loading file \"%s\".", path)
        sound_id = self.pool.load(str(path))
        future = self._future_for(sound_id)

        try:
            status = future.result(timeout=timeout)
        except futures.TimeoutError as e:
            with self._lock:
                self._pending.pop(sound_id, None)
                if not future.done():
                    # A completion arriving later releases the sound and the file
                    self._abandoned[sound_id] = path
                    raise LoadFailure(f"Timed out loading \"{path}\" after {timeout}s") from e
            status = future.result()

        # The pool holds its own copy once loading has finished
        _delete(path)

        if status != LOAD_SUCCESS:
            self.pool.unload(sound_id)
            raise LoadFailure(f"Loading \"{path}\" failed with status {status}")

        self.stop()
        self._sound_id = sound_id
        self._stream_id = self.pool.play(sound_id, loop)
        logger.info("Playing sound %d on stream %d", sound_id, self._stream_id)
        return self._stream_id

    def stop(self):
        """Stop the current stream and unload its sound, if any."""
        if self._stream_id is not None:
            self.pool.stop(self._stream_id)
            logger.info("Stopped stream %d", self._stream_id)
            self._stream_id = None
        if self._sound_id is not None:
            self.pool.unload(self._sound_id)
            self._sound_id = None

    def _future_for(self, sound_id: int) -> Future:
        # The listener may fire before load() returns, so either side may create the future
        with self._lock:
            future = self._pending.get(sound_id)
            if future is None:
                future = self._pending[sound_id] = Future()
            if future.done():
                del self._pending[sound_id]
            return future

    def _on_load_complete(self, sound_id: int, status: int):
        with self._lock:
            path = self._abandoned.pop(sound_id, None)
            if path is None:
                future = self._pending.pop(sound_id, None)
                if future is None:
                    future = self._pending[sound_id] = Future()
                future.set_result(status)
        logger.debug("Load complete for sound %d with status %d", sound_id, status)

        if path is not None:
            logger.info("Releasing sound %d, its load finished after the caller gave up", sound_id)
            self.pool.unload(sound_id)
            _delete(path)


def _delete(path: Path):
    try:
        path.unlink()
    except OSError as e:
        logger.warning("Could not delete cache file \"%s\": %s", path, e)
        warnings.warn(f"Could not delete cache file \"{path}\": {e}", CleanupWarning, stacklevel=3)
