import threading

import pytest

from binaural import ClipService
from playback import LOAD_SUCCESS, SoundPool


class FakeSoundPool(SoundPool):
    """In-memory SoundPool that records every call.

    ``mode`` controls when the load-complete listener fires:
    "sync" calls it from inside load(), "thread" from a timer thread shortly
    after, and "never" not at all.
    """

    def __init__(self, mode="sync", status=LOAD_SUCCESS, delay=0.05):
        self.mode = mode
        self.status = status
        self.delay = delay
        self.listener = None
        self.loaded = []
        self.played = []
        self.stopped = []
        self.unloaded = []
        self._next_id = 1

    def set_on_load_complete(self, listener):
        self.listener = listener

    def load(self, path):
        sound_id = self._next_id
        self._next_id += 1
        with open(path, "rb") as f:
            self.loaded.append((sound_id, f.read()))
        if self.mode == "sync":
            self.listener(sound_id, self.status)
        elif self.mode == "thread":
            threading.Timer(self.delay, self.listener, args=(sound_id, self.status)).start()
        return sound_id

    def play(self, sound_id, loop):
        self.played.append((sound_id, loop))
        return 100 + sound_id

    def stop(self, stream_id):
        self.stopped.append(stream_id)

    def unload(self, sound_id):
        self.unloaded.append(sound_id)


@pytest.fixture
def service(tmp_path):
    return ClipService(cache_dir=tmp_path)


@pytest.fixture
def pool():
    return FakeSoundPool()
