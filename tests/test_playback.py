import pytest

from binaural import CleanupWarning, LoadFailure
from playback import LOAD_SUCCESS, PlaybackHandoff

from conftest import FakeSoundPool


@pytest.fixture
def clip_file(service):
    clip = service.generate_beat(440.0, 4.0, 180.0, num_loops=10)
    return service.write(clip, "custom")[0]


class TestPlaybackHandoff:
    def test_loads_deletes_then_plays(self, pool, clip_file):
        expected = clip_file.read_bytes()
        handoff = PlaybackHandoff(pool)

        stream_id = handoff.start(clip_file)

        assert pool.loaded == [(1, expected)]
        assert not clip_file.exists()
        assert pool.played == [(1, True)]
        assert stream_id == 101
        assert handoff.stream_id == 101

    def test_waits_for_completion_from_another_thread(self, clip_file):
        pool = FakeSoundPool(mode="thread", delay=0.05)
        handoff = PlaybackHandoff(pool)

        handoff.start(clip_file, loop=False, timeout=5.0)

        assert not clip_file.exists()
        assert pool.played == [(1, False)]

    def test_failed_load(self, clip_file):
        pool = FakeSoundPool(status=-1)
        handoff = PlaybackHandoff(pool)

        with pytest.raises(LoadFailure):
            handoff.start(clip_file)

        assert not clip_file.exists()
        assert pool.unloaded == [1]
        assert pool.played == []
        assert handoff.stream_id is None

    def test_timeout_leaves_file_in_place(self, clip_file):
        pool = FakeSoundPool(mode="never")
        handoff = PlaybackHandoff(pool)

        with pytest.raises(LoadFailure):
            handoff.start(clip_file, timeout=0.05)

        assert clip_file.exists()
        assert pool.played == []

    def test_cleanup_failure_only_warns(self, pool, clip_file, monkeypatch):
        handoff = PlaybackHandoff(pool)
        original_load = pool.load

        def load_then_remove(path):
            sound_id = original_load(path)
            clip_file.unlink()
            return sound_id

        monkeypatch.setattr(pool, "load", load_then_remove)
        with pytest.warns(CleanupWarning):
            stream_id = handoff.start(clip_file)

        assert pool.played == [(1, True)]
        assert stream_id == 101

    def test_new_sound_replaces_previous(self, pool, service):
        clip = service.generate_beat(440.0, 4.0, num_loops=10)
        handoff = PlaybackHandoff(pool)

        handoff.start(service.write(clip, "custom")[0])
        handoff.start(service.write(clip, "custom")[0])

        assert pool.stopped == [101]
        assert pool.unloaded == [1]
        assert handoff.stream_id == 102

    def test_stop(self, pool, clip_file):
        handoff = PlaybackHandoff(pool)
        handoff.start(clip_file)

        handoff.stop()
        handoff.stop()

        assert pool.stopped == [101]
        assert pool.unloaded == [1]
        assert handoff.stream_id is None

    def test_late_completion_after_timeout_releases_sound(self, clip_file):
        pool = FakeSoundPool(mode="never")
        handoff = PlaybackHandoff(pool)
        with pytest.raises(LoadFailure):
            handoff.start(clip_file, timeout=0.05)

        pool.listener(1, LOAD_SUCCESS)

        assert pool.unloaded == [1]
        assert pool.played == []
        assert not clip_file.exists()
        assert handoff._pending == {}
        assert handoff.stream_id is None

    def test_late_completion_does_not_affect_next_load(self, clip_file, service):
        pool = FakeSoundPool(mode="never")
        handoff = PlaybackHandoff(pool)
        with pytest.raises(LoadFailure):
            handoff.start(clip_file, timeout=0.05)
        pool.listener(1, LOAD_SUCCESS)

        pool.mode = "sync"
        clip = service.generate_beat(440.0, 4.0, num_loops=10)
        assert handoff.start(service.write(clip, "custom")[0]) == 102
        assert pool.played == [(2, True)]
