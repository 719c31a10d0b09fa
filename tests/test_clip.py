"""
Tests for Clip slots
"""

from liveosc import addresses as addr
from liveosc.clip import Clip, EMPTY, PLAYING, STOPPED
from liveosc.events import EventChannel

from fakes import FakeTransport, Recorder


class TestClip:

    def setup_method(self):
        self.transport = FakeTransport()
        self.sink = EventChannel()
        self.clip = Clip(self.transport, self.sink, track_id=1, id=2)

    def test_requests_info_on_creation(self):
        assert self.transport.sent_to(addr.CLIP_INFO) == [(1, 2)]
        assert self.transport.tags_for(addr.CLIP_INFO) == ['ii']

    def test_info_emits_state_then_length(self):
        order = []
        self.clip.on('state', lambda change: order.append(('state', change.value)))
        self.clip.on('length', lambda change: order.append(('length', change.value)))

        self.transport.deliver(addr.CLIP_INFO, 1, 2, STOPPED, 16.0)

        assert order == [('state', STOPPED), ('length', 16.0)]
        assert self.clip.has_clip

    def test_info_for_occupied_slot_refreshes(self):
        self.transport.reset()
        self.transport.deliver(addr.CLIP_INFO, 1, 2, STOPPED, 4.0)

        sent = self.transport.addresses()
        assert addr.CLIP_LOOPSTART in sent
        assert addr.CLIP_LOOPEND in sent
        assert addr.CLIP_LOOPSTATE in sent
        assert addr.CLIP_NAME in sent
        # MIDI slot
        assert addr.CLIP_WARPING not in sent
        assert addr.CLIP_PITCH not in sent

    def test_audio_slot_also_requests_warping_and_pitch(self):
        clip = Clip(self.transport, self.sink, track_id=0, id=0, audio=1)
        self.transport.reset()
        self.transport.deliver(addr.CLIP_INFO, 0, 0, STOPPED, 4.0)

        assert self.transport.sent_to(addr.CLIP_WARPING) == [(0, 0)]
        assert self.transport.sent_to(addr.CLIP_PITCH) == [(0, 0)]
        clip.destroy()

    def test_known_name_is_not_requested_again(self):
        self.transport.deliver(addr.CLIP_NAME, 1, 2, "Bassline")
        self.transport.reset()
        self.transport.deliver(addr.CLIP_INFO, 1, 2, PLAYING, 4.0)
        assert self.transport.sent_to(addr.CLIP_NAME) == []

    def test_empty_slot_clears_name_silently(self):
        self.transport.deliver(addr.CLIP_NAME, 1, 2, "Bassline")
        names = Recorder()
        self.clip.on('name', names)

        self.transport.deliver(addr.CLIP_INFO, 1, 2, EMPTY)

        assert self.clip.name == ''
        assert names.count == 0

    def test_name_change_requests_info(self):
        self.transport.reset()
        self.transport.deliver(addr.CLIP_NAME, 1, 2, "Lead")
        assert self.clip.name == "Lead"
        assert self.transport.sent_to(addr.CLIP_INFO) == [(1, 2)]

    def test_ignores_other_slots(self):
        self.transport.deliver(addr.CLIP_INFO, 1, 3, PLAYING, 8.0)
        self.transport.deliver(addr.CLIP_INFO, 0, 2, PLAYING, 8.0)
        assert self.clip.state == EMPTY

    def test_loop_fields(self):
        self.transport.deliver(addr.CLIP_LOOPSTART, 1, 2, 1.0)
        self.transport.deliver(addr.CLIP_LOOPEND, 1, 2, 9.0)
        self.transport.deliver(addr.CLIP_LOOPSTATE, 1, 2, 1)
        assert (self.clip.loopstart, self.clip.loopend, self.clip.loopstate) == (1.0, 9.0, 1)

    def test_pitch(self):
        self.transport.deliver(addr.CLIP_PITCH, 1, 2, -12, 5)
        assert self.clip.coarse == -12
        assert self.clip.fine == 5

    def test_consecutive_updates_publish_on_both_channels(self):
        local, song_wide = Recorder(), Recorder()
        self.clip.on('loopend', local)
        self.sink.on('clip:loopend', song_wide)

        for value in (4.0, 8.0, 16.0):
            self.transport.deliver(addr.CLIP_LOOPEND, 1, 2, value)

        for recorder in (local, song_wide):
            assert [change.value for change in recorder.payloads] == [4.0, 8.0, 16.0]
            assert [change.prev for change in recorder.payloads] == [0, 4.0, 8.0]
        assert self.clip.loopend == 16.0

    def test_local_listener_sees_previous_value(self):
        self.transport.deliver(addr.CLIP_LOOPEND, 1, 2, 4.0)
        seen = []
        self.clip.on('loopend', lambda change: seen.append((change.value, change.prev, self.clip.loopend)))

        self.transport.deliver(addr.CLIP_LOOPEND, 1, 2, 8.0)

        assert seen == [(8.0, 4.0, 4.0)]

    def test_song_wide_event_carries_ids(self):
        events = Recorder()
        self.sink.on('clip:state', events)
        self.transport.deliver(addr.CLIP_INFO, 1, 2, PLAYING, 4.0)

        change = events.payloads[0]
        assert change.value == PLAYING
        assert change.id == 2
        assert change.track_id == 1
        assert self.clip.is_playing


class TestClipCommands:

    def setup_method(self):
        self.transport = FakeTransport()
        self.clip = Clip(self.transport, EventChannel(), track_id=1, id=2)
        self.transport.reset()

    def test_play_and_stop(self):
        self.clip.play()
        self.clip.stop()
        assert self.transport.sent_to(addr.CLIP_PLAY) == [(1, 2)]
        assert self.transport.sent_to(addr.CLIP_STOP) == [(1, 2)]

    def test_commands_do_not_change_state(self):
        self.clip.set_loopend(8)
        assert self.clip.loopend == 0

    def test_loop_points_are_floats(self):
        self.clip.set_loopstart(1)
        self.clip.set_loopend(8)
        assert self.transport.tags_for(addr.CLIP_LOOPSTART) == ['iif']
        assert self.transport.sent_to(addr.CLIP_LOOPEND) == [(1, 2, 8.0)]

    def test_set_pitch_on_midi_is_noop(self):
        self.clip.set_pitch(3)
        assert self.transport.sent == []

    def test_set_pitch_on_audio(self):
        clip = Clip(self.transport, EventChannel(), track_id=0, id=0, audio=1)
        self.transport.reset()
        clip.set_pitch(-2, 10)
        assert self.transport.sent == [(addr.CLIP_PITCH, (0, 0, -2, 10), 'iiii')]

    def test_set_name(self):
        self.clip.set_name("Intro")
        assert self.transport.sent == [(addr.CLIP_NAME, (1, 2, "Intro"), 'iis')]

    def test_view_sends_both_ids(self):
        self.clip.view()
        assert self.transport.sent_to(addr.CLIP_VIEW) == [(1, 2)]


class TestClipDestroy:

    def test_destroy_removes_all_handlers(self):
        transport = FakeTransport()
        clip = Clip(transport, EventChannel(), track_id=0, id=0)
        assert transport.subscriber_count() == 7

        destroyed = Recorder()
        clip.on('destroy', destroyed)
        clip.destroy()
        clip.destroy()

        assert destroyed.count == 1
        assert transport.subscriber_count() == 0
        assert transport.deliver(addr.CLIP_INFO, 0, 0, PLAYING, 4.0) == 0
        assert clip.state == EMPTY
