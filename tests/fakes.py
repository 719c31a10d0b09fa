"""
In-memory transport for tests

Records every outbound message as (address, values, type tags), delivers
inbound messages synchronously through the real decode/fan-out path and
holds scheduled callbacks until the test runs them.
"""

from liveosc.transport import Transport


class ScheduledCall:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeTransport(Transport):

    def __init__(self, verbose=False):
        super().__init__(verbose=verbose)
        self.sent = []
        self.scheduled = []

    def send(self, address, *args):
        self.sent.append((address, tuple(arg.value for arg in args), "".join(arg.type_tag for arg in args)))

    def call_later(self, delay, callback):
        call = ScheduledCall(delay, callback)
        self.scheduled.append(call)
        return call

    # Test helpers

    def pending(self):
        return [call for call in self.scheduled if not call.cancelled]

    def run_scheduled(self):
        """Fire every pending callback; returns how many ran"""
        calls = self.pending()
        self.scheduled = []
        for call in calls:
            call.callback()
        return len(calls)

    def sent_to(self, address):
        return [values for sent_address, values, _ in self.sent if sent_address == address]

    def tags_for(self, address):
        return [tags for sent_address, _, tags in self.sent if sent_address == address]

    def addresses(self):
        return [address for address, _, _ in self.sent]

    def reset(self):
        self.sent.clear()


class Recorder:
    """Callable that remembers every call's arguments"""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def payloads(self):
        return [call[0] for call in self.calls if call]

    @property
    def count(self):
        return len(self.calls)
