import itertools


class FakeConnection:
    """Records outbound messages instead of writing them to a socket."""

    def __init__(self):
        self.sent = []
        self.live = True

    @property
    def is_live(self):
        return self.live

    def send(self, message):
        self.sent.append(message)

    def types(self):
        return [m["type"] for m in self.sent]

    def of_type(self, message_type):
        return [m for m in self.sent if m["type"] == message_type]


def sequence(*values):
    """Identifier generator that yields the given values in order."""
    iterator = iter(values)
    return lambda: next(iterator)


def counter(prefix):
    numbers = itertools.count(1)
    return lambda: f"{prefix}{next(numbers)}"
