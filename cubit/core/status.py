from enum import Enum, auto


class StreamStatus(Enum):
    """Lifecycle of a stream or cubit.

    A stream starts OPEN and moves to CLOSED exactly once.
    """

    OPEN = auto()  # Accepting emissions and delivering them
    CLOSED = auto()  # Terminal, emissions are rejected
