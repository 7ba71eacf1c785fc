"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that span more than one record, such as keeping
    thread counters consistent or consuming a challenge exactly once.
    """
