class Channel(object):
    """
    An ordered list of receivers; broadcasting calls each of them in the order in which they were connected.

    A receiver may ask for an action to be run once the broadcast that it is part of is complete, i.e. after the last
    receiver has seen the data, but before `broadcast` returns.

    >>> from channel import Channel
    >>> c = Channel()
    >>> def r0(data):
    ...     print("R0 RECEIVED", data)
    ...     c.after_broadcast(lambda: print("R0 AFTERWARDS", data))
    ...
    >>> def r1(data):
    ...     print("R1 RECEIVED", data)
    ...
    >>> disconnect0 = c.connect(r0)
    >>> disconnect1 = c.connect(r1)
    >>> c.broadcast("hallo")
    R0 RECEIVED hallo
    R1 RECEIVED hallo
    R0 AFTERWARDS hallo

    Outside of a broadcast there is nothing to wait for; the action is run immediately:
    >>> c.after_broadcast(lambda: print("RIGHT AWAY"))
    RIGHT AWAY

    >>> disconnect0()
    >>> c.broadcast("hallo")
    R1 RECEIVED hallo

    Broadcasts may be nested (a receiver may cause another broadcast); each broadcast runs its own post-phase:
    >>> inner = Channel()
    >>> disconnect_inner = inner.connect(lambda data: inner.after_broadcast(lambda: print("INNER DONE", data)))
    >>> def r2(data):
    ...     c.after_broadcast(lambda: print("OUTER DONE", data))
    ...     inner.broadcast(data + 1)
    ...     print("R2 RECEIVED", data)
    ...
    >>> disconnect2 = c.connect(r2)
    >>> c.broadcast(1)
    R1 RECEIVED 1
    INNER DONE 2
    R2 RECEIVED 1
    OUTER DONE 1
    """

    def __init__(self):
        self.receivers = []

        # one list of pending actions per broadcast that is currently running (innermost last)
        self.post_phases = []

    def connect(self, receiver):
        # receiver :: function that takes data
        self.receivers.append(receiver)

        def disconnect():
            if receiver in self.receivers:
                self.receivers.remove(receiver)

        return disconnect

    def broadcast(self, data):
        post_phase = []
        self.post_phases.append(post_phase)
        try:
            # iterate over a copy: receivers may (dis)connect while we broadcast
            for r in self.receivers[:]:
                r(data)
        finally:
            self.post_phases.pop()

        for action in post_phase:
            action()

    def after_broadcast(self, action):
        # action :: argless function
        if not self.post_phases:
            action()
            return

        self.post_phases[-1].append(action)
