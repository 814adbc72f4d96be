"""
An ordered, mutable container of items that announces each structural change over a Channel.

There are four kinds of structural change, each with its own event class: `Insert`, `Remove`, `ReplaceAll` and
`Reorder`. Receivers are connected per event class:

>>> from ordered_collection import OrderedCollection, Insert, Remove, ReplaceAll, Reorder
>>> c = OrderedCollection(["a", "b", "c"])
>>> disconnect = c.connect(Insert, print)
>>> c.insert("X", at=1)
(insert 'X' at 1)
>>> c.items()
['a', 'X', 'b', 'c']
>>> c.append("d")
(insert 'd' at 4)
>>> disconnect()
>>> c.append("e")
>>> len(c), c.at(5), c.at(6)
(6, 'e', None)

Lookup is by identity, not equality:
>>> item = ["same"]
>>> c = OrderedCollection([["same"], item])
>>> c.index_of(item), c.index_of(["same"])
(1, -1)

Removal, replacement and reordering:
>>> c = OrderedCollection(["b", "c", "a"])
>>> for event_class in [Remove, ReplaceAll, Reorder]:
...     _ = c.connect(event_class, print)
...
>>> c.remove(c[1])
(remove 'c' at 1)
>>> c.remove("not there")
>>> c.replace_all(["x", "z", "y"])
(replace-all ['b', 'a'] -> ['x', 'z', 'y'])
>>> c.set_comparator(lambda item: item)
(reorder)
>>> c.items()
['x', 'y', 'z']

With a comparator in place, items that are inserted without an explicit position end up at their sorted position:
>>> _ = c.connect(Insert, print)
>>> c.append("xx")
(insert 'xx' at 1)
"""
from bisect import bisect_left, bisect_right

from channel import Channel
from list_operations import l_insert, l_delete
from utils import pmts


class CollectionEvent(object):
    pass


class Insert(CollectionEvent):
    def __init__(self, item, collection, at, derived_from_remove=False):
        """`at` is the index at which `item` now lives in `collection`.

        `derived_from_remove` marks an insert that moves an already-counted item into view (a refill after a removal),
        as opposed to a new record."""
        self.item = item
        self.collection = collection
        self.at = at
        self.derived_from_remove = derived_from_remove

    def __repr__(self):
        return "(insert %r at %s)" % (self.item, self.at)


class Remove(CollectionEvent):
    def __init__(self, item, collection, index, derived_from_add=False):
        """`index` is the index at which `item` lived in `collection` before it was removed.

        `derived_from_add` marks a removal that pushes an item out of view (an eviction after an insert), as opposed to
        the removal of a record."""
        self.item = item
        self.collection = collection
        self.index = index
        self.derived_from_add = derived_from_add

    def __repr__(self):
        return "(remove %r at %s)" % (self.item, self.index)


class ReplaceAll(CollectionEvent):
    def __init__(self, items, collection, previous_items, from_page=None, to_page=None):
        """`from_page` and `to_page` are set iff the replacement is the result of navigating from one page to another;
        a replacement without them is an edit of the contents."""
        self.items = items
        self.collection = collection
        self.previous_items = previous_items
        self.from_page = from_page
        self.to_page = to_page

    def is_navigation(self):
        return self.from_page is not None or self.to_page is not None

    def __repr__(self):
        return "(replace-all %r -> %r)" % (self.previous_items, self.items)


class Reorder(CollectionEvent):
    def __init__(self, collection):
        self.collection = collection

    def __repr__(self):
        return "(reorder)"


EVENT_CLASSES = [Insert, Remove, ReplaceAll, Reorder]


class OrderedCollection(object):

    def __init__(self, items=(), key=None, reverse=False):
        self.channels = {event_class: Channel() for event_class in EVENT_CLASSES}
        self.key = key
        self.reverse = reverse
        self._items = list(items)
        if key is not None:
            self._items = sorted(self._items, key=key, reverse=reverse)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._items)

    # Reading

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __contains__(self, item):
        return self.index_of(item) != -1

    def at(self, index):
        """The item at `index`, or None if there is no such item."""
        if not (0 <= index < len(self._items)):
            return None
        return self._items[index]

    def index_of(self, item):
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return index
        return -1

    def items(self):
        """A snapshot (new list) of the present items"""
        return self._items[:]

    # Notification

    def connect(self, event_class, receiver):
        # receiver :: function that takes an event of the given class; returns a function to disconnect it again
        return self.channels[event_class].connect(receiver)

    def after_broadcast(self, event_class, action):
        self.channels[event_class].after_broadcast(action)

    def _broadcast(self, event):
        self.channels[type(event)].broadcast(event)

    # Mutating

    def _sorted_index(self, item):
        keys = [self.key(i) for i in self._items]
        if not self.reverse:
            return bisect_right(keys, self.key(item))

        # bisect works on ascending sequences only; we search the reversed keys and mirror the position
        keys.reverse()
        return len(keys) - bisect_left(keys, self.key(item))

    def insert(self, item, at=None, derived_from_remove=False):
        if at is None:
            at = len(self._items) if self.key is None else self._sorted_index(item)

        if not (0 <= at <= len(self._items)):  # insert _at_ len(..) is ok (a.k.a. append)
            raise IndexError("Out of bounds: %s" % at)

        self._items = l_insert(self._items, at, item)
        self._broadcast(Insert(item, self, at, derived_from_remove=derived_from_remove))

    def append(self, item):
        self.insert(item)

    def remove(self, item, derived_from_add=False):
        """Removes `item`; removing an item that is not present is a no-op."""
        index = self.index_of(item)
        if index == -1:
            return

        self._items = l_delete(self._items, index)
        self._broadcast(Remove(item, self, index, derived_from_add=derived_from_add))

    def replace_all(self, items, from_page=None, to_page=None):
        previous_items = self._items
        self._items = list(items)
        if self.key is not None:
            self._items = sorted(self._items, key=self.key, reverse=self.reverse)

        self._broadcast(ReplaceAll(self._items[:], self, previous_items, from_page=from_page, to_page=to_page))

    def sort(self):
        if self.key is None:
            raise Exception("Cannot sort a collection without a comparator")

        self._items = sorted(self._items, key=self.key, reverse=self.reverse)
        self._broadcast(Reorder(self))

    def set_comparator(self, key, reverse=False):
        pmts(reverse, bool)
        self.key = key
        self.reverse = reverse
        self.sort()
