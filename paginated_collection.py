"""
A PaginatedCollection is a page: an OrderedCollection that holds a contiguous slice of some other ("full") collection.

Both collections may be edited; each edit is carried over to the other collection. Inserting into the page inserts into
the full collection at the corresponding position, removing from the full collection removes from the page (if the item
was shown there), etc. After each edit the page holds no more than `page_size` items; when it would hold more, the last
item is pushed out of view (an eviction); when an item disappears from the page while there are more records, the next
record is pulled into view (a refill).

Evictions and refills are themselves edits of the page, and are announced as such. They are announced only after all
receivers of the edit that caused them have seen that edit: anyone that observes both collections sees a consistent
view at each point in time. The evictions and refills are marked as being derived (`derived_from_add`,
`derived_from_remove`), i.e. they move records in and out of view rather than adding or removing records.

>>> from ordered_collection import OrderedCollection
>>> full = OrderedCollection(range(10))
>>> page = PaginatedCollection(full, state={"first_page_index": 0, "page_size": 4})
>>> page.items()
[0, 1, 2, 3]
>>> page.go_to_next_page()
>>> page.items(), page.state
([4, 5, 6, 7], PaginationState(page 1 of 0..2; 4 per page; 10 records))

>>> full.insert("new", at=5)
>>> page.items(), page.state.total_records
([4, 'new', 5, 6], 11)
>>> page.remove(5)
>>> page.items(), full.items()
([4, 'new', 6, 7], [0, 1, 2, 3, 4, 'new', 6, 7, 8, 9])
"""
import logging
from collections.abc import Mapping

from list_operations import l_page, l_splice
from ordered_collection import OrderedCollection, EVENT_CLASSES, Insert, Remove, ReplaceAll, Reorder
from utils import pmts

from dsn.pagination.clef import (
    GoToOffset,
    GoToPage,
    PageTarget,
    RecordsInserted,
    RecordsRemoved,
    RecordsReplaced,
    RecordsReset,
    SetPageSize,
)
from dsn.pagination.construct import play_pagination_note
from dsn.pagination.structure import DESCENDING, UNSORTED, initial_state
from dsn.pagination.utils import page_start_for

logger = logging.getLogger(__name__)


def key_for_sort_key(sort_key):
    """A comparator (key function) that reads `sort_key` from items that are either mappings or plain objects."""

    def key(item):
        if isinstance(item, Mapping):
            return item[sort_key]
        return getattr(item, sort_key)

    return key


def same_items(items_0, items_1):
    return len(items_0) == len(items_1) and all(i0 is i1 for i0, i1 in zip(items_0, items_1))


class PaginatedCollection(OrderedCollection):

    def __init__(self, full_collection, state=None, comparator=None, full=True):
        """
        `state` :: dict of PaginationState values overriding the defaults.

        `comparator` :: key function, attached to the full collection (the default), or to the page if `full` is
        False. If no comparator is given but `state` has a `sort_key`, a comparator is made for that key, in the
        direction of the state's `order`.
        """
        pmts(full_collection, OrderedCollection)
        self.full_collection = full_collection
        self.state = initial_state(state, total_records=len(full_collection))

        reverse = False
        if comparator is None and self.state.sort_key is not None and self.state.order != UNSORTED:
            comparator = key_for_sort_key(self.state.sort_key)
            reverse = self.state.order == DESCENDING

        if comparator is not None and full:
            full_collection.set_comparator(comparator, reverse=reverse)
            OrderedCollection.__init__(self)
        else:
            OrderedCollection.__init__(self, key=comparator, reverse=reverse)

        self._syncing = False
        self._unbinders = []
        self.bind_events()

        self.go_to_page(self.state.current_page)
        self.initial_state = self.state

    @property
    def page_start(self):
        """The index in the full collection of the first item of the page"""
        return page_start_for(self.state.current_page, self.state.page_size, self.state.first_page_index)

    @property
    def page_end(self):
        return self.page_start + self.state.page_size

    # Synchronization

    def bind_events(self):
        for event_class in EVENT_CLASSES:
            for collection in [self, self.full_collection]:
                self._unbinders.append(collection.connect(event_class, self._handle))

    def unbind_events(self):
        """Stops synchronizing; the page is left with whatever items it holds."""
        for unbind in self._unbinders:
            unbind()
        self._unbinders = []

    def _handle(self, event):
        if self._syncing:
            # The event is the result of our own handling of another event; it needs no handling in itself.
            return

        self._syncing = True
        try:
            logger.debug("Synchronizing %s on %s", event, "page" if event.collection is self else "full collection")

            if isinstance(event, Insert):
                self._on_insert(event)
            elif isinstance(event, Remove):
                self._on_remove(event)
            elif isinstance(event, ReplaceAll):
                self._on_replace_all(event)
            elif isinstance(event, Reorder):
                self._on_reorder(event)
            else:
                raise Exception("Unknown event (programming error): %s" % event)

        finally:
            self._syncing = False

    def _on_insert(self, event):
        full = self.full_collection
        page_start, page_end = self.page_start, self.page_end

        if event.collection is full:
            if not event.derived_from_remove:
                self.state = play_pagination_note(RecordsInserted(), self.state)

            if page_start <= event.at < page_end:
                self.insert(event.item, at=event.at - page_start)

            elif event.at < page_start:
                # Everything after the insertion shifts by one; the record that was just before the page now opens it.
                self.insert(full.at(page_start), at=0)

        elif event.item not in full:
            if not event.derived_from_remove:
                self.state = play_pagination_note(RecordsInserted(), self.state)

            full.insert(event.item, at=page_start + event.at)

        elif not event.derived_from_remove:
            # An existing record was put on the page: the record moves to the corresponding position.
            logger.debug("Moving %r to record %s", event.item, page_start + event.at)
            full.remove(event.item)
            full.insert(event.item, at=min(page_start + event.at, len(full)))

        # else: a refill; the record is simply shown, there is nothing to carry over.

        if len(self) > self.state.page_size:
            evictee = self[-1]

            def evict():
                logger.debug("Evicting %r from the page", evictee)
                self.remove(evictee, derived_from_add=True)

            event.collection.after_broadcast(Insert, evict)

        if event.collection is self and not event.derived_from_remove:
            # A record that moved from before the page has shifted the page's records in the full collection.
            self._reslice_if_stale(event, self.state.current_page)

    def _on_remove(self, event):
        if event.derived_from_add:
            # An eviction; the record still exists, it's just no longer in view.
            return

        full = self.full_collection
        page_start, page_end = self.page_start, self.page_end

        self.state = play_pagination_note(RecordsRemoved(), self.state)

        if event.collection is self:
            # The removed item is still in the full collection; the record just after the page is about to take its
            # place there.
            self._refill(event, full.at(page_end), page_start)
            full.remove(event.item)
            return

        if page_start <= event.index < page_end:
            self.remove(event.item)

        elif event.index < page_start and len(self) > 0:
            # Everything after the removal shifts by one; the record that opened the page now precedes it.
            self.remove(self[0])

        else:
            return

        self._refill(event, full.at(page_end - 1), page_start)

    def _refill(self, event, next_item, page_start):
        size = self.state.page_size

        def refill():
            if next_item is not None:
                logger.debug("Pulling %r into the page", next_item)
                self.insert(next_item, derived_from_remove=True)

            elif len(self) == 0 and self.state.total_records:
                # The page has been emptied completely: show the page size worth of records that precede the page.
                # N.B. this is not necessarily the same as re-slicing at the (clamped) current page.
                logger.debug("Page emptied; stepping back from record %s", page_start)
                self.replace_all(
                    l_page(self.full_collection.items(), page_start - size, size),
                    from_page=self.state.current_page,
                    to_page=self.state.current_page)

        event.collection.after_broadcast(Remove, refill)

    def _on_replace_all(self, event):
        full = self.full_collection
        previous_page = self.state.current_page

        if event.collection is self:
            if event.is_navigation():
                return

            # The contents of the page have been replaced by an edit; those contents replace the page's part of the
            # full collection.
            page_start = self.page_start
            records = l_splice(full.items(), page_start, page_start + len(event.previous_items), event.items)
            self.state = play_pagination_note(RecordsReplaced(len(records)), self.state)
            full.replace_all(records)

            # The page may now hold too many items (or, if the full collection sorts, other items)
            self._reslice_if_stale(event, previous_page)
            return

        self.state = play_pagination_note(RecordsReset(len(full)), self.state)
        self._reslice(previous_page)

    def _on_reorder(self, event):
        if event.collection is self.full_collection:
            self._reslice(self.state.current_page)

        # else: a page that sorts itself does so within the page; the full collection is unaffected.

    def _slice(self):
        return l_page(self.full_collection.items(), self.page_start, self.state.page_size)

    def _reslice(self, from_page):
        self.replace_all(self._slice(), from_page=from_page, to_page=self.state.current_page)

    def _reslice_if_stale(self, event, from_page):
        def reslice():
            if not same_items(self.items(), self._slice()):
                self._reslice(from_page)

        self.after_broadcast(type(event), reslice)

    # Navigation

    def go_to_page(self, page):
        """`page` :: page number, PageTarget, or one of "first", "prev", "next", "last"."""
        previous_page = self.state.current_page
        self.state = play_pagination_note(GoToPage(PageTarget.from_value(page)), self.state)

        logger.debug("Going from page %s to page %s", previous_page, self.state.current_page)
        self._reslice(previous_page)

    def go_to_first_page(self):
        self.go_to_page("first")

    def go_to_previous_page(self):
        self.go_to_page("prev")

    def go_to_next_page(self):
        self.go_to_page("next")

    def go_to_last_page(self):
        self.go_to_page("last")

    def go_to_offset(self, offset):
        """Goes to the page that holds the record at index `offset` of the full collection (or the last page)."""
        self.go_to_page(play_pagination_note(GoToOffset(offset), self.state).current_page)

    def has_previous_page(self):
        return self.state.current_page > self.state.first_page_index

    def has_next_page(self):
        return self.state.current_page < self.state.last_page

    def set_page_size(self, page_size, reset_to_first=False):
        """
        Changes the page size; the new current page is the one that shows roughly the same part of the collection as
        the present one, or the first page if `reset_to_first` is True.
        """
        previous_page = self.state.current_page
        self.state = play_pagination_note(SetPageSize(page_size, reset_to_first), self.state)

        logger.debug("Page size set to %s", self.state.page_size)
        self._reslice(previous_page)
