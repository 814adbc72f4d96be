import unittest
import doctest

import channel
import list_operations
import ordered_collection
import paginated_collection
import utils

from dsn.pagination import construct as pagination_construct
from dsn.pagination import structure as pagination_structure
from dsn.pagination import utils as pagination_utils

from ordered_collection import OrderedCollection, Insert, Remove, ReplaceAll
from paginated_collection import PaginatedCollection
from utils import PaginationRangeError, PaginationTypeError

from dsn.pagination.clef import AbsolutePage, LastPage, NextPage
from dsn.pagination.structure import ASCENDING, DESCENDING, initial_state


def load_tests(loader, tests, ignore):
    # Test the docstrings inside our actual codebase
    tests.addTests(doctest.DocTestSuite(utils))
    tests.addTests(doctest.DocTestSuite(channel))
    tests.addTests(doctest.DocTestSuite(list_operations))
    tests.addTests(doctest.DocTestSuite(ordered_collection))
    tests.addTests(doctest.DocTestSuite(paginated_collection))
    tests.addTests(doctest.DocTestSuite(pagination_utils))
    tests.addTests(doctest.DocTestSuite(pagination_structure))
    tests.addTests(doctest.DocTestSuite(pagination_construct))

    # Some tests in the doctests style are too large to nicely fit into a docstring; better to keep them separate:
    tests.addTests(doctest.DocFileSuite("doctests/paginated_collection.txt"))

    return tests


def records(n):
    # distinct objects; lookups in the collections are by identity
    return [{"id": i} for i in range(n)]


def ids(collection):
    return [item["id"] for item in collection]


class EventLog(object):
    """Records the events of one or more collections, in the order in which they are announced."""

    def __init__(self, **collections):
        self.events = []
        for name, collection in collections.items():
            for event_class in [Insert, Remove, ReplaceAll]:
                collection.connect(event_class, self._receiver(name))

    def _receiver(self, name):
        def receive(event):
            self.events.append((name, type(event).__name__, event))
        return receive

    def kinds(self):
        return [(name, kind) for (name, kind, event) in self.events]


class PaginationStateTestCase(unittest.TestCase):

    def test_derived_values(self):
        for first_page_index in [0, 1]:
            for total_records in range(0, 30):
                for page_size in range(1, 8):
                    state = initial_state(
                        {"first_page_index": first_page_index, "page_size": page_size}, total_records)

                    total_pages = -(-total_records // page_size)
                    self.assertEqual(total_pages, state.total_pages)
                    if first_page_index == 0:
                        self.assertEqual(max(0, total_pages - 1), state.last_page)
                    else:
                        self.assertEqual(total_pages or 1, state.last_page)

    def test_defaults_are_per_instance(self):
        state_0 = initial_state({"page_size": 5}, 10)
        state_1 = initial_state(None, 100)

        self.assertEqual(5, state_0.page_size)
        self.assertEqual(25, state_1.page_size)
        self.assertEqual(1, state_1.first_page_index)
        self.assertEqual(1, state_1.current_page)
        self.assertEqual(DESCENDING, state_1.order)

    def test_invalid_initial_state(self):
        self.assertRaises(PaginationRangeError, initial_state, {"page_size": 0}, 10)
        self.assertRaises(PaginationRangeError, initial_state, {"first_page_index": 2}, 10)
        self.assertRaises(PaginationRangeError, initial_state, {"current_page": 0}, 10)
        self.assertRaises(PaginationTypeError, initial_state, {"page_size": 2.5}, 10)
        self.assertRaises(PaginationTypeError, initial_state, {"current_page": "1"}, 10)


class NavigationTestCase(unittest.TestCase):

    def setUp(self):
        self.full = OrderedCollection(records(15))
        self.page = PaginatedCollection(self.full, state={"first_page_index": 0, "page_size": 4})

    def test_last_page_is_partial(self):
        self.assertEqual(4, self.page.state.total_pages)
        self.assertEqual(3, self.page.state.last_page)

        self.page.go_to_page(3)
        self.assertEqual([12, 13, 14], ids(self.page))

        self.assertRaises(PaginationRangeError, self.page.go_to_page, 4)
        self.assertEqual(3, self.page.state.current_page)
        self.assertEqual([12, 13, 14], ids(self.page))

    def test_symbolic_targets(self):
        self.assertRaises(PaginationRangeError, self.page.go_to_page, "prev")
        self.assertFalse(self.page.has_previous_page())

        self.page.go_to_page("next")
        self.assertEqual([4, 5, 6, 7], ids(self.page))

        self.page.go_to_page(LastPage())
        self.assertEqual(3, self.page.state.current_page)
        self.assertFalse(self.page.has_next_page())
        self.assertRaises(PaginationRangeError, self.page.go_to_page, NextPage())

        self.page.go_to_page("first")
        self.assertEqual(0, self.page.state.current_page)

        self.page.go_to_page(AbsolutePage(2))
        self.assertEqual([8, 9, 10, 11], ids(self.page))

    def test_invalid_targets(self):
        self.assertRaises(PaginationTypeError, self.page.go_to_page, 1.0)
        self.assertRaises(PaginationTypeError, self.page.go_to_page, None)
        self.assertRaises(ValueError, self.page.go_to_page, "somewhere")
        self.assertEqual(0, self.page.state.current_page)

    def test_round_trip(self):
        self.page.go_to_page(1)
        before = self.page.items()

        self.page.go_to_page(3)
        self.page.go_to_page(1)

        self.assertEqual(len(before), len(self.page))
        for item_0, item_1 in zip(before, self.page):
            self.assertIs(item_0, item_1)

    def test_navigation_is_announced_as_such(self):
        log = EventLog(page=self.page)
        self.page.go_to_page(2)

        [(name, kind, event)] = log.events
        self.assertEqual("ReplaceAll", kind)
        self.assertEqual(0, event.from_page)
        self.assertEqual(2, event.to_page)

        # no write-back took place
        self.assertEqual(list(range(15)), ids(self.full))

    def test_go_to_offset(self):
        self.page.go_to_offset(5)
        self.assertEqual(1, self.page.state.current_page)

        self.page.go_to_offset(1000)
        self.assertEqual(3, self.page.state.current_page)

        self.assertRaises(PaginationRangeError, self.page.go_to_offset, -1)
        self.assertRaises(PaginationTypeError, self.page.go_to_offset, "5")
        self.assertEqual(3, self.page.state.current_page)

    def test_go_to_offset_one_based(self):
        page = PaginatedCollection(OrderedCollection(records(15)), state={"page_size": 4})
        page.go_to_offset(4)
        self.assertEqual(2, page.state.current_page)
        self.assertEqual([4, 5, 6, 7], ids(page))

    def test_set_page_size(self):
        self.page.go_to_page(2)  # records 8..11

        self.page.set_page_size(8)
        self.assertEqual(1, self.page.state.current_page)
        self.assertEqual(2, self.page.state.total_pages)
        self.assertEqual(list(range(8, 15)), ids(self.page))

        self.page.set_page_size(3, reset_to_first=True)
        self.assertEqual(0, self.page.state.current_page)
        self.assertEqual([0, 1, 2], ids(self.page))

    def test_set_page_size_is_idempotent(self):
        self.page.go_to_page(2)
        self.page.set_page_size(5)
        state, items = self.page.state, self.page.items()

        self.page.set_page_size(5)
        self.assertEqual(state, self.page.state)
        self.assertEqual(items, self.page.items())

    def test_invalid_page_size(self):
        self.page.go_to_page(1)

        self.assertRaises(PaginationRangeError, self.page.set_page_size, 0)
        self.assertRaises(PaginationTypeError, self.page.set_page_size, "4")
        self.assertEqual(4, self.page.state.page_size)
        self.assertEqual(1, self.page.state.current_page)
        self.assertEqual([4, 5, 6, 7], ids(self.page))

    def test_empty_full_collection(self):
        page = PaginatedCollection(OrderedCollection(), state={"page_size": 4})
        self.assertEqual(0, len(page))
        self.assertEqual(1, page.state.current_page)
        self.assertEqual(1, page.state.last_page)
        self.assertFalse(page.has_next_page())
        self.assertRaises(PaginationRangeError, page.go_to_page, "next")


class SynchronizationTestCase(unittest.TestCase):

    def setUp(self):
        self.full = OrderedCollection(records(15))
        self.page = PaginatedCollection(self.full, state={"first_page_index": 0, "page_size": 4})

    def assertConsistent(self):
        page_start = self.page.page_start
        self.assertLessEqual(len(self.page), self.page.state.page_size)
        self.assertEqual(len(self.full), self.page.state.total_records)
        self.assertEqual(ids(self.full)[page_start:page_start + self.page.state.page_size], ids(self.page))

    def test_insert_into_full_collection_inside_page(self):
        new = {"id": "new"}
        log = EventLog(page=self.page, full=self.full)

        self.full.insert(new, at=2)

        self.assertEqual([0, 1, "new", 2], ids(self.page))
        self.assertEqual(16, self.page.state.total_records)
        self.assertEqual([("page", "Insert"), ("full", "Insert"), ("page", "Remove")], log.kinds())

        eviction = log.events[-1][2]
        self.assertTrue(eviction.derived_from_add)
        self.assertEqual(3, eviction.item["id"])
        self.assertConsistent()

    def test_insert_into_full_collection_after_page(self):
        self.full.insert({"id": "new"}, at=10)
        self.assertEqual([0, 1, 2, 3], ids(self.page))
        self.assertEqual(16, self.page.state.total_records)
        self.assertConsistent()

    def test_insert_into_full_collection_before_page(self):
        self.page.go_to_page(1)
        self.full.insert({"id": "new"}, at=0)
        self.assertEqual([3, 4, 5, 6], ids(self.page))
        self.assertConsistent()

    def test_insert_on_partial_last_page(self):
        self.page.go_to_last_page()
        self.full.append({"id": "new"})
        self.assertEqual([12, 13, 14, "new"], ids(self.page))
        self.assertConsistent()

        # The page is full now; the next record starts a new page
        self.full.append({"id": "newer"})
        self.assertEqual([12, 13, 14, "new"], ids(self.page))
        self.assertEqual(4, self.page.state.last_page)
        self.assertConsistent()

    def test_insert_into_page(self):
        self.page.go_to_page(1)
        self.page.insert({"id": "new"}, at=1)

        self.assertEqual([4, "new", 5, 6], ids(self.page))
        self.assertEqual([0, 1, 2, 3, 4, "new", 5, 6, 7], ids(self.full)[:9])
        self.assertEqual(16, self.page.state.total_records)
        self.assertConsistent()

    def test_insert_existing_record_into_page_moves_it(self):
        self.page.insert(self.full[10], at=0)

        self.assertEqual([10, 0, 1, 2], ids(self.page))
        self.assertEqual([10, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 11], ids(self.full)[:12])
        self.assertEqual(15, self.page.state.total_records)
        self.assertConsistent()

    def test_insert_record_from_before_the_page_into_page(self):
        self.page.go_to_page(1)
        self.page.insert(self.full[0], at=1)

        self.assertEqual([1, 2, 3, 4, 5, 0, 6, 7], ids(self.full)[:8])
        self.assertEqual([5, 0, 6, 7], ids(self.page))
        self.assertEqual(15, self.page.state.total_records)
        self.assertConsistent()

    def test_derived_insert_into_full_collection_is_not_counted(self):
        shown = {"id": "shown"}
        self.full.insert(shown, at=2, derived_from_remove=True)

        self.assertEqual(15, self.page.state.total_records)
        self.assertEqual([0, 1, "shown", 2], ids(self.page))
        self.assertIs(shown, self.page[2])

    def test_append_to_page(self):
        self.page.append({"id": "new"})

        # the new record lands right after the page, and is pushed out of view again
        self.assertEqual([0, 1, 2, 3], ids(self.page))
        self.assertEqual("new", ids(self.full)[4])
        self.assertConsistent()

    def test_remove_from_page_refills(self):
        removed = self.page[1]
        log = EventLog(page=self.page)

        self.page.remove(removed)

        self.assertEqual([0, 2, 3, 4], ids(self.page))
        self.assertEqual(-1, self.full.index_of(removed))
        self.assertEqual(14, self.page.state.total_records)
        self.assertEqual([("page", "Remove"), ("page", "Insert")], log.kinds())
        self.assertTrue(log.events[-1][2].derived_from_remove)
        self.assertConsistent()

    def test_remove_from_full_collection_inside_page(self):
        self.page.go_to_page(1)
        self.full.remove(self.full[5])

        self.assertEqual([4, 6, 7, 8], ids(self.page))
        self.assertEqual(14, self.page.state.total_records)
        self.assertConsistent()

    def test_remove_from_full_collection_before_page(self):
        self.page.go_to_page(1)
        self.full.remove(self.full[0])

        self.assertEqual([5, 6, 7, 8], ids(self.page))
        self.assertConsistent()

    def test_remove_from_full_collection_after_page(self):
        self.full.remove(self.full[10])
        self.assertEqual([0, 1, 2, 3], ids(self.page))
        self.assertEqual(14, self.page.state.total_records)

    def test_emptying_the_last_page_steps_back(self):
        self.page.go_to_last_page()
        for item in self.page.items():
            self.page.remove(item)

        self.assertEqual(2, self.page.state.current_page)
        self.assertEqual([8, 9, 10, 11], ids(self.page))
        self.assertEqual(12, self.page.state.total_records)
        self.assertConsistent()

    def test_removing_everything(self):
        for item in self.full.items():
            self.full.remove(item)

        self.assertEqual(0, len(self.page))
        self.assertEqual(0, self.page.state.total_records)
        self.assertEqual(0, self.page.state.current_page)

    def test_page_never_overflows(self):
        for i in range(10):
            self.page.insert({"id": "new %s" % i}, at=i % 3)
            self.full.insert({"id": "other %s" % i}, at=(i * 7) % len(self.full))
            self.assertConsistent()

    def test_reset_of_full_collection(self):
        self.page.go_to_page(2)
        self.full.replace_all(records(6))

        self.assertEqual(0, self.page.state.current_page)
        self.assertEqual(6, self.page.state.total_records)
        self.assertEqual(1, self.page.state.last_page)
        self.assertEqual([0, 1, 2, 3], ids(self.page))

    def test_reset_of_page_writes_back(self):
        self.page.go_to_page(1)
        self.page.replace_all([{"id": "a"}, {"id": "b"}])

        self.assertEqual([0, 1, 2, 3, "a", "b", 8, 9], ids(self.full)[:8])
        self.assertEqual(13, self.page.state.total_records)
        self.assertEqual(["a", "b", 8, 9], ids(self.page))
        self.assertConsistent()

    def test_reset_of_page_counts_records_before_writing_back(self):
        seen = []
        self.full.connect(ReplaceAll, lambda event: seen.append((len(self.full), self.page.state.total_records)))

        self.page.replace_all([{"id": "a"}])

        self.assertEqual([(12, 12)], seen)
        self.assertConsistent()

    def test_reset_of_page_with_too_many_items(self):
        self.page.replace_all(records(6))

        self.assertEqual(17, self.page.state.total_records)
        self.assertEqual(4, len(self.page))
        self.assertConsistent()

    def test_reorder_of_full_collection(self):
        self.page.go_to_page(1)
        self.full.set_comparator(lambda item: -item["id"])

        self.assertEqual([10, 9, 8, 7], ids(self.page))
        self.assertEqual(1, self.page.state.current_page)

    def test_unbind_events(self):
        self.page.unbind_events()
        self.full.insert({"id": "new"}, at=0)

        self.assertEqual([0, 1, 2, 3], ids(self.page))
        self.assertEqual(15, self.page.state.total_records)


class SortingTestCase(unittest.TestCase):

    def test_sort_key_and_order(self):
        full = OrderedCollection(records(10))
        page = PaginatedCollection(full, state={"page_size": 3, "sort_key": "id", "order": DESCENDING})
        self.assertEqual([9, 8, 7], ids(page))

        full.insert({"id": 20})
        self.assertEqual([20, 9, 8], ids(page))
        self.assertEqual(11, page.state.total_records)

    def test_sort_key_ascending(self):
        full = OrderedCollection(reversed(records(10)))
        page = PaginatedCollection(full, state={"page_size": 3, "sort_key": "id", "order": ASCENDING})
        self.assertEqual([0, 1, 2], ids(page))

    def test_comparator_on_page_only(self):
        full = OrderedCollection(records(10))
        page = PaginatedCollection(full, state={"page_size": 3}, comparator=lambda item: -item["id"], full=False)

        self.assertEqual([2, 1, 0], ids(page))
        self.assertEqual(list(range(10)), ids(full))

    def test_initial_state_is_kept(self):
        page = PaginatedCollection(OrderedCollection(records(10)), state={"page_size": 3, "current_page": 2})
        page.go_to_page(4)
        self.assertEqual(2, page.initial_state.current_page)


if __name__ == '__main__':
    unittest.main()
