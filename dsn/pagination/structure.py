"""
>>> state = initial_state({"first_page_index": 0, "page_size": 4}, total_records=15)
>>> state
PaginationState(page 0 of 0..3; 4 per page; 15 records)
>>> state.total_pages
4

Invalid states are refused; the previous state is left as it was:
>>> validate(state.set(current_page=4))  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationRangeError: `current_page` must be 0 <= current_page < total_pages (4) if 0-based; got 4
>>> validate(state.set(page_size=0))  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationRangeError: `page_size` must be >= 1; got 0
>>> validate(state.set(first_page_index=2))  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationRangeError: `first_page_index` must be 0 or 1; got 2
>>> validate(state.set(current_page="2"))  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationTypeError: `current_page` must be a finite integer; got '2'
>>> state.current_page
0

A state that lacks any of the required values is not (yet) checked at all:
>>> validate(PaginationState(page_size=0)).page_size
0
"""
from copy import copy

from utils import finite_int, PaginationRangeError

from dsn.pagination.utils import last_page_for, total_pages_for

ASCENDING = -1
UNSORTED = 0
DESCENDING = 1

DEFAULT_FIRST_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 25
DEFAULT_ORDER = DESCENDING

FIELDS = [
    "first_page_index",
    "current_page",
    "last_page",
    "page_size",
    "total_pages",
    "total_records",
    "sort_key",
    "order",
]


class PaginationState(object):

    def __init__(self, first_page_index=None, current_page=None, last_page=None, page_size=None, total_pages=None,
                 total_records=None, sort_key=None, order=None):
        self.first_page_index = first_page_index
        self.current_page = current_page
        self.last_page = last_page
        self.page_size = page_size
        self.total_pages = total_pages
        self.total_records = total_records
        self.sort_key = sort_key
        self.order = order

    def set(self, **kwargs):
        """Creates a copy of the state, with some values (as provided) changed."""
        result = copy(self)
        for key, value in kwargs.items():
            if key not in FIELDS:
                raise TypeError("Unknown pagination state field: %s" % key)
            setattr(result, key, value)
        return result

    def is_complete(self):
        return None not in (self.total_records, self.page_size, self.current_page, self.first_page_index)

    def as_dict(self):
        return {field: getattr(self, field) for field in FIELDS}

    def __eq__(self, other):
        return isinstance(other, PaginationState) and self.as_dict() == other.as_dict()

    def __repr__(self):
        return "PaginationState(page %s of %s..%s; %s per page; %s records)" % (
            self.current_page, self.first_page_index, self.last_page, self.page_size, self.total_records)


def initial_state(overrides, total_records):
    """Merges the overrides (a dict) with the defaults; the result is validated."""
    values = {
        "first_page_index": DEFAULT_FIRST_PAGE_INDEX,
        "page_size": DEFAULT_PAGE_SIZE,
        "order": DEFAULT_ORDER,
    }
    values.update(overrides or {})

    if values.get("current_page") is None:
        values["current_page"] = values["first_page_index"]

    values["total_records"] = total_records
    return validate(PaginationState().set(**values))


def validate(state):
    """
    Sanity check of the state; returns a copy of it with the derived values (`total_pages`, `last_page`) filled in.
    Only performs checks when all the required values are present.
    """
    if not state.is_complete():
        return state

    total_records = finite_int(state.total_records, "total_records")
    page_size = finite_int(state.page_size, "page_size")
    current_page = finite_int(state.current_page, "current_page")
    first_page_index = finite_int(state.first_page_index, "first_page_index")

    if page_size < 1:
        raise PaginationRangeError("`page_size` must be >= 1; got %s" % page_size)

    if first_page_index not in (0, 1):
        raise PaginationRangeError("`first_page_index` must be 0 or 1; got %s" % first_page_index)

    if total_records < 0:
        raise PaginationRangeError("`total_records` must be >= 0; got %s" % total_records)

    total_pages = total_pages_for(total_records, page_size)
    last_page = last_page_for(total_pages, first_page_index)

    # For 1-based numbering this reads `current_page <= total_pages`, for 0-based `current_page < total_pages`; an empty
    # collection has exactly one (empty) page.
    if not (first_page_index <= current_page <= last_page):
        raise PaginationRangeError("`current_page` must be %s <= current_page %s total_pages (%s) if %s-based; got %s" % (
            first_page_index, "<=" if first_page_index else "<", total_pages, first_page_index, current_page))

    return state.set(
        total_pages=total_pages,
        last_page=last_page,
    )
