"""
>>> from dsn.pagination.structure import initial_state
>>> state = initial_state({"first_page_index": 0, "page_size": 4}, total_records=15)
>>> play_pagination_note(GoToPage(LastPage()), state)
PaginationState(page 3 of 0..3; 4 per page; 15 records)
>>> play_pagination_note(GoToPage(PreviousPage()), state)  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationRangeError: `current_page` must be 0 <= current_page < total_pages (4) if 0-based; got -1
>>> play_pagination_note(GoToOffset(9), state)
PaginationState(page 2 of 0..3; 4 per page; 15 records)

Offsets beyond the last record end up on the last page:
>>> play_pagination_note(GoToOffset(99), state)
PaginationState(page 3 of 0..3; 4 per page; 15 records)
>>> play_pagination_note(GoToOffset(-1), state)  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationRangeError: `offset` must be >= 0; got -1

Removing records may leave the current page beyond the last one; in that case we move to the last page:
>>> state = play_pagination_note(GoToPage(LastPage()), state)
>>> play_pagination_note(RecordsRemoved(), state)
PaginationState(page 3 of 0..3; 4 per page; 14 records)
>>> play_pagination_note(RecordsRemoved(count=3), state)
PaginationState(page 2 of 0..2; 4 per page; 12 records)

Changing the page size keeps roughly the same part of the collection in view, unless asked to start over:
>>> play_pagination_note(SetPageSize(8), state)
PaginationState(page 1 of 0..1; 8 per page; 15 records)
>>> play_pagination_note(SetPageSize(8, reset_to_first=True), state)
PaginationState(page 0 of 0..1; 8 per page; 15 records)
"""
from utils import finite_int, pmts, PaginationRangeError

from dsn.pagination.clef import (
    AbsolutePage,
    FirstPage,
    GoToOffset,
    GoToPage,
    LastPage,
    NextPage,
    PageTarget,
    PaginationNote,
    PreviousPage,
    RecordsInserted,
    RecordsRemoved,
    RecordsReplaced,
    RecordsReset,
    SetPageSize,
)
from dsn.pagination.structure import PaginationState, validate
from dsn.pagination.utils import last_page_for, page_after_resize, page_for_offset, total_pages_for


def resolve_page_target(target, state):
    """:: PageTarget, state => page number (not yet validated)"""
    pmts(target, PageTarget)

    if isinstance(target, AbsolutePage):
        return target.page

    if isinstance(target, FirstPage):
        return state.first_page_index

    if isinstance(target, PreviousPage):
        return state.current_page - 1

    if isinstance(target, NextPage):
        return state.current_page + 1

    if isinstance(target, LastPage):
        return state.last_page

    raise Exception("Unknown page target (programming error): %s" % target)


def clamped_to_last_page(state):
    """Validates the state after moving the current page back to the last page, if it is beyond it."""
    last_page = last_page_for(total_pages_for(state.total_records, state.page_size), state.first_page_index)
    return validate(state.set(current_page=min(state.current_page, last_page)))


def play_pagination_note(note, structure):
    """:: note, state => state"""
    pmts(note, PaginationNote)
    pmts(structure, PaginationState)

    if isinstance(note, GoToPage):
        return validate(structure.set(current_page=resolve_page_target(note.target, structure)))

    if isinstance(note, GoToOffset):
        offset = finite_int(note.offset, "offset")
        if offset < 0:
            raise PaginationRangeError("`offset` must be >= 0; got %s" % offset)

        page = page_for_offset(offset, structure.page_size, structure.first_page_index)
        return validate(structure.set(current_page=min(page, structure.last_page)))

    if isinstance(note, SetPageSize):
        page_size = finite_int(note.page_size, "page_size")
        if page_size < 1:
            raise PaginationRangeError("`page_size` must be >= 1; got %s" % page_size)

        if note.reset_to_first:
            current_page = structure.first_page_index
        else:
            current_page = page_after_resize(
                structure.current_page,
                structure.total_pages,
                total_pages_for(structure.total_records, page_size),
                structure.first_page_index)

        return validate(structure.set(page_size=page_size, current_page=current_page))

    if isinstance(note, RecordsInserted):
        return validate(structure.set(total_records=structure.total_records + note.count))

    if isinstance(note, RecordsRemoved):
        return clamped_to_last_page(structure.set(total_records=structure.total_records - note.count))

    if isinstance(note, RecordsReplaced):
        return clamped_to_last_page(structure.set(total_records=note.total_records))

    if isinstance(note, RecordsReset):
        return validate(structure.set(
            total_records=note.total_records,
            current_page=structure.first_page_index,
        ))

    raise Exception("Unknown note (programming error): %s" % note)
