"""
Page arithmetic; all functions are pure and assume already validated inputs.

>>> total_pages_for(15, 4)
4
>>> total_pages_for(0, 4)
0

The last page depends on the first page index. For 0-based numbering there is always a page 0, even for an empty
collection; for 1-based numbering an empty collection still has page 1:
>>> last_page_for(4, 0), last_page_for(4, 1)
(3, 4)
>>> last_page_for(0, 0), last_page_for(0, 1)
(0, 1)

The absolute index of the first record on a page:
>>> page_start_for(3, 4, 0), page_start_for(3, 4, 1)
(12, 8)

The page that contains a given record:
>>> page_for_offset(13, 4, 0), page_for_offset(13, 4, 1)
(3, 4)
"""


def total_pages_for(total_records, page_size):
    # i.e. ceil(total_records / page_size), without the detour through floats
    return -(-total_records // page_size)


def last_page_for(total_pages, first_page_index):
    if first_page_index == 0:
        return max(0, total_pages - 1)
    return total_pages or first_page_index


def page_start_for(page, page_size, first_page_index):
    return (page if first_page_index == 0 else page - 1) * page_size


def page_for_offset(offset, page_size, first_page_index):
    return offset // page_size + first_page_index


def page_after_resize(current_page, total_pages, new_total_pages, first_page_index):
    """
    The page to show after a change of the page size, such that roughly the same part of the collection stays in view.

    Going from 4 pages to 2 pages, page 2 (of 0..3) becomes page 1 (of 0..1):
    >>> page_after_resize(2, 4, 2, 0)
    1

    Going from 2 pages to 4 pages, page 2 (of 1..2) becomes page 4 (of 1..4):
    >>> page_after_resize(2, 2, 4, 1)
    4

    Nothing to show, or nothing shown before: first page.
    >>> page_after_resize(3, 4, 0, 1), page_after_resize(0, 0, 3, 0)
    (1, 0)
    """
    if not new_total_pages or not total_pages:
        return first_page_index

    return max(first_page_index, (new_total_pages * current_page) // total_pages)
