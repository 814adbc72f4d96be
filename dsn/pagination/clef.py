from utils import finite_int, pmts


class PageTarget(object):
    """Where to go to; either an absolute page number or a page relative to the present state."""

    @staticmethod
    def from_value(value):
        """Accepts a PageTarget, a page number, or one of the names "first", "prev", "next", "last"."""
        if isinstance(value, PageTarget):
            return value

        if isinstance(value, str):
            d = {
                "first": FirstPage,
                "prev": PreviousPage,
                "next": NextPage,
                "last": LastPage,
            }
            if value not in d:
                raise ValueError("Unknown page: %s" % value)
            return d[value]()

        return AbsolutePage(value)


class AbsolutePage(PageTarget):
    def __init__(self, page):
        self.page = finite_int(page, "index")

    def __repr__(self):
        return "AbsolutePage(%s)" % self.page


class FirstPage(PageTarget):
    def __repr__(self):
        return "FirstPage()"


class PreviousPage(PageTarget):
    def __repr__(self):
        return "PreviousPage()"


class NextPage(PageTarget):
    def __repr__(self):
        return "NextPage()"


class LastPage(PageTarget):
    def __repr__(self):
        return "LastPage()"


class PaginationNote(object):
    pass


class GoToPage(PaginationNote):
    def __init__(self, target):
        pmts(target, PageTarget)
        self.target = target


class GoToOffset(PaginationNote):
    def __init__(self, offset):
        """offset :: the absolute index of a record; the page that contains it is the one to go to"""
        self.offset = offset


class SetPageSize(PaginationNote):
    def __init__(self, page_size, reset_to_first=False):
        self.page_size = page_size
        self.reset_to_first = reset_to_first


# The below notes express changes to the full collection, as observed by the window on it.

class RecordsInserted(PaginationNote):
    def __init__(self, count=1):
        self.count = count


class RecordsRemoved(PaginationNote):
    def __init__(self, count=1):
        self.count = count


class RecordsReset(PaginationNote):
    """The full collection has been replaced wholesale; we start over at the first page."""

    def __init__(self, total_records):
        self.total_records = total_records


class RecordsReplaced(PaginationNote):
    """The number of records has changed by an edit of the contents of the present page; we stay where we are if we
    can."""

    def __init__(self, total_records):
        self.total_records = total_records
