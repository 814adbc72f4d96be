"""
Poor man's type system, and the two kinds of errors that pagination raises.

>>> finite_int(3, "page_size")
3
>>> finite_int(3.0, "page_size")  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationTypeError: `page_size` must be a finite integer; got 3.0
>>> finite_int(True, "page_size")  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
PaginationTypeError: `page_size` must be a finite integer; got True
"""


class PaginationTypeError(TypeError):
    """A value that should be a finite integer is not one."""
    pass


class PaginationRangeError(ValueError):
    """A finite integer lies outside its allowed bounds."""
    pass


def pmts(v, type_, extra_information=""):
    """Poor man's type system"""
    assert isinstance(v, type_), "Expected value of type '%s' but is type '%s'%s" % (
        type_.__name__,
        type(v).__name__,
        "" if not extra_information else "; %s" % extra_information
        )


def finite_int(value, name):
    # bool is a subclass of int, but a page number of `True` is always a mistake
    if not isinstance(value, int) or isinstance(value, bool):
        raise PaginationTypeError("`%s` must be a finite integer; got %r" % (name, value))
    return value
