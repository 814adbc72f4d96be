"""
Contains the operations that construct new lists based on existing ones (and an operation).

The ordered collections never mutate their list of items in place; each mutation puts a fresh list in place. This means
that a snapshot handed out earlier (e.g. the `previous_items` of a reset) stays valid, whatever happens afterwards.

>>> l = ['a', 'b', 'c', 'd', 'e']
>>> l_insert(l, 1, 'X')
['a', 'X', 'b', 'c', 'd', 'e']
>>> l_delete(l, 0)
['b', 'c', 'd', 'e']
>>> l_splice(l, 1, 3, ['X', 'Y', 'Z'])
['a', 'X', 'Y', 'Z', 'd', 'e']
>>> l_page(l, 4, 2)
['e']
>>> l_page(l, -2, 2)
[]
>>> l
['a', 'b', 'c', 'd', 'e']
"""


def l_insert(l, index, new_element):
    result = l[:]
    result.insert(index, new_element)
    return result


def l_delete(l, index):
    result = l[:]
    del result[index]
    return result


def l_splice(l, start, stop, new_elements):
    """Replaces l[start:stop] with new_elements"""
    return l[:start] + list(new_elements) + l[stop:]


def l_page(l, start, size):
    """The (possibly shorter than `size`) slice of `size` elements starting at `start`; nothing before the start."""
    if start < 0:
        # A negative start would count from the end of the list, which is never what a page means.
        start, size = 0, size + start
    if size <= 0:
        return []
    return l[start:start + size]
