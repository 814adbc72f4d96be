"""
The dsn 'pagination' models a page: a fixed-size window on a larger ordered collection of records.

The PaginationState is a value; it is never changed in place. Each change to it is expressed as a note (see clef.py),
and playing a note on a state (see construct.py) yields a new, validated state. A note that would lead to an invalid
state raises, which leaves whoever holds the previous state with a perfectly fine state.

Page numbers are either 0-based or 1-based (`first_page_index`); the choice is made once per state and never changes
afterwards. Positions of records, on the other hand, are always 0-based indices into the full collection.
"""
