"""In-memory ordering and paging of a restaurant's reviews."""

from operator import attrgetter

from restaurants.restaurant.repository import Page

SORTABLE_FIELDS = ("date_posted", "rating")

# camelCase names accepted from callers that speak the store's field names
_ALIASES = {"datePosted": "date_posted"}


def sort_reviews(reviews, sort_field=None, ascending=False):
    """Stable sort by ``date_posted`` or ``rating``.

    No field means newest first. Unknown fields fall back to ``date_posted``
    in the requested direction.
    """
    if sort_field is None:
        return sorted(reviews, key=attrgetter("date_posted"), reverse=True)

    field = _ALIASES.get(sort_field, sort_field)
    if field not in SORTABLE_FIELDS:
        field = "date_posted"
    return sorted(reviews, key=attrgetter(field), reverse=not ascending)


def paginate(items, page, size):
    """Slice ``items`` at ``page * size``; past the end gives an empty page with the real total."""
    total = len(items)
    offset = page * size
    if offset >= total:
        return Page(items=[], total=total, page=page, size=size)
    return Page(items=list(items[offset : min(offset + size, total)]), total=total, page=page, size=size)
