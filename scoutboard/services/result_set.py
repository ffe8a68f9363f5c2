"""In-memory search result list for one session.

Holds the fetched candidates together with the group's saved and hidden
sets, and derives the visible page from the current toggles, sort key and
page number. Toggles are optimistic: the local set flips first and is
reverted if the store write raises.
"""
from dataclasses import replace

from ..errors import ActionError
from .candidate_filter import FilterToggles, filter_candidates
from .candidate_sort import SortKey, sort_candidates
from .pagination import paginate


class ResultSet:

    def __init__(self, candidates=(), saved=(), hidden=(), page_size=10):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.candidates = list(candidates)
        self.saved = set(saved)
        self.hidden = set(hidden)
        self.toggles = FilterToggles()
        self.sort_key = SortKey.FEATURED
        self.page = 1
        self.page_size = page_size
        self._generation = 0

    # -- loading -----------------------------------------------------------

    def begin_load(self) -> int:
        """Start a fetch; the returned token must be passed to ``apply``."""
        self._generation += 1
        return self._generation

    def apply(self, candidates, token=None) -> bool:
        """Replace the candidates unless a newer load has started since ``token``."""
        if token is not None and token != self._generation:
            return False
        self.candidates = list(candidates)
        self.page = 1
        return True

    # -- view state --------------------------------------------------------

    def set_toggles(self, toggles):
        self.toggles = toggles
        self.page = 1

    def set_sort(self, key):
        self.sort_key = SortKey.parse(key)

    def set_page(self, page):
        self.page = page

    def _with_membership(self, c):
        pickup, hidden = c.id in self.saved, c.id in self.hidden
        if c.is_pickup == pickup and c.is_hidden == hidden:
            return c
        return replace(c, is_pickup=pickup, is_hidden=hidden)

    def visible(self, now=None):
        rows = [self._with_membership(c) for c in self.candidates]
        rows = filter_candidates(rows, self.toggles, self.hidden)
        rows = sort_candidates(rows, self.sort_key, now)
        page = paginate(rows, self.page, self.page_size)
        self.page = page.page
        return page

    # -- optimistic toggles ------------------------------------------------

    def _toggle(self, members, candidate_id, write):
        was_member = candidate_id in members
        if was_member:
            members.discard(candidate_id)
        else:
            members.add(candidate_id)
        try:
            confirmed = write()
        except ActionError:
            if was_member:
                members.add(candidate_id)
            else:
                members.discard(candidate_id)
            raise
        if confirmed is not None:
            if confirmed:
                members.add(candidate_id)
            else:
                members.discard(candidate_id)
        return candidate_id in members

    def toggle_pickup(self, candidate_id, write):
        """Flip pickup locally, then call ``write()``; revert if it raises."""
        return self._toggle(self.saved, candidate_id, write)

    def toggle_hidden(self, candidate_id, write):
        return self._toggle(self.hidden, candidate_id, write)
