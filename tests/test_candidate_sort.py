from datetime import datetime

import pytest

from scoutboard.services.candidate_sort import SortKey, sort_candidates
from scoutboard.services.candidates import CandidateView

NOW = datetime(2026, 10, 19, 12, 0, 0)


def view(id, **kw):
    return CandidateView(id=id, **kw)


def ids(rows):
    return [c.id for c in rows]


def test_last_login_sort_on_relative_labels():
    rows = [view(1, last_login="3日前"), view(2, last_login="1時間前")]
    assert ids(sort_candidates(rows, "lastLogin", NOW)) == [2, 1]


def test_last_login_unparseable_sorts_last():
    rows = [view(1, last_login="未ログイン"), view(2, last_login="2週間前"), view(3, last_login="5時間前")]
    assert ids(sort_candidates(rows, SortKey.LAST_LOGIN, NOW)) == [3, 2, 1]


def test_newest_is_id_descending():
    rows = [view(i) for i in (4, 9, 1, 7)]
    out = ids(sort_candidates(rows, "newest", NOW))
    assert out == sorted(out, reverse=True)


def test_featured_puts_attention_first_then_id_desc():
    rows = [view(1, is_attention=True), view(2), view(3, is_attention=True), view(4)]
    assert ids(sort_candidates(rows, "featured", NOW)) == [3, 1, 4, 2]


def test_updated_prefers_updated_at():
    rows = [
        view(1, updated_at=datetime(2026, 10, 1)),
        view(2, updated_at=datetime(2026, 10, 18)),
        view(3, last_login="1時間前"),
    ]
    assert ids(sort_candidates(rows, "updated", NOW)) == [3, 2, 1]


@pytest.mark.parametrize("key", ["featured", "newest", "lastLogin", "updated"])
def test_sort_is_stable_for_full_ties(key):
    a = view(5, last_login="3日前", is_attention=True, updated_at=datetime(2026, 10, 1), badge_text="a")
    b = view(5, last_login="3日前", is_attention=True, updated_at=datetime(2026, 10, 1), badge_text="b")
    assert sort_candidates([a, b], key, NOW) == [a, b]
    assert sort_candidates([b, a], key, NOW) == [b, a]


def test_updated_ties_on_labels_keep_input_order():
    a = view(5, last_login="1日前", badge_text="a")
    b = view(5, last_login="1日前", badge_text="b")
    assert sort_candidates([b, a], "updated", NOW) == [b, a]


def test_sort_returns_new_list():
    rows = [view(1), view(2)]
    out = sort_candidates(rows, "newest", NOW)
    assert out is not rows
    assert ids(rows) == [1, 2]


def test_sort_key_parse():
    assert SortKey.parse("last_login") is SortKey.LAST_LOGIN
    assert SortKey.parse("bogus", default=SortKey.FEATURED) is SortKey.FEATURED
    with pytest.raises(ValueError):
        SortKey.parse("bogus")
