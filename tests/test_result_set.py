from datetime import datetime

import pytest

from scoutboard.errors import WriteFailure
from scoutboard.services.candidate_filter import FilterToggles
from scoutboard.services.candidates import CandidateView
from scoutboard.services.result_set import ResultSet

NOW = datetime(2026, 10, 19, 12, 0, 0)


def make_set(n=25, **kw):
    views = [CandidateView(id=i, last_login=f"{i}日前") for i in range(1, n + 1)]
    return ResultSet(views, **kw)


def test_visible_pipeline_filters_sorts_and_pages():
    rs = make_set(saved={3, 5, 7}, hidden={5})
    rs.set_toggles(FilterToggles(pickup=True, hide_hidden=True))
    rs.set_sort("newest")
    page = rs.visible(NOW)
    assert [c.id for c in page.items] == [7, 3]
    assert all(c.is_pickup for c in page.items)


def test_page_is_clamped_and_reset_on_new_toggles():
    rs = make_set(page_size=10)
    rs.set_page(7)
    assert rs.visible(NOW).page == 3
    rs.set_toggles(FilterToggles(new_user=True))
    assert rs.page == 1


def test_toggle_pickup_commits_confirmed_state():
    rs = make_set()
    assert rs.toggle_pickup(4, lambda: True) is True
    assert 4 in rs.saved
    assert rs.toggle_pickup(4, lambda: False) is False
    assert 4 not in rs.saved


def test_toggle_is_optimistic_and_rolls_back():
    rs = make_set(hidden={2})
    seen = []

    def failing_write():
        seen.append(2 in rs.hidden)
        raise WriteFailure()

    with pytest.raises(WriteFailure):
        rs.toggle_hidden(2, failing_write)
    assert seen == [False]  # flipped before the write ran
    assert rs.hidden == {2}


def test_stale_load_is_discarded():
    rs = make_set(n=3)
    old = rs.begin_load()
    new = rs.begin_load()
    assert rs.apply([CandidateView(id=99)], token=new)
    assert not rs.apply([CandidateView(id=1)], token=old)
    assert [c.id for c in rs.candidates] == [99]


def test_invalid_page_size():
    with pytest.raises(ValueError):
        ResultSet(page_size=0)
