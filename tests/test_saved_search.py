import pytest

from scoutboard.errors import NotFound, ValidationError
from scoutboard.services import saved_search
from scoutboard.services.criteria import SearchCriteria


@pytest.fixture
def group(make_group):
    return make_group()


@pytest.fixture
def user(make_user, group):
    return make_user(group)


def criteria():
    c = SearchCriteria(keyword="Python", search_group="1", age_min="25")
    c.add_item("experience_job_types", "Webエンジニア", "3")
    return c


def test_save_and_load(group, user):
    row = saved_search.save_search(group.id, "  エンジニア候補 ", criteria(), user)
    assert row.search_title == "エンジニア候補"
    loaded = saved_search.load_search(row.id, user)
    assert loaded == criteria()


def test_list_only_saved_by_default(group, user):
    saved_search.record_search(group.id, criteria(), user)
    row = saved_search.save_search(group.id, "営業職", criteria(), user)
    listed = saved_search.list_searches(group.id, user)
    assert [s["id"] for s in listed] == [row.id]
    assert listed[0]["name"] == "営業職"
    assert len(saved_search.list_searches(group.id, user, saved_only=False)) == 2


def test_empty_name_rejected(group, user):
    with pytest.raises(ValidationError) as exc:
        saved_search.save_search(group.id, "   ", criteria(), user)
    assert exc.value.field == "name"


def test_rename_and_delete(group, user):
    row = saved_search.save_search(group.id, "旧名", criteria(), user)
    saved_search.rename_search(row.id, "新名", user)
    assert saved_search.list_searches(group.id, user)[0]["name"] == "新名"
    saved_search.delete_search(row.id, user)
    assert saved_search.list_searches(group.id, user) == []
    with pytest.raises(NotFound):
        saved_search.delete_search(row.id, user)


def test_other_groups_cannot_see_search(group, user, make_user, make_group):
    row = saved_search.save_search(group.id, "社外秘", criteria(), user)
    outsider = make_user(make_group("別"))
    assert saved_search.load_search(row.id, outsider) is None
    with pytest.raises(NotFound):
        saved_search.rename_search(row.id, "x", outsider)
