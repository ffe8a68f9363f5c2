import random

import pytest

from scoutboard.services.criteria import SEARCH_GROUP_REQUIRED, SearchCriteria, _to_int, item_id


def test_min_above_max_clears_max():
    c = SearchCriteria()
    c.set_current_salary_max("500")
    assert c.set_current_salary_min("800")
    assert c.current_salary_min == "800"
    assert c.current_salary_max == ""


def test_max_below_min_is_rejected():
    c = SearchCriteria()
    c.set_age_min("30")
    assert c.set_age_max("25") is False
    assert c.age_min == "30"
    assert c.age_max == ""


def test_non_numeric_values_never_conflict():
    c = SearchCriteria()
    c.set_desired_salary_min("指定なし")
    assert c.set_desired_salary_max("400")
    assert c.desired_salary_max == "400"


@pytest.mark.parametrize("pair", ["current_salary", "desired_salary", "age"])
def test_random_range_writes_keep_min_le_max(pair):
    rng = random.Random(pair)
    c = SearchCriteria()
    for _ in range(200):
        value = str(rng.randint(0, 100)) if rng.random() > 0.1 else ""
        if rng.random() < 0.5:
            c.set_min(pair, value)
        else:
            c.set_max(pair, value)
        lo = _to_int(getattr(c, f"{pair}_min"))
        hi = _to_int(getattr(c, f"{pair}_max"))
        assert lo is None or hi is None or lo <= hi


def test_listeners_get_changed_fields_and_can_unsubscribe():
    c = SearchCriteria()
    seen = []
    unsubscribe = c.subscribe(seen.append)
    c.set("keyword", "Python")
    c.set("keyword", "Python")
    c.set_current_salary_max("500")
    c.set_current_salary_min("800")
    c.set_current_salary_max("100")
    unsubscribe()
    c.set("keyword", "Go")
    assert seen == [
        ("keyword",),
        ("current_salary_max",),
        ("current_salary_min", "current_salary_max"),
    ]


def test_add_item_is_idempotent_by_name():
    c = SearchCriteria()
    first = c.add_item("experience_job_types", "Webエンジニア")
    again = c.add_item("experience_job_types", " Webエンジニア ", "3")
    assert first == again == item_id("experience_job_types", "Webエンジニア")
    items = c.experience_job_types
    assert len(items) == 1
    assert items[0].experience_years == "3"


def test_remove_and_update_items():
    c = SearchCriteria()
    a = c.add_item("experience_industries", "IT・通信")
    b = c.add_item("experience_industries", "人材")
    c.update_experience_years("experience_industries", b, "5")
    c.remove_item("experience_industries", a)
    assert [(i.name, i.experience_years) for i in c.experience_industries] == [("人材", "5")]
    with pytest.raises(ValueError):
        c.update_experience_years("desired_locations", "location:東京都", "1")


def test_reading_list_returns_a_copy():
    c = SearchCriteria()
    c.add_item("desired_locations", "東京都")
    c.desired_locations.clear()
    assert len(c.desired_locations) == 1


def test_reset_form_restores_initial_state():
    c = SearchCriteria(keyword="営業", search_group="1")
    c.touch_search_group()
    c.reset_form()
    assert c == SearchCriteria()
    assert c.search_group_touched is False


def test_validate_and_touch_search_group():
    c = SearchCriteria()
    assert not c.validate()
    c.touch_search_group()
    assert c.search_group_touched
    assert c.search_group_error == SEARCH_GROUP_REQUIRED
    c.set("search_group", "3")
    c.touch_search_group()
    assert c.validate()
    assert c.search_group_error == ""


def test_dict_round_trip():
    c = SearchCriteria(keyword="データ", job_type_and_search=True, age_min="25", age_max="40")
    c.add_item("experience_job_types", "データサイエンティスト", "2")
    c.add_item("work_styles", "リモート")
    assert SearchCriteria.from_dict(c.to_dict()) == c


def test_query_encoding():
    c = SearchCriteria(keyword="営業", industry_and_search=True)
    c.set_items("desired_locations", ["東京都", "大阪府"])
    params = c.to_query()
    assert params == {
        "keyword": "営業",
        "industry_and_search": "true",
        "desired_locations": "東京都,大阪府",
    }
    decoded = SearchCriteria.from_query(params)
    assert [i.name for i in decoded.desired_locations] == ["東京都", "大阪府"]
    assert decoded.desired_locations[0].id == item_id("desired_locations", "東京都")
    assert decoded.industry_and_search is True


def test_assign_replays_range_rule():
    c = SearchCriteria().assign({"current_salary_min": "900", "current_salary_max": "600"})
    assert c.current_salary_min == "900"
    assert c.current_salary_max == ""


def test_unknown_field_raises():
    with pytest.raises(ValueError):
        SearchCriteria().set("nope", "x")


def test_list_field_rejects_a_bare_string():
    c = SearchCriteria()
    c.set_items("experience_job_types", ["営業"])
    with pytest.raises(ValueError):
        c.set("experience_job_types", "営業")
    assert [i.name for i in c.experience_job_types] == ["営業"]
    c.set("experience_job_types", None)
    assert c.experience_job_types == []


@pytest.mark.parametrize("raw, expected", [
    ("false", False), ("0", False), ("", False), ("true", True), ("ON", True), (True, True), (0, False),
])
def test_bool_field_parses_strings(raw, expected):
    c = SearchCriteria(job_type_and_search=True)
    c.set("job_type_and_search", raw)
    assert c.job_type_and_search is expected


def test_scalar_field_rejects_lists():
    c = SearchCriteria()
    with pytest.raises(ValueError):
        c.set("keyword", ["営業"])
    with pytest.raises(ValueError):
        c.set("age_min", {"value": 3})
    assert c == SearchCriteria()


def test_session_keeps_search_group_flags():
    c = SearchCriteria(keyword="営業")
    c.touch_search_group()
    restored = SearchCriteria.from_session(c.to_session())
    assert restored.keyword == "営業"
    assert restored.search_group_touched is True
    assert restored.search_group_error == SEARCH_GROUP_REQUIRED
    assert "search_group_error" not in c.to_dict()


def test_to_conditions_types():
    c = SearchCriteria(keyword="  Python ", age_min="25", last_login_min="7")
    c.add_item("experience_job_types", "Webエンジニア", "3")
    cond = c.to_conditions()
    assert cond["keyword"] == "Python"
    assert cond["age_min"] == 25
    assert cond["age_max"] is None
    assert cond["last_login_min"] == 7
    assert cond["experience_job_types"] == [{"name": "Webエンジニア", "experience_years": 3}]
