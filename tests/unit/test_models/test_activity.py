"""Tests for activity and supporter models."""

import pytest
from datetime import date

from src.models.activity import ActivityWithRelations
from src.models.results import LoadResult
from src.models.supporter import MatchedSupporter, SupporterWithRelations
from tests.utils.factories import create_activity_row, create_supporter_row


@pytest.mark.unit
def test_activity_with_relations_from_row():
    activity = ActivityWithRelations.model_validate(
        create_activity_row(activity_id="act-1", activity_date="2024-05-01", status_name="完了")
    )

    assert activity.id == "act-1"
    assert activity.activity_date == date(2024, 5, 1)
    assert activity.status_name == "完了"


@pytest.mark.unit
def test_supporter_relation_ids():
    supporter = SupporterWithRelations.model_validate(create_supporter_row(
        skills=[("cooking", "料理"), ("cleaning", "掃除")],
        time_slots=[("mon-am", "月曜 午前")],
    ))

    assert supporter.skill_ids == {"cooking", "cleaning"}
    assert supporter.skill_names == ["料理", "掃除"]
    assert supporter.time_slot_ids == {"mon-am"}


@pytest.mark.unit
def test_supporter_time_slot_ids_from_link_column():
    supporter = SupporterWithRelations.model_validate({
        "id": "s1",
        "name": "山田",
        "supporter_schedules": [{"time_slot_id": "slot-1"}, {"time_slots": None}],
    })

    assert supporter.time_slot_ids == {"slot-1"}
    assert supporter.skill_ids == set()


@pytest.mark.unit
def test_matched_supporter_count_not_negative():
    with pytest.raises(ValueError):
        MatchedSupporter(id="s1", name="山田", completed_activities=-1)


@pytest.mark.unit
def test_load_result_failure():
    result = LoadResult.failure(RuntimeError("store down"))

    assert result.failed
    assert result.items == []
    assert result.error == "store down"
    assert not LoadResult(items=[]).failed


@pytest.mark.unit
def test_activity_date_label_in_dump():
    activity = ActivityWithRelations.model_validate(create_activity_row(activity_date="2024-05-01"))

    assert activity.date_label == "2024年5月1日(水)"
    assert activity.model_dump(mode="json")["date_label"] == "2024年5月1日(水)"
