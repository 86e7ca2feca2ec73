"""Unit tests for RFID tag and work plan create / update / delete.

Coverage:
  1. RFID create  : validated payload is posted, invalid form sends nothing
  2. RFID update  : only changed fields are patched, nothing sent if unchanged
  3. Work plans   : template pre-fill, incomplete rows ignored, validation
"""

import pytest
from pydantic import ValidationError

from robot_console.models import RFIDTagRecord, WorkPlanRecord
from robot_console.services.api_client import ApiError
from robot_console.services.rfid_service import RFIDService
from robot_console.services.work_plan_service import WorkPlanService


@pytest.fixture()
def rfid(mock_client):
    return RFIDService(client=mock_client)


@pytest.fixture()
def plans(mock_client):
    return WorkPlanService(client=mock_client)


@pytest.fixture()
def tag():
    return RFIDTagRecord.from_api({
        "id": 7,
        "uid": "A1B2",
        "location_name": "Dock 1",
        "description": "Loading bay",
        "reference_temperature": 4,
        "reference_humidity": 60,
    })


def tag_form(**overrides):
    form = {
        "uid": "A1B2",
        "location_name": "Dock 1",
        "description": "Loading bay",
        "reference_temperature": 4.0,
        "reference_humidity": 60.0,
    }
    form.update(overrides)
    return form


# ── 1. RFID create ───────────────────────────────────────────────────────────


class TestCreateTag:
    def test_posts_validated_payload(self, rfid, mock_client):
        rfid.create_tag(tag_form(uid="  NEW1 "))
        mock_client.post.assert_called_once_with("rfid-tags", {
            "uid": "NEW1",
            "location_name": "Dock 1",
            "description": "Loading bay",
            "reference_temperature": 4.0,
            "reference_humidity": 60.0,
        })

    @pytest.mark.parametrize("field,value", [("uid", ""), ("description", "   "), ("reference_humidity", None)])
    def test_invalid_form_sends_nothing(self, rfid, mock_client, field, value):
        with pytest.raises(ValidationError):
            rfid.create_tag(tag_form(**{field: value}))
        mock_client.post.assert_not_called()

    def test_api_failure_propagates(self, rfid, mock_client):
        mock_client.post.side_effect = ApiError("down")
        with pytest.raises(ApiError):
            rfid.create_tag(tag_form())

    def test_list_all_tags_is_unpaginated(self, rfid, mock_client):
        mock_client.get.return_value = {"data": [{"id": 1, "uid": "X"}, {"rfid_tag_id": 2}]}
        tags = rfid.list_all_tags()
        mock_client.get.assert_called_once_with("rfid-tags")
        assert [t.id for t in tags] == [1, 2]


# ── 2. RFID update ───────────────────────────────────────────────────────────


class TestUpdateTag:
    def test_only_changed_fields_are_sent(self, rfid, mock_client, tag):
        changes = rfid.update_tag(tag, tag_form(location_name="Dock 2", reference_temperature=5))

        assert changes == {"location_name": "Dock 2", "reference_temperature": 5.0}
        mock_client.patch.assert_called_once_with("rfid-tags/7", changes)

    def test_unchanged_form_sends_nothing(self, rfid, mock_client, tag):
        assert rfid.update_tag(tag, tag_form()) == {}
        mock_client.patch.assert_not_called()

    def test_invalid_edit_sends_nothing(self, rfid, mock_client, tag):
        with pytest.raises(ValidationError):
            rfid.update_tag(tag, tag_form(location_name=""))
        mock_client.patch.assert_not_called()

    def test_delete(self, rfid, mock_client):
        rfid.delete_tag(7)
        mock_client.delete.assert_called_once_with("rfid-tags/7")


# ── 3. Work plans ────────────────────────────────────────────────────────────


class TestWorkPlans:
    def plan_form(self, **overrides):
        form = {
            "description": "Night sweep",
            "items": [
                {"rfid_tag_id": 1, "measurement_frequency": 2},
                {"rfid_tag_id": None, "measurement_frequency": 1},
                {"rfid_tag_id": 3, "measurement_frequency": None},
            ],
            "temp_threshold": 2.5,
            "hum_threshold": 5,
            "violation_count": 1,
        }
        form.update(overrides)
        return form

    def test_incomplete_rows_are_ignored(self, plans, mock_client):
        plans.create_plan(self.plan_form())
        mock_client.post.assert_called_once_with("work-plans", {
            "description": "Night sweep",
            "items": [{"rfid_tag_id": 1, "measurement_frequency": 2}],
            "temp_threshold": 2.5,
            "hum_threshold": 5.0,
            "violation_count": 1,
        })

    def test_no_complete_row_fails_validation(self, plans, mock_client):
        with pytest.raises(ValidationError):
            plans.create_plan(self.plan_form(items=[{"rfid_tag_id": None, "measurement_frequency": 1}]))
        mock_client.post.assert_not_called()

    @pytest.mark.parametrize("field", ["description", "temp_threshold", "violation_count"])
    def test_missing_field_fails_validation(self, plans, mock_client, field):
        with pytest.raises(ValidationError):
            plans.create_plan(self.plan_form(**{field: None}))
        mock_client.post.assert_not_called()

    def test_frequency_must_be_positive(self, plans):
        with pytest.raises(ValidationError):
            plans.build_payload(self.plan_form(items=[{"rfid_tag_id": 1, "measurement_frequency": 0}]))

    def test_template_from_existing_plan(self, plans):
        plan = WorkPlanRecord.from_api({
            "id": 4,
            "description": "Morning sweep",
            "temp_threshold": 3,
            "hum_threshold": 8,
            "violation_count": 2,
            "items": [{"rfid_tag_id": 1, "measurement_frequency": 3}, {"rfid_tag_id": 2}],
        })
        template = plans.template_from(plan)

        assert template["description"] == "Morning sweep"
        assert template["items"] == [
            {"rfid_tag_id": 1, "measurement_frequency": 3},
            {"rfid_tag_id": 2, "measurement_frequency": 1},
        ]
        assert template["violation_count"] == 2

    def test_blank_template(self, plans):
        template = plans.template_from(None)
        assert template["items"] == [{"rfid_tag_id": None, "measurement_frequency": 1}]
        assert template["temp_threshold"] is None

    def test_delete(self, plans, mock_client):
        plans.delete_plan(4)
        mock_client.delete.assert_called_once_with("work-plans/4")
