"""Tests for ReportService: feed, dashboard, edit form and submission."""

from __future__ import annotations

import pytest

from app.domain.exceptions import ConflictError, NotFoundError, RepositoryError, ValidationError
from app.domain.projection import ReportFilters, ViewState
from app.enums.common import SortField, SortOrder
from infrastructure.storage.media_storage import MediaUpload


def _submit(report_service, garden_setup, plant="Mango 1", **kwargs):
    kwargs.setdefault("description", "Leaves curling at the tips")
    return report_service.submit_report(
        garden_setup["garden"].id,
        garden_setup["plants"][plant].id,
        kwargs.pop("description"),
        **kwargs,
    )


# ============================================================================
# Submission
# ============================================================================


def test_create_report_denormalizes_names(report_service, garden_setup):
    result = _submit(report_service, garden_setup, "Orange 1")
    assert result.created is True
    assert result.message == "Saved for Orange 1"

    report = result.report
    assert report.garden_name == "Garden A"
    assert report.plant_identifier == "Orange 1"
    assert report.type_name == "Orange"
    assert report.description == "Leaves curling at the tips"
    assert report.timestamp


@pytest.mark.parametrize(
    "garden,plant,description,message",
    [
        (None, 1, "x", "Please select a garden"),
        (1, None, "x", "Please select a plant"),
        (1, 1, "   ", "Please enter a description"),
        (999, 1, "x", "Garden 999 does not exist"),
    ],
)
def test_validation_happens_before_any_store_call(report_service, garden_setup, garden, plant, description, message):
    with pytest.raises(ValidationError, match=message):
        report_service.submit_report(garden, plant, description)
    assert report_service.reports.count_reports() == 0


def test_plant_must_belong_to_garden(report_service, garden_setup, seed):
    other = seed.garden("Garden B")
    with pytest.raises(ValidationError, match="does not belong"):
        report_service.submit_report(other.id, garden_setup["plants"]["Mango 1"].id, "x")


def test_unknown_condition_ids_are_rejected(report_service, garden_setup, seed):
    healthy = seed.condition("Healthy", 1)
    with pytest.raises(ValidationError, match="Unknown condition"):
        _submit(report_service, garden_setup, condition_ids=[healthy.id, 77])

    result = _submit(report_service, garden_setup, condition_ids=[healthy.id, healthy.id])
    assert result.report.condition_ids == [healthy.id]


def test_failed_uploads_are_dropped_and_rest_proceed(report_service, garden_setup):
    uploads = [
        MediaUpload(b"jpeg", "a.jpg", "image/jpeg"),
        MediaUpload(b"", "broken.jpg", "image/jpeg"),
        MediaUpload(b"pdf", "doc.pdf", "application/pdf"),
        MediaUpload(b"mp4", "b.mp4", "video/mp4"),
    ]
    result = _submit(
        report_service,
        garden_setup,
        media_urls=["https://cdn.test/existing.jpg"],
        media_kinds=["image/jpeg"],
        uploads=uploads,
    )
    assert result.skipped_uploads == 2
    assert len(result.uploaded_urls) == 2
    assert result.report.media_urls[0] == "https://cdn.test/existing.jpg"
    assert result.report.media_kinds == ["image/jpeg", "image/jpeg", "video/mp4"]


def test_only_one_submission_at_a_time(report_service, garden_setup):
    assert report_service._submit_lock.acquire()
    try:
        with pytest.raises(ConflictError):
            _submit(report_service, garden_setup)
    finally:
        report_service._submit_lock.release()

    assert _submit(report_service, garden_setup).created


def test_update_keeps_timestamp_and_removes_dropped_files(report_service, garden_setup):
    created = _submit(
        report_service,
        garden_setup,
        uploads=[MediaUpload(b"one", "a.jpg", "image/jpeg"), MediaUpload(b"two", "b.jpg", "image/jpeg")],
    )
    keep, drop = created.report.media_urls
    drop_path = report_service.media.resolve(drop.rsplit("/", 1)[1])
    assert drop_path is not None

    result = report_service.submit_report(
        garden_setup["garden"].id,
        garden_setup["plants"]["Mango 2"].id,
        "Updated note",
        media_urls=[keep],
        media_kinds=["image/jpeg"],
        report_id=created.report.id,
    )
    assert result.created is False
    assert result.message == "Report updated!"
    assert result.report.id == created.report.id
    assert result.report.plant_identifier == "Mango 2"
    assert result.report.timestamp == created.report.timestamp
    assert result.report.media_urls == [keep]
    assert not drop_path.exists()


def test_update_missing_report(report_service, garden_setup):
    with pytest.raises(NotFoundError):
        _submit(report_service, garden_setup, report_id=12345)


def test_store_failure_discards_uploads(report_service, garden_setup, monkeypatch):
    monkeypatch.setattr(report_service.reports, "create_report", lambda **kwargs: None)
    with pytest.raises(RepositoryError, match="Failed to save report"):
        _submit(report_service, garden_setup, uploads=[MediaUpload(b"one", "a.jpg", "image/jpeg")])
    assert list(report_service.media.root.iterdir()) == []


# ============================================================================
# Delete
# ============================================================================


def test_delete_removes_report_and_owned_media(report_service, garden_setup):
    created = _submit(report_service, garden_setup, uploads=[MediaUpload(b"one", "a.jpg", "image/jpeg")])
    assert report_service.delete_report(created.report.id) == "Report deleted."
    assert list(report_service.media.root.iterdir()) == []

    with pytest.raises(NotFoundError):
        report_service.delete_report(created.report.id)


# ============================================================================
# Feed / dashboard / detail
# ============================================================================


def test_feed_lists_one_garden_newest_first(report_service, garden_setup, seed):
    seed.garden("Garden B")
    seed.report("Garden A", created_at="2026-10-01T00:00:00+00:00", description="old")
    seed.report("Garden B", created_at="2026-10-02T00:00:00+00:00")
    seed.report("Garden A", created_at="2026-10-03T00:00:00+00:00", description="x" * 60)

    feed = report_service.list_feed(garden_setup["garden"].id)
    assert feed["count"] == 2
    assert [item["description"][:3] for item in feed["items"]] == ["xxx", "old"]
    assert feed["items"][0]["excerpt"] == "x" * 50 + "..."

    with pytest.raises(NotFoundError):
        report_service.list_feed(999)


def test_dashboard_projection(report_service, garden_setup, seed):
    healthy = seed.condition("Healthy", 1)
    seed.garden("Garden B")
    for day in range(1, 13):
        seed.report("Garden A", f"Mango {day}", timestamp=f"2026-10-{day:02d}T08:00:00+00:00")
    for day in range(1, 14):
        seed.report("Garden B", "Orange 1", timestamp=f"2026-09-{day:02d}T08:00:00+00:00", condition_ids=[healthy.id])

    state = ViewState(
        filters=ReportFilters(garden=garden_setup["garden"].id),
        sort_field=SortField.DATE,
        sort_order=SortOrder.DESC,
        page=2,
    )
    data = report_service.project_dashboard(state)
    assert data["pagination"]["total"] == 12
    assert data["pagination"]["page"] == 2
    assert [item["plant_identifier"] for item in data["items"]] == ["Mango 2", "Mango 1"]
    assert data["view"]["page"] == 2
    assert "Orange 1" in data["filter_options"]["plants"]
    assert data["filter_options"]["conditions"][0]["name"] == "Healthy"

    by_condition = report_service.project_dashboard(ViewState(filters=ReportFilters(condition=healthy.id)))
    assert by_condition["pagination"]["total"] == 13
    assert by_condition["items"][0]["conditions"][0]["id"] == healthy.id


def test_detail_drops_inactive_badges(report_service, garden_setup, seed):
    healthy = seed.condition("Healthy", 1)
    retired = seed.condition("Retired", 2, is_active=False)
    report = seed.report(condition_ids=[retired.id, healthy.id, 99])

    detail = report_service.get_report_detail(report.id)
    assert [c["id"] for c in detail["conditions"]] == [healthy.id]
    assert "excerpt" not in detail
    assert detail["display_date"] == "Oct 19, 2026"


def test_edit_form_resolves_plant_and_splits_inline_media(report_service, garden_setup, seed):
    report = seed.report(
        "Garden A",
        "Mango 2",
        media_urls=["/media/a.jpg", "data:image/png;base64,AAAA"],
        media_kinds=["image/jpeg", "image/png"],
    )
    form = report_service.get_edit_form(report.id)
    assert form["garden_id"] == garden_setup["garden"].id
    assert form["plant_id"] == garden_setup["plants"]["Mango 2"].id
    assert form["plant_type"] == "Mango"
    assert form["plant_types"] == ["Mango", "Orange"]
    assert [p["plant_name"] for p in form["plants"]] == ["Mango 1", "Mango 2"]
    assert [m["url"] for m in form["media_urls"]] == ["/media/a.jpg"]
    assert [m["url"] for m in form["pending_media"]] == ["data:image/png;base64,AAAA"]


def test_edit_form_with_deleted_plant(report_service, garden_setup, seed):
    report = seed.report("Garden A", "Mango 99")
    form = report_service.get_edit_form(report.id)
    assert form["plant_id"] is None


def test_available_plants_by_type(report_service, garden_setup):
    garden_id = garden_setup["garden"].id
    assert report_service.available_plant_types(garden_id) == ["Mango", "Orange"]
    assert [p.plant_name for p in report_service.available_plants(garden_id, "Orange")] == ["Orange 1"]
    assert len(report_service.available_plants(garden_id)) == 3
