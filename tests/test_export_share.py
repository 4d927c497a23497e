"""Tests for the PDF export and the WhatsApp share text."""

from __future__ import annotations

from datetime import datetime
from urllib.parse import parse_qs, urlparse

import pytest

from app.domain.exceptions import ValidationError
from app.domain.report import Report
from app.services.application.export_service import ReportExportService
from app.services.application.share_service import ShareService


@pytest.fixture()
def reports():
    return [
        Report(id=1, garden_name="Garden 1", plant_identifier="Mango 3", type_name="Mango", description="Fruit set"),
        Report(
            id=2,
            garden_name="Garden 2",
            plant_identifier="Durian 1",
            type_name="Durian",
            description="Spots on leaves & stems <check>",
            media_urls=["/media/a.jpg", "/media/b.mp4"],
        ),
    ]


# ============================================================================
# PDF export
# ============================================================================


def test_table_rows(reports):
    rows = ReportExportService().table_rows(reports)
    assert rows == [
        ["1", "Mango 3 (Garden 1)", "Fruit set"],
        ["2", "Durian 1 (Garden 2)", "Spots on leaves & stems <check>"],
    ]


def test_render_pdf_returns_pdf_bytes(reports):
    pdf = ReportExportService().render_pdf(reports, generated_at=datetime(2026, 10, 19, 9, 5, 12))
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500


def test_render_pdf_requires_selection():
    with pytest.raises(ValidationError, match="Please select at least one plant."):
        ReportExportService().render_pdf([])


def test_export_filename():
    name = ReportExportService.filename()
    assert name.startswith("garden_report_")
    assert name.endswith(".pdf")
    assert name[len("garden_report_"):-len(".pdf")].isdigit()


# ============================================================================
# Share
# ============================================================================


def test_single_report_text_lists_media(reports):
    text = ShareService().single_report_text(reports[1])
    assert text == (
        "*Garden Report*\n\n"
        "🌱 *Garden:* Garden 2\n"
        "🌿 *Plant:* Durian (Durian 1)\n"
        "📝 *Note:* Spots on leaves & stems <check>\n\n"
        "/media/a.jpg\n/media/b.mp4"
    )


def test_single_report_without_media(reports):
    assert ShareService().single_report_text(reports[0]).endswith("📝 *Note:* Fruit set")


def test_bulk_report_text(reports):
    text = ShareService().bulk_report_text(reports)
    assert text.startswith("*Garden Bulk Report*\n\n*1. Mango 3 (Garden 1)*\n🌿 Type: Mango\n📝 Note: Fruit set\n\n")
    assert "*2. Durian 1 (Garden 2)*" in text


def test_bulk_requires_selection():
    with pytest.raises(ValidationError):
        ShareService().bulk_report_text([])


def test_whatsapp_link_round_trips_text(reports):
    share = ShareService().share_single(reports[1])
    parsed = urlparse(share["url"])
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://wa.me/"
    assert parse_qs(parsed.query)["text"] == [share["text"]]


def test_whatsapp_link_encodes_like_uri_component():
    url = ShareService("https://wa.me").whatsapp_link("a b&c!*()")
    assert url == "https://wa.me/?text=a%20b%26c!*()"


def test_share_bulk_for_single_selection_uses_bulk_layout(reports):
    share = ShareService().share_bulk(reports[:1])
    assert share["text"].startswith("*Garden Bulk Report*")
