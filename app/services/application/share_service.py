"""
Share Service
=============
Builds the WhatsApp-formatted share text for one or several reports and the
``wa.me`` link that opens it.
"""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

from app.domain.exceptions import ValidationError
from app.domain.report import Report

# characters encodeURIComponent leaves as-is
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ShareService:
    """Formats reports as chat messages."""

    def __init__(self, base_url: str = "https://wa.me/"):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    def single_report_text(self, report: Report) -> str:
        text = (
            "*Garden Report*\n\n"
            f"🌱 *Garden:* {report.garden_name}\n"
            f"🌿 *Plant:* {report.type_name} ({report.plant_identifier})\n"
            f"📝 *Note:* {report.description}"
        )
        if report.media_urls:
            text += "\n\n" + "\n".join(report.media_urls)
        return text

    def bulk_report_text(self, reports: Sequence[Report]) -> str:
        if not reports:
            raise ValidationError("Please select at least one plant.")
        text = "*Garden Bulk Report*\n\n"
        for index, r in enumerate(reports, start=1):
            text += (
                f"*{index}. {r.plant_identifier} ({r.garden_name})*\n"
                f"🌿 Type: {r.type_name}\n"
                f"📝 Note: {r.description}\n\n"
            )
        return text

    def whatsapp_link(self, text: str) -> str:
        return f"{self.base_url}?text={quote(text, safe=_URI_COMPONENT_SAFE)}"

    def share_single(self, report: Report) -> dict[str, str]:
        text = self.single_report_text(report)
        return {"text": text, "url": self.whatsapp_link(text)}

    def share_bulk(self, reports: Sequence[Report]) -> dict[str, str]:
        """Text and link for a multi-select; always the bulk layout, even for one report."""
        text = self.bulk_report_text(reports)
        return {"text": text, "url": self.whatsapp_link(text)}
