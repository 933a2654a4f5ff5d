from __future__ import annotations

import os
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from reportlab.lib.colors import black, HexColor
from reportlab.lib.utils import ImageReader

from bus_checker.checks.evaluator import ComplianceReport, Measurement
from bus_checker.config import settings
from bus_checker.profiles.registry import BusProfile
from bus_checker.report.view import (
    DISCLAIMER,
    check_pill,
    overall_status,
    summary_rows,
)
from bus_checker.utils.logging import info, warn


COLORS = {
    "pass": HexColor("#2E7D32"),
    "fail": HexColor("#C62828"),
    "panel": HexColor("#0F1218"),
    "panel2": HexColor("#141925"),
    "muted": HexColor("#B6C0CF"),
    "text": HexColor("#F2F5FA"),
    "line": HexColor("#2A2F3A"),
}


def _now_str(tzname: str) -> str:
    try:
        dt = datetime.now(ZoneInfo(tzname))
    except (ZoneInfoNotFoundError, ValueError):
        warn(f"Unknown report time zone {tzname!r}; using local time.")
        dt = datetime.now().astimezone()
    return dt.strftime("%Y-%m-%d %H:%M %Z")


def _latin(text: str) -> str:
    # Base-14 fonts have no "≤" glyph
    return text.replace("≤", "<=")


def _wrap_width(
    c: canvas.Canvas,
    x: float,
    y: float,
    text: str,
    max_width: float,
    lh: float = 13,
) -> float:
    """Wrap by actual rendered width. Returns new y after drawing."""
    if not text:
        return y

    line = ""
    for w in text.split():
        candidate = (line + " " + w).strip()
        if c.stringWidth(candidate, c._fontname, c._fontsize) <= max_width:
            line = candidate
        else:
            if line:
                c.drawString(x, y, line)
                y -= lh
            line = w

    if line:
        c.drawString(x, y, line)
        y -= lh

    return y


def _pill(c: canvas.Canvas, right_x: float, y: float, text: str, passed: bool) -> None:
    c.setFont("Helvetica-Bold", 9.5)
    w = c.stringWidth(text, "Helvetica-Bold", 9.5) + 16
    c.setFillColor(COLORS["pass"] if passed else COLORS["fail"])
    c.roundRect(right_x - w, y - 5, w, 16, 7, fill=1, stroke=0)
    c.setFillColor(COLORS["text"])
    c.drawCentredString(right_x - w / 2, y, text)


def build_pdf_report(
    out_pdf: str,
    profile: BusProfile,
    measurement: Measurement,
    report: ComplianceReport,
    chart_path: Optional[str] = None,
) -> str:
    """One-page printable summary of a compliance run. Returns out_pdf."""
    out_dir = os.path.dirname(out_pdf)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    status = overall_status(report)

    c = canvas.Canvas(out_pdf, pagesize=letter)
    W, H = letter
    m = 48

    # ===== Header band =====
    band_h = 104
    c.setFillColor(COLORS["panel"])
    c.rect(0, H - band_h, W, band_h, fill=1, stroke=0)

    c.setFont("Helvetica-Bold", 22)
    c.setFillColor(COLORS["text"])
    c.drawString(m, H - 50, settings.app_title)

    c.setFont("Helvetica", 12)
    c.setFillColor(COLORS["muted"])
    c.drawString(m, H - 68, "Power Quality Compliance Check (simplified / demo)")

    c.setFont("Helvetica", 10.6)
    c.drawString(m, H - 88, f"Bus: {profile.label}")
    c.drawRightString(W - m, H - 88, f"Generated: {_now_str(settings.report_timezone)}")

    # ===== Overall status card =====
    panel_h = 78
    panel_y = H - band_h - 24 - panel_h
    c.setFillColor(COLORS["panel2"])
    c.roundRect(m, panel_y, W - 2 * m, panel_h, 14, fill=1, stroke=0)

    c.setFont("Helvetica-Bold", 20)
    c.setFillColor(COLORS[status.state])
    c.drawString(m + 18, panel_y + panel_h - 34, status.pill)

    c.setFont("Helvetica", 11)
    c.setFillColor(COLORS["muted"])
    _wrap_width(c, m + 18, panel_y + 20, status.label, max_width=W - 2 * m - 36)

    # ===== Checklist =====
    y = panel_y - 28
    c.setFont("Helvetica-Bold", 12.5)
    c.setFillColor(black)
    c.drawString(m, y, "Requirement checks")
    y -= 20

    for check in report.checks:
        c.setFont("Helvetica-Bold", 11)
        c.setFillColor(black)
        c.drawString(m + 8, y, check.label)
        _pill(c, W - m, y, check_pill(check), check.passed)
        y -= 14
        c.setFont("Helvetica", 10)
        c.setFillColor(HexColor("#333333"))
        y = _wrap_width(c, m + 8, y, _latin(check.detail), max_width=W - 2 * m - 130, lh=12)
        y -= 8

    c.setStrokeColor(COLORS["line"])
    c.line(m, y, W - m, y)
    y -= 20

    # ===== Measurement summary =====
    c.setFont("Helvetica-Bold", 12.5)
    c.setFillColor(black)
    c.drawString(m, y, "Measurement summary")
    y -= 18

    for name, value in summary_rows(profile, measurement):
        c.setFont("Helvetica", 10.6)
        c.setFillColor(HexColor("#333333"))
        c.drawString(m + 8, y, name)
        c.setFont("Helvetica-Bold", 10.6)
        c.setFillColor(black)
        c.drawString(m + 190, y, value)
        y -= 14

    # ===== Margin chart (optional) =====
    if chart_path and os.path.exists(chart_path):
        chart_h = 170
        y -= 10
        if y - chart_h > 48:
            img = ImageReader(chart_path)
            c.drawImage(
                img,
                m,
                y - chart_h,
                width=W - 2 * m,
                height=chart_h,
                preserveAspectRatio=True,
                mask="auto",
            )
        else:
            warn("Not enough room on the page for the margin chart; skipped.")

    # Footer disclaimer
    c.setFont("Helvetica-Oblique", 8.8)
    c.setFillColor(HexColor("#333333"))
    c.drawString(m, 26, DISCLAIMER)

    c.showPage()
    c.save()

    info(f"Report written: {out_pdf}")
    return out_pdf
