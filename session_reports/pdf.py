from __future__ import annotations  # Styled PDF rendering for scoring reports

import math
from datetime import datetime
from typing import Any, List, Sequence, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import ReportExchange, SessionReport


DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color
SOFT_ACCENT_BG = (243, 248, 255)  # Highlight background


def _parse_datetime(value: str | None) -> datetime | None:  # Parse ISO timestamp safely
    if not value:
        return None
    try:
        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _format_datetime(value: datetime | None) -> str:  # Format timestamp for display
    if not value:
        return "-"
    return value.strftime("%d %b %Y, %I:%M %p").lstrip("0").replace(" 0", " ")


def _effective_width(pdf: FPDF) -> float:  # Compute effective page width
    return float(pdf.w) - float(pdf.l_margin) - float(pdf.r_margin)


def _section_title(pdf: "ReportPDF", title: str) -> None:  # Render styled section title
    pdf.set_text_color(*TEXT)
    pdf.set_x(pdf.l_margin)
    pdf.set_font(pdf.font_bold, "B", 13)
    pdf.cell(0, 9, title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_draw_color(*RULE)
    pdf.set_line_width(0.2)
    y = pdf.get_y()
    pdf.line(pdf.l_margin, y, pdf.l_margin + _effective_width(pdf), y)
    pdf.ln(2)


def _meta_block(pdf: "ReportPDF", rows: List[Tuple[str, str]]) -> None:  # Draw two-column metadata
    col = _effective_width(pdf) / 2.0
    line = 6
    for idx in range(0, len(rows), 2):
        left = rows[idx]
        right = rows[idx + 1] if idx + 1 < len(rows) else ("", "")
        pdf.set_x(pdf.l_margin)
        pdf.set_text_color(*MUTED)
        pdf.set_font(pdf.font_regular, "", 10)
        pdf.cell(col, line, left[0], new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, line, right[0], new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_x(pdf.l_margin)
        pdf.set_text_color(*TEXT)
        pdf.set_font(pdf.font_bold, "B", 11)
        pdf.cell(col, line, left[1], new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, line, right[1], new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)


def _calc_text_height(pdf: FPDF, width: float, text: str, line_height: float) -> float:  # Estimate multi-cell height
    if not text:
        return line_height
    lines = pdf.multi_cell(width, line_height, text, dry_run=True, output="LINES")
    if isinstance(lines, (list, tuple)):
        return line_height * max(1, len(lines))
    return max(1, math.ceil(len(text) / 90)) * line_height


class ReportPDF(FPDF):  # PDF with custom header/footer styling
    def __init__(self, *args, accent: Tuple[int, int, int] = ACCENT, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.accent = accent
        self.header_title = "Interview Report"
        self.font_regular = "Helvetica"
        self.font_bold = "Helvetica"
        self.supports_unicode = False

    def prepare_text(self, text: Any) -> str:  # Sanitize text for core (latin-1) fonts
        value = "" if text is None else str(text)
        if self.supports_unicode:
            return value
        cleaned = value.replace("•", "-").replace("…", "...")
        return cleaned.encode("latin-1", "ignore").decode("latin-1")

    def _sanitise_args(self, args: tuple, kwargs: dict) -> list:  # Clean the text argument wherever it was passed
        args_list = list(args)
        if len(args_list) >= 3:
            args_list[2] = self.prepare_text(args_list[2])
        for key in ("text", "txt"):
            if key in kwargs:
                kwargs[key] = self.prepare_text(kwargs[key])
        return args_list

    def cell(self, *args, **kwargs):  # Wrap base cell with text sanitisation
        return super().cell(*self._sanitise_args(args, kwargs), **kwargs)

    def multi_cell(self, *args, **kwargs):  # Wrap base multi_cell with text sanitisation
        return super().multi_cell(*self._sanitise_args(args, kwargs), **kwargs)

    def header(self) -> None:  # Render header banner
        usable = _effective_width(self)
        if self.page_no() == 1:
            self.set_fill_color(*self.accent)
            self.rect(0, 0, self.w, 20, style="F")
            self.set_text_color(255, 255, 255)
            self.set_font(self.font_bold, "B", 16)
            self.set_xy(self.l_margin, 6)
            self.multi_cell(usable, 8, self.header_title)
            self.set_text_color(*TEXT)
            self.set_y(24)
        else:
            self.set_text_color(80, 80, 80)
            self.set_xy(self.l_margin, 8)
            self.set_font(self.font_bold, "B", 12)
            self.multi_cell(usable, 6, self.header_title)
            mark = self.get_y()
            self.set_draw_color(*self.accent)
            self.set_line_width(0.4)
            self.line(self.l_margin, mark + 1, self.w - self.r_margin, mark + 1)
            self.set_text_color(*TEXT)
            self.ln(4)

    def footer(self) -> None:  # Render footer with pagination
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(self.font_regular, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")


def _render_score_table(pdf: ReportPDF, report: SessionReport) -> None:  # Draw score breakdown table
    scores = report.report
    rows = [
        ("Content", f"{scores.content_score_10}/10"),
        ("Delivery", f"{scores.delivery_score_10}/10"),
        ("Integrity adjustment", f"{scores.adjustment:+d}"),
        ("Overall", f"{scores.overall_score_10}/10"),
    ]
    widths = [_effective_width(pdf) * 0.6, _effective_width(pdf) * 0.4]
    pdf.set_x(pdf.l_margin)
    pdf.set_fill_color(*ACCENT)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(pdf.font_bold, "B", 10)
    pdf.cell(widths[0], 8, "Measure", align="L", fill=True)
    pdf.cell(widths[1], 8, "Score", align="L", fill=True)
    pdf.ln(8)
    pdf.set_text_color(*TEXT)
    pdf.set_font(pdf.font_regular, "", 10)
    for idx, (label, value) in enumerate(rows):
        fill = idx % 2 == 0
        if fill:
            pdf.set_fill_color(247, 250, 255)
        pdf.set_x(pdf.l_margin)
        pdf.cell(widths[0], 7, label, border=0, fill=fill)
        pdf.cell(widths[1], 7, value, border=0, fill=fill)
        pdf.ln(7)
    pdf.ln(2)


def _render_overall_banner(pdf: ReportPDF, score_100: int) -> None:  # Highlight the 0-100 score
    pdf.set_x(pdf.l_margin)
    pdf.set_fill_color(*SOFT_ACCENT_BG)
    pdf.rect(pdf.l_margin, pdf.get_y(), _effective_width(pdf), 16, style="F")
    pdf.set_xy(pdf.l_margin + 6, pdf.get_y() + 4)
    pdf.set_text_color(*MUTED)
    pdf.set_font(pdf.font_regular, "", 10)
    pdf.cell(_effective_width(pdf) - 12, 6, "Overall Score")
    pdf.set_xy(pdf.l_margin, pdf.get_y() - 2)
    pdf.set_text_color(*ACCENT)
    pdf.set_font(pdf.font_bold, "B", 14)
    pdf.cell(_effective_width(pdf) - 6, 8, f"{score_100}/100", align="R")
    pdf.ln(12)
    pdf.set_text_color(*TEXT)


def _render_bullets(pdf: ReportPDF, entries: Sequence[str], empty: str) -> None:  # Render a bullet list section body
    bullet = "•" if pdf.supports_unicode else "-"
    pdf.set_x(pdf.l_margin)
    pdf.set_font(pdf.font_regular, "", 11)
    if not entries:
        pdf.set_text_color(*MUTED)
        pdf.multi_cell(_effective_width(pdf), 6, empty)
        pdf.set_text_color(*TEXT)
        pdf.ln(2)
        return
    pdf.set_text_color(*TEXT)
    for entry in entries:
        pdf.set_x(pdf.l_margin)
        pdf.multi_cell(_effective_width(pdf), 6, f"{bullet} {entry}")
    pdf.ln(2)


def _render_transcript_row(pdf: ReportPDF, index: int, entry: ReportExchange) -> None:  # Render Q&A row
    line = 5.5
    width = _effective_width(pdf)
    question = f"Q{index}: {(entry.question or '-').strip()}"
    answer = f"A: {(entry.answer or '-').strip()}"
    block = _calc_text_height(pdf, width - 4, question, line) + _calc_text_height(pdf, width - 4, answer, line) + 6
    if pdf.get_y() + block > pdf.page_break_trigger:
        pdf.add_page()
    origin_y = pdf.get_y()
    pdf.set_fill_color(248, 249, 255)
    pdf.rect(pdf.l_margin, origin_y, width, block, style="F")
    pdf.set_xy(pdf.l_margin + 2, origin_y + 2)
    pdf.set_text_color(*ACCENT)
    pdf.set_font(pdf.font_bold, "B", 10)
    pdf.multi_cell(width - 4, line, question)
    pdf.set_x(pdf.l_margin + 2)
    pdf.set_text_color(60, 60, 60)
    pdf.set_font(pdf.font_regular, "", 10)
    pdf.multi_cell(width - 4, line, answer)
    bottom = max(pdf.get_y(), origin_y + block - 2)
    pdf.set_draw_color(*RULE)
    pdf.line(pdf.l_margin, bottom + 1, pdf.l_margin + width, bottom + 1)
    pdf.set_y(bottom + 4)
    pdf.set_text_color(*TEXT)


def generate_session_report_pdf(report: SessionReport) -> bytes:  # Build PDF payload for a scoring report
    pdf = ReportPDF()
    pdf.alias_nb_pages()
    try:
        pdf.add_font("DejaVu", "", DEJAVU_SANS)
        pdf.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
        pdf.font_regular = "DejaVu"
        pdf.font_bold = "DejaVu"
        pdf.supports_unicode = True
    except (OSError, RuntimeError):  # pragma: no cover - font registration optional
        pdf.font_regular = "Helvetica"
        pdf.font_bold = "Helvetica"
        pdf.supports_unicode = False
    domain = report.domain or "General"
    pdf.header_title = f"{domain} - Interview Report"
    pdf.set_margins(15, 22, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    scores = report.report
    _section_title(pdf, "Session Overview")
    _meta_block(
        pdf,
        [
            ("Session ID", report.sessionId),
            ("Domain", domain),
            ("Created", _format_datetime(_parse_datetime(report.createdAt))),
            ("Average answer length", f"{scores.avg_answer_length:.0f} chars"),
            ("Integrity", f"{scores.integrity:.2f}"),
            ("High-severity events", str(scores.high_severity_events)),
        ],
    )

    _section_title(pdf, "Scores")
    _render_score_table(pdf, report)
    _render_overall_banner(pdf, scores.overall_score_100)

    _section_title(pdf, "Strengths")
    _render_bullets(pdf, scores.strengths, "No strengths recorded.")
    _section_title(pdf, "Weaknesses")
    _render_bullets(pdf, scores.weaknesses, "No weaknesses recorded.")
    _section_title(pdf, "Improvements")
    _render_bullets(pdf, scores.improvements, "No improvements suggested.")

    _section_title(pdf, "Proctoring Events")
    _render_bullets(
        pdf,
        [f"{event.type} ({event.severity}) - {_format_datetime(_parse_datetime(event.at))}" for event in report.events],
        "No proctoring events recorded.",
    )

    _section_title(pdf, "Question & Answer Transcript")
    if not report.qa:
        _render_bullets(pdf, [], "No transcript entries recorded for this session.")
    for index, entry in enumerate(report.qa, start=1):
        _render_transcript_row(pdf, index, entry)

    return bytes(pdf.output())


__all__ = ["ReportPDF", "generate_session_report_pdf"]
