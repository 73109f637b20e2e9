"""
Programmatic PDF Layout

Draws a ResumeDocument directly onto A4 pages with fpdf2, without going through
HTML. The page reads top to bottom as:

1. Header: uppercased name, contact line, link line (all centered)
2. Professional Profile: bold job title run into the description
3. Work Experience: two-column rows (company | dates, position | location)
   followed by bullet achievements
4. Education: two-column rows (institution | year, degree | GPA)
5. Skills & Certifications: labelled lines

Placeholder rules come from templating.formatting, so an empty document renders
the same prompts as the HTML preview.

Core PDF fonts only cover latin-1. Text is mapped to latin-1 before drawing;
characters outside it become "?".
"""

from contextlib import contextmanager
from typing import Iterator, Tuple

from fpdf import FPDF, XPos, YPos
from fpdf.enums import MethodReturnValue

from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.templating.formatting import (
    EMPTY_MESSAGES,
    SECTION_TITLES,
    SEPARATOR,
    ResumeView,
    build_resume_view,
)

MM_TO_PT = 72 / 25.4
MARGIN_TOP = 15 * MM_TO_PT
MARGIN_BOTTOM = 15 * MM_TO_PT
MARGIN_LEFT = 18 * MM_TO_PT
MARGIN_RIGHT = 18 * MM_TO_PT

FONT = "helvetica"
CHAR_SPACING = 0.3
LINE_GAP = 3
# Body text stops short of the right margin
BODY_INSET = 24
LEFT_COLUMN_RATIO = 0.7

BULLET_INDENT = 8
BULLET_TEXT_INDENT = 14
BULLET_LINE_GAP = 2
BULLET_PARAGRAPH_GAP = 3
BULLET_DIAMETER = 2.6

TEXT_COLOR = "#1a202c"
SUBTLE_COLOR = "#2d3748"
MUTED_COLOR = "#6b7280"
LINK_COLOR = "#1e40af"

LATIN1_REPLACEMENTS = {
    "–": "-",  # en dash
    "—": "-",  # em dash
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "•": "-",  # bullet
    "…": "...",
}


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """
    Convert '#rrggbb' to an (r, g, b) tuple.

    Example:
        >>> hex_to_rgb("#2563eb")
        (37, 99, 235)
    """
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _pdf_text(text: str) -> str:
    for char, replacement in LATIN1_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", "replace").decode("latin-1")


class ResumePdf(FPDF):
    """
    A4 resume page set, measured in points.

    Drawing methods advance the cursor themselves; callers only sequence them.
    """

    def __init__(self, template: str = "minimalist", accent_hex: str = "#2563eb"):
        super().__init__(orientation="P", unit="pt", format="A4")
        self.template = template
        self.accent = hex_to_rgb(accent_hex)
        self.set_margins(left=MARGIN_LEFT, top=MARGIN_TOP, right=MARGIN_RIGHT)
        self.set_auto_page_break(auto=True, margin=MARGIN_BOTTOM)
        self.set_creator("CV Builder")

    # ------------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------------

    @property
    def body_width(self) -> float:
        return self.epw - BODY_INSET

    def _style(self, style: str = "", size: float = 10, color: str = TEXT_COLOR) -> None:
        self.set_font(FONT, style, size)
        self.set_char_spacing(CHAR_SPACING)
        self.set_text_color(*hex_to_rgb(color))

    def _line_height(self, gap: float = LINE_GAP) -> float:
        return self.font_size + gap

    def _text_height(self, text: str, width: float, line_height: float, align: str = "L") -> float:
        return self.multi_cell(
            width,
            line_height,
            _pdf_text(text),
            align=align,
            dry_run=True,
            output=MethodReturnValue.HEIGHT,
        )

    def _paragraph(self, text: str, width: float = 0, align: str = "L") -> None:
        self.set_x(self.l_margin)
        self.multi_cell(
            width,
            self._line_height(),
            _pdf_text(text),
            align=align,
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )

    def _rule(self, color: Tuple[int, int, int], width: float) -> None:
        y = self.get_y() + 2
        self.set_draw_color(*color)
        self.set_line_width(width)
        self.line(self.l_margin, y, self.l_margin + self.epw, y)

    @contextmanager
    def _narrowed(self, inset: float) -> Iterator[None]:
        """Temporarily move the right margin inward so write() wraps at body width."""
        original = self.r_margin
        self.set_right_margin(original + inset)
        try:
            yield
        finally:
            self.set_right_margin(original)

    # ------------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------------

    def header_block(self, view: ResumeView) -> None:
        """Name, contact line and link line, centered."""
        self._style("B", 24)
        self._paragraph(view.name, align="C")
        self._style("", 10)
        self._paragraph(view.contact_line, align="C")
        self._link_line(view)
        self.ln(self.font_size * 0.6)

    def _link_line(self, view: ResumeView) -> None:
        self._style("", 10)
        widths = []
        for link in view.links:
            self.set_font(FONT, "U" if link.href else "", 10)
            widths.append(self.get_string_width(_pdf_text(link.text)))
        self.set_font(FONT, "", 10)
        separator_width = self.get_string_width(SEPARATOR)
        total = sum(widths) + separator_width * (len(widths) - 1)

        height = self._line_height()
        self.set_x(self.l_margin + max(0.0, (self.epw - total) / 2))
        for index, (link, width) in enumerate(zip(view.links, widths)):
            if index:
                self._style("", 10)
                self.cell(separator_width, height, SEPARATOR)
            if link.href:
                self._style("U", 10, LINK_COLOR)
                self.cell(width, height, _pdf_text(link.text), link=link.href)
            else:
                self._style("", 10, MUTED_COLOR)
                self.cell(width, height, _pdf_text(link.text))
        self.ln(height)

    @contextmanager
    def section(self, title: str) -> Iterator[None]:
        """
        Section heading with a rule beneath; the body is drawn inside the block.

        The modern template draws the heading and rule in the accent color.
        """
        modern = self.template == "modern"
        size = 12 if modern else 11
        color = self.accent if modern else hex_to_rgb(TEXT_COLOR)

        self.set_font(FONT, "B", size)
        # Keep the heading with at least one line of its content
        if self.will_page_break(self._line_height() * 2 + 12):
            self.add_page()
        self.set_char_spacing(CHAR_SPACING)
        self.set_text_color(*color)
        self._paragraph(title.upper())
        self._rule(color, 1.5 if modern else 1)
        self.ln(size * 0.6)
        yield
        self.ln(size * 0.8)

    def two_column_row(
        self,
        left: str,
        right: str,
        left_style: Tuple[str, float, str],
        right_style: Tuple[str, float, str],
    ) -> None:
        """
        Draw left text and right-aligned text side by side.

        Row height is the taller of the two wrapped columns. A row that does
        not fit on the current page starts a new one.
        """
        left_width = self.body_width * LEFT_COLUMN_RATIO
        right_width = self.body_width - left_width

        self._style(*left_style)
        left_line = self._line_height()
        left_height = self._text_height(left, left_width, left_line)
        self._style(*right_style)
        right_line = self._line_height()
        right_height = self._text_height(right, right_width, right_line, align="R")
        row_height = max(left_height, right_height)

        if self.will_page_break(row_height):
            self.add_page()
        top = self.get_y()

        self._style(*left_style)
        self.set_xy(self.l_margin, top)
        self.multi_cell(left_width, left_line, _pdf_text(left))
        self._style(*right_style)
        self.set_xy(self.l_margin + left_width, top)
        self.multi_cell(right_width, right_line, _pdf_text(right), align="R")
        self.set_xy(self.l_margin, top + row_height)

    def bullet_list(self, items) -> None:
        """Bulleted lines with a hanging indent."""
        self._style("", 10)
        width = self.body_width - BULLET_TEXT_INDENT
        line_height = self._line_height(BULLET_LINE_GAP)
        for item in items:
            height = self._text_height(item, width, line_height)
            if self.will_page_break(height):
                self.add_page()
            top = self.get_y()
            bullet_y = top + (line_height - BULLET_DIAMETER) / 2
            self.set_fill_color(*hex_to_rgb(TEXT_COLOR))
            self.ellipse(
                self.l_margin + BULLET_INDENT - BULLET_DIAMETER,
                bullet_y,
                BULLET_DIAMETER,
                BULLET_DIAMETER,
                style="F",
            )
            self.set_xy(self.l_margin + BULLET_TEXT_INDENT, top)
            self.multi_cell(width, line_height, _pdf_text(item))
            self.set_xy(self.l_margin, top + height + BULLET_PARAGRAPH_GAP)

    def run_in_text(self, lead: str, text: str, lead_color: str = TEXT_COLOR) -> None:
        """Bold lead-in followed by regular text in the same paragraph."""
        self.set_x(self.l_margin)
        with self._narrowed(BODY_INSET):
            self._style("B", 10.5, lead_color)
            height = self._line_height()
            self.write(height, _pdf_text(lead))
            self._style("", 10.5)
            self.write(height, _pdf_text(text))
        self.ln(height)

    def empty_message(self, text: str) -> None:
        self._style("", 10, MUTED_COLOR)
        self._paragraph(text, width=self.body_width)


# ============================================================================
# Sections
# ============================================================================


def _draw_profile(pdf: ResumePdf, view: ResumeView) -> None:
    pdf.run_in_text(f"{view.summary_title} ", view.summary_description)


def _draw_experience(pdf: ResumePdf, view: ResumeView) -> None:
    if not view.experience:
        pdf.empty_message(EMPTY_MESSAGES["experience"])
        return
    for index, item in enumerate(view.experience):
        pdf.two_column_row(item.company, item.timeline, ("B", 11, TEXT_COLOR), ("B", 10, TEXT_COLOR))
        pdf.two_column_row(item.position, item.location, ("I", 10, SUBTLE_COLOR), ("", 10, SUBTLE_COLOR))
        if item.achievements:
            pdf.ln(1)
            pdf.bullet_list(item.achievements)
        if index != len(view.experience) - 1:
            pdf.ln(4)


def _draw_education(pdf: ResumePdf, view: ResumeView) -> None:
    if not view.education:
        pdf.empty_message(EMPTY_MESSAGES["education"])
        return
    for index, item in enumerate(view.education):
        pdf.two_column_row(item.institution, item.year, ("B", 11, TEXT_COLOR), ("", 10, TEXT_COLOR))
        pdf.two_column_row(item.degree, item.gpa, ("", 10, SUBTLE_COLOR), ("", 10, SUBTLE_COLOR))
        if index != len(view.education) - 1:
            pdf.ln(3.5)


def _draw_skills(pdf: ResumePdf, view: ResumeView) -> None:
    if not view.skill_lines:
        pdf.empty_message(EMPTY_MESSAGES["skills"])
        return
    for index, (label, text) in enumerate(view.skill_lines):
        pdf.run_in_text(f"{label}:", f" {text}")
        if index != len(view.skill_lines) - 1:
            pdf.ln(2)


SECTION_DRAWERS = (_draw_profile, _draw_experience, _draw_education, _draw_skills)


def build_resume_pdf(doc: ResumeDocument) -> bytes:
    """
    Lay out a document as a PDF.

    Args:
        doc: Document to draw; empty fields draw placeholder prompts

    Returns:
        PDF file contents
    """
    view = build_resume_view(doc, dash="-")
    pdf = ResumePdf(template=view.template, accent_hex=view.accent_hex)
    pdf.set_title(_pdf_text(f"{view.name} | CV"))
    pdf.set_subject("Curriculum Vitae")
    pdf.add_page()

    pdf.header_block(view)
    for title, draw in zip(SECTION_TITLES, SECTION_DRAWERS):
        with pdf.section(title):
            draw(pdf, view)

    return bytes(pdf.output())
