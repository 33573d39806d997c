"""Printable invoice for an expense, as PDF (reportlab) or HTML (Jinja)."""
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from flask import render_template
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle, StyleSheet1
from reportlab.lib.units import inch, mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from paperwork.expenses import Attachment, Expense
from paperwork.pagination import chunk_expense_attachments
from paperwork.utils import format_currency

PAGE_FORMATS = {
    'A4': {'page': {'width': 210, 'height': 297}, 'unit': 'mm', 'pagesize': A4},
    'Letter': {'page': {'width': 8.5, 'height': 11}, 'unit': 'in', 'pagesize': LETTER},
}
DEFAULT_PAGE_FORMAT = 'A4'

TOTAL_BACKGROUND = '#ebf4ff'
BORDER_COLOR = '#dcdee0'
TEXT_COLOR = '#313233'


@dataclass
class InvoicePage:
    number: int
    attachments: List[Attachment]
    is_first: bool
    is_last: bool


def get_page_height(page_format: str) -> str:
    dimensions = PAGE_FORMATS[page_format]
    return f"{dimensions['page']['height']}{dimensions['unit']}"


def build_invoice_pages(expense: Expense) -> List[InvoicePage]:
    chunks = chunk_expense_attachments(expense)
    return [
        InvoicePage(number=index, attachments=attachments, is_first=index == 0, is_last=index == len(chunks) - 1)
        for index, attachments in enumerate(chunks)
    ]


def _long_date(value) -> str:
    return f'{value:%B} {value.day}, {value.year}'


def _full_date(value) -> str:
    return f'{value:%A}, {_long_date(value)}'


def invoice_date_label(expense: Expense) -> Optional[str]:
    if not expense.attachments:
        return None
    dates = [attachment.incurred_at for attachment in expense.attachments]
    date_from, date_to = min(dates), max(dates)
    if date_from.date() == date_to.date():
        return f'Date: {_full_date(date_from)}'
    return f'From {_long_date(date_from)} to {_long_date(date_to)}'


def profile_url(website_url: str, account) -> str:
    return f"{website_url.rstrip('/')}/{account.slug}"


def expense_title(expense: Expense) -> str:
    return f'Expense #{expense.legacy_id}: {expense.description}'


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------


def _styles() -> StyleSheet1:
    styles = StyleSheet1()
    styles.add(ParagraphStyle(name='Heading', fontName='Helvetica-Bold', fontSize=14, leading=18,
                              textColor=TEXT_COLOR, spaceAfter=4))
    styles.add(ParagraphStyle(name='Lead', fontName='Helvetica-Bold', fontSize=12, leading=16,
                              textColor=colors.black, spaceAfter=2))
    styles.add(ParagraphStyle(name='Body', fontName='Helvetica', fontSize=10, leading=13,
                              textColor=TEXT_COLOR))
    styles.add(ParagraphStyle(name='InvoiceInfo', parent=styles['Body'], fontName='Helvetica-Oblique',
                              alignment=2))
    return styles


def _multiline(text: Optional[str]) -> str:
    return '<br/>'.join(escape(line) for line in (text or '').splitlines())


def _party(label: str, account, website_url: str, styles, with_link: bool = False) -> list:
    flowables = [Paragraph(label, styles['Heading'])]
    if account is None:
        return flowables
    flowables.append(Paragraph(escape(account.name), styles['Lead']))
    if account.address:
        flowables.append(Paragraph(_multiline(account.address), styles['Body']))
    if account.country:
        flowables.append(Paragraph(escape(account.country), styles['Body']))
    if with_link:
        url = escape(profile_url(website_url, account))
        flowables.append(Paragraph(f'<link href="{url}">{url}</link>', styles['Body']))
    return flowables


def _header(expense: Expense, website_url: str, styles, doc_width: float) -> list:
    parties = Table(
        [[_party('From', expense.payee, website_url, styles),
          _party('Bill to', expense.account, website_url, styles, with_link=True)]],
        colWidths=[doc_width * 0.5, doc_width * 0.5],
        hAlign='LEFT',
    )
    parties.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
    ]))
    flowables = [parties, Spacer(1, 8 * mm), Paragraph(escape(expense_title(expense)), styles['Heading'])]
    date_label = invoice_date_label(expense)
    if date_label:
        flowables.append(Paragraph(escape(date_label), styles['Body']))
    flowables.append(Spacer(1, 6 * mm))
    return flowables


def _attachments_table(expense: Expense, attachments: List[Attachment], styles, doc_width: float) -> Table:
    rows = [['Date', 'Description', 'Amount']]
    for attachment in attachments:
        rows.append([
            attachment.incurred_at.strftime('%Y-%m-%d'),
            Paragraph(escape(attachment.description), styles['Body']),
            format_currency(attachment.amount, expense.currency),
        ])
    table = Table(rows, colWidths=[doc_width * 0.2, doc_width * 0.55, doc_width * 0.25],
                  hAlign='LEFT', repeatRows=1)
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('LINEBELOW', (0, 0), (-1, -1), 0.5, colors.HexColor(BORDER_COLOR)),
        ('ALIGN', (2, 0), (2, -1), 'RIGHT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    return table


def _total(expense: Expense, styles, doc_width: float) -> list:
    total = Table([['TOTAL', format_currency(expense.amount, expense.currency)]],
                  colWidths=[doc_width * 0.25, doc_width * 0.25], hAlign='RIGHT')
    total.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor(TOTAL_BACKGROUND)),
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
        ('ALIGN', (1, 0), (1, 0), 'RIGHT'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    flowables = [Spacer(1, 4 * mm), total]
    if expense.invoice_info:
        flowables.extend([Spacer(1, 12 * mm), Paragraph(_multiline(expense.invoice_info), styles['InvoiceInfo'])])
    return flowables


def render_invoice_pdf(expense: Expense, page_format: str = DEFAULT_PAGE_FORMAT,
                       website_url: str = 'https://opencollective.com') -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_FORMATS[page_format]['pagesize'],
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        title=expense_title(expense),
    )
    styles = _styles()
    story = []
    for page in build_invoice_pages(expense):
        if page.is_first:
            story.extend(_header(expense, website_url, styles, doc.width))
        story.append(_attachments_table(expense, page.attachments, styles, doc.width))
        if page.is_last:
            story.extend(_total(expense, styles, doc.width))
        else:
            story.append(PageBreak())
    doc.build(story)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def render_invoice_html(expense: Expense, page_format: str = DEFAULT_PAGE_FORMAT,
                        website_url: str = 'https://opencollective.com') -> str:
    """Needs an application context (Jinja environment of the Flask app)."""
    return render_template(
        'expense_invoice.html',
        expense=expense,
        pages=build_invoice_pages(expense),
        page_height=get_page_height(page_format),
        title=expense_title(expense),
        date_label=invoice_date_label(expense),
        payee_url=profile_url(website_url, expense.payee) if expense.payee else None,
        account_url=profile_url(website_url, expense.account) if expense.account else None,
        format_currency=format_currency,
    )
