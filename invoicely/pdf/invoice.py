from __future__ import annotations

import logging

from fpdf import FPDF

from invoicely.constants import STATUS_LABELS
from invoicely.formatting import format_money, format_percentage, format_short_date
from invoicely.models import ZERO
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import DiscountType, Invoice, InvoiceTemplate
from invoicely.totals import invoice_totals, line_item_totals

logger = logging.getLogger(__name__)

FONT = "Helvetica"
WHITE = (255, 255, 255)
TEXT = (17, 24, 39)
MUTED = (107, 114, 128)
ROW_ALT = (249, 250, 251)
BORDER = (229, 231, 235)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    h = hex_color.lstrip("#")
    if len(h) != 6:
        h = "3B82F6"
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def _lighten(rgb: tuple[int, int, int], amount: int) -> tuple[int, int, int]:
    r, g, b = (min(255, c + amount) for c in rgb)
    return (r, g, b)


def _latin1(value: str) -> str:
    """Core PDF fonts only cover Latin-1; replace anything else."""
    return value.encode("latin-1", errors="replace").decode("latin-1")


class InvoicePDF:
    def generate(self, invoice: Invoice, client: Client, company: Company) -> bytes:
        self._primary = _hex_to_rgb(company.primary_color)
        self._primary_light = _lighten(self._primary, 190)
        self._currency = invoice.currency
        self._template = invoice.template

        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)
        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, invoice)
        self._draw_parties(pdf, page_w, company, client)
        self._draw_dates(pdf, page_w, invoice)
        self._draw_table(pdf, page_w, invoice)
        self._draw_summary(pdf, page_w, invoice)

        if company.has_bank_details:
            self._draw_bank_details(pdf, page_w, company)
        if invoice.notes:
            self._draw_notes(pdf, page_w, invoice.notes)

        self._draw_footer(pdf, page_w)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: invoice=%s items=%d template=%s size=%d bytes",
            invoice.invoice_number,
            len(invoice.items),
            invoice.template.value,
            len(output),
        )
        return output

    def _money(self, amount) -> str:
        return format_money(amount, self._currency, latin1=True)

    def _draw_header(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        x = pdf.l_margin
        y = pdf.get_y()
        status = STATUS_LABELS.get(invoice.status.value, invoice.status.value).upper()

        if self._template == InvoiceTemplate.MODERN:
            pdf.set_fill_color(*self._primary)
            pdf.rect(x, y, page_w, 34, "F")
            pdf.set_xy(x + 8, y + 7)
            pdf.set_text_color(*WHITE)
            pdf.set_font(FONT, "B", 24)
            pdf.cell(page_w / 2, 12, "INVOICE")
            pdf.set_font(FONT, "", 10)
            pdf.cell(page_w / 2 - 16, 12, f"Status: {status}", align="R", new_x="LMARGIN", new_y="NEXT")
            pdf.set_x(x + 8)
            pdf.set_font(FONT, "", 12)
            pdf.cell(0, 8, _latin1(f"#{invoice.invoice_number}"), new_x="LMARGIN", new_y="NEXT")
            pdf.set_y(y + 44)
            return

        title_color = self._primary if self._template == InvoiceTemplate.CLASSIC else TEXT
        pdf.set_text_color(*title_color)
        pdf.set_font(FONT, "B", 24)
        pdf.cell(0, 12, "INVOICE", new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "", 12)
        pdf.cell(0, 7, _latin1(f"#{invoice.invoice_number}"), new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*MUTED)
        pdf.set_font(FONT, "", 10)
        pdf.cell(0, 6, f"Status: {status}", new_x="LMARGIN", new_y="NEXT")

        if self._template == InvoiceTemplate.CLASSIC:
            pdf.ln(2)
            pdf.set_draw_color(*self._primary)
            pdf.set_line_width(0.8)
            line_y = pdf.get_y()
            pdf.line(x, line_y, x + page_w, line_y)
        pdf.ln(10)

    def _draw_block(self, pdf: FPDF, x: float, y: float, w: float, title: str, lines: list[str]) -> float:
        pdf.set_xy(x, y)
        pdf.set_font(FONT, "B", 11)
        pdf.set_text_color(*TEXT)
        pdf.cell(w, 7, title, new_x="LEFT", new_y="NEXT")
        pdf.set_font(FONT, "", 10)
        for line in lines:
            if not line:
                continue
            pdf.set_x(x)
            pdf.multi_cell(w, 5.5, _latin1(line), new_x="LEFT", new_y="NEXT")
        return pdf.get_y()

    def _draw_parties(self, pdf: FPDF, page_w: float, company: Company, client: Client) -> None:
        col_w = page_w / 2 - 5
        y = pdf.get_y()
        from_lines = [company.company_name, company.email, company.phone, company.address]
        if company.tax_id:
            from_lines.append(f"Tax ID: {company.tax_id}")
        to_lines = [client.name, client.email, client.phone, client.address]
        if client.tax_id:
            to_lines.append(f"Tax ID: {client.tax_id}")

        left_bottom = self._draw_block(pdf, pdf.l_margin, y, col_w, "From:", from_lines)
        right_bottom = self._draw_block(pdf, pdf.l_margin + col_w + 10, y, col_w, "Bill To:", to_lines)
        pdf.set_y(max(left_bottom, right_bottom) + 8)

    def _draw_dates(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        half = page_w / 2
        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "B", 10)
        pdf.cell(25, 7, "Issue Date:")
        pdf.set_font(FONT, "", 10)
        pdf.cell(half - 25, 7, format_short_date(invoice.issue_date))
        pdf.set_font(FONT, "B", 10)
        pdf.cell(25, 7, "Due Date:")
        pdf.set_font(FONT, "", 10)
        pdf.cell(half - 25, 7, format_short_date(invoice.due_date), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(8)

    def _draw_table(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        col_desc = page_w * 0.46
        col_qty = page_w * 0.10
        col_rate = page_w * 0.22
        col_amount = page_w * 0.22
        line_h = 9

        header_fill = self._primary if self._template == InvoiceTemplate.MODERN else (240, 240, 240)
        header_text = WHITE if self._template == InvoiceTemplate.MODERN else TEXT
        pdf.set_fill_color(*header_fill)
        pdf.set_text_color(*header_text)
        pdf.set_font(FONT, "B", 9)
        pdf.cell(col_desc, line_h, "  Description", fill=True)
        pdf.cell(col_qty, line_h, "Qty", fill=True, align="C")
        pdf.cell(col_rate, line_h, "Rate", fill=True, align="R")
        pdf.cell(col_amount, line_h, "Amount  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_text_color(*TEXT)
        for i, item in enumerate(invoice.items):
            line = line_item_totals(item)
            pdf.set_fill_color(*(ROW_ALT if i % 2 == 0 else WHITE))
            pdf.set_font(FONT, "", 9)
            pdf.cell(col_desc, line_h, _latin1(f"  {item.description}"), fill=True)
            pdf.cell(col_qty, line_h, str(item.quantity), fill=True, align="C")
            pdf.cell(col_rate, line_h, self._money(item.unit_price), fill=True, align="R")
            pdf.cell(col_amount, line_h, f"{self._money(line.line_total)}  ", fill=True, align="R",
                     new_x="LMARGIN", new_y="NEXT")

            adjustments = []
            if line.discount_amount:
                if item.discount_type == DiscountType.PERCENTAGE:
                    adjustments.append(f"Discount {format_percentage(item.discount)}")
                else:
                    adjustments.append(f"Discount {self._money(item.discount)}")
            if item.tax_rate:
                adjustments.append(f"Tax {format_percentage(item.tax_rate)}")
            if adjustments:
                pdf.set_font(FONT, "", 7)
                pdf.set_text_color(*MUTED)
                pdf.cell(0, 5, "    " + ", ".join(adjustments), new_x="LMARGIN", new_y="NEXT")
                pdf.set_text_color(*TEXT)

        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.3)
        y = pdf.get_y() + 2
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.set_y(y + 4)

    def _summary_row(self, pdf: FPDF, page_w: float, label: str, value: str, bold: bool = False) -> None:
        label_w = page_w * 0.70
        value_w = page_w * 0.30
        pdf.set_font(FONT, "B" if bold else "", 12 if bold else 10)
        pdf.cell(label_w, 7, label, align="R")
        pdf.cell(value_w, 7, value, align="R", new_x="LMARGIN", new_y="NEXT")

    def _draw_summary(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        totals = invoice_totals(invoice.items)
        pdf.set_text_color(*TEXT)
        self._summary_row(pdf, page_w, "Subtotal:", self._money(totals.subtotal))
        if totals.total_discount > ZERO:
            self._summary_row(pdf, page_w, "Discount:", f"-{self._money(totals.total_discount)}")
        if totals.total_tax > ZERO:
            self._summary_row(pdf, page_w, "Tax:", self._money(totals.total_tax))

        pdf.ln(1)
        y = pdf.get_y()
        pdf.set_draw_color(*BORDER)
        pdf.line(pdf.l_margin + page_w * 0.55, y, pdf.l_margin + page_w, y)
        pdf.ln(2)

        if self._template == InvoiceTemplate.MODERN:
            pdf.set_text_color(*self._primary)
        self._summary_row(pdf, page_w, "Total:", self._money(totals.total), bold=True)
        pdf.set_text_color(*TEXT)

        if invoice.payment_amount is not None:
            self._summary_row(pdf, page_w, "Amount Paid:", f"-{self._money(invoice.payment_amount)}")
            self._summary_row(
                pdf, page_w, "Balance Due:", self._money(totals.total - invoice.payment_amount), bold=True
            )

    def _draw_bank_details(self, pdf: FPDF, page_w: float, company: Company) -> None:
        pdf.ln(10)
        x = pdf.l_margin
        rows = [
            ("Bank Name:", company.bank_name),
            ("Account Number:", company.account_number),
            (f"{company.routing_code_label}:", company.routing_code),
            ("SWIFT/BIC Code:", company.swift_code),
        ]
        rows = [(label, value) for label, value in rows if value]
        box_h = 10 + 6 * len(rows)
        y = pdf.get_y()
        pdf.set_fill_color(*self._primary_light)
        pdf.rect(x, y, page_w, box_h, "F")
        pdf.set_xy(x + 6, y + 3)
        pdf.set_font(FONT, "B", 10)
        pdf.set_text_color(*TEXT)
        pdf.cell(0, 6, "Payment Details", new_x="LEFT", new_y="NEXT")
        for label, value in rows:
            pdf.set_x(x + 6)
            pdf.set_font(FONT, "", 9)
            pdf.set_text_color(*MUTED)
            pdf.cell(40, 6, label)
            pdf.set_text_color(*TEXT)
            pdf.cell(0, 6, _latin1(value), new_x="LEFT", new_y="NEXT")
        pdf.set_y(y + box_h)

    def _draw_notes(self, pdf: FPDF, page_w: float, notes: str) -> None:
        pdf.ln(10)
        if pdf.get_y() > 250:
            pdf.add_page()
        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "B", 10)
        pdf.cell(0, 6, "Notes:", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(FONT, "", 9)
        pdf.multi_cell(page_w, 5, _latin1(notes), new_x="LMARGIN", new_y="NEXT")

    def _draw_footer(self, pdf: FPDF, page_w: float) -> None:
        pdf.set_y(-25)
        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(4)
        pdf.set_font(FONT, "", 7)
        pdf.set_text_color(*MUTED)
        pdf.cell(0, 5, "Thank you for your business!", align="C")
