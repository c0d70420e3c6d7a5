"""Deal summary and lease disclosure documents."""
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from leasedesk.models import DealCalculation, PaymentFrequency, ValidationResult
from leasedesk.utils import format_currency, format_percent
from leasedesk.version import DISCLAIMER

_GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _errors(validation) -> List[Dict[str, Any]]:
    if validation is None:
        return []
    if isinstance(validation, ValidationResult):
        return [e.model_dump(mode="json", by_alias=True) for e in validation.errors]
    return list(validation.get("errors", []))


def build_deal_summary(data: Dict[str, Any]) -> bytes:
    """Plain-text deal summary for the deal jacket.

    ``data`` carries ``calculation`` (a :class:`DealCalculation`),
    ``validation``, ``checklist`` and ``override_reason``. A deal that fails
    validation can only be exported with an ``override_reason``, which is
    printed with the errors it overrides.
    """

    errors = _errors(data.get("validation"))
    override_reason = data.get("override_reason")
    if errors and not override_reason:
        raise ValueError("override_reason required when the deal fails validation")

    lines = []
    calc: Optional[DealCalculation] = data.get("calculation")
    if calc is not None:
        lines.append(f"Lease Summary ({calc.term_months} months, {calc.payment_frequency_label}):")
        lines.append(f"Agreed Price: {format_currency(calc.agreed_price)}")
        lines.append(f"Residual Value: {format_currency(calc.residual_value)}")
        lines.append(f"Base Payment: {format_currency(calc.base_payment)}")
        lines.append(f"Total Payment: {format_currency(calc.total_payment)}")
        lines.append(f"Amount Due at Signing: {format_currency(calc.amount_due_at_signing)}")

    checklist = data.get("checklist", [])
    lines.append("Stip Checklist:")
    for item in checklist:
        box = "[x]" if item.get("checked") else "[ ]"
        lines.append(f"{box} {item.get('label', '')}")

    if errors:
        lines.append("Validation Errors:")
        for e in errors:
            lines.append(f"{e.get('field', '')}: {e.get('message', '')}")

    if override_reason:
        lines.append(f"Override Reason: {override_reason}")

    lines.append(f"Disclaimer: {DISCLAIMER}")
    return "\n".join(lines).encode()


def _frequency_boxes(freq: PaymentFrequency) -> str:
    marks = []
    for f in (PaymentFrequency.MONTHLY, PaymentFrequency.BIWEEKLY, PaymentFrequency.WEEKLY):
        marks.append(f"{'[X]' if f is freq else '[ ]'} {f.label}")
    return "    ".join(marks)


def _letterhead(calc: DealCalculation, branding: Dict[str, str], contract_date: Optional[date], styles) -> list:
    """Title block: lease title, the dealer profile when set, date and state."""
    story = [
        Paragraph("<b>Motor Vehicle Lease Agreement</b>", styles["Title"]),
        Paragraph("CLOSED END", styles["Normal"]),
        Spacer(1, 6),
    ]
    if branding.get("dealer"):
        story.append(Paragraph(f"Lessor: {escape(branding['dealer'])}", styles["Normal"]))
    if branding.get("address"):
        lines = [escape(line.strip()) for line in branding["address"].splitlines() if line.strip()]
        story.append(Paragraph("<br/>".join(lines), styles["Normal"]))
    signed = (contract_date or date.today()).strftime("%m/%d/%Y")
    story += [Paragraph(f"Date: {signed}  |  State: {calc.jurisdiction.value}", styles["Normal"]), Spacer(1, 12)]
    return story


def build_disclosure_pdf(
    calc: DealCalculation,
    branding: Optional[Dict[str, str]] = None,
    validation: Optional[ValidationResult] = None,
    checklist: Optional[List[Dict]] = None,
    contract_date: Optional[date] = None,
) -> bytes:
    """Closed-end lease disclosure as PDF bytes."""
    branding = branding or {}
    styles = getSampleStyleSheet()
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = _letterhead(calc, branding, contract_date, styles)

    story += [
        Paragraph("<b>Federal Consumer Leasing Act Disclosures</b>", styles["Heading3"]),
        Paragraph(f"Payment schedule: {_frequency_boxes(calc.payment_frequency)}", styles["Normal"]),
        Spacer(1, 6),
    ]
    boxes = Table(
        [
            ["Amount Due at Lease Signing", f"{calc.payment_frequency_label} Payments", "Total of Payments"],
            [
                format_currency(calc.amount_due_at_signing),
                f"{calc.number_of_payments} x {format_currency(calc.total_payment)}",
                format_currency(calc.total_of_payments),
            ],
        ],
        hAlign="LEFT",
        colWidths=[180, 170, 170],
    )
    boxes.setStyle(_GRID)
    story += [boxes, Spacer(1, 12)]

    signing = Table(
        [
            ["Amount Due at Signing", ""],
            ["Capitalized cost reduction", format_currency(calc.cap_cost_reduction)],
            ["First payment", format_currency(calc.total_payment)],
            ["Doc fee", format_currency(calc.doc_fee)],
            ["Total", format_currency(calc.amount_due_at_signing)],
        ],
        hAlign="LEFT",
        colWidths=[300, 220],
    )
    signing.setStyle(_GRID)
    story += [signing, Spacer(1, 12)]

    payment = Table(
        [
            ["Your Payment Is Determined As Shown Below", ""],
            ["Agreed price", format_currency(calc.agreed_price)],
            ["Sales tax on price", format_currency(calc.sales_tax_on_price)],
            ["Gross capitalized cost", format_currency(calc.gross_cap_cost)],
            ["Capitalized cost reduction", format_currency(calc.cap_cost_reduction)],
            ["Adjusted capitalized cost", format_currency(calc.adjusted_cap_cost)],
            ["Residual value", format_currency(calc.residual_value)],
            ["Depreciation and amortized amounts", format_currency(calc.depreciation)],
            ["Rent charge", format_currency(calc.rent_charge)],
            ["Total of base payments", format_currency(calc.total_of_base_payments)],
            ["Lease payments", str(calc.number_of_payments)],
            ["Base payment", format_currency(calc.base_payment)],
            [f"Sales/use tax ({format_percent(calc.tax_rate)})", format_currency(calc.tax_per_payment)],
            ["Total payment", format_currency(calc.total_payment)],
        ],
        hAlign="LEFT",
        colWidths=[300, 220],
    )
    payment.setStyle(_GRID)
    story += [payment, Spacer(1, 12)]

    story += [
        Paragraph("<b>Purchase Option at End of Lease Term</b>", styles["Heading3"]),
        Paragraph(
            f"You may purchase the vehicle at the end of the lease for the residual value of "
            f"{format_currency(calc.residual_value)} plus a purchase option fee, for a total of "
            f"{format_currency(calc.purchase_option_price)}.",
            styles["Normal"],
        ),
        Spacer(1, 12),
    ]

    errors = _errors(validation)
    if errors:
        rows = [["Field", "Message"]] + [[e.get("field", ""), e.get("message", "")] for e in errors]
        t = Table(rows, hAlign="LEFT", colWidths=[120, 400])
        t.setStyle(_GRID)
        story += [Paragraph("<b>Program Exceptions</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]
    if checklist:
        rows = [["Stip", "Status"]] + [[c["label"], "Received" if c.get("checked") else "Missing"] for c in checklist]
        t = Table(rows, hAlign="LEFT", colWidths=[360, 160])
        t.setStyle(_GRID)
        story += [Paragraph("<b>Stip Checklist</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()
