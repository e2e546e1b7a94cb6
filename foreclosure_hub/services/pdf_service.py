"""
Timeline and sale-options PDFs, rendered with reportlab.
"""
from io import BytesIO
from html import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle,
    HRFlowable, KeepTogether, ListFlowable, ListItem
)

from foreclosure_hub.core.config import settings
from foreclosure_hub.services.sale_options_service import money

# ── Brand Colors ──────────────────────────────────────────────────────
TEAL = colors.HexColor("#0891B2")
GRAY = colors.HexColor("#4e4e4e")
LIGHT_GRAY = colors.HexColor("#f5f5f5")

URGENCY_COLORS = {
    "critical": "#991b1b",
    "warning": "#b45309",
    "safe": "#2d6a4f",
}

STATUS_LABELS = {"past": "Passed", "current": "Happening Now", "upcoming": "Upcoming"}


def build_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        'TimelineTitle', fontName='Helvetica-Bold', fontSize=22, leading=28,
        textColor=TEAL, alignment=TA_CENTER, spaceAfter=6
    ))
    styles.add(ParagraphStyle(
        'TimelineMeta', fontName='Helvetica', fontSize=11, leading=14,
        textColor=GRAY, alignment=TA_CENTER, spaceAfter=2
    ))
    styles.add(ParagraphStyle(
        'MilestoneHead', fontName='Helvetica-Bold', fontSize=13, leading=17,
        textColor=colors.black, spaceBefore=10, spaceAfter=4
    ))
    styles.add(ParagraphStyle(
        'MilestoneBody', fontName='Helvetica', fontSize=10, leading=13,
        textColor=GRAY, spaceAfter=4
    ))
    return styles


class PdfService:
    def render_timeline(self, notice_date, milestones: list[dict], days_left=None) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=letter,
            leftMargin=0.75 * inch, rightMargin=0.75 * inch,
            topMargin=0.75 * inch, bottomMargin=0.75 * inch,
            title="My Foreclosure Timeline",
        )
        styles = build_styles()

        story = [
            Paragraph("Your Personalized Foreclosure Timeline", styles['TimelineTitle']),
            Paragraph(f"Notice of Default: {notice_date.strftime('%B %d, %Y')}", styles['TimelineMeta']),
        ]
        if days_left is not None:
            story.append(Paragraph(f"Days until foreclosure sale: {days_left}", styles['TimelineMeta']))
        story += [Spacer(1, 12), HRFlowable(width="100%", color=TEAL, thickness=1.5), Spacer(1, 8)]

        summary = [["Day", "Date", "Milestone", "Status"]]
        for m in milestones:
            summary.append([
                str(m["days_from_notice"]),
                m["date"].strftime("%b %d, %Y"),
                Paragraph(escape(m["title"]), styles['MilestoneBody']),
                STATUS_LABELS.get(m["status"], m["status"]),
            ])
        table = Table(summary, colWidths=[0.6 * inch, 1.2 * inch, 3.6 * inch, 1.3 * inch])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), TEAL),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, LIGHT_GRAY]),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ]))
        story += [table, Spacer(1, 16)]

        for m in milestones:
            color = URGENCY_COLORS.get(m["urgency"], "#4e4e4e")
            head = Paragraph(
                f'<font color="{color}">•</font> {escape(m["title"])} '
                f'<font size="9" color="#999999">Day {m["days_from_notice"]} · {m["date"].strftime("%b %d, %Y")}</font>',
                styles['MilestoneHead'],
            )
            actions = ListFlowable(
                [ListItem(Paragraph(escape(a), styles['MilestoneBody'])) for a in m["action_items"]],
                bulletType='bullet', start='•', leftIndent=12,
            )
            story.append(KeepTogether([head, Paragraph(escape(m["description"]), styles['MilestoneBody']), actions]))

        story += [
            Spacer(1, 18),
            HRFlowable(width="100%", color=LIGHT_GRAY, thickness=1),
            Paragraph(
                f"Need help? EnterActDFW can provide a fair cash offer and close in as little as 7-10 days. "
                f"Call {settings.CONTACT_PHONE}.",
                styles['TimelineMeta'],
            ),
        ]

        doc.build(story)
        return buffer.getvalue()

    def render_comparison(self, details: dict, valuation: dict, comparison: dict, generated_at) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=letter,
            leftMargin=0.75 * inch, rightMargin=0.75 * inch,
            topMargin=0.75 * inch, bottomMargin=0.75 * inch,
            title="Property Sale Options Comparison",
        )
        styles = build_styles()

        address = details.get("property_address") or f"ZIP {details['zip_code']}"
        story = [
            Paragraph("Property Sale Options Comparison", styles['TimelineTitle']),
            Paragraph("EnterActDFW - Your Trusted Real Estate Partner", styles['TimelineMeta']),
            Paragraph(f"Generated: {generated_at.strftime('%B %d, %Y at %I:%M %p')}", styles['TimelineMeta']),
            Spacer(1, 12), HRFlowable(width="100%", color=TEAL, thickness=1.5), Spacer(1, 8),
            Paragraph("Property", styles['MilestoneHead']),
            Paragraph(
                f"{escape(address)}: {details['property_type'].replace('_', ' ').title()}, "
                f"{details['square_feet']:,} sq ft, {details['bedrooms']} bd / {details['bathrooms']} ba, "
                f"{details['condition']} condition",
                styles['MilestoneBody'],
            ),
            Paragraph(
                f"Estimated value: <b>{money(valuation['estimated_value'])}</b> "
                f"(range {money(valuation['valuation_range']['low'])} to {money(valuation['valuation_range']['high'])}, "
                f"{valuation['confidence']} confidence)",
                styles['MilestoneBody'],
            ),
            Paragraph(
                f"Mortgage balance: {money(comparison['mortgage_balance'])}. "
                f"Equity: {money(comparison['equity'])} ({comparison['equity_percentage']}%)",
                styles['MilestoneBody'],
            ),
            Spacer(1, 10),
        ]

        options = comparison["options"]
        rows = [[""] + [o["name"] + (" *" if o["recommended"] else "") for o in options]]
        rows += [
            ["Timeline"] + [o["timeline"] for o in options],
            ["Sale price"] + [money(o["gross_proceeds"]) for o in options],
            ["Agent commission"] + [money(o["costs"]["agent_commission"]) for o in options],
            ["Closing costs"] + [money(o["costs"]["closing_costs"]) for o in options],
            ["Repairs"] + [money(o["costs"]["repairs"]) for o in options],
            ["Net proceeds"] + [money(o["net_proceeds"]) for o in options],
        ]
        table = Table(rows, colWidths=[1.6 * inch] + [1.7 * inch] * len(options))
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), TEAL),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, LIGHT_GRAY]),
            ('GRID', (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ]))
        story += [table, Paragraph("* Recommended for your equity position", styles['MilestoneBody']), Spacer(1, 8)]

        for o in options:
            pros = ListFlowable(
                [ListItem(Paragraph(escape(p), styles['MilestoneBody'])) for p in o["pros"]],
                bulletType='bullet', start='+', leftIndent=12,
            )
            cons = ListFlowable(
                [ListItem(Paragraph(escape(c), styles['MilestoneBody'])) for c in o["cons"]],
                bulletType='bullet', start='-', leftIndent=12,
            )
            story.append(KeepTogether([
                Paragraph(escape(o["name"]), styles['MilestoneHead']),
                Paragraph(escape(o["description"]), styles['MilestoneBody']),
                pros, cons,
            ]))

        story += [
            Spacer(1, 18),
            HRFlowable(width="100%", color=LIGHT_GRAY, thickness=1),
            Paragraph(
                f"Estimates only, not an appraisal. Talk to EnterActDFW about your options: {settings.CONTACT_PHONE}.",
                styles['TimelineMeta'],
            ),
        ]

        doc.build(story)
        return buffer.getvalue()
