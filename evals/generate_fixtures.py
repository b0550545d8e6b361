"""PDF fixture generator for evaluation scenarios.

Generates rate confirmation PDFs using reportlab. Each PDF has a companion
JSON file with the FormState values a correct extraction should produce.

Usage:
    python -m evals.generate_fixtures
"""
import json
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import PageBreak, SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle


FIXTURES_DIR = Path("evals/fixtures")

FIXTURE_CONFIGS = [
    # ── Happy path: single page ──
    {
        "id": "single_01",
        "category": "happy_path",
        "broker": "Summit Freight Brokerage LLC",
        "header": {
            "Load #": "SFB-448120",
            "Equipment": "53' Dry Van",
            "Commodity": "Paper goods",
            "Weight": "42,500 lbs",
            "Total Rate": "$2,450.00 USD",
            "Miles": "612",
        },
        "stops": [
            {
                "label": "Pickup 1",
                "company": "Hollister Paper Mill",
                "address": "100 Main St, Hollister, CA 95023",
                "when": "2025-03-04 08:00",
                "contact": "Dana Ruiz, (831) 555-0142",
            },
            {
                "label": "Delivery 1",
                "company": "Pacific Office Supply DC",
                "address": "2200 Harbor Blvd, Reno, NV 89502",
                "when": "2025-03-05 14:00",
                "contact": "Lee Tran, (775) 555-0190",
            },
        ],
        "remit_to": "Summit Freight Brokerage, PO Box 1180, Dallas, TX 75201",
        "expected": {
            "reference": "SFB-448120",
            "origin_city": "Hollister",
            "origin_state": "CA",
            "destination_city": "Reno",
            "destination_state": "NV",
            "pickup_date": "2025-03-04",
            "delivery_date": "2025-03-05",
            "equipment_type": "Dry Van",
            "weight_lbs": "42500",
            "rate": "2450.00",
            "miles": "612",
            "commodity": "Paper goods",
            "broker_customer": "Summit Freight Brokerage LLC",
        },
    },
    {
        "id": "single_02",
        "category": "happy_path",
        "broker": "Northline Logistics Inc.",
        "header": {
            "Reference": "NL-20931",
            "Equipment": "Reefer 53ft",
            "Temperature": "34F continuous",
            "Commodity": "Fresh produce",
            "Weight": "38000 lb",
            "Rate": "$3,100",
        },
        "stops": [
            {
                "label": "Shipper",
                "company": "Salinas Valley Growers",
                "address": "45 Abbott St, Salinas, CA 93901",
                "when": "2025-04-10 06:30",
                "contact": "Maria Lopez, (831) 555-0111",
            },
            {
                "label": "Consignee",
                "company": "Denver Fresh Market",
                "address": "8800 Smith Rd, Denver, CO 80207",
                "when": "2025-04-12 09:00",
                "contact": "Sam Ortiz, (303) 555-0177",
            },
        ],
        "remit_to": "Northline Logistics, 77 Commerce Way, Chicago, IL 60607",
        "expected": {
            "reference": "NL-20931",
            "origin_city": "Salinas",
            "origin_state": "CA",
            "destination_city": "Denver",
            "destination_state": "CO",
            "pickup_date": "2025-04-10",
            "delivery_date": "2025-04-12",
            "equipment_type": "Reefer",
            "weight_lbs": "38000",
            "rate": "3100",
            "commodity": "Fresh produce",
        },
    },
    # ── Multi-page: delivery details on page 2 ──
    {
        "id": "multi_01",
        "category": "multi_page",
        "broker": "Crossroads Transport Brokers",
        "header": {
            "Load Number": "CTB-7781",
            "Equipment": "Flatbed 48'",
            "Commodity": "Steel coils",
            "Weight": "44,000 lbs",
            "Line Haul": "$1,875.00",
        },
        "stops": [
            {
                "label": "Pickup",
                "company": "Gary Steel Works",
                "address": "1 Mill Rd, Gary, IN 46402",
                "when": "2025-05-02 07:00",
                "contact": "Pat Kim, (219) 555-0101",
            },
            {
                "label": "Delivery",
                "company": "Memphis Fabrication",
                "address": "3400 Lamar Ave, Memphis, TN 38118",
                "when": "2025-05-03 13:00",
                "contact": "Jo Bell, (901) 555-0133",
                "page_break_before": True,
            },
        ],
        "remit_to": "Crossroads Transport, 900 Elm St, Atlanta, GA 30303",
        "expected": {
            "reference": "CTB-7781",
            "origin_city": "Gary",
            "origin_state": "IN",
            "destination_city": "Memphis",
            "destination_state": "TN",
            "pickup_date": "2025-05-02",
            "delivery_date": "2025-05-03",
            "equipment_type": "Flatbed",
            "weight_lbs": "44000",
            "rate": "1875.00",
        },
    },
    # ── Not a rate confirmation ──
    {
        "id": "not_ratecon_01",
        "category": "not_a_ratecon",
        "title": "Quarterly Newsletter",
        "body_text": (
            "Welcome to our spring update.\n\n"
            "This quarter we opened a new terminal and hired twelve drivers.\n"
            "Thank you for riding with us."
        ),
    },
]


def _styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("RCTitle", parent=styles["Title"], fontSize=18, spaceAfter=12),
        "heading": ParagraphStyle("RCHeading", parent=styles["Heading3"], spaceBefore=10, spaceAfter=6),
        "body": ParagraphStyle("RCBody", parent=styles["Normal"], fontSize=10, leading=14),
        "footer": ParagraphStyle("RCFooter", parent=styles["Normal"], fontSize=8, textColor=colors.grey),
    }


def _table(rows: list[list[str]]) -> Table:
    table = Table(rows, colWidths=[4.5 * cm, 12 * cm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#e8e8e8")),
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTNAME", (1, 0), (1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
    ]))
    return table


def build_ratecon_pdf(path: Path, config: dict) -> None:
    """Generate a broker rate confirmation with a header table and one block per stop."""
    doc = SimpleDocTemplate(str(path), pagesize=LETTER, topMargin=2 * cm, bottomMargin=2 * cm)
    styles = _styles()
    elements = [
        Paragraph(f"{config['broker']}: Carrier Rate Confirmation", styles["title"]),
        _table([[label, value] for label, value in config["header"].items()]),
    ]

    for stop in config["stops"]:
        if stop.get("page_break_before"):
            elements.append(PageBreak())
        elements.append(Paragraph(stop["label"], styles["heading"]))
        elements.append(_table([
            ["Facility", stop["company"]],
            ["Address", stop["address"]],
            ["Appointment", stop["when"]],
            ["Contact", stop["contact"]],
        ]))

    elements.append(Spacer(1, 1 * cm))
    # Distractor: the remittance address must not become a pickup or delivery location.
    elements.append(Paragraph(f"<b>Remit payment to:</b> {config['remit_to']}", styles["body"]))
    elements.append(Spacer(1, 0.5 * cm))
    elements.append(Paragraph(
        "Carrier agrees to the rate above. Detention is billed after 2 free hours with signed BOL times.",
        styles["footer"],
    ))

    doc.build(elements)


def build_plain_pdf(path: Path, title: str, body_text: str) -> None:
    """Generate a document that is not a rate confirmation."""
    doc = SimpleDocTemplate(str(path), pagesize=LETTER, topMargin=2 * cm, bottomMargin=2 * cm)
    styles = _styles()
    elements = [Paragraph(title, styles["title"]), Spacer(1, 0.5 * cm)]

    for line in body_text.split("\n"):
        if line.strip():
            elements.append(Paragraph(line, styles["body"]))
        else:
            elements.append(Spacer(1, 0.3 * cm))

    doc.build(elements)


def generate_all():
    """Generate all PDF fixtures and companion JSON files."""
    count = 0
    for config in FIXTURE_CONFIGS:
        category_dir = FIXTURES_DIR / config["category"]
        category_dir.mkdir(parents=True, exist_ok=True)

        pdf_path = category_dir / f"{config['id']}.pdf"
        if "stops" in config:
            build_ratecon_pdf(pdf_path, config)
        else:
            build_plain_pdf(pdf_path, config["title"], config["body_text"])

        if "expected" in config:
            with open(category_dir / f"{config['id']}.json", "w") as f:
                json.dump(config["expected"], f, indent=2, ensure_ascii=False)

        count += 1
        print(f"  Generated: {config['category']}/{config['id']}.pdf")

    print(f"\nTotal: {count} fixtures generated in {FIXTURES_DIR}")


if __name__ == "__main__":
    generate_all()
