"""
Sale options comparison: traditional listing vs. EnterActDFW cash offer vs. short sale.

Each option applies a fixed sale-price factor and cost rates to the property
value. Exactly one option is recommended, picked by the equity percentage.
"""
TRADITIONAL = "traditional"
CASH_OFFER = "cash_offer"
SHORT_SALE = "short_sale"

# Equity percentage bands
TRADITIONAL_MIN_EQUITY_PCT = 20  # above this: traditional
CASH_OFFER_MIN_EQUITY_PCT = 5    # from this up to 20 inclusive: cash offer; below: short sale


# ---------------------------------------------------------
# OPTION TABLE
# ---------------------------------------------------------
# price_factor: share of market value the sale brings in.
# Cost rates are fractions of that sale price.
OPTIONS = [
    {
        "type": TRADITIONAL,
        "name": "Traditional Sale",
        "timeline": "60-90 days",
        "timeline_days": 75,
        "price_factor": 1.0,
        "commission_rate": 0.06,
        "closing_rate": 0.03,
        "repairs_rate": 0.05,
        "pros": [
            "Highest potential sale price",
            "Market-rate value",
            "Multiple buyer competition",
            "Standard process",
        ],
        "cons": [
            "Longest timeline (60-90 days)",
            "High costs (14% of value)",
            "Requires repairs and staging",
            "Showings and open houses",
            "Deal may fall through",
        ],
        "description": "List with a real estate agent on the open market for maximum value.",
    },
    {
        "type": CASH_OFFER,
        "name": "Cash Offer (EnterActDFW)",
        "timeline": "7-10 days",
        "timeline_days": 8,
        "price_factor": 0.85,
        "commission_rate": 0.0,
        "closing_rate": 0.02,
        "repairs_rate": 0.0,
        "pros": [
            "Fastest option (7-10 days)",
            "No repairs needed",
            "No showings or staging",
            "Guaranteed close",
            "Avoid foreclosure quickly",
            "Minimal closing costs",
        ],
        "cons": [
            "Lower sale price (85% of value)",
            "Less than market value",
        ],
        "description": "Sell directly to EnterActDFW for a fast, guaranteed cash offer with no repairs.",
    },
    {
        "type": SHORT_SALE,
        "name": "Short Sale",
        "timeline": "90-180 days",
        "timeline_days": 135,
        "price_factor": 0.75,
        "commission_rate": 0.06,
        "closing_rate": 0.02,
        "repairs_rate": 0.0,
        "pros": [
            "Avoid foreclosure",
            "Less credit damage than foreclosure",
            "Lender forgives remaining balance",
            "Sold as-is (no repairs)",
        ],
        "cons": [
            "Longest timeline (90-180 days)",
            "Requires lender approval",
            "Below market value (75%)",
            "Complex negotiation process",
            "May still owe deficiency",
            "Credit score impact",
        ],
        "description": "Sell for less than owed with lender approval to avoid foreclosure.",
    },
]


def recommended_option(equity_percentage: float) -> str:
    if equity_percentage > TRADITIONAL_MIN_EQUITY_PCT:
        return TRADITIONAL
    if equity_percentage >= CASH_OFFER_MIN_EQUITY_PCT:
        return CASH_OFFER
    return SHORT_SALE


def _cents(value: float) -> float:
    return round(value, 2)


def _build_option(option: dict, property_value: float, mortgage_balance: float, recommended: str) -> dict:
    gross = property_value * option["price_factor"]
    commission = gross * option["commission_rate"]
    closing = gross * option["closing_rate"]
    repairs = gross * option["repairs_rate"]
    total = commission + closing + repairs
    return {
        "type": option["type"],
        "name": option["name"],
        "timeline": option["timeline"],
        "timeline_days": option["timeline_days"],
        "gross_proceeds": _cents(gross),
        "costs": {
            "agent_commission": _cents(commission),
            "closing_costs": _cents(closing),
            "repairs": _cents(repairs),
            "total": _cents(total),
        },
        "net_proceeds": _cents(gross - mortgage_balance - total),
        "pros": list(option["pros"]),
        "cons": list(option["cons"]),
        "recommended": option["type"] == recommended,
        "description": option["description"],
    }


def compare_sale_options(property_value: float, mortgage_balance: float) -> dict:
    if property_value <= 0:
        raise ValueError("Property value must be greater than zero")

    equity = property_value - mortgage_balance
    equity_percentage = equity / property_value * 100
    recommended = recommended_option(equity_percentage)

    return {
        "property_value": property_value,
        "mortgage_balance": mortgage_balance,
        "equity": equity,
        "equity_percentage": round(equity_percentage, 1),
        "recommended": recommended,
        "options": [_build_option(option, property_value, mortgage_balance, recommended) for option in OPTIONS],
    }


def money(amount) -> str:
    """Whole-dollar display, e.g. -$12,500."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"
