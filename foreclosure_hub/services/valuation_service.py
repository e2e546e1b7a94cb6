"""
DFW property value estimator.

Value = square feet x the ZIP code's price per square foot, adjusted for property
type, condition and the bedroom/bathroom count. Pure functions, no I/O.
"""
import math

# Approximate price per square foot by ZIP code
DFW_PRICE_PER_SQFT = {
    # Dallas, premium
    "75201": 350, "75202": 320, "75204": 280, "75205": 400, "75206": 350,
    "75209": 380, "75214": 300, "75218": 220, "75219": 320, "75225": 420,
    "75226": 250, "75230": 340, "75231": 280, "75235": 260, "75240": 300,

    # Dallas, mid-range
    "75115": 180, "75116": 170, "75134": 160, "75137": 150, "75141": 155,
    "75146": 165, "75149": 170, "75150": 175, "75154": 160, "75159": 165,
    "75180": 190, "75181": 185, "75182": 180, "75211": 160, "75212": 170,
    "75216": 175, "75217": 165, "75220": 200, "75223": 185, "75224": 170,
    "75227": 160, "75228": 175, "75232": 180, "75233": 165, "75234": 210,
    "75236": 170, "75237": 155, "75238": 195, "75241": 165, "75243": 200,
    "75244": 220, "75246": 210, "75247": 190, "75248": 230, "75249": 200,

    # Fort Worth
    "76001": 180, "76002": 175, "76006": 185, "76008": 170, "76010": 165,
    "76011": 175, "76012": 180, "76013": 185, "76014": 170, "76015": 175,
    "76016": 180, "76017": 190, "76018": 185, "76020": 165, "76021": 170,
    "76028": 175, "76034": 180, "76036": 175, "76039": 170, "76040": 185,
    "76051": 180, "76052": 175, "76053": 170, "76054": 190, "76058": 185,
    "76060": 175, "76063": 180, "76065": 175, "76092": 200, "76102": 220,
    "76103": 180, "76104": 170, "76105": 175, "76106": 180, "76107": 210,
    "76108": 185, "76109": 195, "76110": 175, "76111": 170, "76112": 165,
    "76114": 180, "76115": 175, "76116": 170, "76117": 185, "76118": 190,
    "76119": 165, "76120": 170, "76123": 185, "76126": 180, "76127": 190,
    "76131": 185, "76132": 180, "76133": 175, "76134": 170, "76135": 175,
    "76137": 195, "76140": 180, "76148": 200, "76155": 185, "76177": 190,
    "76179": 195, "76180": 200, "76182": 185,

    # Plano / Frisco / McKinney
    "75002": 280, "75023": 300, "75024": 320, "75025": 310, "75034": 290,
    "75035": 280, "75069": 310, "75070": 295, "75071": 285, "75072": 300,
    "75074": 290, "75075": 305, "75078": 295, "75093": 285, "75094": 300,

    # Irving / Carrollton / Farmers Branch
    "75006": 210, "75007": 215, "75010": 220, "75038": 205, "75039": 210,
    "75040": 215, "75041": 205, "75042": 210, "75043": 215, "75044": 220,
    "75050": 210, "75051": 205, "75056": 215, "75060": 210, "75061": 215,
    "75062": 220, "75063": 210, "75080": 215, "75081": 220, "75082": 210,

    # Arlington / Grand Prairie
    "75052": 185, "75054": 190,
}
DEFAULT_PRICE_PER_SQFT = 185

PROPERTY_TYPE_MULTIPLIERS = {
    "single_family": 1.0,
    "condo": 0.85,
    "townhouse": 0.90,
    "multi_family": 0.95,
}

CONDITION_MULTIPLIERS = {
    "excellent": 1.15,
    "good": 1.0,
    "fair": 0.90,
    "poor": 0.75,
}

# Flat adjustments per room above (or below) a 3 bed / 2 bath baseline
BASELINE_BEDROOMS = 3
BASELINE_BATHROOMS = 2
BEDROOM_VALUE = 15000
BATHROOM_VALUE = 8000

RANGE_LOW = 0.80
RANGE_HIGH = 1.20


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def confidence_level(zip_found: bool, condition: str, square_feet: int) -> str:
    if zip_found and condition != "poor" and 1000 <= square_feet <= 5000:
        return "high"
    if not zip_found or condition == "poor" or square_feet < 800 or square_feet > 6000:
        return "low"
    return "medium"


def estimate_value(zip_code: str, property_type: str, square_feet: int, bedrooms: int, bathrooms: int, condition: str):
    """Returns the estimate, a +/-20% range, the breakdown and a confidence level."""
    zip_found = zip_code in DFW_PRICE_PER_SQFT
    price_per_sqft = DFW_PRICE_PER_SQFT.get(zip_code, DEFAULT_PRICE_PER_SQFT)

    base_value = square_feet * price_per_sqft
    type_adjustment = base_value * (PROPERTY_TYPE_MULTIPLIERS[property_type] - 1)
    condition_adjustment = base_value * (CONDITION_MULTIPLIERS[condition] - 1)
    bedroom_adjustment = (bedrooms - BASELINE_BEDROOMS) * BEDROOM_VALUE
    bathroom_adjustment = (bathrooms - BASELINE_BATHROOMS) * BATHROOM_VALUE

    # Small homes with few rooms can adjust below zero
    estimated = max(0, round_half_up(
        base_value + type_adjustment + condition_adjustment + bedroom_adjustment + bathroom_adjustment
    ))

    return {
        "estimated_value": estimated,
        "valuation_range": {
            "low": round_half_up(estimated * RANGE_LOW),
            "mid": estimated,
            "high": round_half_up(estimated * RANGE_HIGH),
        },
        "price_per_sqft": price_per_sqft,
        "breakdown": {
            "base_value": round_half_up(base_value),
            "type_adjustment": round_half_up(type_adjustment),
            "condition_adjustment": round_half_up(condition_adjustment),
            "bedroom_adjustment": bedroom_adjustment,
            "bathroom_adjustment": bathroom_adjustment,
        },
        "confidence": confidence_level(zip_found, condition, square_feet),
        "zip_code_found": zip_found,
    }
