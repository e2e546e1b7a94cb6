"""
Foreclosure timeline calculator.

Every milestone is a fixed (offset, title, description, action items, urgency)
entry added to the Notice of Default date. Nothing here touches the database:
stored timelines keep only the seed date and are recomputed on every read.
"""
from datetime import date, timedelta
from typing import Optional

PAST = "past"
CURRENT = "current"
UPCOMING = "upcoming"

# A milestone stays "current" from its date until this many days before it
CURRENT_WINDOW_DAYS = 3

SALE_MILESTONE_ID = "foreclosure-sale"


# ---------------------------------------------------------
# MILESTONE TABLES
# (id, days_from_notice, title, description, action_items, urgency)
# ---------------------------------------------------------
_NOTICE_RECEIVED = (
    "notice-received", 0,
    "Notice of Default Received",
    "You received your first official notice that your mortgage is in default.",
    [
        "Read the entire notice carefully",
        "Note all important dates and deadlines",
        "Gather financial documents (pay stubs, bank statements, tax returns)",
        "Contact your mortgage servicer immediately",
    ],
    "warning",
)

_NOTICE_ACCELERATION = (
    "notice-acceleration", 75,
    "Notice of Acceleration (Approx. Day 60-90)",
    "Lender demands full loan balance be paid immediately.",
    [
        "Evaluate if you can pay off the loan or reinstate",
        "If not, seriously consider selling your home",
        "Contact EnterActDFW for a fast cash offer",
        "Explore short sale with your lender's approval",
    ],
    "critical",
)

_NOTICE_SALE_POSTED = (
    "notice-sale-posted", 105,
    "Notice of Sale Posted (Approx. Day 90-120)",
    "Property is officially posted for foreclosure auction (21 days' notice required in Texas).",
    [
        "You still have time to sell or reinstate",
        "Contact EnterActDFW for immediate cash offer (close in 7-10 days)",
        "File for bankruptcy only as last resort (consult attorney)",
        "Start planning for relocation if necessary",
    ],
    "critical",
)

_FORECLOSURE_SALE = (
    SALE_MILESTONE_ID, 126,
    "Foreclosure Sale Date (Approx. Day 120+)",
    "Property will be sold at public auction at the county courthouse.",
    [
        "Last chance to reinstate by paying past-due amounts",
        "Property sold to highest bidder at auction",
        "You may still be able to negotiate with new owner",
        "Prepare to vacate the property",
    ],
    "critical",
)

MILESTONE_TABLES = {
    # Embedded calculator on the guides
    "standard": [
        _NOTICE_RECEIVED,
        (
            "cure-period", 20,
            "20-Day Cure Period Ends",
            "This is your deadline to cure the default by paying all past-due amounts.",
            [
                "Pay all past-due amounts to reinstate loan",
                "Contact lender to confirm reinstatement amount",
                "If unable to pay, explore other options immediately",
                "Document all payments and communications",
            ],
            "critical",
        ),
        _NOTICE_ACCELERATION,
        _NOTICE_SALE_POSTED,
        _FORECLOSURE_SALE,
    ],
    # Stand-alone calculator page
    "detailed": [
        _NOTICE_RECEIVED,
        (
            "contact-lender", 7,
            "Contact Your Lender (Days 1-7)",
            "Critical window to discuss options with your mortgage servicer.",
            [
                "Call your servicer's loss mitigation department",
                "Ask about forbearance and loan modification programs",
                "Request a repayment plan if you can catch up",
                "Document all conversations (date, time, representative name)",
            ],
            "critical",
        ),
        (
            "seek-counseling", 14,
            "Seek Professional Help (Days 7-14)",
            "Get free advice from HUD-approved housing counselors.",
            [
                "Contact HUD-approved housing counselor (1-800-569-4287)",
                "Consult with a foreclosure attorney",
                "Review all your options (modification, short sale, cash sale)",
                "Create a hardship letter explaining your situation",
            ],
            "warning",
        ),
        (
            "apply-assistance", 30,
            "Apply for Loss Mitigation (Days 14-30)",
            "Submit applications for loan modification or other assistance programs.",
            [
                "Complete loss mitigation application",
                "Submit all required financial documents",
                "Follow up weekly on application status",
                "Consider backup options if application is denied",
            ],
            "warning",
        ),
        _NOTICE_ACCELERATION,
        _NOTICE_SALE_POSTED,
        _FORECLOSURE_SALE,
    ],
}

VARIANTS = tuple(MILESTONE_TABLES)
DEFAULT_VARIANT = "standard"


class UnknownVariantError(ValueError):
    pass


def classify_status(milestone_date: date, today: date) -> str:
    days_until = (milestone_date - today).days
    if days_until < 0:
        return PAST
    if days_until <= CURRENT_WINDOW_DAYS:
        return CURRENT
    return UPCOMING


def generate_timeline(notice_date: date, variant: str = DEFAULT_VARIANT, today: Optional[date] = None) -> list[dict]:
    """
    Builds the milestone list for a Notice of Default date.

    Milestones come back in ascending offset order; each date is the notice
    date plus its fixed offset, and status is judged against `today`
    (defaults to the current date).
    """
    if variant not in MILESTONE_TABLES:
        raise UnknownVariantError(f"Unknown timeline variant: {variant}")

    today = today or date.today()
    milestones = []
    for milestone_id, offset, title, description, actions, urgency in MILESTONE_TABLES[variant]:
        milestone_date = notice_date + timedelta(days=offset)
        milestones.append({
            "id": milestone_id,
            "title": title,
            "date": milestone_date,
            "days_from_notice": offset,
            "description": description,
            "action_items": list(actions),
            "urgency": urgency,
            "status": classify_status(milestone_date, today),
        })
    return milestones


def days_until_sale(milestones: list[dict], today: Optional[date] = None) -> Optional[int]:
    today = today or date.today()
    for m in milestones:
        if m["id"] == SALE_MILESTONE_ID:
            return (m["date"] - today).days
    return None


def urgency_alert(days_left: int, phone: str) -> dict:
    if days_left > 60:
        return {
            "level": "time_to_act",
            "message": f"You have time to act. You have approximately {days_left} days until the foreclosure sale. "
                       "Use this time wisely to explore all your options and take action.",
        }
    if days_left > 30:
        return {
            "level": "running_out",
            "message": f"Time is running out. You have approximately {days_left} days until the foreclosure sale. "
                       "Contact us immediately for a fast cash offer.",
        }
    if days_left > 0:
        return {
            "level": "urgent",
            "message": f"URGENT: Act now! You have only {days_left} days until the foreclosure sale. "
                       f"Call us today at {phone} for immediate assistance.",
        }
    return {
        "level": "critical",
        "message": "CRITICAL: Your foreclosure sale date has passed or is imminent. "
                   f"Contact us immediately at {phone}.",
    }


# ---------------------------------------------------------
# PROGRESS MERGE
# ---------------------------------------------------------
def progress_key(milestone_id: str, action_index: int) -> str:
    return f"{milestone_id}-{action_index}"


def summarize_progress(milestones: list[dict], completed: dict[str, bool]) -> dict:
    """Counts completed action items. Stale keys from other variants are ignored."""
    total = 0
    done = 0
    progress_map = {}
    for m in milestones:
        for index, _ in enumerate(m["action_items"]):
            key = progress_key(m["id"], index)
            total += 1
            is_done = bool(completed.get(key))
            progress_map[key] = is_done
            if is_done:
                done += 1

    return {
        "total_actions": total,
        "completed_actions": done,
        "completion_percentage": round(done / total * 100) if total else 0,
        "progress_map": progress_map,
    }


def build_recommendations(
    milestones: Optional[list[dict]],
    completed: dict[str, bool],
    notice_date: Optional[date],
    phone: str,
    today: Optional[date] = None,
) -> list[dict]:
    if milestones is None:
        return [{
            "id": "create-timeline",
            "title": "Create Your Timeline",
            "description": "Start by calculating your personalized foreclosure timeline to understand your key deadlines.",
            "priority": "high",
            "action_url": "/knowledge-base/notice-of-default",
            "action_text": "Calculate Timeline",
        }]

    today = today or date.today()
    recommendations = []

    current = next((m for m in milestones if m["status"] == CURRENT), None)
    upcoming = [m for m in milestones if m["status"] == UPCOMING]

    if current:
        remaining = [
            i for i, _ in enumerate(current["action_items"])
            if not completed.get(progress_key(current["id"], i))
        ]
        if remaining:
            n = len(remaining)
            recommendations.append({
                "id": "complete-current-milestone",
                "title": f"Complete {current['title']}",
                "description": f"You have {n} action{'s' if n > 1 else ''} remaining for this critical milestone. "
                               "Time is running out!",
                "priority": "high",
                "action_url": "/my-timeline",
                "action_text": "View Actions",
            })

    if upcoming:
        nxt = upcoming[0]
        days_away = (nxt["date"] - today).days
        if days_away <= 7:
            recommendations.append({
                "id": "prepare-next-milestone",
                "title": f"Prepare for {nxt['title']}",
                "description": f"This milestone is {days_away} day{'' if days_away == 1 else 's'} away. "
                               "Start preparing now to stay ahead.",
                "priority": "high",
                "action_url": "/my-timeline",
                "action_text": "Review Timeline",
            })

    if notice_date and (today - notice_date).days > 15:
        recommendations.append({
            "id": "contact-specialist",
            "title": "Speak with a Foreclosure Specialist",
            "description": "You're approaching critical deadlines. Get personalized guidance from our team "
                           "to explore all your options.",
            "priority": "high",
            "action_url": "tel:" + "".join(c for c in phone if c.isdigit()),
            "action_text": "Call Now",
        })

    recommendations.append({
        "id": "explore-resources",
        "title": "Learn About Your Options",
        "description": "Read our comprehensive guides to understand loan modifications, short sales, "
                       "and other foreclosure alternatives.",
        "priority": "medium",
        "action_url": "/knowledge-base",
        "action_text": "Browse Guides",
    })

    return recommendations[:3]
