from .user import User
from .lead import Lead, LeadNote
from .cash_offer import CashOfferRequest
from .testimonial import Testimonial
from .timeline import UserTimeline, TimelineActionProgress
from .campaign import Campaign
from .link import ShortenedLink, LinkClick
from .ab_test import ABTest, ABTestVariant, ABTestAssignment, ABTestEvent
from .resource_download import ResourceDownload
from .email_message import EmailMessage
from .comparison import ComparisonHistory
from .property_value_lead import PropertyValueLead

__all__ = [
    "User",
    "Lead",
    "LeadNote",
    "CashOfferRequest",
    "Testimonial",
    "UserTimeline",
    "TimelineActionProgress",
    "Campaign",
    "ShortenedLink",
    "LinkClick",
    "ABTest",
    "ABTestVariant",
    "ABTestAssignment",
    "ABTestEvent",
    "ResourceDownload",
    "EmailMessage",
    "ComparisonHistory",
    "PropertyValueLead",
]
