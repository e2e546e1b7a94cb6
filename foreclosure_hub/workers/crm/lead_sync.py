import logging

from foreclosure_hub.core.database import SessionLocal
from foreclosure_hub.models.lead import Lead
from foreclosure_hub.models.cash_offer import CashOfferRequest
from foreclosure_hub.models.testimonial import Testimonial
from foreclosure_hub.models.resource_download import ResourceDownload
from foreclosure_hub.models.property_value_lead import PropertyValueLead
from foreclosure_hub.services.crm_service import CrmService
from foreclosure_hub.services.email_service import EmailService
from foreclosure_hub.services import template_service

logger = logging.getLogger(__name__)

# Each handler runs after the HTTP response (FastAPI BackgroundTasks) in its own
# session. Integration failures are logged; the stored submission is never rolled back.


def sync_lead(lead_id: int):
    db = SessionLocal()
    try:
        lead = db.query(Lead).filter(Lead.id == lead_id).first()
        if not lead:
            logger.warning(f"[LeadSync] Lead {lead_id} vanished before sync")
            return

        ok, result = CrmService().sync_lead(
            first_name=lead.first_name,
            email=lead.email,
            phone=lead.phone,
            property_zip=lead.property_zip,
            source=lead.source or "Website Form",
        )
        if ok:
            lead.crm_contact_id = result
            db.commit()
        else:
            logger.warning(f"[LeadSync] CRM sync failed for lead {lead_id}: {result}")

        emails = EmailService()
        subject, html = template_service.welcome_email(lead.first_name)
        emails.send_logged(db, "welcome", lead.email, subject, html)

        emails.notify_owner(
            db,
            f"New Foreclosure Lead: {lead.first_name}",
            f"Name: {lead.first_name}\nEmail: {lead.email}\nPhone: {lead.phone}\n"
            f"Property ZIP: {lead.property_zip}\nSMS Consent: {lead.sms_consent}\nSource: {lead.source}"
            + (f"\n\nMessage:\n{lead.notes}" if lead.notes else ""),
        )
        logger.info(f"✅ [LeadSync] Lead {lead_id} processed")

    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LeadSync] Error processing lead {lead_id}: {e}")
    finally:
        db.close()


def sync_cash_offer(offer_id: int):
    db = SessionLocal()
    try:
        offer = db.query(CashOfferRequest).filter(CashOfferRequest.id == offer_id).first()
        if not offer:
            return

        first_name, _, last_name = offer.full_name.partition(" ")
        address = f"{offer.street}, {offer.city}, {offer.state} {offer.zip_code}"
        details = (
            f"Property: {address}\n"
            f"{offer.bedrooms} bd / {offer.bathrooms} ba, {offer.square_feet} sq ft, built {offer.year_built}\n"
            f"Condition: {offer.condition}"
            + (f"\nNotes: {offer.additional_notes}" if offer.additional_notes else "")
        )

        crm = CrmService()
        ok, contact_id = crm.upsert_contact(
            email=offer.email,
            first_name=first_name,
            last_name=last_name or None,
            phone=offer.phone,
            address1=offer.street,
            city=offer.city,
            state=offer.state,
            postal_code=offer.zip_code,
            tags=["Cash Offer Request", "Website Lead"],
            custom_fields={"property_condition": offer.condition},
        )
        if ok:
            crm.add_note(contact_id, f"Cash offer requested via website.\n\n{details}")
            crm.create_task(contact_id, "Prepare cash offer", f"Review property and send an offer to {offer.full_name}.")
        else:
            logger.warning(f"[LeadSync] CRM sync failed for cash offer {offer_id}: {contact_id}")

        EmailService().notify_owner(
            db,
            f"New Cash Offer Request: {offer.full_name}",
            f"Name: {offer.full_name}\nEmail: {offer.email}\nPhone: {offer.phone}\n\n{details}",
        )

    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LeadSync] Error processing cash offer {offer_id}: {e}")
    finally:
        db.close()


def notify_testimonial(testimonial_id: int):
    db = SessionLocal()
    try:
        t = db.query(Testimonial).filter(Testimonial.id == testimonial_id).first()
        if not t:
            return
        EmailService().notify_owner(
            db,
            f"New Testimonial from {t.name}",
            f"{t.name} ({t.location}) submitted a testimonial for review.\n\n"
            f"Situation: {t.situation}\n\nStory:\n{t.story}\n\nOutcome:\n{t.outcome}\n\n"
            f"Permission to publish: {t.permission_to_publish}",
        )
    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LeadSync] Error notifying testimonial {testimonial_id}: {e}")
    finally:
        db.close()


def sync_resource_download(download_id: int, file_url: str):
    db = SessionLocal()
    try:
        download = db.query(ResourceDownload).filter(ResourceDownload.id == download_id).first()
        if not download:
            return

        crm = CrmService()
        ok, contact_id = crm.upsert_contact(
            email=download.email,
            first_name=download.name.split(" ")[0],
            tags=["Guide Download", download.resource_name],
        )
        if ok:
            crm.add_note(contact_id, f"Downloaded resource: {download.resource_name}")
        else:
            logger.warning(f"[LeadSync] CRM sync failed for download {download_id}: {contact_id}")

        subject, html = template_service.guide_download_email(download.name, download.resource_name, file_url)
        EmailService().send_logged(db, "guide_download", download.email, subject, html)

    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LeadSync] Error processing download {download_id}: {e}")
    finally:
        db.close()


def sync_timeline_requester(email: str, first_name: str, notice_date):
    ok, result = CrmService().upsert_contact(
        email=email,
        first_name=first_name,
        tags=["Timeline Calculator", "Website Lead"],
        custom_fields={"notice_of_default_date": str(notice_date)},
    )
    if not ok:
        logger.warning(f"[LeadSync] CRM sync failed for timeline requester {email}: {result}")


def sync_property_value_lead(lead_id: int):
    db = SessionLocal()
    try:
        lead = db.query(PropertyValueLead).filter(PropertyValueLead.id == lead_id).first()
        if not lead:
            return

        first_name, _, last_name = lead.name.partition(" ")
        ok, result = CrmService().upsert_contact(
            email=lead.email,
            first_name=first_name,
            last_name=last_name or None,
            tags=["Property Value Estimator", "Website Lead"],
        )
        if not ok:
            logger.warning(f"[LeadSync] CRM sync failed for property value lead {lead_id}: {result}")

        EmailService().notify_owner(
            db,
            f"New Property Value Lead: {lead.name}",
            f"Name: {lead.name}\nEmail: {lead.email}\nSource: Property Value Estimator",
        )

    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LeadSync] Error processing property value lead {lead_id}: {e}")
    finally:
        db.close()


def sync_comparison_requester(email: str, first_name: str, estimated_value: int, mortgage_balance: int):
    ok, result = CrmService().upsert_contact(
        email=email,
        first_name=first_name,
        tags=["Sale Options Comparison", "Website Lead"],
        custom_fields={"estimated_home_value": str(estimated_value), "mortgage_balance": str(mortgage_balance)},
    )
    if not ok:
        logger.warning(f"[LeadSync] CRM sync failed for comparison requester {email}: {result}")
