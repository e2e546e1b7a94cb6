import sys
import os

# Ensure project root is in path
sys.path.append(os.getcwd())

from foreclosure_hub.core.database import SessionLocal
from foreclosure_hub.models import *  # noqa: F401,F403
from foreclosure_hub.models.lead import Lead
from foreclosure_hub.services.crm_service import CrmService


def resync(include_synced: bool = False):
    """Pushes leads that never reached the CRM (or all leads with --all)."""
    db = SessionLocal()
    crm = CrmService()
    print("🚀 Starting CRM resync...")

    if not crm.configured:
        print("❌ CRM_API_KEY / CRM_LOCATION_ID not set. Nothing to do.")
        db.close()
        return

    try:
        query = db.query(Lead)
        if not include_synced:
            query = query.filter(Lead.crm_contact_id.is_(None))
        leads = query.order_by(Lead.id).all()
        print(f"📊 Processing {len(leads)} leads...")

        synced = 0
        for lead in leads:
            ok, result = crm.sync_lead(
                first_name=lead.first_name,
                email=lead.email,
                phone=lead.phone,
                property_zip=lead.property_zip,
                source=lead.source or "Website Form",
            )
            if ok:
                lead.crm_contact_id = result
                synced += 1
            else:
                print(f"⚠️ Lead {lead.id} ({lead.email}) failed: {result}")

        db.commit()
        print(f"🎉 Success! {synced}/{len(leads)} leads synced.")

    except Exception as e:
        db.rollback()
        print(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    resync(include_synced="--all" in sys.argv)
