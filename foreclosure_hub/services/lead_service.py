import csv
import logging
from io import StringIO
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from foreclosure_hub.models.lead import Lead, LeadNote

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "ID", "First Name", "Email", "Phone", "Property ZIP", "SMS Consent",
    "Source", "Status", "Notes", "CRM Contact ID", "Created At",
]


class LeadService:
    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------
    # 1. CAPTURE
    # ---------------------------------------------------------
    def create_lead(
        self,
        first_name: str,
        email: str,
        phone: str,
        property_zip: str,
        sms_consent: bool = False,
        source: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Lead:
        lead = Lead(
            first_name=first_name.strip(),
            email=email.lower(),
            phone=phone.strip(),
            property_zip=property_zip.strip(),
            sms_consent="yes" if sms_consent else "no",
            source=source or "landing_page",
            status="new",
            notes=notes,
        )
        self.db.add(lead)
        self.db.commit()
        self.db.refresh(lead)
        logger.info(f"📥 New lead #{lead.id} from {lead.source}")
        return lead

    # ---------------------------------------------------------
    # 2. ADMIN QUERIES
    # ---------------------------------------------------------
    def list_leads(self, status: Optional[str] = None, search: Optional[str] = None, page: int = 1, limit: int = 50):
        query = self.db.query(Lead)
        if status:
            query = query.filter(Lead.status == status)
        if search:
            term = f"%{search.strip()}%"
            query = query.filter(or_(
                Lead.first_name.ilike(term),
                Lead.email.ilike(term),
                Lead.phone.ilike(term),
                Lead.property_zip.ilike(term),
            ))

        total = query.count()
        items = query.order_by(Lead.created_at.desc(), Lead.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return {"total": total, "page": page, "limit": limit, "items": items}

    def get_lead(self, lead_id: int) -> Optional[Lead]:
        return self.db.query(Lead).filter(Lead.id == lead_id).first()

    # ---------------------------------------------------------
    # 3. ADMIN UPDATES
    # ---------------------------------------------------------
    def update_status(self, lead: Lead, status: str, changed_by: Optional[str] = None) -> Lead:
        old_status = lead.status
        lead.status = status
        if old_status != status:
            self.db.add(LeadNote(
                lead_id=lead.id,
                note=f"Status changed from {old_status} to {status}",
                note_type="status_change",
                created_by=changed_by,
            ))
        self.db.commit()
        self.db.refresh(lead)
        return lead

    def update_notes(self, lead: Lead, notes: str) -> Lead:
        lead.notes = notes
        self.db.commit()
        self.db.refresh(lead)
        return lead

    def add_note(self, lead: Lead, note: str, note_type: str = "general", created_by: Optional[str] = None) -> LeadNote:
        entry = LeadNote(lead_id=lead.id, note=note, note_type=note_type, created_by=created_by)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def list_notes(self, lead_id: int):
        return (
            self.db.query(LeadNote)
            .filter(LeadNote.lead_id == lead_id)
            .order_by(LeadNote.created_at.desc(), LeadNote.id.desc())
            .all()
        )

    # ---------------------------------------------------------
    # 4. EXPORT
    # ---------------------------------------------------------
    def export_csv(self, lead_ids: Optional[list[int]] = None) -> str:
        query = self.db.query(Lead)
        if lead_ids:
            query = query.filter(Lead.id.in_(lead_ids))

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)
        for lead in query.order_by(Lead.created_at.desc(), Lead.id.desc()).all():
            writer.writerow([
                lead.id,
                lead.first_name,
                lead.email,
                lead.phone,
                lead.property_zip,
                lead.sms_consent,
                lead.source or "",
                lead.status,
                lead.notes or "",
                lead.crm_contact_id or "",
                lead.created_at.isoformat() if lead.created_at else "",
            ])
        return output.getvalue()
