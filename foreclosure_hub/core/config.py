import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    DB_HOST = os.getenv("DB_HOST")
    DB_PORT = os.getenv("DB_PORT")
    DB_NAME = os.getenv("DB_NAME")
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    # Full URL wins over the DB_* parts (used by tests and local sqlite)
    DATABASE_URL = os.getenv("DATABASE_URL")

    # AUTH
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    ADMIN_EMAILS = [e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()]

    # CRM (LeadConnector API)
    CRM_API_URL = os.getenv("CRM_API_URL", "https://services.leadconnectorhq.com")
    CRM_API_KEY = os.getenv("CRM_API_KEY")
    CRM_LOCATION_ID = os.getenv("CRM_LOCATION_ID")
    CRM_API_VERSION = "2021-07-28"

    # EMAIL (Resend API)
    RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
    RESEND_API_KEY = os.getenv("RESEND_API_KEY")
    EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "EnterActDFW <info@enteractdfw.com>")
    OWNER_EMAIL = os.getenv("OWNER_EMAIL")
    # Signing secret for delivery webhooks (whsec_...); unset skips verification
    RESEND_WEBHOOK_SECRET = os.getenv("RESEND_WEBHOOK_SECRET")

    # SITE
    SITE_URL = os.getenv("SITE_URL", "https://enteractdfw.com")
    SHORT_LINK_BASE_URL = os.getenv("SHORT_LINK_BASE_URL", "https://links.enteractai.com")
    CONTACT_PHONE = os.getenv("CONTACT_PHONE", "(832) 932-7585")
    CORS_ORIGINS = [o.strip() for o in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",") if o.strip()]

    # JOBS
    SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "true").lower() == "true"
    SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE", "America/Chicago")
    LINK_EXPIRY_WARNING_DAYS = 7
    HTTP_TIMEOUT_SECONDS = 15

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        from urllib.parse import quote_plus
        password = quote_plus(self.DB_PASSWORD or "")
        return f"postgresql://{self.DB_USER}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

settings = Settings()
