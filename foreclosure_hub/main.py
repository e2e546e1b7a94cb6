import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import Base, engine
from foreclosure_hub.scheduler import start_scheduler, stop_scheduler
from foreclosure_hub.api import (
    auth, timeline, user_timeline, leads, cash_offers, testimonials, resources,
    links, shortlinks, campaigns, ab_testing, dashboard, content, jobs,
    calculators, comparisons, email_tracking, webhooks,
)

from foreclosure_hub.models import *

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="EnterActDFW Foreclosure Hub")

# -------------------------
# CORS (Allow Frontend Cookies)
# -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------
# Include Routers
# -------------------------
app.include_router(auth.router)
app.include_router(content.router)
app.include_router(timeline.router)
app.include_router(user_timeline.router)
app.include_router(leads.router)
app.include_router(cash_offers.router)
app.include_router(testimonials.router)
app.include_router(resources.router)
app.include_router(shortlinks.router)
app.include_router(links.router)
app.include_router(campaigns.router)
app.include_router(ab_testing.router)
app.include_router(dashboard.router)
app.include_router(calculators.router)
app.include_router(comparisons.router)
app.include_router(email_tracking.router)
app.include_router(webhooks.router)
app.include_router(jobs.router)


# -------------------------
# DB INIT
# -------------------------
Base.metadata.create_all(bind=engine)


# -------------------------
# FastAPI lifecycle
# -------------------------
@app.on_event("startup")
def startup():
    if settings.SCHEDULER_ENABLED:
        start_scheduler()
        logger.info("Scheduler started")


@app.on_event("shutdown")
def shutdown():
    stop_scheduler()


# -------------------------
# Routes
# -------------------------
@app.get("/")
def root():
    return {"status": "running"}
