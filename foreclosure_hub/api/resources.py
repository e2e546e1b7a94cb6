from fastapi import APIRouter, Depends, BackgroundTasks, Request
from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.resource_download import ResourceDownload
from foreclosure_hub.schemas.resource import ResourceDownloadRequest, ResourceDownloadResponse
from foreclosure_hub.workers.crm.lead_sync import sync_resource_download

router = APIRouter(prefix="/api/resources", tags=["Resources"])


@router.post("/download", response_model=ResourceDownloadResponse)
def request_download(
    req: ResourceDownloadRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    download = ResourceDownload(
        name=req.name,
        email=req.email.lower(),
        resource_name=req.resource_name,
        resource_file=req.resource_file,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    db.add(download)
    db.commit()
    db.refresh(download)

    file_url = f"{settings.SITE_URL.rstrip('/')}{req.resource_file}"

    background_tasks.add_task(sync_resource_download, download.id, file_url)
    return {"success": True, "file_url": file_url}
