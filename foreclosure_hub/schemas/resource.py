from pydantic import BaseModel, EmailStr, Field

# Guides are served by the site itself: a rooted path such as /guides/survival-guide.pdf
RESOURCE_PATH = r"^(/[A-Za-z0-9_-]+(\.[A-Za-z0-9]+)?)+$"

class ResourceDownloadRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    resource_name: str = Field(..., min_length=1, max_length=200)
    resource_file: str = Field(..., min_length=2, max_length=200, pattern=RESOURCE_PATH)

class ResourceDownloadResponse(BaseModel):
    success: bool
    file_url: str
