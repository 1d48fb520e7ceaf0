from pydantic import BaseModel


class UploadResponse(BaseModel):
    message: str
    handle: str
    download_link: str
    analysis_result: str


class ErrorResponse(BaseModel):
    message: str
    hint: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
