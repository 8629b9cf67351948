from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import smtp_config
from .models import NO_CHANGE, ProductSelection, SubmissionPayload
from .processing import InvalidInput, discovery_manifest, stub_report
from .submit import SMTPNotConfigured, send_submission_email, submission_receipt

logger = logging.getLogger(__name__)

# ---------- Pydantic DTOs ----------


class ProductSelectionDTO(BaseModel):
    id: str
    title: str = ""
    selectedDescription: str = NO_CHANGE
    customDescription: Optional[str] = None
    completedItems: List[str] = []
    todos: List[str] = []


class SubmissionDTO(BaseModel):
    products: List[ProductSelectionDTO]


class SubmissionReceipt(BaseModel):
    status: str
    products: int
    todos: int


class EmailSubmissionRequest(BaseModel):
    to_email: str = Field(..., description="Recipient email address.")
    subject: str = Field(default="SEO/GEO Review Submission", description="Email subject line.")
    from_email: Optional[str] = Field(default=None, description="Sender email override.")
    submission: SubmissionDTO


class EmailResponse(BaseModel):
    status: str


# ---------- Serialization helpers ----------

def _to_payload(dto: SubmissionDTO) -> SubmissionPayload:
    return SubmissionPayload(products=[
        ProductSelection(
            id=p.id,
            title=p.title,
            selected_description=p.selectedDescription,
            custom_description=p.customDescription,
            completed_items=list(p.completedItems),
            todos=list(p.todos),
        )
        for p in dto.products
    ])


# ---------- FastAPI application ----------

app = FastAPI(
    title="SEO/GEO Review API",
    version="1.0.0",
    description="Tool manifest, processing stub and submission hand-off for the SEO/GEO review.",
)


@app.get("/api/discovery")
def discovery() -> Dict[str, Any]:
    return discovery_manifest()


@app.post("/api/tools/seo-geo-report")
def seo_geo_report(body: Any = Body(default=None)):
    try:
        output = stub_report(body)
    except InvalidInput:
        return JSONResponse(status_code=400, content={"error": "Invalid input"})
    return output


@app.post("/api/submissions", response_model=SubmissionReceipt)
def submit(req: SubmissionDTO) -> SubmissionReceipt:
    return SubmissionReceipt(**submission_receipt(_to_payload(req)))


@app.post("/api/submissions/email", response_model=EmailResponse)
async def email_submission(req: EmailSubmissionRequest) -> EmailResponse:
    try:
        await send_submission_email(
            _to_payload(req.submission),
            to_email=req.to_email,
            cfg=smtp_config(),
            subject=req.subject,
            from_email=req.from_email,
        )
    except SMTPNotConfigured as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.error("Submission email failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return EmailResponse(status="sent")
