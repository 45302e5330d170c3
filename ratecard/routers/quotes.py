from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ratecard.db.dal import Database
from ratecard.models.quote import Quote, QuoteCreate, QuoteExportRequest, SendQuoteRequest
from ratecard.services.delivery import (
    QuoteMailer,
    export_filename,
    render_quote_export,
    send_quote,
)
from ratecard.services.quote_assembly import create_quote

from .deps import get_db, get_mailer

router = APIRouter(prefix="/api", tags=["quotes"])


class MessageOut(BaseModel):
    message: str


@router.post("/quotes", response_model=Quote, status_code=201, summary="Save a quote")
async def save_quote(payload: QuoteCreate, db: Database = Depends(get_db)):
    return create_quote(db, payload)


@router.post("/send-quote", response_model=MessageOut, summary="E-mail a quote")
def email_quote(payload: SendQuoteRequest, mailer: QuoteMailer = Depends(get_mailer)):
    sent = send_quote(
        mailer,
        payload.recipient_email,
        payload.sender_name,
        payload.quote_data,
        payload.message,
    )
    if not sent:
        raise HTTPException(status_code=502, detail="Failed to send email")
    return MessageOut(message="Quote sent successfully")


@router.post(
    "/quotes/export",
    response_class=PlainTextResponse,
    summary="Download a quote as a plain-text document",
)
async def export_quote(payload: QuoteExportRequest):
    return PlainTextResponse(
        render_quote_export(payload, breakdown=payload.breakdown),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(payload)}"'},
    )
