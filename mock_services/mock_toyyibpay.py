"""
mock_toyyibpay.py — Mock Implementation of the ToyyibPay Bill API

This module provides a simulated ToyyibPay gateway for testing the checkout integration.
It exposes a small FastAPI application that mimics the gateway's `createBill` behavior.

Simulation Scenarios:
    • Successful bill creation → [{"BillCode": "..."}]
    • Unknown secret key (starts with "sk_invalid") → non-JSON body "[KEY-DID-NOT-EXIST]"
    • Rejected bill (billAmount "0") → [{"msg": "..."}] without BillCode
    • Gateway outage (categoryCode "cat_outage") → HTTP 503

Endpoints:
    POST /index.php/api/createBill — Handles form-encoded bill creation requests.

Port:
    Default: 8101 (HTTP)
"""

import logging
import uuid

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import PlainTextResponse

app = FastAPI(title="Mock ToyyibPay")
log = logging.getLogger(__name__)

# Last bill requests received, newest last; inspected by tests
received_bills = []


@app.post("/index.php/api/createBill")
def create_bill(
        userSecretKey: str = Form(...),
        categoryCode: str = Form(...),
        billName: str = Form(...),
        billDescription: str = Form(...),
        billPriceSetting: str = Form(...),
        billAmount: str = Form(...),
        billReturnUrl: str = Form(""),
        billCallbackUrl: str = Form(""),
        billTo: str = Form(""),
        billEmail: str = Form(""),
        billPhone: str = Form(""),
        billExternalReferenceNo: str = Form("")
):
    """
    Processes a bill creation request.

    Returns:
        list | PlainTextResponse: ToyyibPay-shaped response for the scenario
        selected by the request fields.

    Raises:
        HTTPException(503): If the category code triggers the outage scenario.
    """
    received_bills.append({
        "categoryCode": categoryCode,
        "billName": billName,
        "billDescription": billDescription,
        "billPriceSetting": billPriceSetting,
        "billAmount": billAmount,
        "billReturnUrl": billReturnUrl,
        "billCallbackUrl": billCallbackUrl,
        "billTo": billTo,
        "billEmail": billEmail,
        "billPhone": billPhone,
        "billExternalReferenceNo": billExternalReferenceNo,
    })
    log.info(f"[TP] Bill request for {billTo} (amount {billAmount}, ref {billExternalReferenceNo or '-'})")

    if userSecretKey.startswith("sk_invalid"):
        log.warning("[TP] Unknown secret key.")
        return PlainTextResponse("[KEY-DID-NOT-EXIST]")

    if categoryCode == "cat_outage":
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")

    if billAmount in ("0", "0.00"):
        return [{"msg": "Bill amount must be greater than zero"}]

    bill_code = uuid.uuid4().hex[:8]
    log.info(f"[TP] Bill {bill_code} created.")
    return [{"BillCode": bill_code}]


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8101)
