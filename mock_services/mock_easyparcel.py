"""
mock_easyparcel.py — Mock Implementation of the EasyParcel API

This module simulates the EasyParcel endpoints used by the checkout
integration: rate checking and order submission. Both are served from the
same path and selected by the `ac` query parameter, as on the real API.

Simulation Scenarios:
    • Successful rate check / order submission
    • Unauthorized API key (starts with "ep_invalid") → api_status "Error"
    • Unknown action → HTTP 404
    • Destination postcode "00000" → non-JSON maintenance page

Endpoints:
    POST /?ac=EPOrderPriceChecking
    POST /?ac=EPSubmitOrder

Port:
    Default: 8102 (HTTP)
"""

import logging
import uuid
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

app = FastAPI(title="Mock EasyParcel")
log = logging.getLogger(__name__)

# Bulk entries received, newest last; inspected by tests
received_requests = []


class BulkRequest(BaseModel):
    """
    Represents an EasyParcel bulk request payload.

    Attributes:
        api_key (str): Merchant API key.
        bulk (List[Dict[str, Any]]): One entry per parcel.
    """
    api_key: str
    bulk: List[Dict[str, Any]]


def _rates(entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    weight = float(entry.get("weight", 0))
    return [
        {"service_id": "EP-CS0W", "courier_name": "Poslaju", "price": f"{6.0 + weight * 1.2:.2f}"},
        {"service_id": "EP-CS0A", "courier_name": "J&T Express", "price": f"{5.5 + weight * 1.1:.2f}"},
    ]


@app.post("/")
def dispatch(request: BulkRequest, ac: str = Query(...)):
    """
    Handles both supported actions.

    Returns:
        dict: EasyParcel-shaped response for the action and scenario.

    Raises:
        HTTPException(404): If the action is not supported.
    """
    received_requests.append({"ac": ac, "bulk": request.bulk})
    log.info(f"[EP] {ac} request with {len(request.bulk)} parcel(s)")

    if request.api_key.startswith("ep_invalid"):
        return {"api_status": "Error", "error_code": "1", "error_remark": "Unauthorized user", "result": []}

    if any(entry.get("send_code") == "00000" or entry.get("send_postcode") == "00000" for entry in request.bulk):
        return HTMLResponse("<html><body>Under maintenance</body></html>")

    if ac == "EPOrderPriceChecking":
        results = [{"status": "Success", "rates": _rates(entry)} for entry in request.bulk]
    elif ac == "EPSubmitOrder":
        results = [
            {"status": "Success", "order_number": f"EI-{uuid.uuid4().hex[:6].upper()}", "price": _rates(entry)[0]["price"]}
            for entry in request.bulk
        ]
    else:
        raise HTTPException(status_code=404, detail=f"Unknown action {ac}")

    return {"api_status": "Success", "error_code": "0", "error_remark": "", "result": results}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8102)
