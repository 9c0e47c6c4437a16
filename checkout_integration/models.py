"""
models.py — Data Models for Checkout Integration

This module defines the inbound request bodies and the normalized results
returned to callers. Pydantic models validate every inbound body at the API
boundary, so the payload builders only ever see well-formed orders.

Models:
    - Customer: Buyer identity and delivery address.
    - LineItem: A single ordered part; its tags drive the weight estimate.
    - Order: The complete checkout order.
    - CheckRateRequest / CreateShipmentRequest: EasyParcel endpoint bodies.
    - PaymentCallback: ToyyibPay server-to-server notification.
    - BillResult / ShipmentResult: Normalized provider results.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """
    Represents the paying customer and the shipment destination.

    Attributes:
        name (str): Full name, used as bill payer and parcel receiver.
        email (str): Email address for the payment receipt.
        phone (str): Contact number for payment and courier.
        address (str): Delivery address line.
        postcode (str): Delivery postcode, used for rate lookup.
    """
    name: str
    email: str
    phone: str
    address: str
    postcode: str


class LineItem(BaseModel):
    """
    Represents a single part in an order.

    Attributes:
        model (str, optional): Vehicle model the part fits.
        type (str, optional): Product type tag, e.g. 'Sport Spring'.
        position (str, optional): Fitting position tag, e.g. 'FRONT', 'REAR', '1SET'.
        quantity (int): Number of units. Must be greater than zero.
    """
    model: Optional[str] = None
    type: Optional[str] = None
    position: Optional[str] = None
    quantity: int = Field(..., gt=0)


class Order(BaseModel):
    """
    Represents a checkout order submitted by the storefront.

    Attributes:
        id (str, optional): Storefront order identifier. Used as the bill's
            external reference and to look the order up on payment callback.
        customer (Customer): Buyer and destination details.
        items (List[LineItem]): Ordered parts, at least one.
        total (Decimal): Order total in ringgit (major units), at most
            two decimal places and ten integer digits.
    """
    id: Optional[str] = None
    customer: Customer
    items: List[LineItem] = Field(..., min_length=1)
    total: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class CheckRateRequest(BaseModel):
    order: Order


class CreateShipmentRequest(BaseModel):
    order: Order
    payment: Optional[Dict[str, Any]] = None


class PaymentCallback(BaseModel):
    """
    ToyyibPay payment notification.

    The provider posts a form; only `status` and `order_id` are relied on.
    `status` is "1" for a successful payment, "2" pending, "3" failed.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    status: Optional[str] = None
    order_id: Optional[str] = None
    billcode: Optional[str] = None
    refno: Optional[str] = None
    reason: Optional[str] = None
    amount: Optional[str] = None
    order: Optional[Dict[str, Any]] = None


class BillResult(BaseModel):
    """
    Normalized ToyyibPay bill creation result.

    `transport_error` marks failures where the gateway could not be reached
    or answered with something other than JSON; it is not serialized.
    """
    success: bool
    paymentUrl: Optional[str] = None
    billcode: Optional[str] = None
    error: Optional[Any] = None
    transport_error: bool = Field(False, exclude=True)


class ShipmentResult(BaseModel):
    """EasyParcel response wrapped with a success flag."""
    success: bool
    data: Optional[Any] = None
    error: Optional[Any] = None
    transport_error: bool = Field(False, exclude=True)
