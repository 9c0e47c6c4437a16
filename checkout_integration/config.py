"""
config.py — Runtime Configuration for the Checkout Integration Service

All provider credentials and sender details are read once at process start
and collected into an immutable `Settings` value. The value is passed into the
provider clients and the application factory; nothing reads the environment
mid-request.

Required variables:
    TOYYIBPAY_SECRET_KEY, TOYYIBPAY_CATEGORY_CODE,
    TOYYIBPAY_RETURN_URL, TOYYIBPAY_CALLBACK_URL,
    EASYPARCEL_API_KEY, SENDER_NAME, SENDER_PHONE, SENDER_ADDRESS
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

AMOUNT_UNIT_SEN = "sen"
AMOUNT_UNIT_RINGGIT = "ringgit"

REQUIRED_VARIABLES = (
    "TOYYIBPAY_SECRET_KEY",
    "TOYYIBPAY_CATEGORY_CODE",
    "TOYYIBPAY_RETURN_URL",
    "TOYYIBPAY_CALLBACK_URL",
    "EASYPARCEL_API_KEY",
    "SENDER_NAME",
    "SENDER_PHONE",
    "SENDER_ADDRESS",
)


class ConfigurationError(RuntimeError):
    """Raised at startup when the environment is incomplete or invalid."""


def _get_list(raw_value: str) -> List[str]:
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    toyyibpay_secret_key: str
    toyyibpay_category_code: str
    toyyibpay_return_url: str
    toyyibpay_callback_url: str
    easyparcel_api_key: str
    sender_name: str
    sender_phone: str
    sender_address: str
    sender_postcode: str = "43000"
    toyyibpay_base_url: str = "https://toyyibpay.com"
    toyyibpay_amount_unit: str = AMOUNT_UNIT_SEN
    easyparcel_base_url: str = "https://apiv2.easyparcel.my"
    request_timeout_seconds: float = 10.0
    port: int = 5000
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds the service settings from environment variables.

    Args:
        environ (Mapping[str, str], optional): Source of the variables.
            Defaults to `os.environ`.

    Returns:
        Settings: The immutable configuration value.

    Raises:
        ConfigurationError: If required variables are missing or a value
            cannot be parsed. All missing names are reported at once.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    amount_unit = env.get("TOYYIBPAY_AMOUNT_UNIT", AMOUNT_UNIT_SEN).strip().lower()
    if amount_unit not in (AMOUNT_UNIT_SEN, AMOUNT_UNIT_RINGGIT):
        raise ConfigurationError(
            f"TOYYIBPAY_AMOUNT_UNIT must be '{AMOUNT_UNIT_SEN}' or "
            f"'{AMOUNT_UNIT_RINGGIT}', got '{amount_unit}'"
        )

    try:
        timeout = float(env.get("REQUEST_TIMEOUT_SECONDS", "10"))
        port = int(env.get("PORT", "5000"))
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    return Settings(
        toyyibpay_secret_key=env["TOYYIBPAY_SECRET_KEY"],
        toyyibpay_category_code=env["TOYYIBPAY_CATEGORY_CODE"],
        toyyibpay_return_url=env["TOYYIBPAY_RETURN_URL"],
        toyyibpay_callback_url=env["TOYYIBPAY_CALLBACK_URL"],
        easyparcel_api_key=env["EASYPARCEL_API_KEY"],
        sender_name=env["SENDER_NAME"],
        sender_phone=env["SENDER_PHONE"],
        sender_address=env["SENDER_ADDRESS"],
        sender_postcode=env.get("SENDER_POSTCODE") or "43000",
        toyyibpay_base_url=(env.get("TOYYIBPAY_BASE_URL") or "https://toyyibpay.com").rstrip("/"),
        toyyibpay_amount_unit=amount_unit,
        easyparcel_base_url=(env.get("EASYPARCEL_BASE_URL") or "https://apiv2.easyparcel.my").rstrip("/"),
        request_timeout_seconds=timeout,
        port=port,
        allowed_origins=_get_list(env.get("ALLOWED_ORIGINS", "*")),
    )
