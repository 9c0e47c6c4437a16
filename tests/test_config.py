import pytest

from checkout_integration.config import REQUIRED_VARIABLES, ConfigurationError, load_settings
from checkout_integration.main import create_app

ENV = {
    "TOYYIBPAY_SECRET_KEY": "sk",
    "TOYYIBPAY_CATEGORY_CODE": "cat",
    "TOYYIBPAY_RETURN_URL": "https://shop.example.my/return",
    "TOYYIBPAY_CALLBACK_URL": "https://shop.example.my/callback",
    "EASYPARCEL_API_KEY": "ep",
    "SENDER_NAME": "Proride Parts",
    "SENDER_PHONE": "0312345678",
    "SENDER_ADDRESS": "Kajang",
}


def test_defaults():
    settings = load_settings(ENV)

    assert settings.sender_postcode == "43000"
    assert settings.toyyibpay_amount_unit == "sen"
    assert settings.toyyibpay_base_url == "https://toyyibpay.com"
    assert settings.easyparcel_base_url == "https://apiv2.easyparcel.my"
    assert settings.request_timeout_seconds == 10.0
    assert settings.port == 5000
    assert settings.allowed_origins == ["*"]


def test_overrides():
    settings = load_settings({
        **ENV,
        "PORT": "8080",
        "TOYYIBPAY_AMOUNT_UNIT": "RINGGIT",
        "TOYYIBPAY_BASE_URL": "https://dev.toyyibpay.com/",
        "ALLOWED_ORIGINS": "https://shop.example.my, https://admin.example.my",
        "REQUEST_TIMEOUT_SECONDS": "4",
    })

    assert settings.port == 8080
    assert settings.toyyibpay_amount_unit == "ringgit"
    assert settings.toyyibpay_base_url == "https://dev.toyyibpay.com"
    assert settings.allowed_origins == ["https://shop.example.my", "https://admin.example.my"]
    assert settings.request_timeout_seconds == 4.0


def test_missing_variables_are_all_reported():
    env = {k: v for k, v in ENV.items() if k not in ("EASYPARCEL_API_KEY", "SENDER_NAME")}

    with pytest.raises(ConfigurationError) as exc:
        load_settings(env)

    assert "EASYPARCEL_API_KEY" in str(exc.value)
    assert "SENDER_NAME" in str(exc.value)


def test_empty_value_counts_as_missing():
    with pytest.raises(ConfigurationError):
        load_settings({**ENV, "TOYYIBPAY_SECRET_KEY": ""})


def test_invalid_amount_unit():
    with pytest.raises(ConfigurationError):
        load_settings({**ENV, "TOYYIBPAY_AMOUNT_UNIT": "cents"})


def test_invalid_port():
    with pytest.raises(ConfigurationError):
        load_settings({**ENV, "PORT": "abc"})


def test_app_fails_fast_without_configuration(monkeypatch):
    for name in REQUIRED_VARIABLES:
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(ConfigurationError):
        create_app()
