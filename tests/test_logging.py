"""Logging tests — credentials never reach the log output."""

import pytest
import structlog

from accountd.errors import ServiceError
from accountd.log import REDACTED, configure_logging, redact_sensitive


def test_redacts_sensitive_keys():
    event = redact_sensitive(
        None,
        "info",
        {
            "event": "x",
            "password": "Secret1",
            "Authorization": "Bearer abc",
            "jwt_secret": "s3cret",
            "account_id": "123",
        },
    )
    assert event["password"] == REDACTED
    assert event["Authorization"] == REDACTED
    assert event["jwt_secret"] == REDACTED
    assert event["account_id"] == "123"


def test_configured_logger_masks_token(settings, capsys):
    configure_logging(settings)
    structlog.get_logger().info("test.event", token="eyJhbGciOi.payload.sig", account_id="42")

    err = capsys.readouterr().err
    assert "test.event" in err
    assert "eyJhbGciOi" not in err
    assert REDACTED in err


@pytest.mark.asyncio
async def test_signup_and_login_never_log_credentials(settings, service, capsys):
    configure_logging(settings)

    await service.signup("a@test.com", "Secret-Pass-1", "Ann")
    issued = await service.login("a@test.com", "Secret-Pass-1")
    with pytest.raises(ServiceError):
        await service.login("a@test.com", "Wrong-Pass-2")

    err = capsys.readouterr().err
    assert "account.created" in err
    assert "account.login_failed" in err
    assert "Secret-Pass-1" not in err
    assert "Wrong-Pass-2" not in err
    assert issued.access_token not in err
    assert settings.jwt_secret not in err
