"""Tests for authorize(): ForbiddenError on denial and audit logging."""

import logging

import pytest

from blog.model.entity import Article
from blog.policy.article import ArticlePolicy
from warrant.domain.authorization.identity import IdentityDecorator
from warrant.domain.authorization.resolver.map import MapResolver
from warrant.domain.authorization.service import AuthorizationService
from warrant.domain.shared.error import (
    AuthorizationError,
    ForbiddenError,
    MissingMethodError,
)

SERVICE_LOGGER = "warrant.domain.authorization.service"


def _make_service() -> AuthorizationService:
    return AuthorizationService(MapResolver({Article: ArticlePolicy}))


class TestAuthorize:
    def test_allowed_returns_none(self) -> None:
        service = _make_service()
        admin = IdentityDecorator(service, {"role": "admin"})

        assert service.authorize(admin, "add", Article()) is None

    def test_denied_raises_forbidden(self) -> None:
        service = _make_service()
        guest = IdentityDecorator(service, {"role": "guest"})

        with pytest.raises(ForbiddenError) as exc_info:
            service.authorize(guest, "add", Article())

        assert isinstance(exc_info.value, AuthorizationError)
        assert exc_info.value.code == "access_denied"
        assert exc_info.value.action == "add"
        assert exc_info.value.resource_type == "blog.model.entity.Article"

    def test_identity_authorize(self) -> None:
        service = _make_service()
        guest = IdentityDecorator(service, {"role": "guest"})

        with pytest.raises(ForbiddenError):
            guest.authorize("add", Article())

    def test_configuration_errors_propagate(self) -> None:
        service = _make_service()
        admin = IdentityDecorator(service, {"role": "admin"})

        with pytest.raises(MissingMethodError):
            service.authorize(admin, "modify", Article())


class TestAuthorizationAuditLogging:
    def test_authorize_logs_allow(self, caplog: pytest.LogCaptureFixture) -> None:
        """Successful authorization should emit an info-level log."""
        service = _make_service()
        admin = IdentityDecorator(service, {"role": "admin"})

        with caplog.at_level(logging.DEBUG, logger=SERVICE_LOGGER):
            service.authorize(admin, "add", Article())

        records = [r for r in caplog.records if r.name == SERVICE_LOGGER]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "Authorization allowed" in records[0].message
        assert "action=add" in records[0].message

    def test_authorize_logs_deny(self, caplog: pytest.LogCaptureFixture) -> None:
        """Denied authorization should emit a warning-level log."""
        service = _make_service()
        guest = IdentityDecorator(service, {"role": "guest"})

        with caplog.at_level(logging.DEBUG, logger=SERVICE_LOGGER):
            with pytest.raises(ForbiddenError):
                service.authorize(guest, "add", Article())

        records = [r for r in caplog.records if r.name == SERVICE_LOGGER]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "Authorization denied" in records[0].message
        assert "resource=blog.model.entity.Article" in records[0].message

    def test_before_short_circuit_is_logged_at_debug(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        class _Admins:
            def before(self, identity, resource, action):  # type: ignore[no-untyped-def]
                return True if identity.get("role") == "admin" else None

        service = AuthorizationService(MapResolver({Article: _Admins()}))
        admin = IdentityDecorator(service, {"role": "admin"})

        with caplog.at_level(logging.DEBUG, logger=SERVICE_LOGGER):
            assert service.can(admin, "anything", Article()) is True

        assert any(
            r.levelno == logging.DEBUG and "Before hook settled" in r.message
            for r in caplog.records
        )

    def test_audit_log_records_only_identity_id(self, caplog: pytest.LogCaptureFixture) -> None:
        service = _make_service()
        admin = IdentityDecorator(
            service, {"id": 9, "role": "admin", "api_token": "s3cr3t", "email": "a@b.c"}
        )

        with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
            service.authorize(admin, "add", Article())

        message = next(r.message for r in caplog.records if r.name == SERVICE_LOGGER)
        assert "identity=9 " in message
        assert "s3cr3t" not in message
        assert "a@b.c" not in message
        assert "admin" not in message

    def test_identity_without_id_logged_as_anonymous(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = _make_service()
        guest = IdentityDecorator(service, {"role": "guest", "api_token": "s3cr3t"})

        with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
            with pytest.raises(ForbiddenError):
                service.authorize(guest, "add", Article())

        message = next(r.message for r in caplog.records if r.name == SERVICE_LOGGER)
        assert "identity=anonymous " in message
        assert "s3cr3t" not in message
