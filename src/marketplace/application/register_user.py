"""Application service: Register User use case.

Links an external identity to a new marketplace user record.
"""

from __future__ import annotations

import uuid

import structlog

from marketplace.application.response import ErrorKind, ServiceResponse
from marketplace.domain.exceptions import DomainException, ValidationError
from marketplace.domain.model.user import User
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class RegisterUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity_id: str, email: str, name: str = "") -> ServiceResponse[User]:
        try:
            with self._uow as uow:
                if uow.users.get_by_identity_id(identity_id) is not None:
                    raise ValidationError(f"Identity '{identity_id}' is already registered")
                user = User(
                    id=str(uuid.uuid4()),
                    identity_id=identity_id,
                    email=email.strip(),
                    name=name.strip(),
                )
                uow.users.save(user)
                uow.commit()
        except DomainException as exc:
            return ServiceResponse.from_exception(exc)
        except Exception:
            logger.exception("Error registering user", identity_id=identity_id)
            return ServiceResponse.fail(
                ErrorKind.UNEXPECTED, "An error occurred while registering user"
            )

        logger.info("User registered", user_id=user.id, identity_id=identity_id)
        return ServiceResponse.ok("User registered successfully", user)
