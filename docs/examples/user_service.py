"""Example – a small user service wired through the mediator.

Shows every moving part in one place:

* handlers registered through ``@command_handler`` / ``@query_handler`` and
  :func:`~mp_mediator.application.mediator.discover`,
* the default behaviors plus retry, caching, authorization and audit,
* a type-specific behavior whose target is inferred with ``@handles``,
* a request opting out of auditing with ``@skip_behaviors``.

Run with::

    python docs/examples/user_service.py
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import re
import sys
import uuid
from typing import Any

from mp_mediator.application.cqrs import (
    Command,
    CommandHandler,
    Query,
    QueryHandler,
    command_handler,
    query_handler,
    skip_behaviors,
)
from mp_mediator.application.mediator import Mediator, discover
from mp_mediator.application.pipeline import (
    AuditBehavior,
    AuthorizationBehavior,
    CachingBehavior,
    Next,
    PipelineBehavior,
    RetryBehavior,
    handles,
    pipeline_behavior,
)
from mp_mediator.config.settings import EnvSettingsLoader, MediatorSettings, SettingsFactory
from mp_mediator.kernel.errors import FieldError, ValidationError
from mp_mediator.kernel.security import InMemoryAuditStore, Principal, SecurityContext
from mp_mediator.observability.logging import JsonLoggerFactory, get_logger
from mp_mediator.resilience.retry import ConstantBackoff, NoJitter, RetryPolicy

logger = get_logger("user_service")

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str


@dataclasses.dataclass
class CreateUser(Command):
    name: str
    email: str


@dataclasses.dataclass
class DeleteUser(Command):
    user_id: str


@skip_behaviors(AuditBehavior)
@dataclasses.dataclass
class ProcessPayment(Command):
    order_id: str
    amount: float
    fail_times: int = 0


@dataclasses.dataclass
class GetUser(Query):
    user_id: str


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


USERS: dict[str, User] = {
    "1": User("1", "John Doe", "john@example.com"),
    "2": User("2", "Jane Smith", "jane@example.com"),
}


@command_handler(CreateUser)
class CreateUserHandler(CommandHandler[CreateUser]):
    async def handle(self, command: CreateUser) -> None:
        user = User(uuid.uuid4().hex[:8], command.name, command.email)
        USERS[user.id] = user
        logger.info("user.created", user_id=user.id)


@command_handler(DeleteUser)
class DeleteUserHandler(CommandHandler[DeleteUser]):
    async def handle(self, command: DeleteUser) -> None:
        USERS.pop(command.user_id, None)
        logger.info("user.deleted", user_id=command.user_id)


@command_handler(ProcessPayment)
class ProcessPaymentHandler(CommandHandler[ProcessPayment]):
    def __init__(self) -> None:
        self._failures: dict[str, int] = {}

    async def handle(self, command: ProcessPayment) -> None:
        failed = self._failures.get(command.order_id, 0)
        if failed < command.fail_times:
            self._failures[command.order_id] = failed + 1
            raise ConnectionError(f"Payment gateway temporarily unavailable (attempt {failed + 1})")
        self._failures.pop(command.order_id, None)
        logger.info("payment.processed", order_id=command.order_id, amount=command.amount)


@query_handler(GetUser)
class GetUserHandler(QueryHandler[GetUser, "User | None"]):
    async def handle(self, query: GetUser) -> User | None:
        return USERS.get(query.user_id)


# ---------------------------------------------------------------------------
# Behaviors
# ---------------------------------------------------------------------------


@pipeline_behavior(priority=95, scope="command")
class CreateUserValidationBehavior(PipelineBehavior):
    """Runs only for CreateUser; the target comes from the annotation."""

    @handles
    async def handle(self, request: CreateUser, next_: Next) -> Any:
        errors = []
        if len(request.name.strip()) < 2:
            errors.append(FieldError("name", "Name must be at least 2 characters"))
        if not _EMAIL.match(request.email):
            errors.append(FieldError("email", "Valid email is required"))
        if errors:
            raise ValidationError(errors)
        return await next_()


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_mediator(settings: MediatorSettings, audit_store: InMemoryAuditStore) -> Mediator:
    mediator = Mediator(settings=settings).use_default_behaviors()
    mediator.register_behavior(
        RetryBehavior(
            RetryPolicy(
                max_attempts=settings.retry_max_attempts,
                backoff=ConstantBackoff(0.05),
                jitter=NoJitter(),
                non_retryable_exceptions=(ValidationError,),
            )
        )
    )
    mediator.register_behavior(CachingBehavior.from_settings(settings))
    mediator.register_behavior(AuthorizationBehavior(required_roles={DeleteUser: ["admin"]}))
    mediator.register_behavior(AuditBehavior(audit_store))
    discover(mediator, sys.modules[__name__])
    mediator.freeze()
    return mediator


async def main() -> None:
    JsonLoggerFactory.configure(level=logging.INFO)
    settings = SettingsFactory.create(MediatorSettings, loaders=[EnvSettingsLoader()])
    audit_store = InMemoryAuditStore()
    mediator = build_mediator(settings, audit_store)

    for descriptor in mediator.pipeline_for(CreateUser("x", "y"), "command"):
        logger.info("pipeline.behavior", name=descriptor.name, priority=descriptor.priority)

    with SecurityContext.as_principal(Principal.with_roles("alice", "admin")):
        await mediator.send(CreateUser("Ada Lovelace", "ada@example.com"))
        try:
            await mediator.send(CreateUser("A", "not-an-email"))
        except ValidationError as exc:
            logger.info("example.rejected", errors=[e.to_dict() for e in exc.errors])

        print(await mediator.query(GetUser("1")))
        print(await mediator.query(GetUser("1")))  # cached

        await mediator.send(ProcessPayment("order-1", 99.5, fail_times=2))
        await mediator.send(DeleteUser("2"))

    for event in audit_store.all():
        print(event.outcome, event.action, event.principal_id)


if __name__ == "__main__":
    asyncio.run(main())
