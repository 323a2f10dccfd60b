"""
Command dispatcher.

Single decision point for every ``{action, payload}`` request:
authorize the requester, resolve the action through one alias table,
validate the payload, run the handler and map the outcome to the
response envelope. No exception leaves ``dispatch``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type

from django.db import InterfaceError, OperationalError
from rest_framework import serializers, status

from access.application.commands.set_bot_access import SetBotAccessCommand
from access.application.handlers.set_bot_access_handler import SetBotAccessHandler
from access.domain.services import AccessControlGate
from access.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.exceptions import SERVER_ERROR_MESSAGE, error_body, status_for_domain_exception
from api.v1.commands.serializers import (
    AppPayloadSerializer,
    BotAccessPayloadSerializer,
    IssueBulkKeysPayloadSerializer,
    IssueKeyPayloadSerializer,
    KeyPayloadSerializer,
    KeySerializer,
    KeyStatsSerializer,
)
from core.domain.exceptions import DomainException, PermissionDeniedError, StoreUnavailableError
from core.instrumentation import Status, StatusCode, get_tracer
from keys.application.commands.delete_keys import DeleteExpiredKeysCommand, DeleteKeyCommand
from keys.application.commands.issue_keys import IssueBulkKeysCommand, IssueKeyCommand
from keys.application.handlers.issue_keys_handler import IssueBulkKeysHandler, IssueKeyHandler
from keys.application.handlers.key_lifecycle_handlers import (
    DeleteExpiredKeysHandler,
    DeleteKeyHandler,
)
from keys.application.handlers.key_query_handlers import (
    CheckKeyHandler,
    GetKeyStatsHandler,
    ListKeysHandler,
)
from keys.application.queries.application_keys import GetKeyStatsQuery, ListKeysQuery
from keys.application.queries.check_key import CheckKeyQuery
from keys.domain.services import KeyLifecycleManager
from keys.infrastructure.container import build_key_manager

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

INVALID_COMMAND_MESSAGE = "Invalid command."


@dataclass
class CommandResult:
    """Outcome of one dispatched command."""

    status_code: int
    body: Dict[str, Any]
    outcome: str
    command: str = "unknown"

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))


@dataclass(frozen=True)
class CommandSpec:
    """
    One routable command.

    ``handler`` names the CommandDispatcher coroutine that runs it.
    """

    name: str
    aliases: Tuple[str, ...]
    payload_serializer: Type[serializers.Serializer]
    handler: str
    requires_authorization: bool = True


COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec("issue", ("createkey", "gen"), IssueKeyPayloadSerializer, "_issue"),
    CommandSpec(
        "issue_bulk", ("bulkgen", "bulkcreatekey"), IssueBulkKeysPayloadSerializer, "_issue_bulk"
    ),
    CommandSpec("check", ("checkkey",), KeyPayloadSerializer, "_check"),
    CommandSpec(
        "delete_expired",
        ("deleteexpiredkeys", "deleteexpired"),
        AppPayloadSerializer,
        "_delete_expired",
    ),
    CommandSpec("delete_one", ("deletekey",), KeyPayloadSerializer, "_delete_one"),
    CommandSpec("list_all", ("allkeys",), AppPayloadSerializer, "_list_all"),
    CommandSpec("stats", ("stats",), AppPayloadSerializer, "_stats"),
    CommandSpec(
        "enable", ("enable",), BotAccessPayloadSerializer, "_enable", requires_authorization=False
    ),
    CommandSpec(
        "disable", ("disable",), BotAccessPayloadSerializer, "_disable", requires_authorization=False
    ),
)

ACTION_ALIASES: Dict[str, CommandSpec] = {
    alias: spec for spec in COMMANDS for alias in spec.aliases
}


def resolve_command(action: str) -> Optional[CommandSpec]:
    """Return the command registered for an action alias, if any."""
    return ACTION_ALIASES.get(action)


def _requester_id(payload: Dict[str, Any]) -> Optional[str]:
    value = payload.get("requesterId")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value)


class CommandDispatcher:
    """Routes commands to the key lifecycle manager or the access gate."""

    def __init__(self, key_manager: KeyLifecycleManager, access_gate: AccessControlGate):
        """Initialize dispatcher with its collaborators."""
        self.key_manager = key_manager
        self.access_gate = access_gate

    async def dispatch(self, action: str, payload: Dict[str, Any]) -> CommandResult:
        """
        Run one command.

        Args:
            action: Action alias from the request
            payload: Structured payload from the request

        Returns:
            CommandResult with HTTP status, envelope body and outcome label
        """
        spec = resolve_command(action)
        with tracer.start_as_current_span("dispatch_command") as span:
            span.set_attribute("command.action", action)
            result = await self._dispatch(action, spec, payload)
            if spec is not None:
                result.command = spec.name
            span.set_attribute("command.outcome", result.outcome)
            span.set_attribute("http.status_code", result.status_code)
            if result.status_code >= 500:
                span.set_status(Status(StatusCode.ERROR, result.outcome))
            return result

    async def _dispatch(
        self, action: str, spec: Optional[CommandSpec], payload: Dict[str, Any]
    ) -> CommandResult:
        try:
            if spec is None or spec.requires_authorization:
                requester_id = _requester_id(payload)
                if not await self.access_gate.is_authorized(requester_id):
                    logger.warning("Denied %r for requester %s", action, requester_id)
                    raise PermissionDeniedError()

            if spec is None:
                logger.info("Unknown action %r", action)
                return CommandResult(
                    status.HTTP_200_OK, error_body(INVALID_COMMAND_MESSAGE), "invalid_command"
                )

            validator = spec.payload_serializer(data=payload)
            validator.is_valid(raise_exception=True)
            handler: Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]] = getattr(
                self, spec.handler
            )
            fields = await handler(validator.validated_data)
            return CommandResult(status.HTTP_200_OK, {"success": True, **fields}, "success")

        except serializers.ValidationError as e:
            return CommandResult(
                status.HTTP_400_BAD_REQUEST,
                error_body("Invalid payload.", e.detail),
                "bad_request",
            )
        except PermissionDeniedError as e:
            # Logged at the authorization check
            return CommandResult(
                status_for_domain_exception(e), error_body(e.message), e.code.lower()
            )
        except DomainException as e:
            status_code = status_for_domain_exception(e)
            logger.info("Command %r failed: %s - %s", action, e.code, e.message)
            return CommandResult(status_code, error_body(e.message), e.code.lower())
        except (OperationalError, InterfaceError):
            logger.error("Store unavailable while running %r", action, exc_info=True)
            return CommandResult(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_body(StoreUnavailableError().message),
                "store_unavailable",
            )
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error("Unexpected error while running %r", action, exc_info=True)
            return CommandResult(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_body(SERVER_ERROR_MESSAGE),
                "server_error",
            )

    async def _issue(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = IssueKeyHandler(key_manager=self.key_manager)
        result = await handler.handle(
            IssueKeyCommand(app_id=data["appId"], duration_days=data.get("duration"))
        )
        return {"message": "Successfully created key.", "keys": result.tokens}

    async def _issue_bulk(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = IssueBulkKeysHandler(key_manager=self.key_manager)
        result = await handler.handle(
            IssueBulkKeysCommand(
                app_id=data["appId"],
                quantity=data["quantity"],
                duration_days=data.get("duration"),
            )
        )
        return {
            "message": f"Successfully created {len(result.keys)} keys.",
            "keys": result.tokens,
        }

    async def _check(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = CheckKeyHandler(key_manager=self.key_manager)
        key = await handler.handle(CheckKeyQuery(key=data["key"]))
        return {"keyData": KeySerializer(key).data}

    async def _delete_expired(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = DeleteExpiredKeysHandler(key_manager=self.key_manager)
        result = await handler.handle(DeleteExpiredKeysCommand(app_id=data["appId"]))
        return {
            "message": f"Successfully deleted {result.deleted_count} expired keys.",
            "deletedCount": result.deleted_count,
        }

    async def _delete_one(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = DeleteKeyHandler(key_manager=self.key_manager)
        await handler.handle(DeleteKeyCommand(key=data["key"]))
        return {"message": "Key successfully deleted."}

    async def _list_all(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = ListKeysHandler(key_manager=self.key_manager)
        keys = await handler.handle(ListKeysQuery(app_id=data["appId"]))
        return {"keys": KeySerializer(keys, many=True).data}

    async def _stats(self, data: Dict[str, Any]) -> Dict[str, Any]:
        handler = GetKeyStatsHandler(key_manager=self.key_manager)
        stats = await handler.handle(GetKeyStatsQuery(app_id=data["appId"]))
        return {"stats": KeyStatsSerializer(stats).data}

    async def _enable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._set_bot_access(data["targetId"], enabled=True)

    async def _disable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._set_bot_access(data["targetId"], enabled=False)

    async def _set_bot_access(self, target_id: str, enabled: bool) -> Dict[str, Any]:
        handler = SetBotAccessHandler(access_gate=self.access_gate)
        await handler.handle(SetBotAccessCommand(target_id=target_id, enabled=enabled))
        verb = "enabled" if enabled else "disabled"
        return {"message": f"Successfully {verb} user <@{target_id}>."}


def build_dispatcher() -> CommandDispatcher:
    """
    Build a CommandDispatcher backed by the Django ORM.

    Returns:
        CommandDispatcher instance
    """
    return CommandDispatcher(
        key_manager=build_key_manager(),
        access_gate=AccessControlGate(DjangoUserRepository()),
    )
