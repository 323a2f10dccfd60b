"""
Command endpoint.

A single POST entry point receives ``{action, payload}`` envelopes and
hands them to the CommandDispatcher.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body
from api.v1.commands.dispatcher import build_dispatcher
from api.v1.commands.serializers import CommandRequestSerializer, CommandResponseSerializer
from core.metrics import key_commands_total

logger = logging.getLogger(__name__)


class CommandView(APIView):
    """View dispatching bot commands."""

    authentication_classes = []

    @extend_schema(
        operation_id="dispatch_command",
        summary="Dispatch Command",
        description=(
            "Run one bot command. The requester is identified by payload.requesterId "
            "and must be enabled, except for the enable and disable commands."
        ),
        tags=["Commands"],
        request=CommandRequestSerializer,
        responses={
            200: CommandResponseSerializer,
            400: {"description": "Malformed request or invalid payload"},
            403: {"description": "Requester is not enabled"},
            404: {"description": "Application or key not found"},
            409: {"description": "No unique key could be generated"},
            500: {"description": "Store unavailable or unexpected error"},
        },
        examples=[
            OpenApiExample(
                "Create key",
                value={
                    "action": "createkey",
                    "payload": {"requesterId": "123456789", "appId": "app1", "duration": 7},
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request: Request) -> Response:
        """Dispatch one command."""
        serializer = CommandRequestSerializer(data=request.data)
        if not serializer.is_valid():
            key_commands_total.labels(command="unknown", outcome="malformed").inc()
            return Response(
                error_body("Malformed request.", serializer.errors),
                status=status.HTTP_400_BAD_REQUEST,
            )

        action = serializer.validated_data["action"]
        payload = serializer.validated_data["payload"]

        dispatcher = build_dispatcher()
        result = async_to_sync(dispatcher.dispatch)(action, payload)

        key_commands_total.labels(command=result.command, outcome=result.outcome).inc()
        logger.info(
            "Command %s finished with %s",
            result.command,
            result.outcome,
            extra={
                "correlation_id": getattr(request, "correlation_id", None),
                "action": action,
                "status_code": result.status_code,
            },
        )
        return Response(result.body, status=result.status_code)
