"""Conversion between :class:`Task` and the Cloud Tasks wire resource."""

from __future__ import annotations

from taskpilot import identity
from taskpilot.contracts.exceptions import (
    UnsupportedAuthorizationError,
    UnsupportedMessageTypeError,
    UnsupportedMethodError,
)
from taskpilot.contracts.task import Authorization, HttpMethod, HttpRequest, OAuthToken, OIDCToken, Task, Timestamp
from taskpilot.contracts.wire import WireHttpRequest, WireOAuthToken, WireOidcToken, WireTask

# Headers which can have multiple values (RFC 9110) are sent comma-separated.
HEADER_VALUE_SEPARATOR = ","


def _wire_method(method: str) -> str:
    try:
        return HttpMethod(method).value
    except ValueError:
        raise UnsupportedMethodError(method) from None


def task_to_wire(task: Task) -> WireTask:
    request = task.request
    headers = {key: HEADER_VALUE_SEPARATOR.join(values) for key, values in request.headers.items()}

    http_request = WireHttpRequest(
        url=request.url,
        http_method=_wire_method(request.method),
        headers=headers,
        body=request.body,
    )
    match task.authorization:
        case OAuthToken(service_account_email=email, scope=scope):
            http_request.oauth_token = WireOAuthToken(service_account_email=email, scope=scope)
        case OIDCToken(service_account_email=email, audience=audience):
            http_request.oidc_token = WireOidcToken(service_account_email=email, audience=audience)

    return WireTask(name=task.task_name, schedule_time=task.scheduled_at, http_request=http_request)


def _authorization_from_wire(request: WireHttpRequest) -> Authorization | None:
    unknown = request.extra_authorization_variants()
    if unknown:
        raise UnsupportedAuthorizationError(f"unsupported authorization header type: {', '.join(unknown)}")
    if request.oauth_token is not None and request.oidc_token is not None:
        raise UnsupportedAuthorizationError("authorization header carries both oauthToken and oidcToken")

    if request.oauth_token is not None:
        return OAuthToken(
            service_account_email=request.oauth_token.service_account_email,
            scope=request.oauth_token.scope,
        )
    if request.oidc_token is not None:
        return OIDCToken(
            service_account_email=request.oidc_token.service_account_email,
            audience=request.oidc_token.audience,
        )
    return None


def _request_from_wire(request: WireHttpRequest) -> HttpRequest:
    if request.http_method not in HttpMethod.__members__:
        raise UnsupportedMethodError(request.http_method)
    return HttpRequest(
        method=request.http_method,
        url=request.url,
        headers={key: [value] for key, value in request.headers.items()},
        body=request.body,
    )


def task_from_wire(queue_path: str, prefix: str, wire: WireTask) -> Task:
    id, version = identity.decode(prefix, wire.name)

    if wire.http_request is None:
        kind = "appEngineHttpRequest" if wire.app_engine_http_request is not None else "none"
        raise UnsupportedMessageTypeError(f"unsupported message type: {kind} ({wire.name})")
    return Task(
        queue_path=queue_path,
        prefix=prefix,
        id=id,
        scheduled_at=wire.schedule_time if wire.schedule_time is not None else Timestamp(),
        request=_request_from_wire(wire.http_request),
        authorization=_authorization_from_wire(wire.http_request),
        version=version,
    )
