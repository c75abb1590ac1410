"""Authorization middleware: the per-request decision pipeline."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from remote_authz._audit import (
    log_authorization_decision,
    log_encoding_failure,
    log_transport_failure,
)
from remote_authz._client import AuthorizationClient, AuthorizationReply
from remote_authz._types import Continuation, RequestLike, ResponseLike
from remote_authz.config._config import AuthzConfig, get_global_config, merge_config
from remote_authz.errors import AUT
from remote_authz.exceptions import AuthorizationBodyError, AuthorizationDenied, TransportFailure

__all__ = ["AuthorizationMiddleware", "build_authorization_body"]

AUTHORIZATION_METHOD = "POST"


def build_authorization_body(
    request: RequestLike,
    *,
    object_id: Any,
    token: Any,
    service: str | None = None,
) -> dict[str, Any]:
    """Assemble the JSON body sent to the authorization service.

    Example::

        body = build_authorization_body(request, object_id="r1", token="abc123")
        body["route"]  # request.url
    """
    return {
        "service": service,
        "ip": request.ip,
        "params": dict(request.params),
        "path": request.path,
        "query": dict(request.query),
        "secure": request.secure,
        "xhr": request.xhr,
        "route": request.url,
        "method": request.method,
        "body": request.body if request.body else None,
        "objectId": object_id,
        "token": token,
    }


class AuthorizationMiddleware:
    """Delegates the allow/deny decision for each request to a remote service.

    The effective configuration is merged and validated once, here, and
    is read-only afterwards, so a single instance can serve concurrent
    requests.

    Per request:

    1. the object id and the token are extracted with the configured
       strategies,
    2. a falsy token stops the pipeline (the strategy already wrote 401),
    3. the authorization body is POSTed to ``config.endpoint_url``,
    4. status 200 invokes the continuation,
    5. any other status forwards the reply body, with ``detail`` set to
       ``message.not_authorized``, under the same status,
    6. a transport failure writes 502 and never invokes the continuation,
    7. a body that cannot be encoded as JSON writes 500 (``AUT_005``)
       and never invokes the continuation.

    Args:
        config: Base configuration. Defaults to the global configuration.
        client: Authorization client. A new one is created when omitted.
        **overrides: Merged onto *config*, see
            :func:`~remote_authz.config.merge_config`.

    Raises:
        ConfigurationError: The merged configuration is invalid.

    Example::

        middleware = AuthorizationMiddleware(host="authz.internal", port=8080)

        def handle(request, response):
            middleware.authorize(request, response, lambda: serve(request, response))
    """

    def __init__(
        self,
        config: AuthzConfig | None = None,
        *,
        client: AuthorizationClient | None = None,
        **overrides: Any,
    ) -> None:
        base = config if config is not None else get_global_config()
        self.config: AuthzConfig = merge_config(base, overrides) if overrides else base
        self.client = client if client is not None else AuthorizationClient()

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _extract(self, request: RequestLike, response: ResponseLike) -> tuple[Any, Any]:
        object_id = self.config.get_access_object(request)
        token = self.config.get_token(request, response)  # type: ignore[misc]
        return object_id, token

    def _denial_body(self, body: Any) -> dict[str, Any]:
        if body is None or body == "":
            denial: dict[str, Any] = {}
        elif isinstance(body, Mapping):
            denial = dict(body)
        else:
            denial = {"body": body}
        denial["detail"] = self.config.message.not_authorized
        return denial

    def _reject_transport(self, response: ResponseLike, exc: TransportFailure) -> None:
        log_transport_failure(endpoint=exc.endpoint, error=exc.__cause__ or exc)
        descriptor = AUT["AUTHORIZATION_SERVICE_UNAVAILABLE"].with_detail(
            f"Authorization service could not be reached at {exc.endpoint}"
        )
        response.status(exc.status_code)
        response.json(descriptor.to_dict())

    def _reject_body(
        self, request: RequestLike, response: ResponseLike, exc: AuthorizationBodyError
    ) -> None:
        log_encoding_failure(path=request.path, error=exc.__cause__ or exc)
        descriptor = AUT["AUTHORIZATION_BODY_NOT_ENCODABLE"].with_detail(str(exc))
        response.status(exc.status_code)
        response.json(descriptor.to_dict())

    def _interpret(
        self,
        request: RequestLike,
        response: ResponseLike,
        reply: AuthorizationReply,
        object_id: Any,
    ) -> bool:
        """Write the denial, if any, and return whether to continue."""
        if self.config.log_decisions:
            log_authorization_decision(
                method=request.method,
                path=request.path,
                object_id=object_id,
                status_code=reply.status_code,
            )
        if reply.authorized:
            return True
        denied = AuthorizationDenied(
            status_code=reply.status_code, body=self._denial_body(reply.body)
        )
        response.status(denied.status_code)
        response.json(denied.body)
        return False

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def authorize(
        self,
        request: RequestLike,
        response: ResponseLike,
        continuation: Continuation,
    ) -> None:
        """Run the pipeline for one request, blocking on the remote call."""
        object_id, token = self._extract(request, response)
        if not token:
            return

        body = build_authorization_body(
            request, object_id=object_id, token=token, service=self.config.service
        )
        try:
            reply = self.client.send_request(
                body, AUTHORIZATION_METHOD, self.config.endpoint_url
            )
        except TransportFailure as exc:
            self._reject_transport(response, exc)
            return
        except AuthorizationBodyError as exc:
            self._reject_body(request, response, exc)
            return

        if self._interpret(request, response, reply, object_id):
            continuation()

    async def authorize_async(
        self,
        request: RequestLike,
        response: ResponseLike,
        continuation: Continuation,
    ) -> None:
        """Run the pipeline for one request without blocking the event loop.

        *continuation* may be a plain callable or a coroutine function.
        """
        object_id, token = self._extract(request, response)
        if not token:
            return

        body = build_authorization_body(
            request, object_id=object_id, token=token, service=self.config.service
        )
        try:
            reply = await self.client.send_request_async(
                body, AUTHORIZATION_METHOD, self.config.endpoint_url
            )
        except TransportFailure as exc:
            self._reject_transport(response, exc)
            return
        except AuthorizationBodyError as exc:
            self._reject_body(request, response, exc)
            return

        if self._interpret(request, response, reply, object_id):
            result = continuation()
            if inspect.isawaitable(result):
                await result

    __call__ = authorize

    def close(self) -> None:
        self.client.close()

    async def aclose(self) -> None:
        await self.client.aclose()

    def __repr__(self) -> str:
        return f"AuthorizationMiddleware(endpoint_url={self.config.endpoint_url!r})"
