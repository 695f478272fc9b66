"""
Dry-run transport and transport option validation.

A dry run serves canned responses in order through ``httpx.MockTransport``
so requests, retries and hooks run exactly as they would against a server.
"""

import inspect
from collections import deque
from typing import Any, Sequence

import httpx

from ..exceptions import DryRunExhaustedError, InvalidOptionError

HOOK_EVENTS = ("request", "response")


def normalize_dry_run(option: Any) -> list[httpx.Response] | None:
    """
    Validate a dry_run option.

    Args:
        option: True, False, an httpx.Response or a sequence of them

    Returns:
        The responses to serve, or None when dry running is off
    """
    if option is False:
        return None
    if option is True:
        return [httpx.Response(200)]
    if isinstance(option, httpx.Response):
        return [option]
    if isinstance(option, (list, tuple)):
        for index, item in enumerate(option):
            if not isinstance(item, httpx.Response):
                raise InvalidOptionError(
                    f"All dry_run values need to be httpx.Response instances; "
                    f"{type(item).__name__} given at index {index}",
                    option="dry_run",
                )
        return list(option)

    raise InvalidOptionError(
        f"dry_run needs to be a boolean, an httpx.Response or a list of them; "
        f"{type(option).__name__} given",
        option="dry_run",
    )


def dry_run_transport(responses: Sequence[httpx.Response]) -> httpx.MockTransport:
    """Build a transport that answers each request with the next response."""
    queue = deque(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if not queue:
            raise DryRunExhaustedError(
                f"No dry run response left for {request.method} {request.url}"
            )
        template = queue.popleft()
        # Copy so the same templates can serve later logical requests
        return httpx.Response(
            template.status_code,
            headers=template.headers,
            content=template.content,
            request=request,
        )

    return httpx.MockTransport(handler)


def validate_transport(option: Any, expected: type) -> Any:
    """Check a custom transport against the client flavour that will use it."""
    if option is None or isinstance(option, expected):
        return option
    raise InvalidOptionError(
        f"transport needs to be an instance of httpx.{expected.__name__}; "
        f"{type(option).__name__} given",
        option="transport",
    )


def _is_coroutine_callable(callback: Any) -> bool:
    return inspect.iscoroutinefunction(callback) or inspect.iscoroutinefunction(
        getattr(callback, "__call__", None)
    )


def validate_event_hooks(option: Any, require_async: bool = False) -> dict[str, list] | None:
    """
    Check an event_hooks option in httpx's own format.

    httpx.AsyncClient awaits every hook, so async clients set require_async.
    """
    if option is None:
        return None
    if not isinstance(option, dict):
        raise InvalidOptionError(
            f"event_hooks needs to be a dict of hook lists; {type(option).__name__} given",
            option="event_hooks",
        )

    hooks: dict[str, list] = {}
    for event, callbacks in option.items():
        if event not in HOOK_EVENTS:
            raise InvalidOptionError(
                f"Unknown event hook {event!r}; expected one of {', '.join(HOOK_EVENTS)}",
                option="event_hooks",
            )
        if callable(callbacks):
            callbacks = [callbacks]
        if not isinstance(callbacks, (list, tuple)):
            raise InvalidOptionError(
                f"event_hooks[{event!r}] needs to be a list of callables; "
                f"{type(callbacks).__name__} given",
                option="event_hooks",
            )
        for index, callback in enumerate(callbacks):
            if not callable(callback):
                raise InvalidOptionError(
                    f"All event_hooks[{event!r}] values need to be callables; "
                    f"{type(callback).__name__} given at index {index}",
                    option="event_hooks",
                )
            if require_async and not _is_coroutine_callable(callback):
                raise InvalidOptionError(
                    f"All event_hooks[{event!r}] values need to be async functions "
                    f"for an async client; {type(callback).__name__} given at index {index}",
                    option="event_hooks",
                )
        hooks[event] = list(callbacks)
    return hooks
