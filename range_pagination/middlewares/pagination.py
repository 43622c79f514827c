"""Range-based pagination for FastAPI path operations.

Decorate a path operation with ``paginate`` to serve it as a partial-content
resource:

    @router.get("/items")
    @paginate
    async def list_items(pagination: Optional[PaginationContext] = None):
        ...

How it works:
    1. Requests that are not AJAX (``X-Requested-With: XMLHttpRequest``) or
       that carry no Range / Range-Unit pass straight through to the handler
    2. Otherwise the range is parsed into a PaginationContext, stored on
       ``request.state.pagination`` and handed to the handler
    3. The handler may set ``total``, ``return_range``, ``return_range_unit``
       or ``accept_ranges`` on the context
    4. If the response status is still 200 (the handler set none and the
       route declares none other) it becomes 206 with
       Content-Range, Range-Unit and Accept-Ranges headers

Handler exceptions are never caught here.
"""

import asyncio
import inspect
import types
import typing
from contextvars import ContextVar
from typing import Any, Callable, Optional, Tuple

from fastapi import Request, Response, status
from starlette.concurrency import run_in_threadpool

from range_pagination.api.metrics import range_pagination_requests_total
from range_pagination.config import PaginationMode, settings
from range_pagination.logging import get_logger
from range_pagination.schemas.pagination import PaginationContext, PaginationOptions, RangeSpec

logger = get_logger(__name__)

pagination_context: ContextVar[Optional[PaginationContext]] = ContextVar("pagination_context", default=None)

AJAX_HEADER = "X-Requested-With"
AJAX_HEADER_VALUE = "XMLHttpRequest"

RANGE_HEADER = "Range"
RANGE_UNIT_HEADER = "Range-Unit"
RANGE_PARAM = "range"
RANGE_UNIT_PARAM = "range_unit"

_REQUEST_PARAM = "_paginate_request"
_RESPONSE_PARAM = "_paginate_response"


def get_current_pagination() -> Optional[PaginationContext]:
    """Return the pagination context of the handler currently running, if any."""
    return pagination_context.get()


def is_ajax(request: Request) -> bool:
    return request.headers.get(AJAX_HEADER) == AJAX_HEADER_VALUE


def extract_range(request: Request, mode: PaginationMode) -> Tuple[Optional[str], Optional[str]]:
    """Read the raw Range and Range-Unit values from the configured source."""
    from_headers = (request.headers.get(RANGE_HEADER), request.headers.get(RANGE_UNIT_HEADER))
    from_params = (request.query_params.get(RANGE_PARAM), request.query_params.get(RANGE_UNIT_PARAM))

    if mode == PaginationMode.HEADERS:
        return from_headers
    if mode == PaginationMode.PARAMETERS:
        return from_params

    # Headers win, each value falls back to its own query parameter
    range_value = from_headers[0] if from_headers[0] is not None else from_params[0]
    range_unit = from_headers[1] if from_headers[1] is not None else from_params[1]
    return range_value, range_unit


def route_status_code(request: Request) -> int:
    """Status the matched route answers with when the handler does not set one."""
    route = request.scope.get("route")
    declared = getattr(route, "status_code", None)
    return declared if declared is not None else status.HTTP_200_OK


def apply_partial_content(response: Response, context: PaginationContext) -> Response:
    """Rewrite a successful response into a 206 carrying the range headers."""
    response.headers["Content-Range"] = context.content_range
    response.headers["Range-Unit"] = context.response_range_unit
    response.headers["Accept-Ranges"] = context.response_accept_ranges
    response.status_code = status.HTTP_206_PARTIAL_CONTENT
    return response


def _is_context_annotation(annotation: Any) -> bool:
    if annotation is PaginationContext:
        return True
    if typing.get_origin(annotation) not in (typing.Union, types.UnionType):
        return False
    return PaginationContext in typing.get_args(annotation)


def _find_parameter(parameters, predicate) -> Optional[str]:
    for parameter in parameters:
        if predicate(parameter.annotation):
            return parameter.name
    return None


def _is_subclass(annotation: Any, cls: type) -> bool:
    return inspect.isclass(annotation) and issubclass(annotation, cls)


def _endpoint_signature(func: Callable) -> Tuple[inspect.Signature, Optional[str], Optional[str], Optional[str]]:
    """Build the signature FastAPI sees for the wrapped endpoint.

    Annotations are resolved against the handler's module so that string
    annotations keep working once the signature moves onto the wrapper.
    """
    hints = typing.get_type_hints(func, include_extras=True)
    parameters = [
        parameter.replace(annotation=hints.get(parameter.name, parameter.annotation))
        for parameter in inspect.signature(func).parameters.values()
    ]

    context_name = _find_parameter(parameters, _is_context_annotation)
    request_name = _find_parameter(parameters, lambda a: _is_subclass(a, Request))
    response_name = _find_parameter(parameters, lambda a: _is_subclass(a, Response))

    visible = [parameter for parameter in parameters if parameter.name != context_name]
    extra = []
    if request_name is None:
        extra.append(inspect.Parameter(_REQUEST_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Request))
    if response_name is None:
        extra.append(inspect.Parameter(_RESPONSE_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Response))

    position = next(
        (index for index, parameter in enumerate(visible) if parameter.kind == inspect.Parameter.VAR_KEYWORD),
        len(visible),
    )
    visible[position:position] = extra

    signature = inspect.Signature(visible, return_annotation=hints.get("return", inspect.Signature.empty))
    return signature, context_name, request_name, response_name


def paginate(
    handler: Optional[Callable] = None,
    *,
    ajax_only: Optional[bool] = None,
    mode: Optional[PaginationMode] = None,
    strict_range: Optional[bool] = None,
) -> Callable:
    """Serve a path operation as a Range-paginated resource.

    Usable bare (``@paginate``) or with options
    (``@paginate(mode=PaginationMode.BOTH)``). Options left as ``None`` fall
    back to the PAGINATION_* settings.

    Args:
        handler: The path operation function, sync or async
        ajax_only: Only paginate requests sent with X-Requested-With: XMLHttpRequest
        mode: Read Range / Range-Unit from headers, query parameters or both
        strict_range: Reject malformed Range values with InvalidRangeError

    Returns:
        The wrapped endpoint, or a decorator when called with options only

    """

    def decorator(func: Callable) -> Callable:
        options = PaginationOptions.resolve(settings, ajax_only=ajax_only, mode=mode, strict_range=strict_range)
        signature, context_name, request_name, response_name = _endpoint_signature(func)
        is_coroutine = asyncio.iscoroutinefunction(func)

        async def call_handler(kwargs: dict) -> Any:
            if is_coroutine:
                return await func(**kwargs)
            return await run_in_threadpool(func, **kwargs)

        async def endpoint(**kwargs: Any) -> Any:
            request: Request = kwargs[request_name] if request_name else kwargs.pop(_REQUEST_PARAM)
            response: Response = kwargs[response_name] if response_name else kwargs.pop(_RESPONSE_PARAM)

            if options.ajax_only and not is_ajax(request):
                logger.debug("Pagination skipped, not an AJAX request", path=request.url.path)
                range_pagination_requests_total.labels(outcome="not_ajax").inc()
                if context_name:
                    kwargs[context_name] = None
                return await call_handler(kwargs)

            range_value, range_unit = extract_range(request, options.mode)
            if range_value is None or range_unit is None:
                logger.debug("Pagination skipped, range or unit missing", path=request.url.path, mode=options.mode.value)
                range_pagination_requests_total.labels(outcome="missing_range").inc()
                if context_name:
                    kwargs[context_name] = None
                return await call_handler(kwargs)

            context = PaginationContext(
                range=RangeSpec.parse(range_value, strict=options.strict_range),
                range_unit=range_unit,
            )
            request.state.pagination = context
            if context_name:
                kwargs[context_name] = context

            token = pagination_context.set(context)
            try:
                content = await call_handler(kwargs)
            finally:
                pagination_context.reset(token)

            # A returned Response replaces the temporal one entirely
            target = content if isinstance(content, Response) else response
            status_code = target.status_code if target.status_code is not None else route_status_code(request)
            if status_code != status.HTTP_200_OK:
                logger.debug("Pagination skipped, handler set status", path=request.url.path, status_code=status_code)
                range_pagination_requests_total.labels(outcome="status_passthrough").inc()
                return content

            apply_partial_content(target, context)
            range_pagination_requests_total.labels(outcome="partial_content").inc()
            logger.debug(
                "Partial content applied",
                path=request.url.path,
                content_range=target.headers["Content-Range"],
                range_unit=target.headers["Range-Unit"],
            )
            return content

        endpoint.__name__ = func.__name__
        endpoint.__qualname__ = func.__qualname__
        endpoint.__doc__ = func.__doc__
        endpoint.__module__ = func.__module__
        endpoint.__signature__ = signature
        return endpoint

    if handler is not None:
        return decorator(handler)
    return decorator
