"""Generic REST tool adapter.

One RestTool instance serves one ToolDescriptor. Every Finnhub endpoint goes
through the same invocation flow:

  1. Validate that the arguments are a key/value mapping
  2. Bind declared parameters present in the arguments, in declared order
  3. Build the query string and prepare a GET request with Accept: application/json
  4. Send it, read the body, classify status >= 400 as an API error
  5. Pretty-print the JSON body (or pass non-JSON bodies through as text)

Failures at any step end the invocation with an error ToolResult. Nothing is
retried. A RestTool keeps no per-call state, so one instance can serve
concurrent invocations; the requests.Session it sends through is the only
shared resource.
"""
import json
import math
import time
import uuid
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

import requests

from .base import ToolResult
from .descriptor import ParameterSpec, ToolDescriptor
from ..config import APIConfig
from ..errors import (
    StructuredError,
    InvalidArgumentsError,
    RequestConstructionError,
    TransportError,
    BodyReadError,
    APIError,
    FormatError,
)
from ..logging import get_logger

log = get_logger("rest")

ACCEPT_HEADERS = {"Accept": "application/json"}


class InvocationStage(Enum):
    """Where a tool invocation is in its lifecycle.

    VALIDATING_ARGS -> BUILDING_REQUEST -> AWAITING_RESPONSE -> FORMATTING_RESULT -> DONE,
    with ERROR reachable from any stage.
    """
    VALIDATING_ARGS = "validating_args"
    BUILDING_REQUEST = "building_request"
    AWAITING_RESPONSE = "awaiting_response"
    FORMATTING_RESULT = "formatting_result"
    DONE = "done"
    ERROR = "error"


def stringify_value(value: Any) -> str:
    """Render an argument value the way it appears in the query string.

    Strings pass through untouched; booleans and None use their JSON literals;
    integral floats below 1e21 drop the fractional part (JSON clients often
    send 10 as 10.0), larger ones use exponent form (1e+21); containers are
    rendered as compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def bind_parameters(
    arguments: Mapping[str, Any],
    parameters: Sequence[ParameterSpec],
    encode: bool = False
) -> List[Tuple[str, str]]:
    """Pick declared parameters out of the caller's arguments.

    Args:
        arguments: Caller-supplied arguments
        parameters: Declared parameters; their order fixes the output order
        encode: Percent-encode keys and values. Off by default, in which case
                values are placed in the query string verbatim.

    Returns:
        (key, value) pairs for every declared key present in arguments.
        Absent keys are skipped; required-ness is not checked here.
    """
    pairs: List[Tuple[str, str]] = []
    for param in parameters:
        if param.key not in arguments:
            continue
        value = stringify_value(arguments[param.key])
        if encode:
            pairs.append((quote(param.key, safe=""), quote(value, safe="")))
        else:
            pairs.append((param.key, value))
    return pairs


def build_query_string(pairs: Sequence[Tuple[str, str]]) -> str:
    if not pairs:
        return ""
    return "?" + "&".join(f"{key}={value}" for key, value in pairs)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def format_response(raw_body: bytes) -> ToolResult:
    """Pretty-print a JSON response body.

    Any JSON value is accepted (object, array or scalar) and re-serialized with
    two-space indentation and sorted keys, so the same body always formats to
    the same text. A body that is not valid JSON, including one holding a
    number too large for a float, is returned as text. Valid UTF-8 comes back
    unchanged; undecodable bytes become U+FFFD so the text stays encodable.

    Raises:
        FormatError: If the parsed value cannot be serialized again
    """
    try:
        value = json.loads(raw_body, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return ToolResult.ok(raw_body.decode("utf-8", errors="replace"))

    try:
        pretty = json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise FormatError(cause=e)
    return ToolResult.ok(pretty)


class RestTool:
    """Tool backed by a single Finnhub GET endpoint.

    Example:
        >>> descriptor = ToolDescriptor(
        ...     name="get_news",
        ...     description="Market News",
        ...     path="/news",
        ...     parameters=(ParameterSpec(key="category", required=True),),
        ... )
        >>> tool = RestTool(descriptor, APIConfig(base_url="https://finnhub.io/api/v1"))
        >>> tool.build_url({"category": "general"})
        'https://finnhub.io/api/v1/news?category=general'
    """

    def __init__(
        self,
        descriptor: ToolDescriptor,
        config: APIConfig,
        session: Optional[requests.Session] = None
    ):
        """Initialize the tool.

        Args:
            descriptor: Endpoint name, description, path and parameters
            config: Upstream API settings (base URL, timeout, encoding)
            session: HTTP session to send through. A new one is created if
                     omitted; pass a shared session to pool connections.
        """
        self.descriptor = descriptor
        self.name = descriptor.name
        self.description = descriptor.description
        self._config = config
        self._session = session or requests.Session()

    def input_schema(self) -> Dict[str, Any]:
        return self.descriptor.input_schema()

    def build_url(self, arguments: Mapping[str, Any]) -> str:
        pairs = bind_parameters(
            arguments,
            self.descriptor.parameters,
            encode=self._config.encode_query_values
        )
        return f"{self._config.base_url}{self.descriptor.path}{build_query_string(pairs)}"

    def prepare(self, url: str) -> requests.PreparedRequest:
        """Turn a URL into a GET request ready to send.

        Session defaults (headers, cookies) are merged in, as Session.request does.

        Raises:
            RequestConstructionError: If the URL is not a valid HTTP URL
        """
        try:
            return self._session.prepare_request(
                requests.Request("GET", url, headers=dict(ACCEPT_HEADERS))
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            raise RequestConstructionError(cause=e, details={"url": url})

    def send(self, prepared: requests.PreparedRequest) -> bytes:
        """Send the request and return the body of a successful response.

        Raises:
            RequestConstructionError: If no transport can handle the URL scheme
            TransportError: If the network call fails or times out
            BodyReadError: If the response body cannot be read
            APIError: If the API answers with status >= 400
        """
        try:
            # Proxies, CA bundle and client cert from the session and environment
            send_kwargs = self._session.merge_environment_settings(
                prepared.url, {}, True, None, None
            )
            response = self._session.send(
                prepared,
                timeout=self._config.timeout_seconds,
                **send_kwargs
            )
        except (requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL) as e:
            raise RequestConstructionError(cause=e, details={"url": prepared.url})
        except requests.exceptions.Timeout as e:
            raise TransportError(cause=e, timed_out=True, details={"timeout_seconds": self._config.timeout_seconds})
        except requests.exceptions.RequestException as e:
            raise TransportError(cause=e)

        try:
            body = response.content
        except requests.exceptions.RequestException as e:
            raise BodyReadError(cause=e, details={"status": response.status_code})
        finally:
            response.close()

        log.debug("tool=%s status=%s bytes=%d", self.name, response.status_code, len(body))

        if response.status_code >= 400:
            raise APIError(status=response.status_code, body=body)
        return body

    def run(self, arguments: Any, correlation_id: str | None = None) -> ToolResult:
        """Invoke the endpoint with the caller's arguments.

        Never raises for invocation failures: every StructuredError is turned
        into an error ToolResult, with the failing stage recorded in the
        error's details.

        Args:
            arguments: Caller-supplied arguments. Must be a mapping; None is
                       treated as no arguments.
            correlation_id: Optional correlation ID for tracing. Auto-generates UUID if not provided.

        Returns:
            ToolResult with pretty JSON / raw text, or the error
        """
        if correlation_id is None:
            correlation_id = str(uuid.uuid4())

        start = time.perf_counter()
        stage = InvocationStage.VALIDATING_ARGS
        try:
            args = self._validate_arguments(arguments)

            stage = InvocationStage.BUILDING_REQUEST
            prepared = self.prepare(self.build_url(args))

            stage = InvocationStage.AWAITING_RESPONSE
            body = self.send(prepared)

            stage = InvocationStage.FORMATTING_RESULT
            result = format_response(body)
        except StructuredError as e:
            elapsed = (time.perf_counter() - start) * 1000
            e.details.setdefault("tool", self.name)
            e.details["stage"] = stage.value
            log.warning(
                "tool=%s correlation_id=%s stage=%s->%s error=%s elapsed_ms=%.1f",
                self.name, correlation_id, stage.value, InvocationStage.ERROR.value,
                e.__class__.__name__, elapsed
            )
            return ToolResult.failure(e)

        elapsed = (time.perf_counter() - start) * 1000
        log.info(
            "tool=%s correlation_id=%s stage=%s elapsed_ms=%.1f",
            self.name, correlation_id, InvocationStage.DONE.value, elapsed
        )
        return result

    @staticmethod
    def _validate_arguments(arguments: Any) -> Mapping[str, Any]:
        if arguments is None:
            return {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentsError(details={"received_type": type(arguments).__name__})
        return arguments
