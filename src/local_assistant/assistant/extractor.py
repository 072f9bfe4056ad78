"""Extraction of tool calls from model output.

Two protocols are supported:

- strict: the whole response must be one JSON call descriptor
  (used with one-shot generation in JSON format);
- embedded: free text that may contain a call descriptor between a start
  and an end marker (used with streamed chat).

For embedded responses without markers, find_balanced_json() offers a
degraded brace-scanning fallback. It cannot tell a JSON-looking snippet in
prose from a real call and is only used when explicitly enabled.
"""

import json
import logging
import re
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from local_assistant.tools.errors import ResponseParseError
from local_assistant.tools.types import CallDescriptor, CallParameter

logger = logging.getLogger(__name__)

_CODE_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


class CallParameterPayload(BaseModel):
    """Wire shape of one call parameter."""

    parameterName: str
    parameterValue: str

    model_config = ConfigDict(extra="forbid", strict=True)


class CallDescriptorPayload(BaseModel):
    """Wire shape of a call descriptor."""

    functionName: str = Field(min_length=1)
    parameters: list[CallParameterPayload]

    model_config = ConfigDict(strict=True)


def _validate(data: Any) -> CallDescriptor:
    """Validate decoded JSON against the call descriptor shape.

    Raises:
        ResponseParseError: If the data does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    try:
        payload = CallDescriptorPayload.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Invalid AI response format: {e}") from e

    return CallDescriptor(
        function_name=payload.functionName,
        parameters=[
            CallParameter(
                parameter_name=parameter.parameterName,
                parameter_value=parameter.parameterValue,
            )
            for parameter in payload.parameters
        ],
    )


def _strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapping the whole text, if present."""
    match = _CODE_FENCE_PATTERN.match(text)
    return match.group(1).strip() if match else text


def extract_strict(text: str) -> CallDescriptor:
    """Parse a response that must consist of exactly one call descriptor.

    Args:
        text: The complete model response

    Returns:
        CallDescriptor: The validated call

    Raises:
        ResponseParseError: If the text is not valid JSON or not call-shaped
    """
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e}") from e

    return _validate(data)


def _delimited_fragments(text: str, start_marker: str, end_marker: str) -> Iterator[str]:
    """Yield the text between each start marker and the next end marker."""
    position = 0
    while True:
        start = text.find(start_marker, position)
        if start == -1:
            return
        content_start = start + len(start_marker)
        end = text.find(end_marker, content_start)
        if end == -1:
            return
        yield text[content_start:end]
        position = end + len(end_marker)


def find_balanced_json(text: str) -> Iterator[str]:
    """Yield every balanced ``{...}`` span in text, in order of its opening brace.

    Braces inside JSON string literals are ignored.
    """
    for start, char in enumerate(text):
        if char != "{":
            continue

        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            current = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif current == "\\":
                    escaped = True
                elif current == '"':
                    in_string = False
            elif current == '"':
                in_string = True
            elif current == "{":
                depth += 1
            elif current == "}":
                depth -= 1
                if depth == 0:
                    yield text[start : index + 1]
                    break


def _try_parse(fragment: str) -> CallDescriptor | None:
    try:
        return extract_strict(_strip_code_fence(fragment.strip()))
    except ResponseParseError as e:
        logger.debug(f"Ignoring malformed call fragment: {e}")
        return None


def extract_embedded(
    text: str,
    start_marker: str,
    end_marker: str,
    allow_brace_fallback: bool = False,
) -> CallDescriptor | None:
    """Find a call descriptor embedded in free text.

    The first delimited fragment that parses as a valid call wins. A response
    without a call is a normal outcome, so this never raises.

    Args:
        text: The accumulated model response
        start_marker: Marker opening the call payload
        end_marker: Marker closing the call payload
        allow_brace_fallback: Scan for bare ``{...}`` spans when the text
            contains no start marker at all

    Returns:
        The call, or None if no valid call is present
    """
    for fragment in _delimited_fragments(text, start_marker, end_marker):
        call = _try_parse(fragment)
        if call is not None:
            return call

    if allow_brace_fallback and start_marker not in text:
        for candidate in find_balanced_json(text):
            call = _try_parse(candidate)
            if call is not None:
                logger.debug("Found call via brace-scanning fallback")
                return call

    return None
