"""SOAP 1.1 envelope codec built on ``xml.etree.ElementTree``.

Requests are decoded into a flat :class:`ParsedRequest`; replies are
encoded from :class:`Response` / :class:`Fault`. :func:`parse_reply` is the
inverse of the two renderers and is what a client (or a test) uses to read
an answer back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.etree import ElementTree as ET

from countryws.domain.errors import ErrorCode, MalformedRequestError
from countryws.soap.messages import Fault, ParsedRequest, Response

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_PREFIX = "soap"
PAYLOAD_PREFIX = "tns"

_ENV = f"{{{SOAP_ENV_NS}}}"

ET.register_namespace(SOAP_PREFIX, SOAP_ENV_NS)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _body_child(document: bytes | str) -> ET.Element:
    """Return the single element inside ``soap:Body``."""
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise MalformedRequestError(f"Envelope is not well-formed XML: {exc}") from exc

    if root.tag != f"{_ENV}Envelope":
        raise MalformedRequestError(f"Expected soap:Envelope, got <{_local_name(root.tag)}>")
    body = root.find(f"{_ENV}Body")
    if body is None:
        raise MalformedRequestError("Envelope has no soap:Body")

    children = list(body)
    if not children:
        raise MalformedRequestError("soap:Body is empty")
    if len(children) > 1:
        raise MalformedRequestError("soap:Body must carry exactly one element")
    return children[0]


def parse_envelope(document: bytes | str) -> ParsedRequest:
    """Decode a request envelope.

    Leaf children of the request element become params keyed by local name.
    One level of nesting is flattened to dotted keys; anything deeper is
    rejected. Text is passed through untrimmed.

    Raises:
        MalformedRequestError: The document is not a usable request envelope.
    """
    request = _body_child(document)
    params: dict[str, str] = {}
    for child in request:
        key = _local_name(child.tag)
        nested = list(child)
        if not nested:
            params[key] = child.text or ""
            continue
        for leaf in nested:
            if len(leaf):
                raise MalformedRequestError(f"<{key}> is nested too deeply")
            params[f"{key}.{_local_name(leaf.tag)}"] = leaf.text or ""
    return ParsedRequest(operation=_local_name(request.tag), params=params)


def _element_to_payload(element: ET.Element) -> dict[str, list[Any]]:
    payload: dict[str, list[Any]] = {}
    for child in element:
        value: Any = _element_to_payload(child) if len(child) else (child.text or "")
        payload.setdefault(_local_name(child.tag), []).append(value)
    return payload


def parse_reply(document: bytes | str) -> Response | Fault:
    """Decode a response or fault envelope.

    Response payload values are always lists (one entry per occurrence),
    with nested elements decoded to dicts of the same shape.
    """
    element = _body_child(document)
    if element.tag != f"{_ENV}Fault":
        return Response(operation=_local_name(element.tag), payload=_element_to_payload(element))

    message = element.findtext("faultstring") or ""
    code_text = None
    detail = element.find("detail")
    if detail is not None:
        for node in detail.iter():
            if _local_name(node.tag) == "code":
                code_text = node.text
                break
    try:
        code = ErrorCode(code_text or ErrorCode.INTERNAL)
    except ValueError:
        code = ErrorCode.INTERNAL
    return Fault(code=code, message=message)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append_value(parent: ET.Element, key: str, value: Any, namespace: str) -> None:
    element = ET.SubElement(parent, f"{{{namespace}}}{key}")
    if isinstance(value, Mapping):
        _append_payload(element, value, namespace)
    else:
        element.text = _text(value)


def _append_payload(parent: ET.Element, payload: Mapping[str, Any], namespace: str) -> None:
    """Dicts become child elements, lists repeat the element, None is omitted."""
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, list | tuple):
            for item in value:
                _append_value(parent, key, item, namespace)
        else:
            _append_value(parent, key, value, namespace)


def _new_envelope(namespace: str) -> tuple[ET.Element, ET.Element]:
    ET.register_namespace(PAYLOAD_PREFIX, namespace)
    envelope = ET.Element(f"{_ENV}Envelope")
    ET.SubElement(envelope, f"{_ENV}Header")
    body = ET.SubElement(envelope, f"{_ENV}Body")
    return envelope, body


def _serialize(envelope: ET.Element, *, pretty: bool) -> bytes:
    if pretty:
        ET.indent(envelope)
    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


def render_response(response: Response, *, namespace: str, pretty: bool = False) -> bytes:
    """Encode a successful reply as ``<tns:{operation}>`` inside the body."""
    envelope, body = _new_envelope(namespace)
    element = ET.SubElement(body, f"{{{namespace}}}{response.operation}")
    _append_payload(element, response.payload, namespace)
    return _serialize(envelope, pretty=pretty)


def render_fault(fault: Fault, *, namespace: str, pretty: bool = False) -> bytes:
    """Encode a fault; the stable code travels in ``detail/tns:fault/tns:code``."""
    envelope, body = _new_envelope(namespace)
    element = ET.SubElement(body, f"{_ENV}Fault")
    ET.SubElement(element, "faultcode").text = f"{SOAP_PREFIX}:{fault.fault_role}"
    ET.SubElement(element, "faultstring").text = fault.message
    detail = ET.SubElement(element, "detail")
    _append_value(
        detail,
        "fault",
        {"code": str(fault.code), "message": fault.message},
        namespace,
    )
    return _serialize(envelope, pretty=pretty)


def render_request(request: ParsedRequest, *, namespace: str, pretty: bool = False) -> bytes:
    """Encode a request envelope (dotted params become one nested level)."""
    payload: dict[str, Any] = {}
    for key, value in request.params.items():
        outer, _, inner = key.partition(".")
        if inner:
            payload.setdefault(outer, {})[inner] = value
        else:
            payload[key] = value
    return render_response(
        Response(operation=request.operation, payload=payload),
        namespace=namespace,
        pretty=pretty,
    )
