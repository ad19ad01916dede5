"""SOAP transport: envelope construction, httpx POST and XML decoding."""

from __future__ import annotations

import logging
import re
import time
import xml.etree.ElementTree as ET
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from service_monitor.errors import TransportError, UnresolvedURLError
from service_monitor.resolver.models import ResolvedService
from service_monitor.transport.base import TransportResponse
from service_monitor.validation.faults import find_fault

logger = logging.getLogger(__name__)

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"

ET.register_namespace("soap", SOAP_ENV_NS)

# Fault texts servers use when the requested operation is not part of their contract.
_UNKNOWN_OPERATION = re.compile(
    r"no such operation"
    r"|unknown (?:method|operation)"
    r"|(?:method|operation)\s+['\"]?[\w:{}/.-]+['\"]?\s+(?:is\s+)?not (?:found|implemented|defined|supported)"
    r"|did not recognize the value of HTTP Header SOAPAction"
    r"|unexpected wrapper element",
    re.IGNORECASE,
)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _append_value(parent: ET.Element, tag: str, value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            _append_value(parent, tag, item)
        return
    child = ET.SubElement(parent, tag)
    if isinstance(value, dict):
        for key, sub in value.items():
            _append_value(child, _qualify(key, tag), sub)
    elif value is not None:
        child.text = str(value).lower() if isinstance(value, bool) else str(value)


def _qualify(name: str, sibling_tag: str) -> str:
    """Put *name* in the same namespace as *sibling_tag*."""
    if sibling_tag.startswith("{"):
        return sibling_tag.split("}", 1)[0] + "}" + name
    return name


def build_envelope(method: str, args: dict[str, Any], namespace: str | None = None) -> str:
    """Build a SOAP 1.1 request envelope calling *method* with *args*."""
    envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
    body = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    call_tag = f"{{{namespace}}}{method}" if namespace else method
    call = ET.SubElement(body, call_tag)
    for key, value in args.items():
        _append_value(call, _qualify(key, call_tag), value)
    return ET.tostring(envelope, encoding="unicode")


def endpoint_url(url: str) -> str:
    """Drop a ``?wsdl`` query so a WSDL location can be used as the endpoint."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k.lower() != "wsdl"]
    return urlunsplit(parts._replace(query=urlencode(query)))


def element_to_data(element: ET.Element) -> Any:
    """Convert an element into nested dicts; repeated children become lists."""
    children = list(element)
    if not children:
        text = (element.text or "").strip()
        return text or None
    data: dict[str, Any] = {}
    for child in children:
        key = _local_name(child.tag)
        value = element_to_data(child)
        if key in data:
            existing = data[key]
            if not isinstance(existing, list):
                data[key] = [existing]
            data[key].append(value)
        else:
            data[key] = value
    return data


def xml_to_data(text: str) -> Any:
    """Parse a SOAP response, unwrapping Envelope, Body and a single ``*Response`` element."""
    root = ET.fromstring(text)
    if _local_name(root.tag) != "Envelope":
        return {_local_name(root.tag): element_to_data(root)}
    body = next((child for child in root if _local_name(child.tag) == "Body"), None)
    if body is None:
        return element_to_data(root)
    data = element_to_data(body)
    if isinstance(data, dict) and len(data) == 1:
        key, value = next(iter(data.items()))
        if key.endswith("Response") and isinstance(value, dict):
            return value
    return data


def _fault_text(value: Any) -> str:
    if isinstance(value, dict):
        return " ".join(_fault_text(v) for v in value.values())
    if isinstance(value, list):
        return " ".join(_fault_text(v) for v in value)
    return "" if value is None else str(value)


def is_unknown_operation_fault(body: Any) -> bool:
    """Whether *body* is a SOAP fault saying the called operation does not exist."""
    fault_key = find_fault(body)
    if fault_key is None or fault_key.lower() != "fault":
        return False
    return bool(_UNKNOWN_OPERATION.search(_fault_text(body[fault_key])))


def decode_xml(text: str) -> Any:
    if not text.strip():
        return None
    try:
        return xml_to_data(text)
    except ET.ParseError:
        return text


class SoapTransport:
    """Calls SOAP services with either a custom XML body or a generated envelope."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def _request(self, service: ResolvedService, url: str) -> tuple[str, str, dict[str, str]]:
        if service.xml_body:
            headers = {
                "Content-Type": "application/xml",
                "SOAPAction": service.soap_action or service.method,
                **service.headers,
            }
            return url, service.xml_body, headers

        namespace = service.options.get("namespace")
        action = service.soap_action or (f"{namespace.rstrip('/')}/{service.method}" if namespace else service.method)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{action}"',
            **service.headers,
        }
        return endpoint_url(url), build_envelope(service.method, service.args, namespace), headers

    async def invoke(self, service: ResolvedService) -> TransportResponse:
        if not service.url:
            raise UnresolvedURLError(f"URL is required for SOAP service {service.name} ({service.id})")

        url, payload, headers = self._request(service, service.url)
        timeout = service.timeout or self._timeout
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.post(url, content=payload.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timeout after {timeout}s calling {url}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        latency = (time.monotonic() - start) * 1000

        body = decode_xml(resp.text)
        if not service.xml_body and is_unknown_operation_fault(body):
            raise TransportError(
                f"Method {service.method} not found in SOAP service",
                status_code=resp.status_code,
            )
        # SOAP faults arrive as HTTP 500 and go on to the validator.
        if resp.status_code >= 400 and find_fault(body) is None:
            raise TransportError(f"SOAP call returned HTTP {resp.status_code}", status_code=resp.status_code)
        logger.debug("SOAP %s %s -> %d in %.1fms", service.method, url, resp.status_code, latency)
        return TransportResponse(status_code=resp.status_code, body=body, elapsed_ms=round(latency, 1))
