"""SOAP 1.1 document/literal transport over HTTP."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

import httpx
from loguru import logger

from soapbridge.codec.values import WireEntity
from soapbridge.utils.exceptions import RemoteFault, TransportError, sanitize_error_message

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_INT_TYPES = {"int", "integer", "long", "short", "byte", "unsignedInt", "unsignedLong", "unsignedShort", "nonNegativeInteger"}
_FLOAT_TYPES = {"float", "double", "decimal"}

ET.register_namespace("SOAP-ENV", SOAP_ENV_NS)
ET.register_namespace("xsi", XSI_NS)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_name(key: Any) -> str:
    name = key.decode("utf-8", errors="replace") if isinstance(key, bytes) else str(key)
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = f"_{name}"
    return name


def _fill(element: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        append_payload(element, value)
    elif value is None:
        element.set(f"{{{XSI_NS}}}nil", "true")
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif isinstance(value, bytes):
        element.text = value.decode("utf-8", errors="replace")
    else:
        element.text = str(value)


def append_payload(parent: ET.Element, payload: dict[Any, Any]) -> None:
    """Append a payload dict as child elements; list values become repeated elements."""
    for key, value in payload.items():
        name = _element_name(key)
        for member in value if isinstance(value, list) else [value]:
            _fill(ET.SubElement(parent, name), member)


def _typed_text(element: ET.Element) -> Any:
    if element.get(f"{{{XSI_NS}}}nil") in ("true", "1"):
        return None
    text = element.text or ""
    xsi_type = _local(element.get(f"{{{XSI_NS}}}type", "")).split(":")[-1]
    try:
        if xsi_type in _INT_TYPES:
            return int(text.strip())
        if xsi_type in _FLOAT_TYPES:
            return float(text.strip())
    except ValueError:
        return text
    if xsi_type == "boolean":
        return text.strip().lower() in ("true", "1")
    return text


def parse_element(element: ET.Element) -> Any:
    """Turn an XML element into nested dicts; repeated child names become lists."""
    children = list(element)
    if not children:
        return _typed_text(element)
    result: dict[str, Any] = {}
    repeated: set[str] = set()
    for child in children:
        name = _local(child.tag)
        value = parse_element(child)
        if name not in result:
            result[name] = value
        elif name in repeated:
            result[name].append(value)
        else:
            result[name] = [result[name], value]
            repeated.add(name)
    return result


class HttpSoapTransport:
    """Posts SOAP envelopes to one endpoint and parses the response body."""

    def __init__(
        self,
        url: str,
        *,
        namespace: str | None = None,
        timeout: float = 20.0,
        client: httpx.Client | None = None,
    ):
        self.url = url
        self.namespace = namespace or url
        self.timeout = timeout
        self._client = client

    @property
    def wsdl_url(self) -> str:
        return f"{self.url}?SOAPAPI=WSDL"

    def soap_action(self, operation: str) -> str:
        return f'"{self.namespace.rstrip("/")}/{operation}"'

    def build_envelope(self, operation: str, payload: dict[Any, Any]) -> bytes:
        envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
        body = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
        request = ET.SubElement(body, f"{{{self.namespace}}}{operation}")
        append_payload(request, payload)
        return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)

    def _post(self, content: bytes, headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.url, content=content, headers=headers)
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(self.url, content=content, headers=headers)

    def invoke(self, operation: str, argument: WireEntity) -> Any:
        content = self.build_envelope(operation, argument.to_payload())
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": self.soap_action(operation),
            "Accept-Encoding": "gzip, deflate",
        }
        logger.debug("SOAP request {} -> {}", operation, self.url)
        try:
            resp = self._post(content, headers)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"soap timeout: {operation}",
                code="SOAP_TIMEOUT",
                retryable=True,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"soap network error: {operation}: {sanitize_error_message(str(exc))}",
                code="SOAP_NETWORK_ERROR",
                retryable=True,
            ) from exc
        return self._parse_response(operation, resp)

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return status_code >= 500 or status_code in {408, 429}

    def _parse_response(self, operation: str, resp: httpx.Response) -> Any:
        status_code = int(resp.status_code)
        try:
            root = ET.fromstring(resp.content)
        except ET.ParseError as exc:
            if status_code >= 400:
                text = sanitize_error_message((resp.text or "").strip()[:200])
                raise TransportError(
                    f"soap http error {status_code}: {text or 'request failed'}",
                    code="SOAP_HTTP_ERROR",
                    status_code=status_code,
                    retryable=self._is_retryable_status(status_code),
                ) from exc
            raise TransportError(
                f"soap bad response: non-xml body for {operation}",
                code="SOAP_BAD_RESPONSE",
                status_code=status_code,
            ) from exc

        body = root.find(f"{{{SOAP_ENV_NS}}}Body")
        if body is None:
            raise TransportError(
                f"soap bad response: missing Body for {operation}",
                code="SOAP_BAD_RESPONSE",
                status_code=status_code,
            )
        fault = body.find(f"{{{SOAP_ENV_NS}}}Fault")
        if fault is not None:
            parsed = parse_element(fault)
            parsed = parsed if isinstance(parsed, dict) else {}
            raise RemoteFault(
                str(parsed.get("faultcode") or "Server"),
                str(parsed.get("faultstring") or "remote fault"),
                detail=parsed.get("detail"),
                status_code=status_code,
            )
        if status_code >= 400:
            raise TransportError(
                f"soap http error {status_code} for {operation}",
                code="SOAP_HTTP_ERROR",
                status_code=status_code,
                retryable=self._is_retryable_status(status_code),
            )

        response = next(iter(body), None)
        if response is None:
            return {}
        logger.debug("SOAP response {} <- {}", operation, _local(response.tag))
        parsed = parse_element(response)
        if isinstance(parsed, dict):
            return parsed
        # a bare text response is surfaced as a scalar result
        return {} if parsed in ("", None) else {"value": parsed}
