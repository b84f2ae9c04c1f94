"""Row source backed by the CUCM AXL executeSQLQuery operation."""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List
from xml.sax.saxutils import escape

import requests

from .config import AxlSettings, RouteFilters
from .errors import AxlQueryError
from .sql import route_gateway_sql, route_trunk_sql

logger = logging.getLogger(__name__)

_ENVELOPE = (
    '<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" '
    'xmlns:ns1="{namespace}">'
    "<soapenv:Header/>"
    "<soapenv:Body><ns1:executeSQLQuery><sql>{sql}</sql></ns1:executeSQLQuery></soapenv:Body>"
    "</soapenv:Envelope>"
)


class AxlClient:
    """Fetches gateway and trunk route rows over AXL."""

    def __init__(self, settings: AxlSettings, filters: RouteFilters | None = None) -> None:
        self._settings = settings
        self._filters = filters or RouteFilters()

    def fetch_gateway_routes(self) -> List[Dict[str, str]]:
        return self.execute_sql_query(route_gateway_sql(self._filters))

    def fetch_trunk_routes(self) -> List[Dict[str, str]]:
        return self.execute_sql_query(route_trunk_sql(self._filters))

    def execute_sql_query(self, sql: str) -> List[Dict[str, str]]:
        settings = self._settings
        body = _ENVELOPE.format(namespace=settings.namespace, sql=escape(sql))
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"CUCM:DB ver={settings.version}.0 executeSQLQuery"',
        }
        logger.debug("POST executeSQLQuery to %s", settings.endpoint)
        try:
            response = requests.post(
                settings.endpoint,
                data=body.encode("utf-8"),
                headers=headers,
                auth=(settings.username, settings.password),
                verify=settings.verify_tls,
                timeout=settings.timeout,
            )
        except requests.RequestException as error:
            raise AxlQueryError(f"AXL request failed: {error}") from error

        root = self._parse_xml(response.content)
        if root is not None:
            fault = self._find_fault(root)
            if fault:
                raise AxlQueryError(f"AXL fault: {fault}")
        if response.status_code >= 400:
            raise AxlQueryError(f"AXL request failed with HTTP {response.status_code}")
        if root is None:
            raise AxlQueryError("AXL response is not valid XML")

        rows = self.parse_rows(root)
        logger.info("executeSQLQuery returned %d rows", len(rows))
        return rows

    @staticmethod
    def parse_rows(root: ET.Element) -> List[Dict[str, str]]:
        rows: List[Dict[str, str]] = []
        for element in root.iter():
            if _local_name(element.tag) != "row":
                continue
            rows.append({_local_name(child.tag): (child.text or "") for child in element})
        return rows

    @staticmethod
    def _parse_xml(content: bytes) -> ET.Element | None:
        if not content:
            return None
        try:
            return ET.fromstring(content)
        except ET.ParseError:
            return None

    @staticmethod
    def _find_fault(root: ET.Element) -> str:
        for element in root.iter():
            if _local_name(element.tag) != "Fault":
                continue
            for child in element.iter():
                if _local_name(child.tag) == "faultstring":
                    return (child.text or "").strip() or "unknown fault"
            return "unknown fault"
        return ""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
