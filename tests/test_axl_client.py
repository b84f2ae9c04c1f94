import pytest
import requests

from dial_plan_map import axl_client
from dial_plan_map.axl_client import AxlClient
from dial_plan_map.config import AxlSettings, RouteFilters
from dial_plan_map.errors import AxlQueryError

ROWS_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Body>
    <ns:executeSQLQueryResponse xmlns:ns="http://www.cisco.com/AXL/API/10.0">
      <return>
        <row>
          <css>CSS_Internal</css>
          <partition>PT_Internal</partition>
          <pattern>8XXX/PT_Internal</pattern>
          <destination>SIP_Cluster2</destination>
        </row>
        <row>
          <css>CSS_Lobby</css>
          <partition>PT_Internal</partition>
          <pattern>8XXX/PT_Internal</pattern>
          <destination/>
        </row>
      </return>
    </ns:executeSQLQueryResponse>
  </soapenv:Body>
</soapenv:Envelope>"""

EMPTY_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Body>
    <ns:executeSQLQueryResponse xmlns:ns="http://www.cisco.com/AXL/API/10.0">
      <return/>
    </ns:executeSQLQueryResponse>
  </soapenv:Body>
</soapenv:Envelope>"""

FAULT_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Body>
    <soapenv:Fault>
      <faultcode>soapenv:Server</faultcode>
      <faultstring>A syntax error has occurred.</faultstring>
    </soapenv:Fault>
  </soapenv:Body>
</soapenv:Envelope>"""


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code


@pytest.fixture
def settings():
    return AxlSettings(host="10.0.0.5", username="axladmin", password="secret")


@pytest.fixture
def captured(monkeypatch):
    calls = []
    responses = []

    def fake_post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        return responses.pop(0)

    monkeypatch.setattr(axl_client.requests, "post", fake_post)
    return calls, responses


def test_rows_are_parsed_into_records(settings, captured):
    calls, responses = captured
    responses.append(FakeResponse(ROWS_RESPONSE))

    rows = AxlClient(settings).execute_sql_query("SELECT 1")

    assert rows == [
        {
            "css": "CSS_Internal",
            "partition": "PT_Internal",
            "pattern": "8XXX/PT_Internal",
            "destination": "SIP_Cluster2",
        },
        {
            "css": "CSS_Lobby",
            "partition": "PT_Internal",
            "pattern": "8XXX/PT_Internal",
            "destination": "",
        },
    ]
    call = calls[0]
    assert call["url"] == "https://10.0.0.5:8443/axl/"
    assert call["auth"] == ("axladmin", "secret")
    assert call["verify"] is False
    assert call["headers"]["SOAPAction"] == '"CUCM:DB ver=10.0 executeSQLQuery"'
    assert b"http://www.cisco.com/AXL/API/10.0" in call["data"]


def test_sql_is_escaped_inside_the_envelope(settings, captured):
    calls, responses = captured
    responses.append(FakeResponse(EMPTY_RESPONSE))

    AxlClient(settings).execute_sql_query("SELECT a FROM t WHERE x < 5 AND y = 'z'")

    assert b"x &lt; 5" in calls[0]["data"]


def test_empty_return_yields_no_rows(settings, captured):
    _, responses = captured
    responses.append(FakeResponse(EMPTY_RESPONSE))

    assert AxlClient(settings).execute_sql_query("SELECT 1") == []


def test_fetch_methods_send_filtered_route_queries(settings, captured):
    calls, responses = captured
    responses.extend([FakeResponse(EMPTY_RESPONSE), FakeResponse(EMPTY_RESPONSE)])
    client = AxlClient(settings, RouteFilters(css="CSS_%"))

    client.fetch_gateway_routes()
    client.fetch_trunk_routes()

    assert b"rg.name AS route_group" in calls[0]["data"]
    assert b"rg.name IS NULL" in calls[1]["data"]
    assert all(b"LIKE lower('CSS_%')" in call["data"] for call in calls)


def test_soap_fault_raises(settings, captured):
    _, responses = captured
    responses.append(FakeResponse(FAULT_RESPONSE, status_code=500))

    with pytest.raises(AxlQueryError, match="syntax error"):
        AxlClient(settings).execute_sql_query("SELEC 1")


def test_http_error_without_body_raises(settings, captured):
    _, responses = captured
    responses.append(FakeResponse(b"", status_code=401))

    with pytest.raises(AxlQueryError, match="HTTP 401"):
        AxlClient(settings).execute_sql_query("SELECT 1")


def test_connection_error_raises(settings, monkeypatch):
    def failing_post(url, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(axl_client.requests, "post", failing_post)

    with pytest.raises(AxlQueryError, match="connection refused"):
        AxlClient(settings).execute_sql_query("SELECT 1")
