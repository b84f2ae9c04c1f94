import pytest

from dial_plan_map.graph_builder import GraphBuilder


class StaticRowSource:
    def __init__(self, gateway_rows=None, trunk_rows=None):
        self.gateway_rows = gateway_rows
        self.trunk_rows = trunk_rows
        self.calls = []

    def fetch_gateway_routes(self):
        self.calls.append("gateway")
        return self.gateway_rows

    def fetch_trunk_routes(self):
        self.calls.append("trunk")
        return self.trunk_rows


def gateway_row(css, partition, dn, route_list, route_group, destination):
    return {
        "css": css,
        "partition": partition,
        "pattern": f"{dn}/{partition}",
        "route_list": route_list,
        "route_group": route_group,
        "destination": destination,
    }


def trunk_row(css, partition, dn, destination):
    return {
        "css": css,
        "partition": partition,
        "pattern": f"{dn}/{partition}",
        "destination": destination,
    }


@pytest.fixture
def builder():
    return GraphBuilder()


@pytest.fixture
def gateway_rows():
    return [
        gateway_row("CSS_Internal", "PT_Internal", "9.@", "RL_PSTN", "RG_PSTN", "GW_HQ"),
        gateway_row("CSS_Internal", "PT_Internal", "9.@", "RL_PSTN", "RG_PSTN", "GW_Branch"),
        gateway_row("CSS_Lobby", "PT_Internal", "9.@", "RL_PSTN", "RG_PSTN", "GW_HQ"),
        gateway_row("CSS_Internal", "PT_Intl", "9.011!", "RL_Intl", "RG_Intl", "GW_HQ"),
    ]


@pytest.fixture
def trunk_rows():
    return [
        trunk_row("CSS_Internal", "PT_Internal", "8XXX", "SIP_Cluster2"),
        trunk_row("CSS_Lobby", "PT_Internal", "8XXX", "SIP_Cluster2"),
    ]
