"""executeSQLQuery statements for gateway and trunk route discovery."""

from typing import Dict

from .config import RouteFilters

_ROUTE_GATEWAY_BASE = """SELECT css.name AS css,
  rp.name AS partition,
  CONCAT(CONCAT(n.dnorpattern,"/"),rp.name) AS pattern,
  d.name AS route_list,
  rg.name AS route_group,
  dd.name AS destination
  FROM callingsearchspace AS css
    INNER JOIN callingsearchspacemember csm ON csm.fkcallingsearchspace = css.pkid
    INNER JOIN routepartition rp ON csm.fkroutepartition = rp.pkid
    INNER JOIN numplan n ON rp.pkid = n.fkroutepartition
    INNER JOIN devicenumplanmap AS dmap ON dmap.fknumplan=n.pkid
    INNER JOIN device AS d ON dmap.fkdevice=d.pkid
    LEFT JOIN routelist AS rl ON rl.fkdevice = d.pkid
    INNER JOIN routegroup AS rg ON rg.pkid=rl.fkroutegroup
    INNER JOIN RouteGroupDeviceMap rgdp ON rgdp.fkRouteGroup=rg.pkid
    INNER JOIN device dd ON dd.pkid=rgdp.fkDevice
  WHERE n.tkpatternusage=5 """

_ROUTE_TRUNK_BASE = """SELECT css.name AS css,
  rp.name AS partition,
  CONCAT(CONCAT(n.dnorpattern,"/"),rp.name) AS pattern,
  d.name AS destination
  FROM callingsearchspace AS css
    INNER JOIN callingsearchspacemember csm ON csm.fkcallingsearchspace = css.pkid
    INNER JOIN routepartition rp ON csm.fkroutepartition = rp.pkid
    INNER JOIN numplan n ON rp.pkid = n.fkroutepartition
    INNER JOIN devicenumplanmap AS dmap ON dmap.fknumplan=n.pkid
    INNER JOIN device AS d ON dmap.fkdevice=d.pkid
    LEFT JOIN routelist AS rl ON rl.fkdevice = d.pkid
    LEFT JOIN routegroup AS rg ON rg.pkid=rl.fkroutegroup
    LEFT JOIN RouteGroupDeviceMap rgdp ON rgdp.fkRouteGroup=rg.pkid
    LEFT JOIN device dd ON dd.pkid=rgdp.fkDevice
  WHERE n.tkpatternusage=5
  AND rg.name IS NULL """

_ORDER_BY = "ORDER BY css.name, csm.sortorder"

GATEWAY_FILTER_COLUMNS: Dict[str, str] = {
    "css": "css.name",
    "partition": "rp.name",
    "pattern": "pattern",
    "route_list": "d.name",
    "route_group": "rg.name",
    "device": "dd.name",
}

# Trunks attach directly to the pattern's device and have no route list/group.
TRUNK_FILTER_COLUMNS: Dict[str, str] = {
    "css": "css.name",
    "partition": "rp.name",
    "pattern": "pattern",
    "device": "d.name",
}


def route_gateway_sql(filters: RouteFilters | None = None) -> str:
    return add_filters(_ROUTE_GATEWAY_BASE, filters, GATEWAY_FILTER_COLUMNS) + _ORDER_BY


def route_trunk_sql(filters: RouteFilters | None = None) -> str:
    return add_filters(_ROUTE_TRUNK_BASE, filters, TRUNK_FILTER_COLUMNS) + _ORDER_BY


def add_filters(sql: str, filters: RouteFilters | None, columns: Dict[str, str]) -> str:
    if filters is None:
        return sql
    for name, pattern in filters.active().items():
        column = columns.get(name)
        if column is None:
            continue
        sql += f"AND lower({column}) LIKE lower('{_quote(pattern)}') "
    return sql


def _quote(value: str) -> str:
    return value.replace("'", "''")
