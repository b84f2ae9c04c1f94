from dial_plan_map.config import RouteFilters
from dial_plan_map.sql import route_gateway_sql, route_trunk_sql


def test_gateway_sql_without_filters():
    sql = route_gateway_sql()

    assert "rg.name AS route_group" in sql
    assert "WHERE n.tkpatternusage=5" in sql
    assert "LIKE" not in sql
    assert sql.endswith("ORDER BY css.name, csm.sortorder")


def test_gateway_sql_applies_every_filter():
    filters = RouteFilters(css="CSS_%", route_list="RL_%", route_group="RG_%", device="GW_%")

    sql = route_gateway_sql(filters)

    assert "AND lower(css.name) LIKE lower('CSS_%') " in sql
    assert "AND lower(d.name) LIKE lower('RL_%') " in sql
    assert "AND lower(rg.name) LIKE lower('RG_%') " in sql
    assert "AND lower(dd.name) LIKE lower('GW_%') " in sql
    assert sql.index("LIKE") < sql.index("ORDER BY")


def test_trunk_sql_applies_filters_and_skips_route_list_and_group():
    filters = RouteFilters(partition="PT_%", route_list="RL_%", route_group="RG_%", device="SIP_%")

    sql = route_trunk_sql(filters)

    assert "rg.name IS NULL" in sql
    assert "AND lower(rp.name) LIKE lower('PT_%') " in sql
    assert "AND lower(d.name) LIKE lower('SIP_%') " in sql
    assert "RL_%" not in sql
    assert "RG_%" not in sql


def test_filter_quotes_are_doubled():
    sql = route_gateway_sql(RouteFilters(css="O'Brien"))

    assert "LIKE lower('O''Brien')" in sql
