from datetime import date

from treasury.domain import FilterSpec, Transaction
from treasury.services import ReportService, agg_totals, default_aggregators

TRANSACTIONS = (
    Transaction("t1", date(2024, 1, 5), "inflow", 100, "Offering", "Offerings", "Ana"),
    Transaction("t2", date(2024, 1, 10), "outflow", 30, "Bulbs", "Maintenance", "Rui"),
    Transaction("t3", date(2024, 2, 1), "inflow", 50, "Tithe", "Tithes", "Ana"),
    Transaction("t4", date(2023, 7, 1), "inflow", 999, "Old offering", "Offerings", "Ana"),
)


def test_general_report_filters_then_aggregates():
    svc = ReportService(default_aggregators())
    report = svc.general_report(TRANSACTIONS, FilterSpec(year=2024))
    result = report["result"]

    assert report["period"] == "2024"
    assert [t.id for t in report["transactions"]] == ["t1", "t2", "t3"]
    assert result["totals"].balance == 120
    assert len(result["monthly"]) == 12
    assert result["monthly"][0].balance == 70
    assert [c.category for c in result["categories"]] == ["Offerings", "Maintenance", "Tithes"]
    assert [p.cumulative_balance for p in result["running_balance"]] == [100, 70, 120]
    assert [s.name for s in result["inflow_pie"]] == ["Offerings", "Tithes"]
    assert [s["aggregator"] for s in report["steps"]] == [
        "agg_totals",
        "agg_monthly",
        "agg_categories",
        "agg_running_balance",
        "agg_pies",
    ]


def test_general_report_empty_selection():
    report = ReportService(default_aggregators()).general_report(TRANSACTIONS, FilterSpec(category="Missions"))

    assert report["transactions"] == ()
    assert report["result"]["totals"].inflow == 0
    assert report["result"]["running_balance"] == ()


def test_aggregators_see_previous_outputs():
    seen = {}

    def agg_share(trans, acc):
        seen.update(acc)
        t = acc["totals"]
        return {"inflow_share": t.inflow / (t.inflow + t.outflow)}

    report = ReportService([agg_totals, agg_share]).general_report(TRANSACTIONS, FilterSpec(year=2024))

    assert "totals" in seen
    assert report["result"]["inflow_share"] == 150 / 180


def test_failing_aggregator_is_recorded_and_skipped():
    def agg_broken(trans, acc):
        raise RuntimeError("boom")

    report = ReportService([agg_broken, agg_totals]).general_report(TRANSACTIONS, FilterSpec())

    assert report["steps"][0] == {"aggregator": "agg_broken", "error": "boom"}
    assert report["result"]["totals"].inflow == 1149
