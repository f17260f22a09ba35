from typing import Any, Callable, Dict, Iterable, List, Sequence

from treasury import aggregator
from treasury.domain import FilterSpec, Transaction
from treasury.logging_setup import get_logger

logger = get_logger(__name__)

Aggregator = Callable[[Sequence[Transaction], Dict[str, Any]], Dict[str, Any]]


def agg_totals(trans, acc):
    return {"totals": aggregator.totals(trans)}


def agg_monthly(trans, acc):
    return {"monthly": aggregator.monthly_summary(trans)}


def agg_categories(trans, acc):
    return {"categories": aggregator.category_summary(trans)}


def agg_running_balance(trans, acc):
    return {"running_balance": aggregator.running_balance(trans)}


def agg_pies(trans, acc):
    inflow, outflow = aggregator.category_pie(trans)
    return {"inflow_pie": inflow, "outflow_pie": outflow}


def default_aggregators() -> List[Aggregator]:
    return [agg_totals, agg_monthly, agg_categories, agg_running_balance, agg_pies]


class ReportService:
    """Facade that filters transactions and runs injected aggregators over them.

    aggregators: sequence of functions taking (transactions, acc) -> dict.
    ``acc`` holds the merged outputs of the aggregators that ran before.
    """

    def __init__(self, aggregators: Sequence[Aggregator]):
        self.aggregators = aggregators

    def general_report(self, transactions: Iterable[Transaction], spec: FilterSpec) -> Dict[str, Any]:
        filtered = aggregator.filter_transactions(transactions, spec)
        report: Dict[str, Any] = {
            "period": aggregator.period_description(spec),
            "transactions": filtered,
            "steps": [],
            "result": {},
        }

        acc: Dict[str, Any] = {}
        for agg in self.aggregators:
            name = getattr(agg, "__name__", str(agg))
            try:
                out = agg(filtered, dict(acc))
            except Exception as e:
                logger.exception("Aggregator %s failed", name)
                report["steps"].append({"aggregator": name, "error": str(e)})
                continue
            report["steps"].append({"aggregator": name, "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        logger.debug("General report for %s: %d transactions", report["period"], len(filtered))
        return report
