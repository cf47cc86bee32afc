from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import CalendarBoundary
from .core.constants import RuleTable
from .events.aggregator import DayAggregator
from .integrity.auditor import IntegrityAuditor
from .integrity.diagnostics import Diagnostics
from .reporting.reporter import StatisticsReporter
from .streaks.calculator import StreakCalculator
from .streaks.calendar import CalendarPolicy, calendar_from_settings
from .validation.factory import ActionStrategyFactory
from .validation.timing import TimingEvaluator
from .validation.validator import ActionValidator


@dataclass(frozen=True)
class Container:
    rules: RuleTable
    boundary: CalendarBoundary
    calendar: CalendarPolicy
    authorized_origins: tuple

    timing: TimingEvaluator
    validator: ActionValidator
    aggregator: DayAggregator
    streaks: StreakCalculator
    reporter: StatisticsReporter
    auditor: IntegrityAuditor
    diagnostics: Diagnostics


def build_container(settings: Optional[object] = None) -> Container:
    """Wire the engine from a settings module (None gives the built-in defaults)."""
    rules = RuleTable.from_settings(settings)
    boundary = CalendarBoundary.from_name(getattr(settings, "TIMEZONE", "") or None)
    calendar = calendar_from_settings(settings)

    timing = TimingEvaluator(rules)
    validator = ActionValidator(
        rules,
        allow_any_origin=bool(getattr(settings, "ALLOW_ANY_ORIGIN", False)),
        strategy_factory=ActionStrategyFactory(),
        timing=timing,
        boundary=boundary,
    )
    aggregator = DayAggregator(boundary)
    streaks = StreakCalculator(calendar, window_days=rules.streak_window_days, boundary=boundary)
    reporter = StatisticsReporter(aggregator=aggregator, streaks=streaks, calendar=calendar, boundary=boundary)
    auditor = IntegrityAuditor(rules, boundary=boundary, aggregator=aggregator, reporter=reporter)
    diagnostics = Diagnostics(auditor=auditor, validator=validator, rules=rules, boundary=boundary)

    return Container(
        rules=rules,
        boundary=boundary,
        calendar=calendar,
        authorized_origins=tuple(getattr(settings, "AUTHORIZED_ORIGINS", ()) or ()),
        timing=timing,
        validator=validator,
        aggregator=aggregator,
        streaks=streaks,
        reporter=reporter,
        auditor=auditor,
        diagnostics=diagnostics,
    )
