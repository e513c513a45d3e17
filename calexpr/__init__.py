__version__ = "0.1.0"

from .calendar import Clock, FixedClock, SystemClock
from .errors import (
    CalexprError,
    EvalError,
    IncompatibleOperands,
    IteratorConfigError,
    LexError,
    ParseError,
)
from .evaluator import (
    calculate,
    dayname,
    end_of_day,
    end_of_month,
    end_of_week,
    end_of_year,
    evaluate,
    evaluate_iterator,
    iterate,
    start_of_day,
    start_of_month,
    start_of_week,
    start_of_year,
)
from .iterator import BeforeMark, BeforeMoment, Count, DateIterator, IteratorSpec
from .parser import parse_iterator, parse_timetype
from .predicates import (
    EndOfYear,
    IsPeriodStart,
    Matches,
    MomentValue,
    MonthIs,
    MonthStart,
    OnMark,
    Predicate,
    WeekdayIs,
)
from .timetype import (
    Amount,
    Duration,
    Moment,
    TimeType,
    days,
    hours,
    minutes,
    moment,
    months,
    now,
    seconds,
    today,
    tomorrow,
    weeks,
    years,
    yesterday,
)
from .units import Unit

__all__ = [
    "Amount",
    "Duration",
    "Moment",
    "TimeType",
    "Unit",
    "Clock",
    "FixedClock",
    "SystemClock",
    "parse_timetype",
    "parse_iterator",
    "evaluate",
    "evaluate_iterator",
    "calculate",
    "iterate",
    "start_of_day",
    "start_of_week",
    "start_of_month",
    "start_of_year",
    "end_of_day",
    "end_of_week",
    "end_of_month",
    "end_of_year",
    "dayname",
    "IteratorSpec",
    "DateIterator",
    "BeforeMoment",
    "BeforeMark",
    "Count",
    "Predicate",
    "MonthIs",
    "WeekdayIs",
    "IsPeriodStart",
    "OnMark",
    "Matches",
    "EndOfYear",
    "MonthStart",
    "MomentValue",
    "moment",
    "now",
    "today",
    "yesterday",
    "tomorrow",
    "seconds",
    "minutes",
    "hours",
    "days",
    "weeks",
    "months",
    "years",
    "CalexprError",
    "LexError",
    "ParseError",
    "EvalError",
    "IncompatibleOperands",
    "IteratorConfigError",
]
