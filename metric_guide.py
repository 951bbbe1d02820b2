"""Human-readable metric definitions for the app."""

METRIC_GUIDE = [
    {
        "Metric": "Net value",
        "Meaning": "Portfolio value on the latest date in the uploaded series.",
        "Formula": "value(last point)",
    },
    {
        "Metric": "Current month growth",
        "Meaning": "Change over the latest month present in the data.",
        "Formula": "EndValue(latest month) - StartValue(latest month)",
    },
    {
        "Metric": "Total return",
        "Meaning": "Change from the first to the last observation.",
        "Formula": "(value(last) - value(first)) / value(first) * 100",
    },
    {
        "Metric": "All time high",
        "Meaning": "Largest portfolio value anywhere in the series.",
        "Formula": "max(value)",
    },
    {
        "Metric": "Month start value",
        "Meaning": "Closing value of the previous month present in the data; the first month opens at its own first value.",
        "Formula": "EndValue(previous month) or value(first point of month)",
    },
    {
        "Metric": "Month end value",
        "Meaning": "Value of the last observation inside the month.",
        "Formula": "value(last point of month)",
    },
    {
        "Metric": "Monthly growth",
        "Meaning": "Absolute change across the month.",
        "Formula": "EndValue - StartValue",
    },
    {
        "Metric": "Monthly growth %",
        "Meaning": "Relative change across the month; reported as 0 when the start value is 0.",
        "Formula": "(EndValue - StartValue) / StartValue * 100",
    },
    {
        "Metric": "Daily change",
        "Meaning": "Change from the previous observation in the full series.",
        "Formula": "value(point) - value(previous point)",
    },
    {
        "Metric": "Index growth %",
        "Meaning": "Market index change between the first and last observation, when both carry an index.",
        "Formula": "(index(last) - index(first)) / index(first) * 100",
    },
]
