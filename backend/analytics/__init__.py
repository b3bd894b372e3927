"""
analytics — Pure computation over earning and expense records.

Modules
-------
    analytics.iso_calendar  ISO-8601 week numbering.
    analytics.totals        Immutable running totals and safe ratios.
    analytics.summary       Profit and expense summaries.
    analytics.buckets       Grouping by day, platform, month and category.
    analytics.hourly        Weekday × hour profitability ranking.
    analytics.periods       Default ranges and dashboard windows.
    analytics.forecasting   Weekly moving-average + trend forecast.
"""
