from wms.gateway import fetch_counts

# (endpoint, chart label)
DASHBOARD_SERIES = [
    ("workers", "Workers"),
    ("trades", "Trades"),
    ("departments", "Departments"),
    ("trainings", "Training Programs"),
]


def summarize(counts):
    """Turn per-entity counts into pie-chart data.

    ``counts`` maps endpoint to a count or None when that request has not
    produced one; missing counts show as 0 without holding back the others.
    """
    values = {endpoint: counts.get(endpoint) or 0 for endpoint, _ in DASHBOARD_SERIES}
    total = sum(values.values())
    series = []
    for endpoint, label in DASHBOARD_SERIES:
        count = values[endpoint]
        series.append({
            "key": endpoint,
            "name": label,
            "y": count,
            "percentage": round(count * 100 / total) if total else 0,
            "loaded": counts.get(endpoint) is not None,
        })
    return {"total": total, "series": series}


def collect_counts(gateways):
    endpoints = [endpoint for endpoint, _ in DASHBOARD_SERIES]
    results = fetch_counts(*(gateways[endpoint].alist for endpoint in endpoints))
    return dict(zip(endpoints, results))
