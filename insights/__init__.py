"""Dashboard aggregation for HR attrition, telecom churn and retail transactions.

This package contains:
- typed record access and binning tables
- a single-pass grouping engine plus ranking policies
- weighted-sum risk scoring profiles
- per-dataset dashboard configuration (JSON-serializable payloads)
- CSV loading, filter normalization and chart helpers (Altair -> Vega-Lite spec dict)
"""
