"""Core (UI-agnostic) catalog dashboard logic.

This package contains:
- data loading (CSV -> pandas)
- filter controls, filter state and filtering
- grouped aggregates and widget payloads (JSON-serializable)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
