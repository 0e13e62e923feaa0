"""Serialization module — export engine results for the report/UI layer."""

from race_predictor.serialization.report import to_report_json, to_report_json_string

__all__ = ["to_report_json", "to_report_json_string"]
