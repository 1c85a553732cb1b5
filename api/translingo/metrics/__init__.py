"""Prometheus metrics for the TransLingo API.

Usage:
    from translingo.metrics.translation_metrics import provider_attempts_total
"""
