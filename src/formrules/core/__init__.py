"""
Core validation engine: models, rule grammar, evaluators, lookups and sessions.
"""
