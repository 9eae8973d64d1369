"""Adaptation rules, discovered by RuleRegistry at runtime."""
