"""OPTIMIZATION-tier adaptation rules."""
