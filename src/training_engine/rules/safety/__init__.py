"""SAFETY-tier adaptation rules."""
