"""RECOVERY-tier adaptation rules."""
