"""Strata command-line interface."""
