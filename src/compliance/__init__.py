"""Disclosure compliance core.

Rule validators, completeness assessors and aggregators for ESRS
disclosure records, plus the service that wires them to the record store.

Validators, assessors and aggregators are deterministic -- no I/O.
"""
