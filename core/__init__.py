"""
Core Module

Shared application wiring: app factory, errors, auth and LLM providers.
"""
