"""
Accounts Module

Supabase-backed authentication and user settings.
"""
