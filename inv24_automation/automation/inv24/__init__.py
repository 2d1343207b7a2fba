"""
INV24 automation module.

Selectors, login session, outcome classification and the session-level
client for the INV24 invoicing UI.
"""
