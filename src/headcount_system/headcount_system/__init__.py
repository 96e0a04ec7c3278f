"""Headcount System package.

Daily headcount ledger organized by feature modules (users, sessions,
attendance, audit, ...) with a thin Flask controller layer on top of
service/repository layers backed by a whole-document store.
"""
