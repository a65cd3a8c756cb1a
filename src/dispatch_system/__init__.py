"""Dispatch System package.

Resolves, per route and per calendar day, who drives which transport route
(normal, substitute, no service, holiday) from the route driver chains, approved
leave requests, and senior absences. Organized by feature modules (routes,
seniors, leaves, dispatch, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
