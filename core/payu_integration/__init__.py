"""
PayU Integration Package - DSP
=============================================================

This package handles course purchases paid through PayU. PayU reports every
payment asynchronously with an Instant Payment Notification (IPN); the
endpoint in this package re-validates each notification with PayU and, if
everything checks out, enrols the paying user into the course.

Current Scope
--------------------
- IPN endpoint (see views.py) with request admission and parsing
  (notification.py), gateway validation (gateway.py) and the business
  rules (processor.py).
- Transaction records for reconciliation (models.py), visible in the
  Django admin and through a staff-only read API.
- Notifications to students, teachers and site administrators
  (messaging.py).

Design Rationale
----------------
- Explicit dependencies: each request builds an `IpnContext` (config,
  record store, enrolment service, notifier, gateway client) instead of
  reaching for globals.
- Explicit results: the processor returns an `IpnResult`; only the view
  decides what PayU gets to see.
- Two error channels: a generic 400 for malformed requests, admin e-mail
  for everything else.

Structure
---------
- __init__.py     → this file
- apps.py         → App configuration (`PayuIntegrationConfig`)
- config.py       → `PayuConfig` built from Django settings
- notification.py → admission guard, parser, echo builder
- gateway.py      → validation call to PayU
- store.py        → database lookups and transaction records
- messaging.py    → e-mail delivery and message texts
- processor.py    → decision core
- views.py        → API endpoints
- urls.py         → Routes

Author: DSP Development Team
Date: 2025-10-01
"""
