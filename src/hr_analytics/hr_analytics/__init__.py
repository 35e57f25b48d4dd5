"""HR Analytics package.

Feature modules (employees, attendance, coverage, reconciliation, analytics)
each follow the same split: plain dataclass models, a repository Protocol,
a MySQL implementation, a service and a thin Flask controller.
"""
