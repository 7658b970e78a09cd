"""Field-force reconciliation engine.

Feature modules (claims, payroll, approvals, sales, ...) each keep a plain
model/repository/service split; a thin Flask controller layer sits on top.
The document store and the asset store are external collaborators reached
through the protocols in ``store``.
"""
