"""Service layer: command runner, label patcher, exit translator.

INVARIANT: services return ServiceResult for expected failures and never
raise for them.
"""
