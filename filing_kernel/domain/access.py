"""
Access control and pause policy (``filing_kernel.domain.access``).

Responsibility
--------------
Guard helpers shared by both registries.  Every mutating operation applies
them in a fixed order before touching state:

    1. pause check      -- ``require_not_paused``
    2. role check       -- ``require_owner`` / ``require_any_of``
    3. domain checks    -- registry specific
    4. mutation

The order is observable: when several violations co-occur, the first guard
in this sequence decides the reported error.  A non-owner calling an
owner-only operation on a paused registry gets the pause error.

Architecture position
---------------------
**Kernel domain layer** -- pure functions over ``RegistryControl``.  Guards
raise typed exceptions; the registry operation boundary converts them into
``OperationResult`` failures.
"""

from __future__ import annotations

from dataclasses import dataclass

from filing_kernel.exceptions import AccessError, NotAuthorizedError
from filing_kernel.domain.values import Principal


@dataclass
class RegistryControl:
    """Owner identity and pause flag of one registry."""

    owner: Principal
    paused: bool = False

    def is_owner(self, caller: Principal) -> bool:
        return caller == self.owner


def require_not_paused(
    control: RegistryControl,
    operation: str,
    paused_error: type[AccessError],
) -> None:
    """Raise ``paused_error(operation)`` when the registry is paused."""
    if control.paused:
        raise paused_error(operation)


def require_owner(control: RegistryControl, caller: Principal) -> None:
    if not control.is_owner(caller):
        raise NotAuthorizedError(caller, "owner")


def require_any_of(
    caller: Principal,
    role_name: str,
    *principals: Principal | None,
) -> None:
    """Raise NotAuthorizedError unless ``caller`` is one of ``principals``.

    Unset (None) principals never match.
    """
    if not any(p is not None and caller == p for p in principals):
        raise NotAuthorizedError(caller, role_name)
