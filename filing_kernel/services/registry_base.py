"""
RegistryBase -- shared operation boundary for both registries.

Responsibility:
    Converts typed kernel errors raised by guards and domain checks into
    ``OperationResult`` failures, binds per-call log context, and provides
    the owner-only pause switch both registries expose.

Architecture position:
    Kernel > Services.  May import from domain/, exceptions, logging_config.

Invariants enforced:
    - Operations check first and mutate last.  A failure raised anywhere in
      an operation body leaves state untouched because no body mutates
      state before its final check has passed.
    - Only ``FilingKernelError`` is converted; anything else (host faults,
      programming errors) propagates.

Audit relevance:
    Every operation logs ``operation_applied`` or ``operation_rejected``
    with the caller, height and error code bound in ``LogContext``.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

from filing_kernel.domain.access import RegistryControl, require_owner
from filing_kernel.domain.results import OperationResult
from filing_kernel.domain.values import CallContext
from filing_kernel.exceptions import AccessError, FilingKernelError
from filing_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.registry")

F = TypeVar("F", bound=Callable[..., Any])


def ledger_operation(name: str, bind: str | None = None) -> Callable[[F], F]:
    """Wrap a registry method ``(self, ctx, ...)`` as a ledger operation.

    ``bind`` names the LogContext field (``tax_year`` or ``filing_id``) that
    receives the first argument after ``ctx``.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(self: RegistryBase, ctx: CallContext, *args: Any, **kwargs: Any) -> OperationResult:
            fields: dict[str, Any] = {}
            if bind is not None:
                fields[bind] = args[0] if args else kwargs.get(bind)
            with LogContext.bind(
                caller=ctx.caller,
                height=ctx.height,
                operation=name,
                **fields,
            ):
                try:
                    value = fn(self, ctx, *args, **kwargs)
                except FilingKernelError as exc:
                    logger.warning(
                        "operation_rejected",
                        extra={
                            "registry": self.registry_name,
                            "error_code": exc.code,
                            "error_number": exc.error_code,
                            "reason": str(exc),
                        },
                    )
                    return OperationResult.failure(exc)

                logger.info(
                    "operation_applied",
                    extra={"registry": self.registry_name},
                )
                return OperationResult.success(value)

        return wrapper  # type: ignore[return-value]

    return decorator


class RegistryBase(ABC):
    """
    Base for SeasonRegistry and FilingRegistry.

    Subclasses set ``registry_name`` and ``paused_error`` and expose their
    ``RegistryControl`` via ``control``.
    """

    registry_name: str = "registry"
    paused_error: type[AccessError]

    @property
    @abstractmethod
    def control(self) -> RegistryControl:
        ...

    @ledger_operation("pause_contract")
    def pause_contract(self, ctx: CallContext) -> bool:
        """Owner only. Idempotent; never blocked by the pause flag."""
        require_owner(self.control, ctx.caller)
        self.control.paused = True
        return True

    @ledger_operation("unpause_contract")
    def unpause_contract(self, ctx: CallContext) -> bool:
        """Owner only. Idempotent; never blocked by the pause flag."""
        require_owner(self.control, ctx.caller)
        self.control.paused = False
        return True
