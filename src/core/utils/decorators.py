"""
Utility decorators for logging simulator executions.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

CONTEXT_PARAMS = ["index", "action", "price", "symbol"]

F = TypeVar("F", bound=Callable[..., Any])


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    return value


def _extract_trading_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract trading context from function arguments."""
    context: dict[str, Any] = {}
    for param_name, value in bound_args.arguments.items():
        if param_name == "candle":
            context["close"] = value.close
            context["candle_timestamp"] = value.timestamp
        elif param_name in CONTEXT_PARAMS:
            context[param_name] = _serialize_parameter_value(value)
    return context


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Setup logging context for a trading operation."""
    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_trading_context(bound_args),
    }


def _result_succeeded(result: Any) -> bool:
    """Interpret result objects that report success as a value."""
    if hasattr(result, "success"):
        return bool(result.success)
    if hasattr(result, "valid"):
        return bool(result.valid)
    return True


def _execute_with_logging(
    func: Callable[..., Any],
    context: dict[str, Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    """Execute function, logging outcome and duration."""
    func_name = func.__name__
    log = logger.bind(**context)
    log.debug(f"Trading operation started: {func_name}")
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log.bind(execution_time_ms=execution_time_ms, error_type=type(e).__name__).error(
            f"Trading operation failed: {func_name}: {e}"
        )
        raise

    execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
    if _result_succeeded(result):
        log.bind(execution_time_ms=execution_time_ms).success(
            f"Trading operation completed: {func_name}"
        )
    else:
        log.bind(execution_time_ms=execution_time_ms).warning(
            f"Trading operation rejected: {func_name}: {getattr(result, 'error', None)}"
        )
    return result


def log_trades(func: F) -> F:
    """Decorator to log trading operations with correlation IDs.

    Rejections reported through a ``success``/``valid`` attribute are logged
    as warnings; raised exceptions are logged and re-raised.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        return _execute_with_logging(func, context, args, kwargs)

    return wrapper  # type: ignore
