import functools
import inspect

from loguru import logger


def log_endpoint(func):
    """
    A decorator for async endpoint methods that logs entry, exit, and failures.

    Features:
    - Logs the endpoint name and its bound parameters (minus self)
    - Logs the number of returned items, or the record type for single results
    - Logs exceptions and re-raises them unchanged
    """
    sig = inspect.signature(func)

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        func_name = func.__name__

        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        params = {k: v for k, v in bound_args.arguments.items() if k != "self"}

        logger.debug(f"Entering {func_name} with params: {params}")

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"{func_name} failed: {type(e).__name__}: {e}")
            raise

        if isinstance(result, list):
            logger.info(f"{func_name}: {len(result)} items")
        else:
            logger.info(f"{func_name}: {type(result).__name__}")
        return result

    return wrapper
