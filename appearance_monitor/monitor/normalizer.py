"""Absence normalization for settled provider calls."""

from typing import TypeVar, Union

import structlog

from ..errors import SettingNotFoundError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def not_found_as_none(outcome: Union[T, BaseException]) -> Union[T, None]:
    """
    Turn the settled outcome of one provider call into a value.

    ``outcome`` is what ``asyncio.gather(..., return_exceptions=True)``
    produced for the call: the value itself or the raised exception.

    Returns:
        None for SettingNotFoundError, the value otherwise

    Raises:
        The outcome itself, when it is any other exception
    """
    if isinstance(outcome, SettingNotFoundError):
        logger.debug("Setting not found, treating as absent", key=outcome.key)
        return None
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome
