"""
Tagged results for paginated listings.

A paginated listing yields one of three outcomes per step:

* :class:`Item` - a successfully decoded item
* :class:`PageError` - fetching or decoding this step failed
* :class:`Exhausted` - there is nothing more to fetch

Consumers stop on ``Exhausted`` and decide for themselves whether a
``PageError`` is fatal.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Tuple, Type, Union

from .constants import MAX_CONSECUTIVE_PAGE_ERRORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    value: Any


@dataclass(frozen=True)
class PageError:
    error: BaseException


@dataclass(frozen=True)
class Exhausted:
    pass


EXHAUSTED = Exhausted()

PageResult = Union[Item, PageError, Exhausted]


def iterate_tagged(
    fetch: Callable[[], Iterable[Any]],
    errors: Tuple[Type[BaseException], ...] = (Exception,),
    max_consecutive_errors: int = MAX_CONSECUTIVE_PAGE_ERRORS,
) -> Iterator[PageResult]:
    """
    Wrap a raw listing iterator so every step becomes a tagged result.

    Args:
        fetch: Callable returning the raw iterable (called once)
        errors: Exception types reported as ``PageError``; anything else propagates
        max_consecutive_errors: Give up after this many errors in a row

    Yields:
        ``Item`` and ``PageError`` results, always terminated by ``Exhausted``
    """
    try:
        iterator = iter(fetch())
    except errors as e:
        yield PageError(e)
        yield EXHAUSTED
        return

    consecutive_errors = 0
    while True:
        try:
            value = next(iterator)
        except StopIteration:
            break
        except errors as e:
            consecutive_errors += 1
            yield PageError(e)
            if consecutive_errors >= max_consecutive_errors:
                logger.warning(
                    "Abandoning listing after %d consecutive page errors",
                    consecutive_errors,
                )
                break
            continue

        consecutive_errors = 0
        yield Item(value)

    yield EXHAUSTED
