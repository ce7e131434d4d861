import logging
from typing import Any, Callable, Iterable

logger = logging.getLogger('wpsutils')


def each(items: Iterable, fn: Callable, *args: Any, **kwargs: Any) -> None:
    """
    Call ``fn`` once for every item, passing the item followed by the extra arguments.

    :param items: The items to loop over.
    :param fn: The callback, called as ``fn(item, *args, **kwargs)``.
    :param args: Extra positional arguments for the callback.
    :param kwargs: Extra keyword arguments for the callback.

    Nothing is called if ``fn`` is not callable. Exceptions raised by the callback
    are not caught.
    """
    if not callable(fn):
        logger.warning(f'each() called with a non callable: {fn!r}')
        return

    for item in items:
        fn(item, *args, **kwargs)
