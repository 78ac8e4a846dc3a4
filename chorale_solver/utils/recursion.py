"""Exceptions for backtracking searches.

A step that breaks a rule raises a DeadEnd (an UndoRecursiveStep) and the search
backs up to its last choice point. RecursionFailed, on the other hand, means the
whole search should be abandoned.
"""
from __future__ import annotations

import typing as t
from copy import deepcopy


class RecursionFailed(Exception):
    pass


class UndoRecursiveStep(Exception):
    pass


class DeadEnd(UndoRecursiveStep):
    """
    Keyword arguments describe the dead end; they are stored in `save_deadends_to`
    (if given) until it holds `max_deadends_to_save` items.

    >>> deadends = []
    >>> exc = DeadEnd("bad spacing", save_deadends_to=deadends, i=3)
    >>> str(exc), deadends
    ('bad spacing', [{'i': 3}])
    """

    def __init__(
        self,
        msg: str = "",
        save_deadends_to: list[t.Any] | None = None,
        max_deadends_to_save: int = 100,
        **kwargs,
    ):
        super().__init__(msg)
        if (
            save_deadends_to is not None
            and len(save_deadends_to) < max_deadends_to_save
        ):
            save_deadends_to.append(deepcopy(kwargs))
