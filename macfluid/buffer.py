"""
Double Buffer

A pair of values (front, back) with a swap operation.

The front value is written during the current step while the back value keeps
the result of the previous step, so updates can read stable prior state
without making temporary copies of whole fields.
"""

import numpy as np


class FrontBackBuffer:
    """
    Front/back value pair.

    Parameters
    ----------
    front : float or ndarray
        Value being written by the current step
    back : float or ndarray, optional
        Value committed by the previous step. If None, a copy of `front`.
    """

    __slots__ = ("front", "back")

    def __init__(self, front, back=None):
        self.front = front
        if back is None:
            back = front.copy() if isinstance(front, np.ndarray) else front
        self.back = back

    def swap(self):
        """Exchange front and back."""
        self.front, self.back = self.back, self.front

    def __repr__(self):
        return f"FrontBackBuffer(front={self.front!r}, back={self.back!r})"
