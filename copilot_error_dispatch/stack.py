# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Stack capture for reported errors.

An error handed to a reporter is wrapped exactly once in a ``TracedError``
which pairs the exception with an ordered tuple of frames, innermost first.
The first frame is always the wrapping frame (the function that called
``with_stack``, e.g. a reporter's ``report``) and is dropped when the frames
are rendered for a sink.
"""

import traceback
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StackFrame:
    """A single stack trace entry."""

    method: str
    file: str
    line: int

    @classmethod
    def from_summary(cls, summary: traceback.FrameSummary) -> "StackFrame":
        return cls(method=summary.name, file=summary.filename, line=summary.lineno or 0)


@dataclass(frozen=True)
class TracedError:
    """An exception together with the stack captured when it was wrapped.

    Attributes:
        error: The wrapped exception (never modified)
        frames: Captured frames, innermost first, wrapping frame included
    """

    error: BaseException
    frames: tuple[StackFrame, ...]

    def __str__(self) -> str:
        return str(self.error)


def with_stack(error: BaseException | TracedError) -> TracedError:
    """Wrap an error so it carries a stack trace.

    Wrapping is idempotent: an already wrapped error is returned unchanged.

    When the exception has been raised, the frames come from its traceback
    (raise site first). Otherwise the current call stack is captured, so the
    frames describe where the error was reported from.

    Args:
        error: Exception to wrap, or an already wrapped error

    Returns:
        TracedError whose first frame is the caller of ``with_stack``
    """
    if isinstance(error, TracedError):
        return error

    # extract_stack() is outermost first; drop this function's own frame so the
    # caller becomes the wrapping frame
    current = [StackFrame.from_summary(s) for s in reversed(traceback.extract_stack()[:-1])]
    wrapping_frame, callers = current[0], current[1:]

    if error.__traceback__ is not None:
        raised = [
            StackFrame.from_summary(s)
            for s in reversed(traceback.extract_tb(error.__traceback__))
        ]
        return TracedError(error=error, frames=(wrapping_frame, *raised))

    return TracedError(error=error, frames=(wrapping_frame, *callers))


def format_stack(traced: TracedError) -> list[dict[str, Any]]:
    """Render captured frames in the sink's stack trace format.

    The wrapping frame is excluded, the remaining frames keep capture order.

    Args:
        traced: Wrapped error

    Returns:
        List of ``{"method", "file", "lineNumber"}`` dictionaries
    """
    return [
        {
            "method": frame.method,
            "file": frame.file,
            "lineNumber": int(frame.line),
        }
        for frame in traced.frames[1:]
    ]
