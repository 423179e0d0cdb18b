# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Chain Reaction package.

Chain together fallible steps that return ``Success``/``Failure`` and run them
as a timed pipeline:

    ```python
    from chain_reaction import Reactor, Success

    result, timings = (
        Reactor.input(5)
        .then(lambda x: Success(x + 1))
        .then(lambda x: Success(x * 2))
        .then(lambda x: Success(str(x)))
        .run()
    )
    assert result == Success("12")
    assert len(timings) == 3
    ```
"""

from __future__ import annotations

from chain_reaction.config import Config, ExceptionPolicy, MutableConfig, TimeUnit
from chain_reaction.core.errors import (
    ChainReactionError,
    ConfigError,
    StepContractError,
    TypeMismatchError,
    UnwrapError,
)
from chain_reaction.core.failures import FailureKind, StepFailure
from chain_reaction.core.outcome import Either, Failure, Left, Outcome, Right, Success, to_outcome
from chain_reaction.pipeline import (
    Clock,
    PipelineBuilder,
    Reactor,
    RunResult,
    Step,
    TimingLog,
    TimingRecord,
    step,
)

__all__ = [
    "ChainReactionError",
    "Clock",
    "Config",
    "ConfigError",
    "Either",
    "ExceptionPolicy",
    "Failure",
    "FailureKind",
    "Left",
    "MutableConfig",
    "Outcome",
    "PipelineBuilder",
    "Reactor",
    "Right",
    "RunResult",
    "Step",
    "StepContractError",
    "StepFailure",
    "Success",
    "TimeUnit",
    "TimingLog",
    "TimingRecord",
    "TypeMismatchError",
    "UnwrapError",
    "step",
    "to_outcome",
]
