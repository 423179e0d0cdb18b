# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Pipeline engine: steps, combinators, the immutable builder and the reactor."""

from __future__ import annotations

from chain_reaction.pipeline.builder import PipelineBuilder
from chain_reaction.pipeline.combinators import ForEachStep, IfElseStep, MergeStep
from chain_reaction.pipeline.reactor import Reactor, ReactorState, RunResult
from chain_reaction.pipeline.step import ChainStep, Invocation, MapStep, Step, as_step, step
from chain_reaction.pipeline.timing import Clock, TimingLog, TimingRecord

__all__ = [
    "ChainStep",
    "Clock",
    "ForEachStep",
    "IfElseStep",
    "Invocation",
    "MapStep",
    "MergeStep",
    "PipelineBuilder",
    "Reactor",
    "ReactorState",
    "RunResult",
    "Step",
    "TimingLog",
    "TimingRecord",
    "as_step",
    "step",
]
