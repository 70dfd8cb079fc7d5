"""Application pipeline – behavior contract, registry and chain builder."""
from mp_mediator.application.pipeline.behavior import (
    BehaviorOptions,
    BehaviorScope,
    Next,
    PipelineBehavior,
    handles,
    pipeline_behavior,
)
from mp_mediator.application.pipeline.registry import BehaviorDescriptor, BehaviorRegistry
from mp_mediator.application.pipeline.builder import PipelineBuilder
from mp_mediator.application.pipeline.behaviors import (
    AuditBehavior,
    AuthorizationBehavior,
    CachingBehavior,
    ExceptionHandlingBehavior,
    ExceptionTransformer,
    LoggingBehavior,
    PerformanceBehavior,
    RetryBehavior,
    TimeoutBehavior,
    ValidationBehavior,
)

__all__ = [
    "AuditBehavior",
    "AuthorizationBehavior",
    "BehaviorDescriptor",
    "BehaviorOptions",
    "BehaviorRegistry",
    "BehaviorScope",
    "CachingBehavior",
    "ExceptionHandlingBehavior",
    "ExceptionTransformer",
    "LoggingBehavior",
    "Next",
    "PerformanceBehavior",
    "PipelineBehavior",
    "PipelineBuilder",
    "RetryBehavior",
    "TimeoutBehavior",
    "ValidationBehavior",
    "handles",
    "pipeline_behavior",
]
