"""
mp_mediator – in-process command/query mediator with a behavior pipeline.

Import path convention::

    from mp_mediator.application.mediator import Mediator
    from mp_mediator.application.cqrs import Command, Query, command_handler
    from mp_mediator.application.pipeline import PipelineBehavior, pipeline_behavior
    from mp_mediator.kernel.errors import HandlerNotFoundError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
