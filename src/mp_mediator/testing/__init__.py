"""Testing – helpers for exercising mediator pipelines in unit tests."""
from mp_mediator.testing.fakes import FakePolicyEngine
from mp_mediator.testing.recording import TraceRecorder, make_recording_behavior

__all__ = ["FakePolicyEngine", "TraceRecorder", "make_recording_behavior"]
