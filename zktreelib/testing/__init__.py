"""Testing utilities for ZKTreeLib consumers."""

from .fixtures import RecordingSession, RecordingSessionFactory, build_namespace

__all__ = ['RecordingSession', 'RecordingSessionFactory', 'build_namespace']
