"""Orchestration package for sdkpatcher."""

from .orchestrator import BuildOrchestrator

__all__ = ["BuildOrchestrator"]
