"""Runpod Assistant - RunPod onboarding for the assistant CLI."""

__version__ = "0.1.0"
