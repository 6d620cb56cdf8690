"""Slack Integration Package.

This package contains the Slack integration modules. Contains:

- client: Factory for per-provider Slack WebClient instances.
"""
