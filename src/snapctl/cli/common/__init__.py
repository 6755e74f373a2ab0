"""Shared building blocks for snapctl commands: context, options, decorators."""
