"""Coaching intelligence: context assembly, prompts and providers."""
