"""Spec document structure: block forests and method/context matching."""
