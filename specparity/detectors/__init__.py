"""Cop implementations: spec parity, spec existence and ``let!`` usage."""
