"""specparity: RSpec parity checks for Rails codebases."""

__version__ = "0.3.0"
