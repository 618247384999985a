"""Option Calc - Vesting stock option value estimates."""

__version__ = "0.1.0"
