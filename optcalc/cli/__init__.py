"""Option Calc command-line interface."""
