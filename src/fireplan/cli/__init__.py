"""
Command Line Interface Package

Unified CLI for statement import and FIRE planning.

Command Structure:
- fireplan: Main entry point with utility commands (version, config)
- fireplan parse: Parse a CAMT.053 statement to JSON
- fireplan metrics: FIRE metrics from transaction files
- fireplan allocate: Monthly allocation plan and transfer recommendations
"""
