"""
Command-Line Interface Layer.

Typer commands, Rich formatting helpers and the console prompter.
"""
