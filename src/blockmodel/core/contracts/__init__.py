"""Pydantic contracts for block positions, sizes and grid addresses."""
