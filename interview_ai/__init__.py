"""
Interview AI - mock interview service.

Generates interview questions, scores answers with a language model
(falling back to deterministic templates) and compiles final reports.
"""
__version__ = "0.1.0"
