"""Relative time expression parsing.

An expression such as `now/w-1d/d` is tokenized against a fixed grammar, its keyword and unit
tokens are resolved against a unit table, and the result is evaluated through adapter callables.
"""
