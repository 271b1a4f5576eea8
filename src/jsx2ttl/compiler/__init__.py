"""Lowering of JSX element trees into tagged-template calls."""
