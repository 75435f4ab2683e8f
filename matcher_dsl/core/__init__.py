"""Core Layer — pure matcher construction and dispatch, no IO, no global state.

Invariants:
    - No module in core/ imports from services/, schemas/, infrastructure/, or config
    - Nothing in core/ logs or reads settings; the shell decides both

Design Decisions:
    - Functional core separated from imperative shell (ADR: registry is the only shared state)
"""
