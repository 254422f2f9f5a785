"""
calcpad - Browser Calculator Engine

A small arithmetic calculator engine: an input-state machine that turns
button and keyboard events into a current entry, a pending expression,
a memory slot and a short calculation history, plus the HTTP and CLI
surfaces a front end talks to.
"""

__version__ = "1.0.0"
__author__ = "calcpad Team"
