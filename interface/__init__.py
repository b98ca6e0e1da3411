"""
Interface package: the agent's controller-facing protocol.

Modules:
    protocol - Line protocol command loop and console entry point.
               Reads commands from stdin, writes responses to stdout.
               Can be run as a standalone script: python interface/protocol.py
"""
