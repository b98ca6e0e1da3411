"""
Antichess agent package.

This package implements the game-side half of a mandatory-capture chess
agent: it keeps the authoritative position, converts moves to and from
coordinate notation, and picks counter-moves with a random capture-first
policy. Move generation itself is delegated to python-chess.

Modules:
    constants - Starting FEN, notation sentinels, protocol tokens
    move      - The tagged Move value and its sentinels
    position  - python-chess adapter: enumerations, apply/undo, FEN access
    codec     - Coordinate-notation encode/decode
    selector  - Mandatory-capture random move selection
    state     - Game state manager owning the position and snapshot arena
    config    - Validated agent configuration
"""
