"""
Free Cell core Python package.

This package holds the rules engine for Free Cell solitaire as small
pure-logic modules, so the CLI and the Flask app stay thin callers.
Modules:
- cards.py: Card, suits, ranks, deck
- state.py: locations and GameState
- errors.py: MoveError, MoveResult
- deal.py: shuffle and deal
- moves.py: move validation and application
- completion.py: auto-promotion and win detection
- engine.py: FreeCellGame, the stateful session object
- config.py, cli.py: settings and terminal driver
"""
