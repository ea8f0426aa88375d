"""
Memory puzzle core Python package.

Pure game logic for the pair-matching (concentration) game, kept free of
console and HTTP concerns so it can be driven and tested directly.
Modules:
- board.py: Card, CardView, Board, Coord
- deal.py: symbol pool, deck building, shuffling
- state.py: TurnPhase, TurnOutcome
- engine.py: GameEngine (turn state machine)
- errors.py: MemoryGameError and the TurnError family
- render.py, cli.py: console presentation
"""
