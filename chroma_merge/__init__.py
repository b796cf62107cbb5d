"""
Chroma Merge
============

Game-state engine for the Chroma Merge tile puzzle: place colored tiles on
an 8x8 grid, merge same-colored neighbours into the next tier, and keep going
until the grid is full.

- core: grid, tile generation, merge resolution, scoring, rules, engine
- game_config.yaml: all tunable gameplay parameters
"""
