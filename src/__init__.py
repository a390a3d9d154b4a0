"""
Household power consumption analysis.

Modules:
- household_power: load, featurize, split, train (tree + neural net), evaluate
"""
