"""
drawcoach: Poker Draw and Pot Odds Trainer

Counts outs for drawing hands, turns them into equity and expected value
against a pot and call amount, and generates balanced call-or-fold
practice scenarios.
"""

__version__ = "0.1.0"
