"""Trading quotes shown alongside the journal."""

import random
from typing import Optional

TRADING_QUOTES = [
    "The goal of a successful trader is to make the best trades. Money is secondary.",
    "Cut your losses short and let your winners run.",
    "Plan the trade and trade the plan.",
    "The trend is your friend until the end when it bends.",
    "Risk comes from not knowing what you're doing.",
    "Amateurs think about how much money they can make. Professionals think about how much they could lose.",
    "The market can stay irrational longer than you can stay solvent.",
    "Do more of what works and less of what doesn't.",
    "It's not whether you're right or wrong, but how much you make when you're right and lose when you're wrong.",
    "Losers average losers.",
    "Every trader has strengths and weaknesses. Know yours.",
    "Discipline is the bridge between goals and accomplishment.",
    "The hard part is discipline, patience and judgment.",
    "Protect your capital first. Profits come second.",
    "A small loss today is better than a big loss tomorrow.",
]


def random_quote(rng: Optional[random.Random] = None) -> str:
    """Pick a random trading quote.

    Args:
        rng: Optional random generator, for deterministic picks.
    """
    return (rng or random).choice(TRADING_QUOTES)
